"""
Модель смесей реагентов: количества, температура и перенос между смесями.
"""

from .config import (
    ZERO_CELSIUS_IN_KELVIN,
    MixtureSettings,
    NegativeQuantityPolicy,
    configure_logging,
    get_settings,
)
from .core_logic import (
    InvalidAmountError,
    MixtureError,
    NegativeQuantityError,
    ReagentMix,
    combine,
    split,
    total_volume,
)
from .models import Reagent

__version__ = "1.0.0"

__all__ = [
    "ZERO_CELSIUS_IN_KELVIN",
    "InvalidAmountError",
    "MixtureError",
    "MixtureSettings",
    "NegativeQuantityError",
    "NegativeQuantityPolicy",
    "Reagent",
    "ReagentMix",
    "combine",
    "configure_logging",
    "get_settings",
    "split",
    "total_volume",
]
