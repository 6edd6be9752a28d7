"""
Основная логика смесей реагентов.
"""

from .mix_operations import combine, split, total_volume
from .reagent_mix import (
    InvalidAmountError,
    MixtureError,
    NegativeQuantityError,
    ReagentMix,
)

__all__ = [
    "InvalidAmountError",
    "MixtureError",
    "NegativeQuantityError",
    "ReagentMix",
    "combine",
    "split",
    "total_volume",
]
