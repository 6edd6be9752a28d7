"""
Конфигурация модели смесей реагентов.
"""

from .mixture_config import (
    ENV_PREFIX,
    MIXTURE_CONFIG,
    ZERO_CELSIUS_IN_KELVIN,
    MixtureSettings,
    NegativeQuantityPolicy,
    configure_logging,
    get_mixture_config,
    get_settings,
    reset_settings,
    set_settings,
    validate_config,
)

__all__ = [
    "ENV_PREFIX",
    "MIXTURE_CONFIG",
    "ZERO_CELSIUS_IN_KELVIN",
    "MixtureSettings",
    "NegativeQuantityPolicy",
    "configure_logging",
    "get_mixture_config",
    "get_settings",
    "reset_settings",
    "set_settings",
    "validate_config",
]
