"""
Модуль расчётов температуры смесей.

Содержит детерминированные функции для смешения и разделения температур
по количеству вещества.
"""

from .temperature_blend import (
    blend_temperature,
    blend_temperatures,
    celsius_to_kelvin,
    kelvin_to_celsius,
    unblend_temperature,
)

__all__ = [
    "blend_temperature",
    "blend_temperatures",
    "celsius_to_kelvin",
    "kelvin_to_celsius",
    "unblend_temperature",
]
