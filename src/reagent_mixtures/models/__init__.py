"""Data models for reagent mixtures."""

from .reagent import Reagent

__all__ = ["Reagent"]
