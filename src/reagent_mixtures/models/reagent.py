"""
Pydantic model for reagent identity.

The mixture core treats reagents as opaque hashable keys. This model is a
ready-made identity for hosts without a reagent registry of their own: it is
frozen (hashable, usable as a dict key) and compares by value.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Reagent(BaseModel):
    """Chemical reagent identity."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Unique reagent name")
    formula: Optional[str] = Field(None, description="Chemical formula, if known")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        """Reagent name must not be blank."""
        v = v.strip()
        if not v:
            raise ValueError("Reagent name must not be empty")
        return v

    def __str__(self) -> str:
        return self.name

    def to_dict(self) -> dict:
        """Serialize to dictionary for logging."""
        return {"name": self.name, "formula": self.formula}
