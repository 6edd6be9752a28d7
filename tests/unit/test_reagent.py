"""Unit tests for Reagent identity model."""

import pytest
from pydantic import ValidationError

from reagent_mixtures.models.reagent import Reagent


class TestReagent:
    """Test Reagent model."""

    def test_value_equality_and_hash(self):
        first = Reagent(name="Water", formula="H2O")
        second = Reagent(name="Water", formula="H2O")

        assert first == second
        assert hash(first) == hash(second)
        assert {first: 1.0}[second] == 1.0

    def test_different_reagents(self):
        assert Reagent(name="Water") != Reagent(name="Salt")

    def test_frozen(self):
        reagent = Reagent(name="Water")
        with pytest.raises(ValidationError):
            reagent.name = "Ice"

    def test_name_is_stripped(self):
        assert Reagent(name="  Water ").name == "Water"

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError):
            Reagent(name="   ")

    def test_str_and_to_dict(self):
        reagent = Reagent(name="Salt", formula="NaCl")

        assert str(reagent) == "Salt"
        assert reagent.to_dict() == {"name": "Salt", "formula": "NaCl"}
