"""
Integration tests for mixture scenarios.

Covers the conservation and clamp laws on a set of seeded random
mixtures, and the reference scenarios for add/take/clean/max.
"""

import random

import pytest

from reagent_mixtures import Reagent, ReagentMix, combine, split, total_volume

REAGENT_POOL = [Reagent(name=name) for name in ("Water", "Salt", "Ethanol", "Acid", "Base", "Oil")]

SEEDS = [1, 7, 42, 2024, 31337]


def random_mix(rng: random.Random) -> ReagentMix:
    """Build a mixture with 1-5 reagents and positive amounts."""
    count = rng.randint(1, 5)
    contents = {
        reagent: rng.uniform(0.01, 50.0)
        for reagent in rng.sample(REAGENT_POOL, count)
    }
    return ReagentMix(rng.uniform(250.0, 400.0), contents)


class TestConservationLaws:
    """Laws that must hold for arbitrary mixtures."""

    @pytest.mark.parametrize("seed", SEEDS)
    def test_add_total(self, seed):
        rng = random.Random(seed)
        a, b = random_mix(rng), random_mix(rng)

        merged = a.clone()
        merged.add(b)

        assert merged.total == pytest.approx(a.total + b.total)

    @pytest.mark.parametrize("seed", SEEDS)
    def test_transfer_conserves_volume(self, seed):
        rng = random.Random(seed)
        a, b = random_mix(rng), random_mix(rng)
        a_before, b_before = a.total, b.total
        composition_before = a.composition()
        amount = rng.uniform(0.0, a_before)

        moved = a.transfer_to(b, amount)

        assert moved.total == pytest.approx(amount)
        assert a_before == pytest.approx(a.total + moved.total)
        assert b.total == pytest.approx(b_before + moved.total)
        for reagent, fraction in moved.composition().items():
            assert fraction == pytest.approx(composition_before[reagent])

    @pytest.mark.parametrize("seed", SEEDS)
    def test_clamp_law(self, seed):
        rng = random.Random(seed)
        mix = random_mix(rng)
        cap = rng.uniform(0.0, 2 * mix.total)

        removed = mix.max(cap)

        assert removed >= 0
        assert mix.total <= cap + 1e-9

    @pytest.mark.parametrize("seed", SEEDS)
    def test_clean_idempotent(self, seed):
        rng = random.Random(seed)
        mix = random_mix(rng)
        mix.add(ReagentMix(mix.temperature, {Reagent(name="Trace"): 0.0}))

        mix.clean()
        once = mix.as_dict()
        mix.clean()

        assert mix.as_dict() == once

    @pytest.mark.parametrize("seed", SEEDS)
    def test_split_then_combine_restores(self, seed):
        rng = random.Random(seed)
        mix = random_mix(rng)
        original = mix.clone()

        restored = combine(split(mix, rng.randint(2, 6)))

        assert restored.temperature == pytest.approx(original.temperature)
        for reagent, amount in original:
            assert restored[reagent] == pytest.approx(amount)


class TestReferenceScenarios:
    """Reference scenarios for the mixture algebra."""

    def test_water_plus_salt(self):
        water, salt = Reagent(name="Water"), Reagent(name="Salt")
        mix = ReagentMix.of(water, 10, 293.15)

        mix.add(ReagentMix.of(salt, 5, 373.15))

        assert mix.as_dict() == {water: 10.0, salt: 5.0}
        assert mix.total == pytest.approx(15.0)
        assert mix.temperature == pytest.approx((293.15 * 10 + 373.15 * 5) / 15)

    def test_take_four_of_ten(self):
        water = Reagent(name="Water")
        source = ReagentMix.of(water, 10, 293.15)

        taken = source.take(4)

        assert taken[water] == pytest.approx(4.0)
        assert taken.temperature == pytest.approx(293.15)
        assert source[water] == pytest.approx(6.0)
        assert source.temperature == pytest.approx(293.15)

    def test_clean_drops_zero(self):
        mix = ReagentMix(300.0, {"A": 3, "B": 0})
        mix.clean()
        assert mix.as_dict() == {"A": 3.0}

    def test_max_scenarios(self):
        water = Reagent(name="Water")

        mix = ReagentMix.of(water, 10)
        assert mix.max(5) == pytest.approx(5.0)
        assert mix.as_dict() == {water: pytest.approx(5.0)}

        mix = ReagentMix.of(water, 10)
        assert mix.max(20) == 0
        assert mix.as_dict() == {water: 10.0}

    def test_pipeline_of_transfers(self):
        """Flask -> beaker -> vial chain keeps total volume."""
        water, ethanol = Reagent(name="Water"), Reagent(name="Ethanol")
        flask = ReagentMix(293.15, {water: 30.0, ethanol: 10.0})
        beaker = ReagentMix(353.15, {water: 5.0})
        vial = ReagentMix()
        start = total_volume([flask, beaker, vial])

        flask.transfer_to(beaker, 15.0)
        beaker.transfer_to(vial, 8.0)
        vial.transfer_to(flask, 100.0)

        assert total_volume([flask, beaker, vial]) == pytest.approx(start)
        assert vial.total == pytest.approx(0.0)
        assert 293.15 < beaker.temperature < 353.15
