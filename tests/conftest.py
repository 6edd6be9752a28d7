"""
Общие фикстуры для тестов смесей реагентов.
"""

import pytest

from reagent_mixtures.config.mixture_config import (
    ENV_PREFIX,
    MixtureSettings,
    reset_settings,
    set_settings,
)
from reagent_mixtures.models import Reagent


@pytest.fixture(autouse=True)
def default_settings(monkeypatch):
    """Каждый тест работает с настройками по умолчанию, без влияния окружения."""
    for name in MixtureSettings.model_fields:
        monkeypatch.delenv(f"{ENV_PREFIX}{name.upper()}", raising=False)
    set_settings(MixtureSettings())
    yield
    reset_settings()


@pytest.fixture
def water():
    return Reagent(name="Water", formula="H2O")


@pytest.fixture
def salt():
    return Reagent(name="Salt", formula="NaCl")


@pytest.fixture
def ethanol():
    return Reagent(name="Ethanol", formula="C2H5OH")
