"""
Конфигурация модели смесей реагентов.

Содержит значения по умолчанию для температуры, допусков сравнения с нулём
и политики обработки отрицательных количеств, а также загрузку настроек
из переменных окружения.
"""

import logging
import os
from enum import Enum
from typing import Any, Dict, Optional

from dotenv import dotenv_values, find_dotenv
from pydantic import BaseModel, Field, field_validator

# Температура плавления льда в Кельвинах
ZERO_CELSIUS_IN_KELVIN = 273.15

ENV_PREFIX = "REAGENT_MIX_"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class NegativeQuantityPolicy(str, Enum):
    """Policy applied when an operation would drive a quantity below zero."""

    RAISE = "raise"
    CLAMP = "clamp"


# Конфигурация смесей по умолчанию
MIXTURE_CONFIG: Dict[str, Any] = {
    # Температура новой пустой смеси (K)
    "default_temperature": ZERO_CELSIUS_IN_KELVIN,

    # Отрицательные остатки в пределах допуска считаются нулём
    "zero_tolerance": 1e-9,

    # 0.0 означает точное сравнение с нулём при clean()
    "clean_tolerance": 0.0,

    # raise: отклонить операцию, clamp: обрезать до нуля
    "negative_quantity_policy": NegativeQuantityPolicy.RAISE.value,

    "log_level": "WARNING",
}


class MixtureSettings(BaseModel):
    """Runtime settings shared by all mixtures of the process."""

    default_temperature: float = Field(
        MIXTURE_CONFIG["default_temperature"],
        description="Temperature of a freshly created mixture, K",
    )
    zero_tolerance: float = Field(
        MIXTURE_CONFIG["zero_tolerance"],
        description="Negative leftovers within this bound snap to zero",
    )
    clean_tolerance: float = Field(
        MIXTURE_CONFIG["clean_tolerance"],
        description="clean() purges entries with abs(quantity) <= tolerance",
    )
    negative_quantity_policy: NegativeQuantityPolicy = Field(
        NegativeQuantityPolicy(MIXTURE_CONFIG["negative_quantity_policy"]),
        description="What to do when a quantity would become negative",
    )
    log_level: str = Field(MIXTURE_CONFIG["log_level"], description="Logging level")

    @field_validator("default_temperature")
    @classmethod
    def validate_temperature(cls, v):
        """Temperature must be above absolute zero."""
        if v <= 0:
            raise ValueError("default_temperature must be > 0 K")
        return v

    @field_validator("zero_tolerance", "clean_tolerance")
    @classmethod
    def validate_tolerance(cls, v):
        """Tolerances cannot be negative."""
        if v < 0:
            raise ValueError("tolerance must be >= 0")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Only standard logging level names are accepted."""
        level = str(v).upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {v}")
        return level

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None) -> "MixtureSettings":
        """
        Создание настроек из переменных окружения и файла .env.

        Файл .env ищется от текущего рабочего каталога вверх, если путь
        не задан. Из файла берутся только ключи с префиксом REAGENT_MIX_;
        переменные окружения процесса имеют приоритет над файлом.
        os.environ не изменяется.
        """
        path = dotenv_path or find_dotenv(usecwd=True)
        source: Dict[str, str] = {}
        if path:
            for key, raw in dotenv_values(path).items():
                if key.startswith(ENV_PREFIX) and raw is not None:
                    source[key] = raw
        source.update(
            (key, raw) for key, raw in os.environ.items() if key.startswith(ENV_PREFIX)
        )

        values: Dict[str, Any] = {}
        for name in cls.model_fields:
            raw = source.get(f"{ENV_PREFIX}{name.upper()}")
            if raw is not None and raw.strip() != "":
                values[name] = raw.strip().lower() if name == "negative_quantity_policy" else raw.strip()

        return cls(**values)


_settings: Optional[MixtureSettings] = None


def get_settings() -> MixtureSettings:
    """Получить настройки процесса (создаются из окружения при первом вызове)."""
    global _settings
    if _settings is None:
        _settings = MixtureSettings.from_env()
    return _settings


def set_settings(settings: MixtureSettings) -> None:
    """Заменить настройки процесса."""
    global _settings
    _settings = settings


def reset_settings() -> None:
    """Сбросить кэш настроек; следующий get_settings() перечитает окружение."""
    global _settings
    _settings = None


def get_mixture_config() -> Dict[str, Any]:
    """Получить копию конфигурации по умолчанию."""
    return MIXTURE_CONFIG.copy()


def configure_logging(level: Optional[str] = None) -> None:
    """
    Настроить корневой логгер.

    Args:
        level: Уровень логирования. Если None, берётся из настроек.
    """
    if level is None:
        level = get_settings().log_level
    logging.basicConfig(level=getattr(logging, level.upper()), format=LOG_FORMAT)


def validate_config() -> bool:
    """
    Валидировать конфигурацию смесей по умолчанию.

    Returns:
        True если конфигурация корректна
    """
    errors = []

    if not isinstance(MIXTURE_CONFIG["default_temperature"], (int, float)):
        errors.append("default_temperature должен быть числом")
    elif MIXTURE_CONFIG["default_temperature"] <= 0:
        errors.append("default_temperature должен быть > 0")

    for key in ("zero_tolerance", "clean_tolerance"):
        if not isinstance(MIXTURE_CONFIG[key], (int, float)):
            errors.append(f"{key} должен быть числом")
        elif MIXTURE_CONFIG[key] < 0:
            errors.append(f"{key} должен быть >= 0")

    allowed = {policy.value for policy in NegativeQuantityPolicy}
    if MIXTURE_CONFIG["negative_quantity_policy"] not in allowed:
        errors.append(f"negative_quantity_policy должен быть одним из {sorted(allowed)}")

    if errors:
        logging.getLogger(__name__).error(
            "Ошибки в конфигурации MIXTURE_CONFIG: " + "; ".join(errors)
        )
        return False

    return True


# Валидация конфигурации при импорте
if not validate_config():
    raise ValueError("Некорректная конфигурация смесей реагентов")
