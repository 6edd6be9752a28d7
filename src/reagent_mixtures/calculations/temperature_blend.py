"""
Смешение температур смесей реагентов.

Температура смеси считается средневзвешенной по количеству вещества.
Вырожденные случаи (нулевая или отрицательная суммарная масса) не
возвращают NaN: функции возвращают None, и вызывающий код сам решает,
какое значение сохранить.
"""

import logging
import math
from typing import Optional, Sequence

import numpy as np

from ..config.mixture_config import ZERO_CELSIUS_IN_KELVIN

logger = logging.getLogger(__name__)


def kelvin_to_celsius(temperature: float) -> float:
    """Перевод K → °C."""
    return temperature - ZERO_CELSIUS_IN_KELVIN


def celsius_to_kelvin(temperature: float) -> float:
    """Перевод °C → K."""
    return temperature + ZERO_CELSIUS_IN_KELVIN


def blend_temperature(
    t1: float,
    total1: float,
    t2: float,
    total2: float
) -> Optional[float]:
    """
    Температура после слияния двух смесей.

    Формула:
    T = (T1*m1 + T2*m2) / (m1 + m2)

    Args:
        t1: Температура первой смеси, K
        total1: Количество первой смеси
        t2: Температура второй смеси, K
        total2: Количество второй смеси

    Returns:
        Температура результата или None, если m1 + m2 <= 0
    """
    divisor = total1 + total2
    if divisor <= 0:
        logger.debug(f"Смешение с нулевой суммарной массой: m1={total1}, m2={total2}")
        return None

    result = (t1 * total1 + t2 * total2) / divisor
    if not math.isfinite(result):
        return None
    return result


def unblend_temperature(
    t1: float,
    total1: float,
    t2: float,
    total2: float
) -> Optional[float]:
    """
    Температура остатка после вычитания второй смеси из первой.

    Обратная операция к blend_temperature, делитель асимметричен:
    T = (T1*m1 - T2*m2) / (m1 - m2)

    Returns:
        Температура остатка или None, если m1 - m2 <= 0 либо результат
        не является конечной положительной величиной
    """
    divisor = total1 - total2
    if divisor <= 0:
        logger.debug(
            f"Вычитание не оставляет массы: m1={total1}, m2={total2}, делитель={divisor}"
        )
        return None

    result = (t1 * total1 - t2 * total2) / divisor
    if not math.isfinite(result) or result <= 0:
        logger.debug(f"Вырожденная температура остатка: {result}")
        return None
    return result


def blend_temperatures(
    temperatures: Sequence[float],
    weights: Sequence[float]
) -> Optional[float]:
    """
    Средневзвешенная температура нескольких частей за одно вычисление.

    Результат не обязан побитово совпадать с последовательностью попарных
    blend_temperature.

    Args:
        temperatures: Температуры частей, K
        weights: Количества частей

    Returns:
        Средневзвешенная температура или None, если сумма весов <= 0
    """
    if len(temperatures) != len(weights):
        raise ValueError(
            f"Длины не совпадают: {len(temperatures)} температур, {len(weights)} весов"
        )
    if not temperatures:
        return None

    t = np.asarray(temperatures, dtype=float)
    w = np.asarray(weights, dtype=float)

    weight_sum = float(w.sum())
    if weight_sum <= 0:
        logger.debug(f"Сумма весов {weight_sum} <= 0, температура не определена")
        return None

    result = float(np.dot(t, w) / weight_sum)
    if not math.isfinite(result):
        return None
    return result
