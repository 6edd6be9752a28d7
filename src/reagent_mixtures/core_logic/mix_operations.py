"""
Групповые операции над несколькими смесями.

combine() сливает любое число смесей за одно взвешенное вычисление
температуры, в отличие от цепочки попарных add().
"""

import logging
import math
from typing import Iterable, List, Optional

from ..calculations.temperature_blend import blend_temperatures
from ..config.mixture_config import NegativeQuantityPolicy
from .reagent_mix import InvalidAmountError, ReagentMix

logger = logging.getLogger(__name__)


def total_volume(mixtures: Iterable[ReagentMix]) -> float:
    """Суммарный объём нескольких смесей."""
    return math.fsum(mix.total for mix in mixtures)


def combine(
    mixtures: Iterable[ReagentMix],
    temperature: Optional[float] = None,
    policy: Optional[NegativeQuantityPolicy] = None
) -> ReagentMix:
    """
    Слить несколько смесей в новую.

    Исходные смеси не изменяются.

    Args:
        mixtures: Смеси для слияния
        temperature: Температура результата, если суммарный объём нулевой.
            Если None, используется температура по умолчанию
        policy: Политика отрицательных количеств результата. Если None и все
            смеси имеют одну политику, она переносится; иначе берётся из настроек

    Returns:
        Новая смесь с суммарным содержимым и средневзвешенной температурой
    """
    parts = list(mixtures)

    if policy is None:
        policies = {mix.policy for mix in parts}
        if len(policies) == 1:
            policy = policies.pop()

    blended = blend_temperatures(
        [mix.temperature for mix in parts],
        [mix.total for mix in parts],
    )
    if blended is None:
        logger.debug(f"combine: {len(parts)} смесей с нулевым объёмом, температура по умолчанию")
    else:
        temperature = blended

    contents = {}
    for mix in parts:
        for reagent, amount in mix:
            contents[reagent] = contents.get(reagent, 0.0) + amount

    return ReagentMix(temperature, contents, policy)


def split(mixture: ReagentMix, parts: int) -> List[ReagentMix]:
    """
    Разделить смесь на равные пропорциональные порции.

    Исходная смесь опустошается: последняя порция забирает остаток,
    поэтому суммарный объём сохраняется.

    Args:
        mixture: Разделяемая смесь
        parts: Число порций (>= 1)

    Returns:
        Список порций с температурой исходной смеси
    """
    if parts < 1:
        raise InvalidAmountError(f"Число порций должно быть >= 1, получено: {parts}")

    portion = mixture.total / parts
    portions = [mixture.take(portion) for _ in range(parts - 1)]
    portions.append(mixture.take(mixture.total))
    return portions
