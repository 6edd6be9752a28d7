"""
Смесь реагентов: основной тип данных модели.

Смесь хранит отображение «реагент → количество» и общую температуру.
Поддерживаются слияние, вычитание, масштабирование, ограничение по
объёму и пропорциональный перенос между смесями. Все операции
синхронные, выполняются за O(k) по числу различных реагентов и не
используют глобального изменяемого состояния, кроме настроек процесса.

Инварианты:
- После любой публичной операции все количества >= 0 (если смесь не была
  создана вызывающим кодом из отрицательных значений).
- Температура имеет смысл только при total > 0.
- Нулевые записи могут оставаться до вызова clean().

Потокобезопасность не обеспечивается: владелец смеси сериализует доступ.
"""

import logging
import math
from typing import Any, Callable, Dict, Hashable, Iterator, List, Mapping, Optional, Tuple

from ..calculations.temperature_blend import (
    blend_temperature,
    kelvin_to_celsius,
    unblend_temperature,
)
from ..config.mixture_config import NegativeQuantityPolicy, get_settings

logger = logging.getLogger(__name__)

ReagentKey = Hashable


class MixtureError(Exception):
    """Базовая ошибка операций со смесью."""
    pass


class NegativeQuantityError(MixtureError):
    """
    Операция оставила бы отрицательное количество реагента.

    Смесь при этом не изменяется.
    """

    def __init__(self, operation: str, quantities: Dict[ReagentKey, float]):
        self.operation = operation
        self.quantities = quantities
        details = ", ".join(f"{reagent}={value:.6g}" for reagent, value in quantities.items())
        super().__init__(
            f"Операция {operation} даёт отрицательные количества: {details}"
        )


class InvalidAmountError(MixtureError, ValueError):
    """Недопустимый аргумент количества, ёмкости или множителя."""
    pass


def _validate_amount(value: float, name: str) -> float:
    """Проверить, что количество конечное и неотрицательное."""
    try:
        value = float(value)
    except (TypeError, ValueError) as e:
        raise InvalidAmountError(f"{name} должен быть числом, получено: {value!r}") from e
    if not math.isfinite(value) or value < 0:
        raise InvalidAmountError(
            f"{name} должен быть конечным неотрицательным числом, получено: {value}"
        )
    return value


class ReagentMix:
    """
    Смесь реагентов с общей температурой.

    Ключами служат любые хешируемые идентификаторы реагентов
    (например, models.Reagent). Количества задаются числами с плавающей точкой.

    Итерация возвращает пары (реагент, количество) из снимка содержимого
    на момент начала обхода. Изменять смесь во время обхода нельзя:
    изменения не будут видны в текущем обходе.

    len(mix) считает записи, включая нулевые, а bool(mix) отражает total > 0:
    смесь из одних нулевых записей имеет ненулевую длину, но ложна.
    """

    def __init__(
        self,
        temperature: Optional[float] = None,
        reagents: Optional[Mapping[ReagentKey, float]] = None,
        policy: Optional[NegativeQuantityPolicy] = None
    ):
        """
        Создание смеси.

        Args:
            temperature: Температура, K. Если None, берётся из настроек (273.15 K)
            reagents: Исходное содержимое; копируется, отрицательные значения
                не проверяются
            policy: Политика для отрицательных количеств. Если None, берётся
                из настроек
        """
        settings = get_settings()
        if temperature is None:
            temperature = settings.default_temperature
        self._temperature = float(temperature)
        self.policy = (
            settings.negative_quantity_policy if policy is None
            else NegativeQuantityPolicy(policy)
        )
        self._reagents: Dict[ReagentKey, float] = (
            {reagent: float(amount) for reagent, amount in reagents.items()}
            if reagents else {}
        )
        self._total: Optional[float] = None

    @classmethod
    def of(
        cls,
        reagent: ReagentKey,
        amount: float,
        temperature: Optional[float] = None
    ) -> "ReagentMix":
        """Смесь из одного реагента."""
        return cls(temperature, {reagent: amount})

    @classmethod
    def from_mapping(
        cls,
        reagents: Mapping[ReagentKey, float],
        temperature: Optional[float] = None
    ) -> "ReagentMix":
        """Смесь из готового отображения реагент → количество."""
        return cls(temperature, reagents)

    # Температура

    @property
    def temperature(self) -> float:
        """Температура смеси, K. Не имеет смысла при total == 0."""
        return self._temperature

    @temperature.setter
    def temperature(self, value: float) -> None:
        self._temperature = float(value)

    @property
    def temperature_celsius(self) -> float:
        """Температура смеси, °C."""
        return kelvin_to_celsius(self._temperature)

    # Запросы

    def amount_of(self, reagent: ReagentKey) -> Optional[float]:
        """
        Количество реагента.

        Returns:
            Количество или None, если реагента в смеси нет
        """
        return self._reagents.get(reagent)

    def __getitem__(self, reagent: ReagentKey) -> Optional[float]:
        return self._reagents.get(reagent)

    def get(self, reagent: ReagentKey, default: float = 0.0) -> float:
        """Количество реагента или default, если его нет."""
        return self._reagents.get(reagent, default)

    def contains(self, reagent: ReagentKey, amount: float) -> bool:
        """True, если реагента не меньше amount."""
        value = self._reagents.get(reagent)
        return value is not None and value >= amount

    def contains_more_than(self, reagent: ReagentKey, amount: float) -> bool:
        """True, если реагента строго больше amount."""
        value = self._reagents.get(reagent)
        return value is not None and value > amount

    def __contains__(self, reagent: ReagentKey) -> bool:
        return reagent in self._reagents

    def __len__(self) -> int:
        return len(self._reagents)

    def __bool__(self) -> bool:
        return self.total > 0

    @property
    def total(self) -> float:
        """Суммарное количество (кэшируется до следующего изменения)."""
        if self._total is None:
            self._total = self.calculate_total()
        return self._total

    def calculate_total(self) -> float:
        """Суммарное количество, всегда пересчитывается."""
        return math.fsum(self._reagents.values())

    def is_empty(self) -> bool:
        """True, если в смеси ничего нет."""
        return self.total <= 0

    def composition(self) -> Dict[ReagentKey, float]:
        """Доли реагентов от общего количества (пусто при total == 0)."""
        total = self.total
        if total <= 0:
            return {}
        return {reagent: amount / total for reagent, amount in self._reagents.items()}

    # Перечисление

    def __iter__(self) -> Iterator[Tuple[ReagentKey, float]]:
        return iter(list(self._reagents.items()))

    def items(self) -> List[Tuple[ReagentKey, float]]:
        """Снимок пар (реагент, количество)."""
        return list(self._reagents.items())

    def reagents(self) -> List[ReagentKey]:
        """Снимок списка реагентов."""
        return list(self._reagents)

    def sorted_items(
        self,
        key: Optional[Callable[[ReagentKey], Any]] = None
    ) -> List[Tuple[ReagentKey, float]]:
        """
        Пары (реагент, количество) в детерминированном порядке.

        Args:
            key: Ключ сортировки реагентов, по умолчанию str(reagent)
        """
        sort_key = key or str
        return sorted(self._reagents.items(), key=lambda item: sort_key(item[0]))

    def as_dict(self) -> Dict[ReagentKey, float]:
        """Независимая копия содержимого."""
        return dict(self._reagents)

    # Изменение

    def add(self, other: "ReagentMix") -> None:
        """
        Добавить содержимое другой смеси.

        Температура становится средневзвешенной:
        T = (T1*m1 + T2*m2) / (m1 + m2)

        Если обе смеси пусты, температура не меняется. other не изменяется.
        """
        incoming = other.items()
        other_total = other.total
        other_temperature = other.temperature

        if other_total != 0 and other_temperature != self._temperature:
            self_total = self.total
            if self_total == 0 and other_total > 0:
                self._temperature = other_temperature
            else:
                blended = blend_temperature(
                    self._temperature, self_total, other_temperature, other_total
                )
                if blended is None:
                    logger.debug(
                        f"add: суммарная масса {self_total} + {other_total} <= 0, "
                        f"температура {self._temperature:.2f}K сохранена"
                    )
                else:
                    self._temperature = blended

        for reagent, amount in incoming:
            self._reagents[reagent] = self._reagents.get(reagent, 0.0) + amount
        self._total = None

    def subtract(self, other: "ReagentMix") -> None:
        """
        Вычесть содержимое другой смеси.

        Температура остатка считается обратным смешением с асимметричным делителем:
        T = (T1*m1 - T2*m2) / (m1 - m2)

        При делителе <= 0 температура сохраняется. Отрицательные остатки
        обрабатываются согласно политике смеси: RAISE отклоняет операцию
        целиком, CLAMP обрезает их до нуля. После обрезки m2 равна реально
        убранному количеству, а не other.total. other не изменяется.

        Raises:
            NegativeQuantityError: при политике RAISE и отрицательном остатке
        """
        tolerance = get_settings().zero_tolerance
        updated: Dict[ReagentKey, float] = {}
        negatives: List[ReagentKey] = []

        for reagent, amount in other.items():
            value = self._reagents.get(reagent, 0.0) - amount
            if value < 0:
                if value >= -tolerance:
                    value = 0.0
                else:
                    negatives.append(reagent)
            updated[reagent] = value

        self._resolve_negatives("subtract", updated, negatives)

        # После обрезки до нуля убыль меньше other.total
        if negatives:
            removed = math.fsum(
                self._reagents.get(reagent, 0.0) - value
                for reagent, value in updated.items()
            )
        else:
            removed = other.total
        if removed != 0 and other.temperature != self._temperature:
            remaining = unblend_temperature(
                self._temperature, self.total, other.temperature, removed
            )
            if remaining is None:
                logger.debug(
                    f"subtract: вырожденный делитель {self.total} - {removed}, "
                    f"температура {self._temperature:.2f}K сохранена"
                )
            else:
                self._temperature = remaining

        self._reagents.update(updated)
        self._total = None

    def multiply(self, factor: float) -> None:
        """
        Умножить все количества на factor.

        Ключи не удаляются даже при factor == 0. Температура не меняется.

        Raises:
            InvalidAmountError: если factor не число или не конечен
            NegativeQuantityError: при отрицательном factor и политике RAISE
        """
        try:
            factor = float(factor)
        except (TypeError, ValueError) as e:
            raise InvalidAmountError(f"Множитель должен быть числом, получено: {factor!r}") from e
        if not math.isfinite(factor):
            raise InvalidAmountError(f"Множитель должен быть конечным, получено: {factor}")

        tolerance = get_settings().zero_tolerance
        updated: Dict[ReagentKey, float] = {}
        negatives: List[ReagentKey] = []

        for reagent, amount in self._reagents.items():
            value = amount * factor
            if value < -tolerance:
                negatives.append(reagent)
            elif value < 0:
                value = 0.0
            updated[reagent] = value

        self._resolve_negatives("multiply", updated, negatives)

        self._reagents = updated
        self._total = None

    def remove_volume(self, amount: float) -> None:
        """
        Уменьшить общий объём на amount с сохранением пропорций.

        factor = (total - amount) / total

        Пустая смесь не меняется. При amount >= total смесь опустошается
        (ключи остаются с нулевыми количествами).

        Raises:
            InvalidAmountError: если amount отрицателен или не конечен
        """
        amount = _validate_amount(amount, "amount")
        total = self.total

        if total <= 0:
            logger.debug(f"remove_volume({amount}) на пустой смеси, без изменений")
            return
        if amount == 0:
            return

        if amount >= total:
            logger.debug(f"remove_volume: {amount} >= {total}, смесь опустошается")
            factor = 0.0
        else:
            factor = (total - amount) / total

        self.multiply(factor)

    def max(self, cap: float) -> float:
        """
        Ограничить общий объём значением cap.

        Args:
            cap: Максимально допустимый объём

        Returns:
            Сколько было удалено (>= 0). Если total <= cap, смесь не меняется

        Raises:
            InvalidAmountError: если cap отрицателен или не конечен
        """
        cap = _validate_amount(cap, "cap")
        total = self.total
        if total <= cap:
            return 0.0

        removed = total - cap
        # масштаб cap/total точнее, чем (total - removed)/total
        self.multiply(cap / total)
        return removed

    def transfer_to(self, destination: "ReagentMix", amount: float) -> "ReagentMix":
        """
        Перенести до amount объёма в destination пропорционально составу.

        Returns:
            Смесь, описывающая ровно то, что было перенесено

        Raises:
            InvalidAmountError: если amount недопустим или destination совпадает с этой смесью
        """
        if destination is self:
            raise InvalidAmountError("Нельзя перенести смесь саму в себя")
        amount = _validate_amount(amount, "amount")

        transferred = self.clone()
        transferred.max(amount)
        self.subtract(transferred)
        destination.add(transferred)
        return transferred

    def take(self, amount: float) -> "ReagentMix":
        """Извлечь до amount объёма в новую смесь с температурой источника."""
        taken = ReagentMix(self._temperature, policy=self.policy)
        self.transfer_to(taken, amount)
        return taken

    def clean(self, tolerance: Optional[float] = None) -> int:
        """
        Удалить записи с нулевым количеством.

        Args:
            tolerance: Удаляются записи с abs(количество) <= tolerance.
                Если None, берётся clean_tolerance из настроек (0.0 означает точный ноль)

        Returns:
            Число удалённых записей
        """
        if tolerance is None:
            tolerance = get_settings().clean_tolerance
        tolerance = _validate_amount(tolerance, "tolerance")

        stale = [reagent for reagent, amount in self._reagents.items() if abs(amount) <= tolerance]
        for reagent in stale:
            del self._reagents[reagent]
        if stale:
            self._total = None
        return len(stale)

    def clear(self) -> None:
        """Удалить всё содержимое. Температура остаётся прежней (устаревшей)."""
        self._reagents.clear()
        self._total = None

    def clone(self) -> "ReagentMix":
        """Независимая копия с той же температурой и политикой."""
        copy = ReagentMix(self._temperature, policy=self.policy)
        copy._reagents = dict(self._reagents)
        copy._total = self._total
        return copy

    def _resolve_negatives(
        self,
        operation: str,
        updated: Dict[ReagentKey, float],
        negatives: List[ReagentKey]
    ) -> None:
        """Применить политику к отрицательным результатам до изменения смеси."""
        if not negatives:
            return

        if self.policy is NegativeQuantityPolicy.RAISE:
            raise NegativeQuantityError(
                operation, {reagent: updated[reagent] for reagent in negatives}
            )

        logger.warning(
            f"{operation}: отрицательные количества обрезаны до нуля для "
            f"{len(negatives)} реагент(ов): {', '.join(str(r) for r in negatives)}"
        )
        for reagent in negatives:
            updated[reagent] = 0.0

    # Представление

    def to_dict(self) -> dict:
        """Сводка для логирования."""
        return {
            "temperature": self._temperature,
            "total": self.total,
            "reagents_count": len(self._reagents),
            "reagents": {str(reagent): amount for reagent, amount in self.sorted_items()},
        }

    def __repr__(self) -> str:
        contents = ", ".join(f"{reagent}: {amount:g}" for reagent, amount in self.sorted_items())
        return f"ReagentMix({{{contents}}}, T={self._temperature:.2f}K)"
