"""
Базовый пример использования модели смесей реагентов.

Демонстрирует слияние смесей, пропорциональный перенос и ограничение
объёма ёмкостью сосуда.
"""

import sys
from pathlib import Path

# Добавляем src в путь
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from reagent_mixtures import Reagent, ReagentMix, configure_logging


def demo_mixing():
    """Демонстрация слияния двух смесей."""
    print("=" * 60)
    print("Демонстрация 1: Слияние смесей")
    print("=" * 60)

    water = Reagent(name="Water", formula="H2O")
    salt = Reagent(name="Salt", formula="NaCl")

    beaker = ReagentMix.of(water, 10, 293.15)
    brine = ReagentMix.of(salt, 5, 373.15)
    beaker.add(brine)

    print(beaker)
    print(f"T = {beaker.temperature_celsius:.2f} °C")
    print()


def demo_transfer():
    """Демонстрация переноса и ограничения объёма."""
    print("=" * 60)
    print("Демонстрация 2: Перенос в сосуд ограниченной ёмкости")
    print("=" * 60)

    water = Reagent(name="Water", formula="H2O")
    ethanol = Reagent(name="Ethanol", formula="C2H5OH")

    flask = ReagentMix(293.15, {water: 30.0, ethanol: 10.0})
    vial = ReagentMix()

    moved = flask.transfer_to(vial, 12.0)
    removed = vial.max(8.0)

    print(f"Перенесено: {moved}")
    print(f"Колба: {flask}")
    print(f"Пробирка: {vial} (перелито {removed:.2f})")
    print()


def main():
    configure_logging("INFO")
    demo_mixing()
    demo_transfer()


if __name__ == "__main__":
    main()
