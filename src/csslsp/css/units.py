from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Mapping


class UnitCategory(str, Enum):
    """Group of interchangeable measurement suffixes."""

    LENGTH = "length"
    ANGLE = "angle"
    TIME = "time"
    PERCENTAGE = "percentage"
    FREQUENCY = "frequency"
    RESOLUTION = "resolution"

    def __str__(self) -> str:
        return str(self.value)


UNITS: Mapping[UnitCategory, tuple[str, ...]] = MappingProxyType(
    {
        UnitCategory.LENGTH: (
            "em",
            "rem",
            "ex",
            "px",
            "cm",
            "mm",
            "in",
            "pt",
            "pc",
            "ch",
            "vw",
            "vh",
            "vmin",
            "vmax",
        ),
        UnitCategory.ANGLE: ("deg", "rad", "grad", "turn"),
        UnitCategory.TIME: ("ms", "s"),
        UnitCategory.PERCENTAGE: ("%",),
        UnitCategory.FREQUENCY: ("Hz", "kHz"),
        UnitCategory.RESOLUTION: ("dpi", "dpcm", "dppx"),
    }
)

# Used for numeric completions when the property is not known
UNIVERSAL_UNIT_CATEGORIES: tuple[UnitCategory, ...] = (
    UnitCategory.LENGTH,
    UnitCategory.PERCENTAGE,
)


def units_for(categories: tuple[UnitCategory, ...]) -> list[tuple[str, UnitCategory]]:
    """Flatten categories into ``(suffix, category)`` pairs, keeping order."""
    return [(suffix, category) for category in categories for suffix in UNITS[category]]


def category_of_unit(suffix: str) -> UnitCategory | None:
    for category, suffixes in UNITS.items():
        if suffix in suffixes:
            return category
    return None
