"""
model/enums.py

(Кратко RU: перечисления для читателя штрихкодов «2 из 5».)

EN: Domain enums for the two-of-five reader: supported symbologies, gray-scale
conversion methods and monochrome threshold presets.
"""

from __future__ import annotations

from enum import Enum, IntEnum
from typing import Literal


class Symbology(str, Enum):
    INDUSTRIAL = "industrial"
    INTERLEAVED = "interleaved"

    @property
    def digits_per_group(self) -> int:
        """Interleaved groups carry one digit in bars and one in spaces."""
        return 2 if self is Symbology.INTERLEAVED else 1

    def localized_name(self, lang: Literal["ru", "en"] = "ru") -> str:
        names_ru = {
            Symbology.INDUSTRIAL: "Промышленный 2 из 5",
            Symbology.INTERLEAVED: "Чередующийся 2 из 5",
        }
        names_en = {
            Symbology.INDUSTRIAL: "Industrial 2 of 5",
            Symbology.INTERLEAVED: "Interleaved 2 of 5",
        }
        return names_ru[self] if lang == "ru" else names_en[self]


class GrayScaleMethod(str, Enum):
    BASIC = "basic"  # (R + G + B) / 3
    MIDDLE_VALUE = "middle_value"  # (max + min) / 2
    NTSC = "ntsc"  # weighted, fixed point

    def localized_name(self, lang: Literal["ru", "en"] = "ru") -> str:
        names_ru = {
            GrayScaleMethod.BASIC: "Простое среднее",
            GrayScaleMethod.MIDDLE_VALUE: "Метод среднего значения",
            GrayScaleMethod.NTSC: "Взвешенное среднее NTSC",
        }
        names_en = {
            GrayScaleMethod.BASIC: "Simple average",
            GrayScaleMethod.MIDDLE_VALUE: "Middle value",
            GrayScaleMethod.NTSC: "NTSC weighted average",
        }
        return names_ru[self] if lang == "ru" else names_en[self]


class MonoThreshold(IntEnum):
    """Preset gray levels; gray values below the threshold become black."""

    VERY_LOW = 42
    LOW = 84
    MEDIUM = 126
    HIGH = 170
    VERY_HIGH = 212

    @classmethod
    def from_name(cls, name: str) -> "MonoThreshold":
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown threshold preset: {name!r}") from None
