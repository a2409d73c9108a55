"""
Исключения пакета twofive.

Ошибки разбора штрихкода (нет стартового кода, неверный шаблон, больше
двух широких элементов в группе) исключениями НЕ являются: читатель
просто возвращает None. Исключения здесь сигнализируют об ошибках
программиста или конфигурации.

Иерархия:
    BarcodeReaderError (базовое)
    ├── FormatSpecError
    ├── CalibrationError
    ├── UnsupportedSymbologyError
    ├── ConfigError (также ValueError)
    └── PatternGenError
"""

from __future__ import annotations

from typing import Optional

__all__: list[str] = [
    "BarcodeReaderError",
    "FormatSpecError",
    "CalibrationError",
    "UnsupportedSymbologyError",
    "ConfigError",
    "PatternGenError",
]


class BarcodeReaderError(Exception):
    """Base class for all twofive errors."""


class FormatSpecError(BarcodeReaderError):
    """Symbology format description is inconsistent."""


class CalibrationError(BarcodeReaderError):
    """
    Width classification requested before reference widths were calibrated,
    or calibration was attempted from an empty set of runs.
    """


class UnsupportedSymbologyError(BarcodeReaderError):
    """No reader is registered for the requested symbology."""

    def __init__(self, symbology: object) -> None:
        super().__init__(f"Unsupported symbology: {symbology!r}")
        self.symbology = symbology


class ConfigError(BarcodeReaderError, ValueError):
    """Invalid configuration value."""

    def __init__(self, message: str, key: Optional[str] = None) -> None:
        super().__init__(message)
        self.key = key


class PatternGenError(BarcodeReaderError):
    """Pattern generation/validation error."""
