"""Symbology enums and format descriptions."""

from .enums import GrayScaleMethod, MonoThreshold, Symbology
from .format_info import INDUSTRIAL_FORMAT, INTERLEAVED_FORMAT, FormatSpec

__all__ = [
    "Symbology",
    "GrayScaleMethod",
    "MonoThreshold",
    "FormatSpec",
    "INDUSTRIAL_FORMAT",
    "INTERLEAVED_FORMAT",
]
