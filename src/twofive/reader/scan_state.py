"""Per-call scanning cursor and calibration references."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

from twofive.errors import CalibrationError

from .classifier import WidthClassifier

__all__ = ["ScanState", "coerce_digit_count"]


def coerce_digit_count(value: int) -> int:
    """Digit counts below 1 are raised to 1."""
    return max(1, int(value))


@dataclass
class ScanState:
    """
    Mutable state of a single ``decode()`` call.

    ``x``/``y`` is the raster cursor; ``y`` stays fixed once the first black
    pixel is found. Reference widths stay None until the reader calibrates them.
    """

    digit_count: int = 1
    x: int = 0
    y: int = 0
    black_wide: Optional[int] = None
    black_narrow: Optional[int] = None
    white_wide: Optional[int] = None
    white_narrow: Optional[int] = None

    def __post_init__(self) -> None:
        self.digit_count = coerce_digit_count(self.digit_count)

    def copy(self) -> "ScanState":
        return replace(self)

    def observe_black(self, length: int) -> None:
        """Widen the black references to include ``length``."""
        if self.black_wide is None or length > self.black_wide:
            self.black_wide = length
        if self.black_narrow is None or length < self.black_narrow:
            self.black_narrow = length

    def calibrate_black(self, classifier: WidthClassifier) -> None:
        self.black_wide = classifier.wide
        self.black_narrow = classifier.narrow

    def calibrate_white(self, classifier: WidthClassifier) -> None:
        self.white_wide = classifier.wide
        self.white_narrow = classifier.narrow

    def black_classifier(self) -> WidthClassifier:
        if self.black_wide is None or self.black_narrow is None:
            raise CalibrationError("black bar widths are not calibrated")
        return WidthClassifier(wide=self.black_wide, narrow=self.black_narrow)

    def white_classifier(self) -> WidthClassifier:
        if self.white_wide is None or self.white_narrow is None:
            raise CalibrationError("white space widths are not calibrated")
        return WidthClassifier(wide=self.white_wide, narrow=self.white_narrow)
