"""Wide/narrow classification of measured run lengths."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from twofive.errors import CalibrationError

__all__ = ["WidthClassifier"]


@dataclass(frozen=True)
class WidthClassifier:
    """
    Classifies a run length by its distance to two calibrated references.

    A length exactly halfway between ``wide`` and ``narrow`` is neither wide
    nor narrow. Start and stop patterns that hit such a tie are rejected.

    Examples:
        >>> c = WidthClassifier(wide=5, narrow=2)
        >>> c.is_wide(6), c.is_narrow(1)
        (True, True)
        >>> WidthClassifier(wide=5, narrow=1).is_wide(3)
        False
    """

    wide: int
    narrow: int

    def __post_init__(self) -> None:
        if self.wide < self.narrow:
            raise CalibrationError(
                f"wide reference {self.wide} is below narrow reference {self.narrow}"
            )

    @classmethod
    def from_widths(cls, widths: Iterable[int]) -> "WidthClassifier":
        """Calibrate from observed run lengths: wide = max, narrow = min."""
        values = list(widths)
        if not values:
            raise CalibrationError("cannot calibrate from an empty set of runs")
        return cls(wide=max(values), narrow=min(values))

    def is_wide(self, measured: int) -> bool:
        return abs(measured - self.wide) < abs(measured - self.narrow)

    def is_narrow(self, measured: int) -> bool:
        return abs(measured - self.wide) > abs(measured - self.narrow)
