# RU: Описание формата символики «2 из 5»: число баров старт/значение/стоп и веса позиций.
# EN: Immutable two-of-five format description with fail-fast validation and digit decoding.

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Final, Optional, Sequence, Tuple

from twofive.errors import FormatSpecError

logger = logging.getLogger(__name__)

__all__ = [
    "FormatSpec",
    "INDUSTRIAL_FORMAT",
    "INTERLEAVED_FORMAT",
    "MAX_WIDE_PER_DIGIT",
]

# A valid digit has exactly two wide elements out of five.
MAX_WIDE_PER_DIGIT: Final[int] = 2


@dataclass(frozen=True)
class FormatSpec:
    """
    Bar counts and positional weights of a two-of-five symbology.

    Attributes:
        start_bar_count: Bars in the start pattern.
        value_bar_count: Slots consumed per digit group.
        stop_bar_count: Bars in the stop pattern.
        bar_weights: Weight added to the digit value when a slot is wide.
        digits_per_group: Digits interleaved in one group. Slot ``j`` belongs
            to digit ``j % digits_per_group``.

    Examples:
        >>> INDUSTRIAL_FORMAT.decode_group([False, True, True, False, False])
        '6'
        >>> INTERLEAVED_FORMAT.value_bar_count
        10
    """

    start_bar_count: int
    value_bar_count: int
    stop_bar_count: int
    bar_weights: Tuple[int, ...]
    digits_per_group: int = 1

    def __post_init__(self) -> None:
        """Validate parameters."""
        if self.start_bar_count < 1 or self.stop_bar_count < 1:
            raise FormatSpecError("start and stop bar counts must be >= 1")
        if self.digits_per_group < 1:
            raise FormatSpecError("digits_per_group must be >= 1")
        if self.value_bar_count < 1 or self.value_bar_count % self.digits_per_group:
            raise FormatSpecError(
                f"value_bar_count {self.value_bar_count} must be a positive "
                f"multiple of digits_per_group {self.digits_per_group}"
            )
        if len(self.bar_weights) != self.value_bar_count:
            raise FormatSpecError(
                f"expected {self.value_bar_count} bar weights, "
                f"got {len(self.bar_weights)}"
            )
        if any(w < 0 for w in self.bar_weights):
            raise FormatSpecError("bar weights must be non-negative")
        for offset in range(self.digits_per_group):
            stream = self.bar_weights[offset :: self.digits_per_group]
            if stream.count(0) != 1:
                raise FormatSpecError(
                    f"digit stream {offset} must have exactly one zero-weight "
                    f"slot, got {stream}"
                )

    @property
    def slots_per_digit(self) -> int:
        """Slots (and weights) read for one digit of a group."""
        return self.value_bar_count // self.digits_per_group

    def max_bar_count(self, digit_count: int) -> int:
        """Bars and value spaces spanned by a whole symbol of ``digit_count`` groups."""
        return (
            self.start_bar_count
            + self.stop_bar_count
            + self.value_bar_count * digit_count
        )

    def decode_digit(
        self, wide_flags: Sequence[bool], weights: Sequence[int]
    ) -> Optional[int]:
        """
        Sum the weights of wide slots.

        Returns None when more than two slots are wide. A sum above 9
        decodes to 0: weights 4 + 7 are how zero is encoded.
        """
        size = self.slots_per_digit
        if len(wide_flags) != size or len(weights) != size:
            raise FormatSpecError(
                f"a digit needs {size} slots and weights, "
                f"got {len(wide_flags)} and {len(weights)}"
            )

        value = 0
        wide_count = 0
        for is_wide, weight in zip(wide_flags, weights):
            if is_wide:
                value += weight
                wide_count += 1

        if wide_count > MAX_WIDE_PER_DIGIT:
            logger.debug("Digit rejected: %d wide slots", wide_count)
            return None

        if value > 9:
            value = 0

        return value

    def decode_group(self, wide_flags: Sequence[bool]) -> Optional[str]:
        """
        Decode one digit group into ``digits_per_group`` characters.

        Slots are split by stride: for Interleaved, even slots (bars) give
        the first digit and odd slots (spaces) the second.
        """
        if len(wide_flags) != self.value_bar_count:
            raise FormatSpecError(
                f"digit group needs {self.value_bar_count} slots, "
                f"got {len(wide_flags)}"
            )

        digits = []
        for offset in range(self.digits_per_group):
            value = self.decode_digit(
                wide_flags[offset :: self.digits_per_group],
                self.bar_weights[offset :: self.digits_per_group],
            )
            if value is None:
                return None
            digits.append(str(value))
        return "".join(digits)


INDUSTRIAL_FORMAT: Final[FormatSpec] = FormatSpec(
    start_bar_count=3,
    value_bar_count=5,
    stop_bar_count=3,
    bar_weights=(1, 2, 4, 7, 0),
)

# Start and stop counts are bars only; the spaces between them carry no data.
INTERLEAVED_FORMAT: Final[FormatSpec] = FormatSpec(
    start_bar_count=2,
    value_bar_count=10,
    stop_bar_count=2,
    bar_weights=(1, 1, 2, 2, 4, 4, 7, 7, 0, 0),
    digits_per_group=2,
)
