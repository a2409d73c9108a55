"""
Abstract two-of-five reader.

RU: Общий конвейер чтения: поиск первого чёрного пикселя, затем стартовый
код, значение и стоп-код. Шаги, зависящие от символики, реализуются в
подклассах.

EN: The pipeline is ``seek start -> read start -> read value -> read stop``.
Every stage either advances the shared cursor or rejects the row; any
rejection makes ``decode()`` return None. No partial results are returned and
nothing is retried.

Scratch state lives in a ``ScanState`` created per call, so a reader instance
can be shared between threads as long as each call gets its own sampler.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Optional

from PIL import Image

from twofive.model.format_info import FormatSpec

from .sampler import ImageSampler, PixelSampler
from .scan_state import ScanState, coerce_digit_count
from .scanline import find_first_black

logger = logging.getLogger(__name__)

__all__ = ["BarcodeReader2of5"]


class BarcodeReader2of5(ABC):
    """
    Base class for two-of-five readers.

    Args:
        digit_count: Number of digit groups to read. Values below 1 are
            coerced to 1.

    Subclasses provide the format description and the three grammar steps.
    """

    SYMBOLOGY_NAME: str = "2 of 5"

    def __init__(self, digit_count: int = 1) -> None:
        self._format = self._create_format()
        if not isinstance(self._format, FormatSpec):
            raise TypeError(
                f"{type(self).__name__}._create_format() must return FormatSpec, "
                f"got {type(self._format)!r}"
            )
        self._digit_count = 1
        self.digit_count = digit_count
        self._logger = logger.getChild(type(self).__name__)

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    @property
    def digit_count(self) -> int:
        return self._digit_count

    @digit_count.setter
    def digit_count(self, value: int) -> None:
        self._digit_count = coerce_digit_count(value)

    @property
    def format_spec(self) -> FormatSpec:
        return self._format

    def expected_length(self, digit_count: Optional[int] = None) -> int:
        """Length of a successfully decoded string."""
        count = self._digit_count if digit_count is None else coerce_digit_count(digit_count)
        return count * self._format.digits_per_group

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------

    def decode(
        self, sampler: PixelSampler, digit_count: Optional[int] = None
    ) -> Optional[str]:
        """
        Read one barcode from ``sampler``.

        Args:
            sampler: Pixel source.
            digit_count: Overrides the configured digit count for this call
                (coerced to at least 1).

        Returns:
            The decoded digits, or None when the row does not hold a
            well-formed symbol.
        """
        count = self._digit_count if digit_count is None else coerce_digit_count(digit_count)
        state = ScanState(digit_count=count)
        self._logger.debug(
            "Decoding %s: %d digit group(s), image %dx%d",
            self.SYMBOLOGY_NAME,
            count,
            sampler.width,
            sampler.height,
        )

        if not self._reset_start(sampler, state):
            self._logger.debug("No black pixel found")
            return None

        if not self._read_start(sampler, state):
            self._logger.debug("Start pattern rejected at row %d", state.y)
            return None

        barcode = self._read_value(sampler, state)
        if barcode is None:
            self._logger.debug("Value part rejected at x=%d, row %d", state.x, state.y)
            return None

        if not self._read_stop(sampler, state):
            self._logger.debug("Stop pattern rejected at x=%d, row %d", state.x, state.y)
            return None

        self._logger.info("Decoded %s: %s", self.SYMBOLOGY_NAME, barcode)
        return barcode

    def read_image(
        self, image: Image.Image, digit_count: Optional[int] = None
    ) -> Optional[str]:
        """Decode a Pillow image. Only pure black pixels count as bars."""
        return self.decode(ImageSampler(image), digit_count)

    # ------------------------------------------------------------------
    # Hooks
    # ------------------------------------------------------------------

    @abstractmethod
    def _create_format(self) -> FormatSpec:
        """Format description of the symbology."""
        ...

    def _reset_start(self, sampler: PixelSampler, state: ScanState) -> bool:
        """Place the cursor on the first black pixel of the image."""
        found = find_first_black(sampler)
        if found is None:
            return False
        state.x, state.y = found
        return True

    @abstractmethod
    def _read_start(self, sampler: PixelSampler, state: ScanState) -> bool:
        """Consume and validate the start pattern."""
        ...

    @abstractmethod
    def _read_value(self, sampler: PixelSampler, state: ScanState) -> Optional[str]:
        """Consume the digit groups and return their digits."""
        ...

    @abstractmethod
    def _read_stop(self, sampler: PixelSampler, state: ScanState) -> bool:
        """Consume and validate the stop pattern."""
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}(digit_count={self._digit_count})"
