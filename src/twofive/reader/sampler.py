"""
Pixel access used by the readers.

The readers only ask whether a pixel is pure black. Anything else (gray,
anti-aliased edges, colour) counts as a space, so photographs should be
binarised first with :func:`twofive.imaging.to_mono`.
"""

from __future__ import annotations

import logging
from typing import Any, List, Protocol, Sequence, runtime_checkable

from PIL import Image

logger = logging.getLogger(__name__)

__all__ = ["PixelSampler", "ImageSampler", "BitmapSampler"]


@runtime_checkable
class PixelSampler(Protocol):
    """Read-only view of a raster image."""

    @property
    def width(self) -> int: ...

    @property
    def height(self) -> int: ...

    def is_black(self, x: int, y: int) -> bool:
        """True iff the pixel at (x, y) is pure black."""
        ...


class ImageSampler:
    """
    PixelSampler over a Pillow image.

    The image is converted to RGB once; a pixel is black when
    R + G + B == 0.
    """

    def __init__(self, image: Image.Image) -> None:
        if not isinstance(image, Image.Image):
            raise TypeError(f"image must be PIL.Image.Image, got {type(image)!r}")
        self._image = image if image.mode == "RGB" else image.convert("RGB")
        self._pixels: Any = self._image.load()
        logger.debug(
            "ImageSampler created: %dx%d (source mode %s)",
            self._image.width,
            self._image.height,
            image.mode,
        )

    @property
    def width(self) -> int:
        return self._image.width

    @property
    def height(self) -> int:
        return self._image.height

    def is_black(self, x: int, y: int) -> bool:
        r, g, b = self._pixels[x, y]
        return r + g + b == 0


class BitmapSampler:
    """
    PixelSampler over nested sequences, ``rows[y][x]`` truthy meaning black.

    Example:
        >>> s = BitmapSampler.from_row([0, 1, 1, 0])
        >>> s.width, s.height, s.is_black(1, 0)
        (4, 1, True)
    """

    def __init__(self, rows: Sequence[Sequence[Any]]) -> None:
        bitmap: List[List[bool]] = [[bool(v) for v in row] for row in rows]
        widths = {len(row) for row in bitmap}
        if len(widths) > 1:
            raise ValueError(f"rows must have equal length, got widths {sorted(widths)}")
        self._rows = bitmap
        self._width = widths.pop() if widths else 0

    @classmethod
    def from_row(cls, row: Sequence[Any], height: int = 1) -> "BitmapSampler":
        """Repeat a single row ``height`` times."""
        if height < 1:
            raise ValueError("height must be >= 1")
        return cls([list(row) for _ in range(height)])

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return len(self._rows)

    def is_black(self, x: int, y: int) -> bool:
        return self._rows[y][x]
