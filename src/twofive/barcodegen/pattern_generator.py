from __future__ import annotations

import logging
from io import BytesIO
from itertools import combinations
from typing import Any, Dict, List, Optional, Tuple, TypedDict

from PIL import Image, ImageDraw

from twofive.errors import PatternGenError
from twofive.model.enums import Symbology
from twofive.model.format_info import INDUSTRIAL_FORMAT

logger = logging.getLogger(__name__)

__all__ = [
    "PatternGenerator",
    "PatternGenError",
    "PatternOptions",
    "digit_wide_flags",
]

# (is_black, width in pixels)
RunSpec = Tuple[bool, int]


class PatternOptions(TypedDict, total=False):
    """
    Типобезопасные опции геометрии штрихкода (в пикселях).

    Example:
        >>> options: PatternOptions = {"narrow": 2, "wide": 6, "quiet_zone": 8}
        >>> gen = PatternGenerator(Symbology.INDUSTRIAL, "123", options)
    """

    narrow: int  # Ширина узкого элемента
    wide: int  # Ширина широкого элемента
    quiet_zone: int  # Белое поле слева и справа
    height: int  # Высота изображения
    background: str  # Цвет фона
    foreground: str  # Цвет баров; читатель распознаёт только чистый чёрный


_DEFAULT_OPTIONS: Dict[str, Any] = {
    "narrow": 2,
    "wide": 5,
    "quiet_zone": 10,
    "height": 20,
    "background": "white",
    "foreground": "black",
}


def digit_wide_flags(digit: int) -> Tuple[bool, ...]:
    """
    Wide/narrow pattern of one digit over the weights 1, 2, 4, 7, 0.

    Exactly two of the five elements are wide; zero is encoded as 4 + 7.

    Examples:
        >>> digit_wide_flags(6)
        (False, True, True, False, False)
        >>> digit_wide_flags(0)
        (False, False, True, True, False)
    """
    if not 0 <= digit <= 9:
        raise PatternGenError(f"digit must be 0..9, got {digit}")
    weights = INDUSTRIAL_FORMAT.bar_weights
    target = 11 if digit == 0 else digit
    for i, j in combinations(range(len(weights)), 2):
        if weights[i] + weights[j] == target:
            return tuple(k in (i, j) for k in range(len(weights)))
    raise PatternGenError(f"no two-of-five pattern for digit {digit}")


class PatternGenerator:
    """
    Generator of two-of-five symbols in the exact geometry the readers expect.

    Args:
        symbology: INDUSTRIAL or INTERLEAVED
        data: Digit string (even length for Interleaved)
        options: Optional geometry/colour overrides
    """

    def __init__(
        self,
        symbology: Symbology,
        data: str,
        options: Optional[PatternOptions] = None,
    ) -> None:
        if not isinstance(symbology, Symbology):
            raise TypeError(
                f"symbology must be Symbology enum, got {type(symbology)!r}"
            )
        self.symbology = symbology
        self.data = data
        self.options: Dict[str, Any] = {**_DEFAULT_OPTIONS, **(options or {})}

    def validate(self) -> None:
        """
        Проверяет данные и геометрию.

        Raises:
            PatternGenError: при ошибке данных или геометрии.
        """
        if not isinstance(self.data, str) or not self.data:
            raise PatternGenError("Barcode data must be non-empty string")
        if not self.data.isdigit() or not self.data.isascii():
            raise PatternGenError(
                f"{self.symbology.name} barcode requires digits only."
            )
        if self.symbology == Symbology.INTERLEAVED and len(self.data) % 2 != 0:
            raise PatternGenError("Interleaved 2 of 5 must be even number of digits.")

        narrow = self.options["narrow"]
        wide = self.options["wide"]
        if not isinstance(narrow, int) or not isinstance(wide, int):
            raise PatternGenError("narrow and wide must be integers")
        if narrow < 1 or wide <= narrow:
            raise PatternGenError(
                f"need 1 <= narrow < wide, got narrow={narrow} wide={wide}"
            )
        if self.options["quiet_zone"] < 1:
            raise PatternGenError("quiet_zone must be >= 1")
        if self.options["height"] < 1:
            raise PatternGenError("height must be >= 1")

    @property
    def digit_count(self) -> int:
        """Digit count to configure the matching reader with."""
        if self.symbology == Symbology.INTERLEAVED:
            return len(self.data) // 2
        return len(self.data)

    def encode_runs(self) -> List[RunSpec]:
        """
        Symbol as alternating runs, quiet zones included.

        Industrial puts a narrow space after every bar. Interleaved ends
        with a narrow terminating bar after the stop pattern.
        """
        self.validate()
        n = self.options["narrow"]
        w = self.options["wide"]
        quiet = self.options["quiet_zone"]

        def width(is_wide: bool) -> int:
            return w if is_wide else n

        runs: List[RunSpec] = [(False, quiet)]

        if self.symbology == Symbology.INDUSTRIAL:
            bars: List[bool] = [True, True, False]
            for ch in self.data:
                bars.extend(digit_wide_flags(int(ch)))
            bars.extend([True, False, True])
            for is_wide in bars:
                runs.append((True, width(is_wide)))
                runs.append((False, n))
            # the last space merges into the quiet zone
            runs.pop()
        else:
            runs.extend([(True, n), (False, n), (True, n), (False, n)])
            for i in range(0, len(self.data), 2):
                bar_flags = digit_wide_flags(int(self.data[i]))
                space_flags = digit_wide_flags(int(self.data[i + 1]))
                for bar_wide, space_wide in zip(bar_flags, space_flags):
                    runs.append((True, width(bar_wide)))
                    runs.append((False, width(space_wide)))
            runs.extend([(True, w), (False, n), (True, n)])

        runs.append((False, quiet))
        logger.debug(
            "Encoded %s [%s] into %d runs", self.symbology.value, self.data, len(runs)
        )
        return runs

    def render_row(self) -> List[bool]:
        """Single pixel row, True for black."""
        row: List[bool] = []
        for is_black, length in self.encode_runs():
            row.extend([is_black] * length)
        return row

    def render_image(self, height: Optional[int] = None) -> Image.Image:
        """
        Рендеринг изображения штрихкода (RGB), бары на всю высоту.

        Args:
            height: Высота в пикселях (по умолчанию из options).

        Returns:
            PIL Image объект (RGB режим).
        """
        runs = self.encode_runs()
        img_height = height if height is not None else self.options["height"]
        if img_height < 1:
            raise PatternGenError("height must be >= 1")
        img_width = sum(length for _, length in runs)

        img = Image.new("RGB", (img_width, img_height), color=self.options["background"])
        draw = ImageDraw.Draw(img)
        x = 0
        for is_black, length in runs:
            if is_black:
                draw.rectangle(
                    (x, 0, x + length - 1, img_height - 1),
                    fill=self.options["foreground"],
                )
            x += length
        logger.debug(
            "Rendered %s [%s] as %dx%d image",
            self.symbology.value,
            self.data,
            img_width,
            img_height,
        )
        return img

    def render_bytes(self, height: Optional[int] = None) -> bytes:
        img = self.render_image(height)
        buf = BytesIO()
        img.save(buf, format="PNG")
        buf.seek(0)
        return buf.read()
