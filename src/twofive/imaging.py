"""
Image preprocessing for the readers.

The readers treat only pure black (R + G + B == 0) as bar pixels, so scanned
or photographed labels are converted to monochrome first: every pixel whose
gray value is below the threshold becomes black, everything else white.

Example:
    >>> from twofive.imaging import to_mono
    >>> from twofive.model.enums import GrayScaleMethod, MonoThreshold
    >>> mono = to_mono(photo, GrayScaleMethod.NTSC, MonoThreshold.MEDIUM)
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, Final, Optional, Tuple, Union

from PIL import Image, ImageChops, ImageMath

from twofive.model.enums import GrayScaleMethod, MonoThreshold

logger = logging.getLogger(__name__)

__all__ = ["gray_value", "to_gray", "to_mono", "trim"]

# NTSC weights in 10-bit fixed point
NTSC_R_RATIO: Final[int] = int(0.298912 * 1024)
NTSC_G_RATIO: Final[int] = int(0.586611 * 1024)
NTSC_B_RATIO: Final[int] = int(0.114478 * 1024)

RGB = Tuple[int, int, int]


def _gray_basic(r: int, g: int, b: int) -> int:
    return (r + g + b) // 3


def _gray_middle_value(r: int, g: int, b: int) -> int:
    return (max(r, g, b) + min(r, g, b)) // 2


def _gray_ntsc(r: int, g: int, b: int) -> int:
    return min(255, (r * NTSC_R_RATIO + g * NTSC_G_RATIO + b * NTSC_B_RATIO) >> 10)


_GRAY_FUNCS: Dict[GrayScaleMethod, Callable[[int, int, int], int]] = {
    GrayScaleMethod.BASIC: _gray_basic,
    GrayScaleMethod.MIDDLE_VALUE: _gray_middle_value,
    GrayScaleMethod.NTSC: _gray_ntsc,
}


def gray_value(pixel: RGB, method: GrayScaleMethod = GrayScaleMethod.NTSC) -> int:
    """Gray level (0-255) of one RGB pixel."""
    try:
        func = _GRAY_FUNCS[GrayScaleMethod(method)]
    except ValueError:
        raise ValueError(f"Unsupported gray scale method: {method!r}") from None
    r, g, b = pixel[:3]
    return func(r, g, b)


def _check_image(image: Image.Image) -> None:
    if not isinstance(image, Image.Image):
        raise TypeError(f"image must be PIL.Image.Image, got {type(image)!r}")


def _bands_basic(r: Image.Image, g: Image.Image, b: Image.Image) -> Image.Image:
    return ImageMath.lambda_eval(
        lambda args: (args["r"] + args["g"] + args["b"]) / 3, r=r, g=g, b=b
    )


def _bands_middle_value(
    r: Image.Image, g: Image.Image, b: Image.Image
) -> Image.Image:
    hi = ImageChops.lighter(ImageChops.lighter(r, g), b)
    lo = ImageChops.darker(ImageChops.darker(r, g), b)
    return ImageMath.lambda_eval(
        lambda args: (args["hi"] + args["lo"]) >> 1, hi=hi, lo=lo
    )


def _bands_ntsc(r: Image.Image, g: Image.Image, b: Image.Image) -> Image.Image:
    return ImageMath.lambda_eval(
        lambda args: (
            args["r"] * NTSC_R_RATIO
            + args["g"] * NTSC_G_RATIO
            + args["b"] * NTSC_B_RATIO
        )
        >> 10,
        r=r,
        g=g,
        b=b,
    )


# Same arithmetic as _GRAY_FUNCS, evaluated on whole 32-bit integer bands.
_GRAY_BANDS: Dict[
    GrayScaleMethod, Callable[[Image.Image, Image.Image, Image.Image], Image.Image]
] = {
    GrayScaleMethod.BASIC: _bands_basic,
    GrayScaleMethod.MIDDLE_VALUE: _bands_middle_value,
    GrayScaleMethod.NTSC: _bands_ntsc,
}


def _convert(
    image: Image.Image,
    method: GrayScaleMethod,
    threshold: Optional[int],
) -> Image.Image:
    try:
        bands_func = _GRAY_BANDS[GrayScaleMethod(method)]
    except ValueError:
        raise ValueError(f"Unsupported gray scale method: {method!r}") from None

    # Alpha is dropped: the result is always opaque.
    r, g, b = image.convert("RGB").split()
    # "I" -> "L" clips to 0..255
    gray = bands_func(r, g, b).convert("L")
    if threshold is not None:
        gray = gray.point(lambda v: 255 if v >= threshold else 0)

    return Image.merge("RGB", (gray, gray, gray))


def to_gray(
    image: Image.Image, method: GrayScaleMethod = GrayScaleMethod.NTSC
) -> Image.Image:
    """Gray-scale copy of ``image`` as an RGB image with equal channels."""
    _check_image(image)
    logger.debug("Gray scale conversion (%s) of %dx%d image", method, *image.size)
    return _convert(image, method, None)


def to_mono(
    image: Image.Image,
    method: GrayScaleMethod = GrayScaleMethod.NTSC,
    threshold: Union[MonoThreshold, int] = MonoThreshold.MEDIUM,
) -> Image.Image:
    """
    Monochrome copy of ``image``: gray >= threshold is white, below is black.

    Raises:
        ValueError: threshold outside 0..256.
    """
    _check_image(image)
    level = int(threshold)
    if not 0 <= level <= 256:
        raise ValueError(f"threshold must be between 0 and 256, got {level}")
    logger.debug(
        "Monochrome conversion (%s, threshold %d) of %dx%d image",
        method,
        level,
        *image.size,
    )
    return _convert(image, method, level)


def trim(image: Image.Image, box: Tuple[int, int, int, int]) -> Image.Image:
    """
    Crop ``box`` = (left, top, right, bottom) out of ``image``.

    Useful to restrict the reader to the label area so the first black
    pixel found is the barcode's start bar.
    """
    _check_image(image)
    left, top, right, bottom = box
    if not (0 <= left < right <= image.width and 0 <= top < bottom <= image.height):
        raise ValueError(f"Invalid crop box {box} for image {image.size}")
    return image.crop(box)
