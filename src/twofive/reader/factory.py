"""Reader lookup by symbology and one-call decoding of Pillow images."""

from __future__ import annotations

import logging
from typing import Dict, Optional, Type, Union

from PIL import Image

from twofive.errors import UnsupportedSymbologyError
from twofive.imaging import to_mono
from twofive.model.enums import GrayScaleMethod, MonoThreshold, Symbology

from .base import BarcodeReader2of5
from .industrial import IndustrialBarcodeReader
from .interleaved import InterleavedBarcodeReader

logger = logging.getLogger(__name__)

__all__ = ["create_reader", "read_barcode", "reader_class_map"]

_READERS: Dict[Symbology, Type[BarcodeReader2of5]] = {
    Symbology.INDUSTRIAL: IndustrialBarcodeReader,
    Symbology.INTERLEAVED: InterleavedBarcodeReader,
}


def reader_class_map() -> Dict[Symbology, Type[BarcodeReader2of5]]:
    return dict(_READERS)


def create_reader(
    symbology: Union[Symbology, str], digit_count: int = 1
) -> BarcodeReader2of5:
    """
    Build a reader for ``symbology``.

    Raises:
        UnsupportedSymbologyError: unknown symbology value.
    """
    try:
        key = Symbology(symbology)
    except ValueError:
        raise UnsupportedSymbologyError(symbology) from None
    reader_cls = _READERS.get(key)
    if reader_cls is None:
        raise UnsupportedSymbologyError(symbology)
    return reader_cls(digit_count)


def read_barcode(
    image: Image.Image,
    symbology: Union[Symbology, str] = Symbology.INDUSTRIAL,
    digit_count: int = 1,
    threshold: Optional[Union[MonoThreshold, int]] = None,
    method: GrayScaleMethod = GrayScaleMethod.NTSC,
) -> Optional[str]:
    """
    Decode a barcode from a Pillow image.

    Args:
        image: Source image.
        symbology: Which two-of-five variant to read.
        digit_count: Digit groups to read (pairs of digits for Interleaved).
        threshold: When given, the image is first converted to monochrome
            so that dark gray pixels count as bars.
        method: Gray conversion used together with ``threshold``.

    Returns:
        Decoded digits or None.
    """
    reader = create_reader(symbology, digit_count)
    if threshold is not None:
        logger.debug(
            "Binarising image with %s threshold %d",
            GrayScaleMethod(method).value,
            int(threshold),
        )
        image = to_mono(image, method, threshold)
    return reader.read_image(image)
