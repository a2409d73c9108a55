"""
reader

Чтение штрихкодов Industrial 2 of 5 и Interleaved 2 of 5 по одной строке
пикселей.

Public API:
    - PixelSampler: протокол доступа к пикселям
    - ImageSampler, BitmapSampler: реализации над Pillow и над списками
    - IndustrialBarcodeReader, InterleavedBarcodeReader: читатели
    - create_reader, read_barcode: фабрика и чтение одним вызовом

Примеры:
    >>> from twofive.reader import BitmapSampler, create_reader
    >>> reader = create_reader("industrial", digit_count=2)
    >>> reader.decode(BitmapSampler.from_row(row))
"""

from twofive.errors import (
    BarcodeReaderError,
    CalibrationError,
    FormatSpecError,
    UnsupportedSymbologyError,
)

from .base import BarcodeReader2of5
from .classifier import WidthClassifier
from .factory import create_reader, read_barcode, reader_class_map
from .industrial import IndustrialBarcodeReader
from .interleaved import InterleavedBarcodeReader
from .sampler import BitmapSampler, ImageSampler, PixelSampler
from .scan_state import ScanState

__all__ = [
    "BarcodeReader2of5",
    "BarcodeReaderError",
    "CalibrationError",
    "FormatSpecError",
    "UnsupportedSymbologyError",
    "WidthClassifier",
    "ScanState",
    "PixelSampler",
    "ImageSampler",
    "BitmapSampler",
    "IndustrialBarcodeReader",
    "InterleavedBarcodeReader",
    "create_reader",
    "read_barcode",
    "reader_class_map",
]
