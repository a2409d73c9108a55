"""
Industrial 2 of 5 (bars only).

Start: wide, wide, narrow. Stop: wide, narrow, wide. Each digit is five
bars weighted 1, 2, 4, 7, 0; spaces carry no information. Reference widths
are taken from the start pattern and frozen for the rest of the symbol.
"""

from __future__ import annotations

from typing import List, Optional

from twofive.model.format_info import INDUSTRIAL_FORMAT, FormatSpec

from .base import BarcodeReader2of5
from .sampler import PixelSampler
from .scan_state import ScanState
from .scanline import read_bars

__all__ = ["IndustrialBarcodeReader"]


class IndustrialBarcodeReader(BarcodeReader2of5):
    SYMBOLOGY_NAME = "Industrial 2 of 5"

    def _create_format(self) -> FormatSpec:
        return INDUSTRIAL_FORMAT

    def _read_start(self, sampler: PixelSampler, state: ScanState) -> bool:
        bars = read_bars(sampler, state, self._format.start_bar_count)
        if bars is None:
            return False

        for length in bars:
            state.observe_black(length)

        classifier = state.black_classifier()
        self._logger.debug(
            "Start bars %s, calibrated wide=%d narrow=%d",
            bars,
            classifier.wide,
            classifier.narrow,
        )
        return (
            classifier.is_wide(bars[0])
            and classifier.is_wide(bars[1])
            and classifier.is_narrow(bars[2])
        )

    def _read_value(self, sampler: PixelSampler, state: ScanState) -> Optional[str]:
        fmt = self._format
        classifier = state.black_classifier()
        bars = read_bars(sampler, state, fmt.value_bar_count * state.digit_count)
        if bars is None:
            return None

        matrix: List[List[bool]] = [
            [classifier.is_wide(length) for length in bars[i : i + fmt.value_bar_count]]
            for i in range(0, len(bars), fmt.value_bar_count)
        ]

        digits = []
        for row in matrix:
            group = fmt.decode_group(row)
            if group is None:
                return None
            digits.append(group)
        return "".join(digits)

    def _read_stop(self, sampler: PixelSampler, state: ScanState) -> bool:
        bars = read_bars(sampler, state, self._format.stop_bar_count)
        if bars is None:
            return False

        classifier = state.black_classifier()
        return (
            classifier.is_wide(bars[0])
            and classifier.is_narrow(bars[1])
            and classifier.is_wide(bars[2])
        )
