"""
Interleaved 2 of 5 (bars and spaces).

Each group of ten alternating runs carries two digits: the five bars encode
the first digit, the five spaces the second. Because spaces carry data they
need their own references, so the whole symbol is pre-scanned before the
start pattern is validated.

Layout on the row::

    start: bar space bar space      (all narrow)
    value: (bar space) x 5 per pair of digits
    stop:  wide bar, narrow space, terminating bar
"""

from __future__ import annotations

from typing import List, Optional

from twofive.model.format_info import INTERLEAVED_FORMAT, FormatSpec

from .base import BarcodeReader2of5
from .classifier import WidthClassifier
from .sampler import PixelSampler
from .scan_state import ScanState
from .scanline import iter_runs, read_bars, read_runs, skip_to_black

__all__ = ["InterleavedBarcodeReader"]


class InterleavedBarcodeReader(BarcodeReader2of5):
    SYMBOLOGY_NAME = "Interleaved 2 of 5"

    def _create_format(self) -> FormatSpec:
        return INTERLEAVED_FORMAT

    def _prescan_weights(self, sampler: PixelSampler, state: ScanState) -> bool:
        """
        Calibrate black and white references from the whole symbol.

        Every bar is collected. Spaces are collected only inside the value
        part: the spaces of the start and stop patterns are always narrow
        and are excluded. The cursor in ``state`` is not moved.
        """
        fmt = self._format
        max_bar_num = fmt.max_bar_count(state.digit_count)
        first_value_space = fmt.start_bar_count
        last_value_space = max_bar_num - fmt.stop_bar_count

        black_weights: List[int] = []
        white_weights: List[int] = []
        bar_count = 0

        probe = state.copy()
        for run in iter_runs(sampler, probe):
            if run.black:
                black_weights.append(run.length)
                bar_count += 1
            elif first_value_space < bar_count < last_value_space:
                white_weights.append(run.length)
                bar_count += 1
            if bar_count >= max_bar_num:
                break

        if bar_count < max_bar_num:
            self._logger.debug(
                "Pre-scan found %d of %d bars before the row ended",
                bar_count,
                max_bar_num,
            )
            return False

        state.calibrate_black(WidthClassifier.from_widths(black_weights))
        state.calibrate_white(WidthClassifier.from_widths(white_weights))
        self._logger.debug(
            "Pre-scan: black wide=%s narrow=%s, white wide=%s narrow=%s",
            state.black_wide,
            state.black_narrow,
            state.white_wide,
            state.white_narrow,
        )
        return True

    def _read_start(self, sampler: PixelSampler, state: ScanState) -> bool:
        if not self._prescan_weights(sampler, state):
            return False

        bars = read_bars(sampler, state, self._format.start_bar_count)
        if bars is None:
            return False

        classifier = state.black_classifier()
        return all(classifier.is_narrow(length) for length in bars[:2])

    def _read_value(self, sampler: PixelSampler, state: ScanState) -> Optional[str]:
        if not skip_to_black(sampler, state):
            return None

        fmt = self._format
        black = state.black_classifier()
        white = state.white_classifier()
        runs = read_runs(sampler, state, fmt.value_bar_count * state.digit_count)
        if runs is None:
            return None

        flags = [
            black.is_wide(run.length) if run.black else white.is_wide(run.length)
            for run in runs
        ]
        matrix: List[List[bool]] = [
            flags[i : i + fmt.value_bar_count]
            for i in range(0, len(flags), fmt.value_bar_count)
        ]

        digits = []
        for row in matrix:
            group = fmt.decode_group(row)
            if group is None:
                return None
            digits.append(group)
        return "".join(digits)

    def _read_stop(self, sampler: PixelSampler, state: ScanState) -> bool:
        runs = read_runs(sampler, state, 2)
        if runs is None:
            return False

        bar, space = runs
        if not bar.black or space.black:
            return False
        return state.black_classifier().is_wide(
            bar.length
        ) and state.white_classifier().is_narrow(space.length)
