"""
Run-length primitives along a single pixel row.

A run is closed by the first pixel of the opposite colour; after a run is
yielded the cursor rests on that closing pixel, which is where the next
reader picks up. A run still open at the right edge of the image is never
reported.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

from .sampler import PixelSampler
from .scan_state import ScanState

__all__ = [
    "Run",
    "find_first_black",
    "skip_to_black",
    "iter_runs",
    "read_bars",
    "read_runs",
]


@dataclass(frozen=True)
class Run:
    black: bool
    length: int


def find_first_black(sampler: PixelSampler) -> Optional[Tuple[int, int]]:
    """Raster scan (row by row, left to right) for the first black pixel."""
    for y in range(sampler.height):
        for x in range(sampler.width):
            if sampler.is_black(x, y):
                return x, y
    return None


def skip_to_black(sampler: PixelSampler, state: ScanState) -> bool:
    """Advance ``state.x`` to the next black pixel on the row."""
    while state.x < sampler.width and not sampler.is_black(state.x, state.y):
        state.x += 1
    return state.x < sampler.width


def iter_runs(sampler: PixelSampler, state: ScanState) -> Iterator[Run]:
    """
    Yield closed runs starting at ``state.x``, advancing the cursor.

    The generator is lazy: a consumer that stops early leaves ``state.x`` on
    the pixel that closed the last run it received.
    """
    width = sampler.width
    y = state.y
    if state.x >= width:
        return

    colour = sampler.is_black(state.x, y)
    length = 0
    while state.x < width:
        black = sampler.is_black(state.x, y)
        if black == colour:
            length += 1
            state.x += 1
            continue
        yield Run(colour, length)
        colour = black
        length = 0


def read_bars(
    sampler: PixelSampler, state: ScanState, count: int
) -> Optional[List[int]]:
    """Collect the lengths of the next ``count`` black runs, skipping spaces."""
    bars: List[int] = []
    if count <= 0:
        return bars
    for run in iter_runs(sampler, state):
        if not run.black:
            continue
        bars.append(run.length)
        if len(bars) == count:
            return bars
    return None


def read_runs(
    sampler: PixelSampler, state: ScanState, count: int
) -> Optional[List[Run]]:
    """Collect the next ``count`` runs of either colour."""
    runs: List[Run] = []
    if count <= 0:
        return runs
    for run in iter_runs(sampler, state):
        runs.append(run)
        if len(runs) == count:
            return runs
    return None
