"""
Polyline approximation of curves.

Each segment's parameter interval is bisected until the curve point at the
middle of an interval lies within ``max_dist`` of the middle of the chord.
The chords are handed to a collector in parameter order.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List, Protocol, Tuple

from bendspline.logging import get_logger

logger = get_logger("approx")


@dataclass
class Line2d:
    """Straight line from (pstartx, pstarty) to (pendx, pendy)."""

    pstartx: float
    pstarty: float
    pendx: float
    pendy: float

    def start(self) -> Tuple[float, float]:
        return self.pstartx, self.pstarty

    def end(self) -> Tuple[float, float]:
        return self.pendx, self.pendy


class LineCollector2d(Protocol):
    """Receives the lines of an approximation."""

    def line_to(self, pstartx: float, pstarty: float, pendx: float, pendy: float) -> None:
        ...


@dataclass
class LineToSliceCollector2d:
    """Collects approximation lines into a list."""

    lines: List[Line2d] = field(default_factory=list)

    def line_to(self, pstartx: float, pstarty: float, pendx: float, pendy: float) -> None:
        self.lines.append(Line2d(pstartx, pstarty, pendx, pendy))


def approx_all(spline, max_dist: float, collector: LineCollector2d, max_depth: int = 16) -> int:
    """Approximate a whole spline by lines.

    Args:
        spline: Any curve with ``at(t)`` and ``knots()``.
        max_dist: Maximum distance between curve and chord at interval middles.
        collector: Receives the lines.
        max_depth: Bisection depth limit per segment.

    Returns:
        Number of lines emitted.
    """
    if max_dist <= 0:
        raise ValueError(f"max_dist must be > 0, got {max_dist}")

    knots = spline.knots()
    count = 0
    for i in range(knots.segment_count()):
        ts, te = knots.knot(i), knots.knot(i + 1)
        count += approx_segment(spline, ts, te, max_dist, collector, max_depth)
    logger.debug(f"approximated {knots.segment_count()} segments with {count} lines")
    return count


def approx_segment(
    spline,
    ts: float,
    te: float,
    max_dist: float,
    collector: LineCollector2d,
    max_depth: int = 16,
) -> int:
    """Approximate the curve between parameters ``ts`` and ``te``."""
    pstart = spline.at(ts)
    pend = spline.at(te)
    return _approx(spline, ts, pstart, te, pend, max_dist, collector, max_depth)


def _approx(spline, ts, pstart, te, pend, max_dist, collector, depth) -> int:
    tm = (ts + te) / 2
    pmid = spline.at(tm)
    chord_mid = ((pstart[0] + pend[0]) / 2, (pstart[1] + pend[1]) / 2)
    if depth <= 0 or math.dist(pmid, chord_mid) <= max_dist:
        collector.line_to(pstart[0], pstart[1], pend[0], pend[1])
        return 1
    return _approx(spline, ts, pstart, tm, pmid, max_dist, collector, depth - 1) + _approx(
        spline, tm, pmid, te, pend, max_dist, collector, depth - 1
    )
