"""
Canonical (power basis) cubic splines.

A segment is a cubic ``a + b*u + c*u^2 + d*u^3`` per axis, evaluated on the
local parameter ``u`` in [0, 1]. A CanonicalSpline2d maps the global curve
parameter ``t`` onto a segment and its local ``u``.
"""

from __future__ import annotations

import math
from bisect import bisect_left
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

from bendspline.exceptions import ConstructionError, DomainError, EmptySplineError
from bendspline.knots import Knots, new_knots


@dataclass(frozen=True)
class CubicPoly:
    """Scalar cubic polynomial a + b*u + c*u^2 + d*u^3."""

    a: float
    b: float
    c: float
    d: float

    def at(self, u: float) -> float:
        return self.a + u * (self.b + u * (self.c + self.d * u))

    def deriv(self, u: float) -> float:
        return self.b + u * (2 * self.c + 3 * self.d * u)

    def deriv2(self, u: float) -> float:
        return 2 * self.c + 6 * self.d * u

    def coefficients(self) -> Tuple[float, float, float, float]:
        return self.a, self.b, self.c, self.d

    def fn(self) -> Callable[[float], float]:
        return self.at


@dataclass(frozen=True)
class Cubic2d:
    """Pair of cubic polynomials, one per axis."""

    cubx: CubicPoly
    cuby: CubicPoly

    def at(self, u: float) -> Tuple[float, float]:
        return self.cubx.at(u), self.cuby.at(u)

    def deriv(self, u: float) -> Tuple[float, float]:
        return self.cubx.deriv(u), self.cuby.deriv(u)

    def deriv2(self, u: float) -> Tuple[float, float]:
        return self.cubx.deriv2(u), self.cuby.deriv2(u)

    def fn(self) -> Callable[[float], Tuple[float, float]]:
        return self.at


# =============================================================================
# Parameter to segment mapping
# =============================================================================


def map_uniform_to_segment(t: float, segment_count: int) -> Tuple[int, float]:
    """Map ``t`` in [0, segment_count] onto (segment number, local u).

    Raises:
        DomainError: If ``t`` is outside [0, segment_count].
    """
    upper = float(segment_count)
    if math.isnan(t):
        raise DomainError(t, 0.0, upper, reason="t is NaN")
    if t < 0:
        raise DomainError(t, 0.0, upper, reason=f"{t} smaller than 0")
    if t > upper:
        raise DomainError(t, 0.0, upper, reason=f"{t} greater than last knot {upper}")

    u, whole = math.modf(t)
    if whole == upper:
        # t == upper would index one past the last segment
        return segment_count - 1, 1.0
    return int(whole), u


def map_nonuniform_to_segment(t: float, knots: Sequence[float]) -> Tuple[int, float]:
    """Map ``t`` onto (segment number, local u) for explicit knot values.

    A ``t`` equal to an interior knot resolves to the earlier segment at u == 1.

    Raises:
        DomainError: If ``t`` is outside [knots[0], knots[-1]] or fewer than
            two knots are given.
    """
    segment_count = len(knots) - 1
    if segment_count < 1:
        tstart = knots[0] if knots else 0.0
        raise DomainError(t, tstart, tstart, reason="at least one segment having 2 knots required")
    if math.isnan(t):
        raise DomainError(t, knots[0], knots[-1], reason="t is NaN")
    if t < knots[0]:
        raise DomainError(t, knots[0], knots[-1], reason=f"{t} smaller than first knot {knots[0]}")
    if t > knots[-1]:
        raise DomainError(t, knots[0], knots[-1], reason=f"{t} greater than last knot {knots[-1]}")

    # first i with t <= knots[i+1]
    i = bisect_left(knots, t, 1, segment_count) - 1
    return i, (t - knots[i]) / (knots[i + 1] - knots[i])


# =============================================================================
# Canonical spline
# =============================================================================


class CanonicalSpline2d:
    """
    Ordered sequence of Cubic2d segments plus an optional knot sequence.

    With no knots, segment ``i`` spans [i, i+1]. With knots, there must be
    exactly one more knot than segments and segment ``i`` spans
    [knots[i], knots[i+1]].
    """

    def __init__(self, cubics: Sequence[Cubic2d], tknots: Optional[Sequence[float]] = None):
        cubics = list(cubics)
        tknots = list(tknots) if tknots is not None else []
        if len(tknots) > 0 and len(tknots) != len(cubics) + 1:
            raise ConstructionError(
                "knots must be empty or having length of cubics + 1",
                segment_count=len(cubics),
                knot_count=len(tknots),
            )
        self._cubics: List[Cubic2d] = cubics
        self._tknots: List[float] = [float(t) for t in tknots]
        self._knots: Knots = new_knots(self._tknots, len(cubics) + 1 if cubics else 0)

    def segment_count(self) -> int:
        return len(self._cubics)

    def cubic(self, i: int) -> Cubic2d:
        return self._cubics[i]

    def knots(self) -> Knots:
        return self._knots

    def map_to_segment(self, t: float) -> Tuple[int, float]:
        """Resolve ``t`` to (segment number, local u)."""
        if not self._cubics:
            raise EmptySplineError(t)
        if not self._tknots:
            return map_uniform_to_segment(t, len(self._cubics))
        return map_nonuniform_to_segment(t, self._tknots)

    def at(self, t: float) -> Tuple[float, float]:
        """Evaluate the curve at parameter ``t``.

        Raises:
            DomainError: If ``t`` is outside the domain or the spline is empty.
        """
        segment_no, u = self.map_to_segment(t)
        return self._cubics[segment_no].at(u)

    def fn(self) -> Callable[[float], Tuple[float, float]]:
        return self.at

    def __repr__(self) -> str:
        return f"CanonicalSpline2d(segments={len(self._cubics)}, knots={self._tknots})"
