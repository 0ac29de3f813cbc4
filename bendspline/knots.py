"""
Knot sequences.

A knot marks a segment boundary along the curve parameter ``t``.
- UniformKnots: knot ``i`` has the value ``i``; every segment has length 1.
- NonUniformKnots: an explicit, strictly increasing list of values.

Both expose the same queries, so splines and tangent finders never need to
know which kind they were given beyond ``is_uniform()``.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from bendspline.exceptions import KnotError, KnotIndexError


class Knots(ABC):
    """Parametrization of segment boundaries."""

    @abstractmethod
    def is_uniform(self) -> bool:
        """True when knots are spaced at implicit integer values."""

    @abstractmethod
    def knot_count(self) -> int:
        """Number of knots (equals the number of vertices)."""

    @abstractmethod
    def knot(self, i: int) -> float:
        """Parameter value of knot ``i``."""

    @abstractmethod
    def external(self) -> List[float]:
        """Explicit knot values, empty for uniform knots."""

    def segment_count(self) -> int:
        return max(self.knot_count() - 1, 0)

    def segment_length(self, i: int) -> float:
        """Length of segment ``i`` in parameter space.

        Raises:
            KnotIndexError: If ``i`` is not a valid segment index.
        """
        if not 0 <= i < self.segment_count():
            raise KnotIndexError("segment", i, self.segment_count())
        return self.knot(i + 1) - self.knot(i)

    def tstart(self) -> float:
        if self.knot_count() == 0:
            return 0.0
        return self.knot(0)

    def tend(self) -> float:
        if self.knot_count() == 0:
            return 0.0
        return self.knot(self.knot_count() - 1)

    def __len__(self) -> int:
        return self.knot_count()


class UniformKnots(Knots):
    """Knots at 0, 1, ..., count - 1."""

    def __init__(self, count: int = 0):
        if count < 0:
            raise KnotError(f"knot count must be >= 0, got {count}")
        self._count = count

    def is_uniform(self) -> bool:
        return True

    def knot_count(self) -> int:
        return self._count

    def knot(self, i: int) -> float:
        if not 0 <= i < self._count:
            raise KnotIndexError("knot", i, self._count)
        return float(i)

    def external(self) -> List[float]:
        return []

    def segment_length(self, i: int) -> float:
        if not 0 <= i < self.segment_count():
            raise KnotIndexError("segment", i, self.segment_count())
        return 1.0

    # Uniform knots carry no values, mutation only changes the count

    def add(self) -> None:
        self._count += 1

    def insert(self, i: int) -> None:
        if not 0 <= i <= self._count:
            raise KnotError(f"cannot insert knot at {i} for {self._count} knots")
        self._count += 1

    def delete(self, i: int) -> None:
        if not 0 <= i < self._count:
            raise KnotError(f"knot {i} out of range for {self._count} knots")
        self._count -= 1

    def __repr__(self) -> str:
        return f"UniformKnots(count={self._count})"


class NonUniformKnots(Knots):
    """Explicit strictly increasing knot values t0 < t1 < ... < t(n-1)."""

    def __init__(self, tknots: Sequence[float]):
        values = [float(t) for t in tknots]
        _check_increasing(values)
        self._tknots = values

    def is_uniform(self) -> bool:
        return False

    def knot_count(self) -> int:
        return len(self._tknots)

    def knot(self, i: int) -> float:
        if not 0 <= i < len(self._tknots):
            raise KnotIndexError("knot", i, len(self._tknots))
        return self._tknots[i]

    def external(self) -> List[float]:
        return list(self._tknots)

    def add(self, t: float) -> None:
        """Append a knot after the current last one."""
        self.insert(len(self._tknots), t)

    def insert(self, i: int, t: float) -> None:
        """Insert knot value ``t`` at index ``i``, keeping the sequence increasing."""
        if not 0 <= i <= len(self._tknots):
            raise KnotError(f"cannot insert knot at {i} for {len(self._tknots)} knots")
        candidate = self._tknots[:i] + [float(t)] + self._tknots[i:]
        _check_increasing(candidate)
        self._tknots = candidate

    def delete(self, i: int) -> None:
        if not 0 <= i < len(self._tknots):
            raise KnotError(f"knot {i} out of range for {len(self._tknots)} knots")
        del self._tknots[i]

    def __repr__(self) -> str:
        return f"NonUniformKnots({self._tknots})"


def _check_increasing(values: List[float]) -> None:
    for t in values:
        if not math.isfinite(t):
            raise KnotError("knot values must be finite", values)
    for prev, cur in zip(values, values[1:]):
        if cur <= prev:
            raise KnotError("knot values must be strictly increasing", values)


def new_knots(tknots: Optional[Sequence[float]], count: int = 0) -> Knots:
    """Create uniform knots when ``tknots`` is empty, otherwise non-uniform ones.

    Args:
        tknots: Explicit knot values or None.
        count: Knot count used for uniform knots.
    """
    if tknots is None or len(tknots) == 0:
        return UniformKnots(count)
    return NonUniformKnots(tknots)
