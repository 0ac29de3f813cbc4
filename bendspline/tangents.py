"""
Tangent finders for Hermite splines.

A tangent finder takes the ordered vertex positions as an ``(n, dim)`` array
plus the knots and returns an entry and an exit tangent per vertex. Tangents
are derivatives with respect to the curve parameter ``t``.

- CardinalTangentFinder: local, closed form. Tension 0 is Catmull-Rom.
- NaturalTangentFinder: global, C2 continuous. Solves a tridiagonal system
  once per spatial dimension.

Mathematical background for the natural spline: "Interpolating Cubic Splines"
chapter 9 (Gary D. Knott), and "An Introduction to Splines for use in
Computer Graphics and Geometric Modeling" section 3.1 (Bartels, Beatty, Barsky).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

import numpy as np

from bendspline.exceptions import DegenerateInputError
from bendspline.knots import Knots
from bendspline.logging import get_logger, timed

logger = get_logger("tangents")


@dataclass
class VertexTangents:
    """Entry and exit tangents, one row per vertex.

    Attributes:
        entry: (n, dim) array of entry tangents.
        exit: (n, dim) array of exit tangents.
    """

    entry: np.ndarray
    exit: np.ndarray

    @classmethod
    def zeros(cls, n: int, dim: int) -> "VertexTangents":
        return cls(entry=np.zeros((n, dim)), exit=np.zeros((n, dim)))

    def __len__(self) -> int:
        return len(self.entry)


class TangentFinder(ABC):
    """Strategy computing entry/exit tangents from vertex positions."""

    name: str = "tangent_finder"

    def find(self, positions: np.ndarray, knots: Knots) -> VertexTangents:
        """Compute tangents for all vertices.

        Args:
            positions: (n, dim) array of vertex positions.
            knots: Knots with one knot per vertex.

        Returns:
            VertexTangents; all zero when fewer than 2 vertices are given.
        """
        positions = np.atleast_2d(np.asarray(positions, dtype=float))
        n, dim = positions.shape
        if n < 2:
            return VertexTangents.zeros(n, dim)
        return self._find(positions, knots)

    @abstractmethod
    def _find(self, positions: np.ndarray, knots: Knots) -> VertexTangents:
        """Compute tangents for at least 2 vertices."""


# =============================================================================
# Cardinal / Catmull-Rom
# =============================================================================


class CardinalTangentFinder(TangentFinder):
    """Cardinal spline tangents with the given tension.

    Interior tangents are ``b * (p[i+1] - p[i-1])`` with ``b = (1 - tension) / 2``;
    the first and last vertex use their single neighbour instead. For
    non-uniform knots entry and exit tangents keep the same direction but are
    divided by the length of their segment.
    """

    name = "cardinal"

    def __init__(self, tension: float = 0.0):
        self.tension = float(tension)

    def _find(self, positions: np.ndarray, knots: Knots) -> VertexTangents:
        n = len(positions)
        b = (1 - self.tension) / 2

        exit_tans = np.empty_like(positions)
        exit_tans[0] = b * (positions[1] - positions[0])
        exit_tans[1:-1] = b * (positions[2:] - positions[:-2])
        exit_tans[-1] = b * (positions[-1] - positions[-2])
        entry_tans = exit_tans.copy()

        if not knots.is_uniform():
            for i in range(n - 1):
                segment_len = knots.segment_length(i)
                if segment_len == 0:
                    raise DegenerateInputError("segment of length zero", segment=i)
                exit_tans[i] /= segment_len
                entry_tans[i + 1] /= segment_len

        return VertexTangents(entry=entry_tans, exit=exit_tans)

    def __repr__(self) -> str:
        return f"CardinalTangentFinder(tension={self.tension})"


def catmull_rom_tangent_finder() -> CardinalTangentFinder:
    """Cardinal tangent finder with tension 0."""
    return CardinalTangentFinder(tension=0.0)


# =============================================================================
# Natural spline
# =============================================================================


def solve_natural_uniform(p: np.ndarray) -> np.ndarray:
    """Solve the uniform natural spline system for one dimension.

    Solves A*m = rhs for m[0] ... m[n-1]::

        2 1              = 3 * (p1 - p0)
        1 4 1            = 3 * (p2 - p0)
          1 4 1          = 3 * (p3 - p1)
             ...         = ...
              1 4 1      = 3 * (p(n-1) - p(n-3))
                1 2      = 3 * (p(n-1) - p(n-2))

    Forward elimination removes the 1's below the diagonal, leaving r[i] on
    the diagonal, followed by back substitution.

    Args:
        p: Vertex coordinates of one dimension, at least 2 values.

    Returns:
        Tangent component per vertex.
    """
    n = len(p)
    r = np.zeros(n)
    m = np.zeros(n)

    # forward elimination
    r[0] = 2
    m[0] = 3 * (p[1] - p[0])
    for i in range(1, n - 1):
        scl = 1 / r[i - 1]
        r[i] = 4 - scl
        m[i] = 3 * (p[i + 1] - p[i - 1]) - scl * m[i - 1]
    scl = 1 / r[n - 2]
    r[n - 1] = 2 - scl
    m[n - 1] = 3 * (p[n - 1] - p[n - 2]) - scl * m[n - 2]

    # back substitution
    m[n - 1] /= r[n - 1]
    for i in range(n - 2, -1, -1):
        m[i] = (m[i] - m[i + 1]) / r[i]

    return m


def solve_natural_nonuniform(p: np.ndarray, t: np.ndarray) -> np.ndarray:
    """Solve the non-uniform natural spline system for one dimension.

    With segment lengths t[i] and s = t[i] / t[i-1]::

        2     1                       = 3 * (p1 - p0) / t0
        t1    2*(t1+t0)   t0          = 3 * (p2/s + (s - 1/s)*p1 - s*p0)
              t2          2*(t2+t1) t1 = ...
                          ...
                          1         2 = 3 * (p(n-1) - p(n-2)) / t(n-2)

    Args:
        p: Vertex coordinates of one dimension, at least 2 values.
        t: Segment lengths, len(p) - 1 values.

    Returns:
        Tangent component per vertex.
    """
    n = len(p)
    r = np.zeros(n)
    m = np.zeros(n)

    # upper[i] is the coefficient right of the diagonal in row i
    upper = np.ones(n)
    upper[1:n - 1] = t[0:n - 2]

    # forward elimination
    r[0] = 2
    m[0] = 3 * (p[1] - p[0]) / t[0]
    for i in range(1, n - 1):
        scl = t[i] / r[i - 1]
        s = t[i] / t[i - 1]
        r[i] = 2 * (t[i] + t[i - 1]) - scl * upper[i - 1]
        m[i] = 3 * (p[i + 1] / s + (s - 1 / s) * p[i] - s * p[i - 1]) - scl * m[i - 1]
    scl = 1 / r[n - 2]
    r[n - 1] = 2 - scl * upper[n - 2]
    m[n - 1] = 3 * (p[n - 1] - p[n - 2]) / t[n - 2] - scl * m[n - 2]

    # back substitution
    m[n - 1] /= r[n - 1]
    for i in range(n - 2, -1, -1):
        m[i] = (m[i] - upper[i] * m[i + 1]) / r[i]

    return m


class NaturalTangentFinder(TangentFinder):
    """Natural spline tangents: second derivative continuous at every knot
    and zero at both ends. Entry and exit tangents are equal."""

    name = "natural"

    @timed
    def _find(self, positions: np.ndarray, knots: Knots) -> VertexTangents:
        n, dim = positions.shape

        if knots.is_uniform():
            def solve(p):
                return solve_natural_uniform(p)
        else:
            lengths = np.array([knots.segment_length(i) for i in range(n - 1)])
            if np.any(lengths <= 0):
                raise DegenerateInputError(
                    "segment of length zero", segment=int(np.argmax(lengths <= 0))
                )

            def solve(p):
                return solve_natural_nonuniform(p, lengths)

        tangents = np.empty_like(positions)
        for d in range(dim):
            tangents[:, d] = solve(positions[:, d])

        logger.debug(f"natural tangents solved for {n} vertices in {dim} dimensions")
        return VertexTangents(entry=tangents, exit=tangents.copy())

    def __repr__(self) -> str:
        return "NaturalTangentFinder()"
