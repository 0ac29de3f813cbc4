"""
Hermite splines.

A Hermite spline is an ordered list of vertices, each with a position and an
entry and exit tangent, plus knots. Segment ``i`` runs from vertex ``i`` to
vertex ``i+1`` and is converted to power basis form on demand.

Mutations go through the builder methods (add/insert/update/delete vertex),
which all end in ``invalidate()``: the tangent finder, if any, is re-run over
all vertices and the cached canonical spline is dropped. Code that edits a
vertex in place must call ``invalidate()`` itself.
"""

from __future__ import annotations

from typing import Callable, List, Optional, Sequence, Tuple

import numpy as np

from bendspline.cubic import CanonicalSpline2d, Cubic2d, CubicPoly
from bendspline.exceptions import DomainError, EmptySplineError, KnotError, VertexIndexError
from bendspline.knots import Knots, NonUniformKnots, UniformKnots, new_knots
from bendspline.logging import get_logger
from bendspline.tangents import (
    CardinalTangentFinder,
    NaturalTangentFinder,
    TangentFinder,
)
from bendspline.vector import as_vec, zero_vec

logger = get_logger("hermite")


class HermiteVertex:
    """Vertex position with entry and exit tangent.

    Tangents default to zero vectors. All vectors are copied on construction.
    """

    def __init__(self, position, entry_tangent=None, exit_tangent=None):
        self.position = as_vec(position)
        dim = len(self.position)
        self.entry_tangent = zero_vec(dim) if entry_tangent is None else as_vec(entry_tangent)
        self.exit_tangent = zero_vec(dim) if exit_tangent is None else as_vec(exit_tangent)
        if len(self.entry_tangent) != dim or len(self.exit_tangent) != dim:
            raise ValueError("tangents must have the dimension of the position")

    @classmethod
    def raw(cls, x: float, y: float) -> "HermiteVertex":
        """Vertex at (x, y) with zero tangents."""
        return cls((x, y))

    def dim(self) -> int:
        return len(self.position)

    def copy(self) -> "HermiteVertex":
        return HermiteVertex(self.position, self.entry_tangent, self.exit_tangent)

    def __repr__(self) -> str:
        return (
            f"HermiteVertex(position={self.position.tolist()}, "
            f"entry={self.entry_tangent.tolist()}, exit={self.exit_tangent.tolist()})"
        )


def hermite_to_cubic(p0, exit0, p1, entry1, segment_length: float = 1.0) -> Cubic2d:
    """Convert one Hermite segment to power basis form.

    Tangents are derivatives with respect to the curve parameter, so they are
    scaled by the segment length to become derivatives in the local u::

        a = p0
        b = exit0
        c = 3*(p1 - p0) - 2*exit0 - entry1
        d = 2*(p0 - p1) + exit0 + entry1

    Args:
        p0: Start position.
        exit0: Exit tangent at the start vertex.
        p1: End position.
        entry1: Entry tangent at the end vertex.
        segment_length: Length of the segment in parameter space.
    """
    p0 = np.asarray(p0, dtype=float)
    p1 = np.asarray(p1, dtype=float)
    m0 = segment_length * np.asarray(exit0, dtype=float)
    m1 = segment_length * np.asarray(entry1, dtype=float)

    a = p0
    b = m0
    c = 3 * (p1 - p0) - 2 * m0 - m1
    d = 2 * (p0 - p1) + m0 + m1

    return Cubic2d(
        CubicPoly(float(a[0]), float(b[0]), float(c[0]), float(d[0])),
        CubicPoly(float(a[1]), float(b[1]), float(c[1]), float(d[1])),
    )


class HermiteSpline2d:
    """
    Hermite spline through 2-D vertices.

    Args:
        vertices: Vertices in curve order.
        tknots: Explicit knot values (one per vertex) or None for uniform knots.
        tangent_finder: Optional strategy that overwrites the vertex tangents
            whenever vertices or knots change.
    """

    def __init__(
        self,
        vertices: Sequence[HermiteVertex] = (),
        tknots: Optional[Sequence[float]] = None,
        tangent_finder: Optional[TangentFinder] = None,
    ):
        self._vertices: List[HermiteVertex] = [self._checked(v).copy() for v in vertices]
        if tknots is not None and 0 < len(tknots) != len(self._vertices):
            raise KnotError(
                f"{len(tknots)} knots given for {len(self._vertices)} vertices", tknots
            )
        self._knots: Knots = new_knots(tknots, len(self._vertices))
        self._tangent_finder = tangent_finder
        self._canonical: Optional[CanonicalSpline2d] = None
        self.invalidate()

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    def knots(self) -> Knots:
        return self._knots

    def vertices(self) -> Tuple[HermiteVertex, ...]:
        return tuple(self._vertices)

    def vertex(self, i: int) -> HermiteVertex:
        self._check_index(i, len(self._vertices))
        return self._vertices[i]

    def vertex_count(self) -> int:
        return len(self._vertices)

    def segment_count(self) -> int:
        return max(len(self._vertices) - 1, 0)

    def tangent_finder(self) -> Optional[TangentFinder]:
        return self._tangent_finder

    def positions(self) -> np.ndarray:
        """(n, 2) array of vertex positions."""
        if not self._vertices:
            return np.zeros((0, 2))
        return np.array([v.position for v in self._vertices])

    # -------------------------------------------------------------------------
    # Builder
    # -------------------------------------------------------------------------

    def add_vertex(self, vertex: HermiteVertex, t: Optional[float] = None) -> None:
        """Append a vertex; non-uniform knots need its knot value ``t``."""
        self.insert_vertex(len(self._vertices), vertex, t)

    def insert_vertex(self, i: int, vertex: HermiteVertex, t: Optional[float] = None) -> None:
        """Insert a vertex before index ``i`` (``i == vertex_count()`` appends)."""
        self._check_index(i, len(self._vertices) + 1)
        self._checked(vertex)
        if not self._vertices:
            # an empty spline takes its knot kind from the first vertex
            self._knots = UniformKnots() if t is None else NonUniformKnots([])
        if self._knots.is_uniform():
            if t is not None:
                raise KnotError("uniform knots take no knot value")
            self._knots.insert(i)
        else:
            if t is None:
                raise KnotError("non-uniform knots require a knot value")
            self._knots.insert(i, t)
        self._vertices.insert(i, vertex.copy())
        self.invalidate()

    def update_vertex(self, i: int, vertex: HermiteVertex) -> None:
        self._check_index(i, len(self._vertices))
        self._vertices[i] = self._checked(vertex).copy()
        self.invalidate()

    def delete_vertex(self, i: int) -> None:
        self._check_index(i, len(self._vertices))
        self._knots.delete(i)
        del self._vertices[i]
        self.invalidate()

    def set_tangent_finder(self, tangent_finder: Optional[TangentFinder]) -> None:
        self._tangent_finder = tangent_finder
        self.invalidate()

    @staticmethod
    def _checked(vertex: HermiteVertex) -> HermiteVertex:
        if vertex.dim() != 2:
            raise ValueError(f"2-D vertex expected, got dimension {vertex.dim()}")
        return vertex

    @staticmethod
    def _check_index(i: int, limit: int) -> None:
        if not 0 <= i < limit:
            raise VertexIndexError(i, limit)

    # -------------------------------------------------------------------------
    # Recomputation
    # -------------------------------------------------------------------------

    def invalidate(self) -> None:
        """Recompute tangents (if a finder is set) and drop the canonical form."""
        self._canonical = None
        if self._tangent_finder is None or not self._vertices:
            return

        tangents = self._tangent_finder.find(self.positions(), self._knots)
        for vertex, entry, exit_ in zip(self._vertices, tangents.entry, tangents.exit):
            vertex.entry_tangent = entry.copy()
            vertex.exit_tangent = exit_.copy()
        logger.debug(
            f"recomputed tangents of {len(self._vertices)} vertices "
            f"with {self._tangent_finder!r}"
        )

    def canonical(self) -> CanonicalSpline2d:
        """Power basis form of the current vertices, cached until invalidated."""
        if self._canonical is None:
            cubics = []
            for i in range(self.segment_count()):
                v0, v1 = self._vertices[i], self._vertices[i + 1]
                cubics.append(
                    hermite_to_cubic(
                        v0.position,
                        v0.exit_tangent,
                        v1.position,
                        v1.entry_tangent,
                        self._knots.segment_length(i),
                    )
                )
            self._canonical = CanonicalSpline2d(cubics, self._knots.external())
        return self._canonical

    # -------------------------------------------------------------------------
    # Evaluation
    # -------------------------------------------------------------------------

    def at(self, t: float) -> Tuple[float, float]:
        """Evaluate the curve at parameter ``t``.

        A single vertex is a curve defined only at its knot.

        Raises:
            DomainError: If ``t`` is outside [tstart, tend].
            EmptySplineError: If the spline has no vertices.
        """
        if not self._vertices:
            raise EmptySplineError(t)
        if len(self._vertices) == 1:
            tstart = self._knots.tstart()
            if t != tstart:
                raise DomainError(t, tstart, tstart)
            x, y = self._vertices[0].position[:2]
            return float(x), float(y)
        return self.canonical().at(t)

    def fn(self) -> Callable[[float], Tuple[float, float]]:
        return self.at

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(vertices={len(self._vertices)}, "
            f"knots={self._knots!r}, tangent_finder={self._tangent_finder!r})"
        )


# =============================================================================
# Splines with tangent finders attached
# =============================================================================


class CardinalHermiteSpline2d(HermiteSpline2d):
    """Hermite spline with Cardinal tangents of the given tension."""

    def __init__(
        self,
        vertices: Sequence[HermiteVertex] = (),
        tension: float = 0.0,
        tknots: Optional[Sequence[float]] = None,
    ):
        self._tension = float(tension)
        super().__init__(vertices, tknots, CardinalTangentFinder(tension))

    @property
    def tension(self) -> float:
        return self._tension

    @tension.setter
    def tension(self, tension: float) -> None:
        self._tension = float(tension)
        self.set_tangent_finder(CardinalTangentFinder(tension))


def catmull_rom_spline(
    vertices: Sequence[HermiteVertex] = (), tknots: Optional[Sequence[float]] = None
) -> CardinalHermiteSpline2d:
    """Cardinal spline with tension 0."""
    return CardinalHermiteSpline2d(vertices, 0.0, tknots)


class NaturalHermiteSpline2d(HermiteSpline2d):
    """Hermite spline with natural (C2) tangents."""

    def __init__(
        self,
        vertices: Sequence[HermiteVertex] = (),
        tknots: Optional[Sequence[float]] = None,
    ):
        super().__init__(vertices, tknots, NaturalTangentFinder())
