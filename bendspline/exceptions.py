"""
bendspline Exception Hierarchy.

This module defines all custom exceptions used in the bendspline package.
Every error carries a human-readable message plus a ``details`` dictionary
so callers can decide whether to clamp, skip or propagate:
- Configuration errors (loading and validating settings)
- Spline errors (construction, evaluation domain, degenerate input)
- Curve file errors (reading vertex data from YAML)
"""

from typing import Any, Optional, Sequence


class BendSplineError(Exception):
    """Base exception for all bendspline errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary with additional context.
    """

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({detail_str})"
        return self.message


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(BendSplineError):
    """Error in configuration loading or validation."""

    pass


class ConfigNotFoundError(ConfigurationError):
    """Configuration file not found."""

    def __init__(self, config_path: str):
        super().__init__(
            f"Configuration file not found: {config_path}",
            details={"path": config_path},
        )


class ConfigValidationError(ConfigurationError):
    """Configuration validation failed."""

    def __init__(self, key: str, reason: str, value: Any = None):
        details = {"key": key, "reason": reason}
        if value is not None:
            details["value"] = str(value)
        super().__init__(
            f"Invalid configuration for '{key}': {reason}",
            details=details,
        )


# =============================================================================
# Spline Errors
# =============================================================================


class SplineError(BendSplineError):
    """Base class for spline construction and evaluation errors."""

    pass


class ConstructionError(SplineError):
    """A spline could not be constructed from the given data.

    The object under construction is never returned.
    """

    def __init__(self, reason: str, **details: Any):
        super().__init__(
            f"Cannot construct spline: {reason}",
            details={"reason": reason, **details},
        )


class KnotError(ConstructionError):
    """Invalid knot sequence or knot mutation."""

    def __init__(self, reason: str, knots: Optional[Sequence[float]] = None):
        details = {}
        if knots is not None:
            details["knots"] = list(knots)
        super().__init__(reason, **details)


class KnotIndexError(SplineError):
    """Knot or segment index out of range for a lookup."""

    def __init__(self, kind: str, index: int, count: int):
        super().__init__(
            f"{kind.capitalize()} {index} out of range for {count} {kind}s",
            details={"index": index, "count": count},
        )


class DomainError(SplineError):
    """Evaluation parameter lies outside the spline's domain."""

    def __init__(self, t: float, tstart: float, tend: float, reason: Optional[str] = None):
        self.t = t
        self.tstart = tstart
        self.tend = tend
        super().__init__(
            reason or f"Parameter {t} outside domain [{tstart}, {tend}]",
            details={"t": t, "tstart": tstart, "tend": tend},
        )


class EmptySplineError(DomainError):
    """Evaluation of a spline without any segment or vertex."""

    def __init__(self, t: float = 0.0):
        super().__init__(t, 0.0, 0.0, reason="Spline has no segments to evaluate")


class DegenerateInputError(SplineError):
    """Input data the algorithms cannot handle, e.g. a zero-length segment."""

    def __init__(self, reason: str, segment: Optional[int] = None):
        details = {"reason": reason}
        if segment is not None:
            details["segment"] = segment
        super().__init__(
            f"Degenerate input: {reason}",
            details=details,
        )


class VertexIndexError(SplineError):
    """Vertex index out of range for a builder operation."""

    def __init__(self, index: int, count: int):
        super().__init__(
            f"Vertex index {index} out of range for {count} vertices",
            details={"index": index, "count": count},
        )


class UnknownTangentFinderError(SplineError):
    """Requested tangent finder is not registered."""

    def __init__(self, name: str, available: Optional[list] = None):
        details = {"finder": name}
        if available:
            details["available"] = available
        super().__init__(
            f"Tangent finder '{name}' not found",
            details=details,
        )


# =============================================================================
# Curve File Errors
# =============================================================================


class CurveFileError(BendSplineError):
    """Base class for errors reading curve definition files."""

    pass


class CurveFileNotFoundError(CurveFileError):
    """Curve file not found."""

    def __init__(self, path: str):
        super().__init__(
            f"Curve file not found: {path}",
            details={"path": path},
        )


class InvalidCurveFileError(CurveFileError):
    """Curve file content is malformed."""

    def __init__(self, path: str, reason: str):
        super().__init__(
            f"Invalid curve file '{path}': {reason}",
            details={"path": path, "reason": reason},
        )
