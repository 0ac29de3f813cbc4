"""
bendspline - Piecewise cubic parametric curves in 2-D.

This package evaluates cubic splines through a sequence of vertices with
several tangent strategies:
- hermite: tangents given with the vertices
- cardinal / catmull_rom: local tangents from neighbouring vertices
- natural: global C2 tangents from a tridiagonal solve per dimension

Knots are either uniform (implicit 0, 1, 2, ...) or an explicit increasing
sequence.

Basic Usage:
    from bendspline import HermiteVertex, NaturalHermiteSpline2d

    spline = NaturalHermiteSpline2d(
        [HermiteVertex.raw(0, 0), HermiteVertex.raw(1, 1), HermiteVertex.raw(2, 0)]
    )
    x, y = spline.at(0.5)

For more control:
    from bendspline.config import SplineConfig, ConfigManager
    from bendspline.factory import create_spline, load_curve
    from bendspline.exceptions import DomainError
"""

from __future__ import annotations

__version__ = "0.1.0"

# =============================================================================
# Core API
# =============================================================================

from bendspline.cubic import (
    CubicPoly,
    Cubic2d,
    CanonicalSpline2d,
    map_uniform_to_segment,
    map_nonuniform_to_segment,
)

from bendspline.knots import (
    Knots,
    UniformKnots,
    NonUniformKnots,
    new_knots,
)

from bendspline.tangents import (
    TangentFinder,
    VertexTangents,
    CardinalTangentFinder,
    NaturalTangentFinder,
    catmull_rom_tangent_finder,
    solve_natural_uniform,
    solve_natural_nonuniform,
)

from bendspline.hermite import (
    HermiteVertex,
    HermiteSpline2d,
    CardinalHermiteSpline2d,
    NaturalHermiteSpline2d,
    catmull_rom_spline,
    hermite_to_cubic,
)

from bendspline.approx import (
    Line2d,
    LineToSliceCollector2d,
    approx_all,
)

from bendspline.registry import (
    register_tangent_finder,
    get_tangent_finder_class,
    list_tangent_finders,
    create_tangent_finder,
)

from bendspline.config import (
    create_default_config,
    load_config,
    SplineConfig,
    ConfigManager,
    get_config,
    init_config,
)

from bendspline.factory import (
    create_spline,
    load_curve,
)

from bendspline.runner import (
    sample_spline,
    run_curve,
)

# =============================================================================
# Logging
# =============================================================================

from bendspline.logging import (
    LOG_DEBUG,
    LOG_INFO,
    LOG_WARN,
    LOG_ERROR,
    LOG_CRITICAL,
    get_logger,
    setup_logging,
    profile_scope,
    timed,
)

# =============================================================================
# Exceptions
# =============================================================================

from bendspline.exceptions import (
    BendSplineError,
    ConfigurationError,
    ConfigNotFoundError,
    ConfigValidationError,
    SplineError,
    ConstructionError,
    KnotError,
    KnotIndexError,
    DomainError,
    EmptySplineError,
    DegenerateInputError,
    VertexIndexError,
    UnknownTangentFinderError,
    CurveFileError,
    CurveFileNotFoundError,
    InvalidCurveFileError,
)

# =============================================================================
# Public API
# =============================================================================

__all__ = [
    "__version__",
    # Cubic
    "CubicPoly",
    "Cubic2d",
    "CanonicalSpline2d",
    "map_uniform_to_segment",
    "map_nonuniform_to_segment",
    # Knots
    "Knots",
    "UniformKnots",
    "NonUniformKnots",
    "new_knots",
    # Tangents
    "TangentFinder",
    "VertexTangents",
    "CardinalTangentFinder",
    "NaturalTangentFinder",
    "catmull_rom_tangent_finder",
    "solve_natural_uniform",
    "solve_natural_nonuniform",
    # Hermite
    "HermiteVertex",
    "HermiteSpline2d",
    "CardinalHermiteSpline2d",
    "NaturalHermiteSpline2d",
    "catmull_rom_spline",
    "hermite_to_cubic",
    # Approximation
    "Line2d",
    "LineToSliceCollector2d",
    "approx_all",
    # Registry
    "register_tangent_finder",
    "get_tangent_finder_class",
    "list_tangent_finders",
    "create_tangent_finder",
    # Config
    "create_default_config",
    "load_config",
    "SplineConfig",
    "ConfigManager",
    "get_config",
    "init_config",
    # Factory
    "create_spline",
    "load_curve",
    # Runner
    "sample_spline",
    "run_curve",
    # Logging
    "LOG_DEBUG",
    "LOG_INFO",
    "LOG_WARN",
    "LOG_ERROR",
    "LOG_CRITICAL",
    "get_logger",
    "setup_logging",
    "profile_scope",
    "timed",
    # Exceptions
    "BendSplineError",
    "ConfigurationError",
    "ConfigNotFoundError",
    "ConfigValidationError",
    "SplineError",
    "ConstructionError",
    "KnotError",
    "KnotIndexError",
    "DomainError",
    "EmptySplineError",
    "DegenerateInputError",
    "VertexIndexError",
    "UnknownTangentFinderError",
    "CurveFileError",
    "CurveFileNotFoundError",
    "InvalidCurveFileError",
]
