"""
Pytest configuration and fixtures for bendspline tests.

This module provides shared fixtures for testing:
- Configuration fixtures
- Vertex and spline fixtures
- Temporary file fixtures
- Assertion helpers
"""

from __future__ import annotations

import math
from pathlib import Path
from typing import Any, Dict, List

import numpy as np
import pytest

DELTA = 1e-9


# =============================================================================
# Assertion Helpers
# =============================================================================


def assert_point(actual, expected, delta: float = DELTA) -> None:
    """Assert two 2-D points are equal within ``delta``."""
    assert actual[0] == pytest.approx(expected[0], abs=delta)
    assert actual[1] == pytest.approx(expected[1], abs=delta)


def assert_splines_equal(spline1, spline2, n: int = 100, delta: float = DELTA) -> None:
    """Assert two splines agree at ``n`` parameters, domains rescaled to each other."""
    k1, k2 = spline1.knots(), spline2.knots()
    for i in range(n + 1):
        frac = i / n
        t1 = k1.tstart() + frac * (k1.tend() - k1.tstart())
        t2 = k2.tstart() + frac * (k2.tend() - k2.tstart())
        assert_point(spline1.at(t1), spline2.at(t2), delta)


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture
def default_config() -> Dict[str, Any]:
    """Create default spline configuration."""
    from bendspline import create_default_config

    return create_default_config()


@pytest.fixture
def natural_config() -> Dict[str, Any]:
    """Create configuration for natural tangents."""
    from bendspline import create_default_config

    return create_default_config("natural")


@pytest.fixture
def hermite_config() -> Dict[str, Any]:
    """Create configuration keeping explicit tangents."""
    from bendspline import create_default_config

    return create_default_config("hermite")


# =============================================================================
# Vertex and Spline Fixtures
# =============================================================================


@pytest.fixture
def zigzag_points() -> List[List[float]]:
    """Vertex positions of a zigzag line."""
    return [[0.0, 0.0], [1.0, 2.0], [3.0, 1.0], [4.0, 3.0], [6.0, 0.5]]


@pytest.fixture
def zigzag_vertices(zigzag_points):
    """Zigzag vertices with zero tangents."""
    from bendspline import HermiteVertex

    return [HermiteVertex(p) for p in zigzag_points]


@pytest.fixture
def irregular_knots() -> List[float]:
    """Non-uniform knots matching the zigzag vertices."""
    return [0.0, 0.5, 2.0, 2.3, 4.0]


@pytest.fixture
def herm_diag_00_to_11():
    """Straight line (0,0)->(1,1) with chord tangents, uniform knots."""
    from bendspline import HermiteSpline2d, HermiteVertex

    return HermiteSpline2d(
        [
            HermiteVertex((0, 0), (0, 0), (1, 1)),
            HermiteVertex((1, 1), (1, 1), (0, 0)),
        ]
    )


@pytest.fixture
def herm_nonuni_diag_00_to_11():
    """Straight line (0,0)->(1,1) at unit speed, knots [0, sqrt(2)]."""
    from bendspline import HermiteSpline2d, HermiteVertex

    s = math.sqrt(0.5)
    return HermiteSpline2d(
        [
            HermiteVertex((0, 0), (0, 0), (s, s)),
            HermiteVertex((1, 1), (s, s), (0, 0)),
        ],
        tknots=[0, math.sqrt(2)],
    )


def make_double_parabola(uniform: bool):
    """Parabola y = x^2 on [0, 1] followed by y = 1 + (x-1)^2 on [1, 2]."""
    from bendspline import HermiteSpline2d, HermiteVertex

    tknots = None if uniform else [0, 1, 2]
    return HermiteSpline2d(
        [
            HermiteVertex((0, 0), (0, 0), (1, 0)),
            HermiteVertex((1, 1), (1, 2), (1, 0)),
            HermiteVertex((2, 2), (1, 2), (0, 0)),
        ],
        tknots=tknots,
    )


@pytest.fixture
def double_parabola():
    """Uniform double parabola."""
    return make_double_parabola(uniform=True)


# =============================================================================
# Temporary Files Fixtures
# =============================================================================


@pytest.fixture
def temp_config_file(tmp_path) -> Path:
    """Create a temporary configuration file."""
    import yaml

    config = {
        "tangents": {
            "finder": "natural",
        },
        "approx": {
            "max_dist": 0.05,
        },
    }

    config_path = tmp_path / "test_config.yml"
    with open(config_path, "w") as f:
        yaml.dump(config, f)

    return config_path


@pytest.fixture
def temp_curve_file(tmp_path, zigzag_points) -> Path:
    """Create a temporary curve file."""
    import yaml

    curve_path = tmp_path / "curve.yml"
    with open(curve_path, "w") as f:
        yaml.dump({"vertices": zigzag_points}, f)

    return curve_path


@pytest.fixture
def clean_env(monkeypatch):
    """Remove BENDSPLINE_* configuration variables."""
    import os

    for key in list(os.environ):
        if key.startswith("BENDSPLINE_"):
            monkeypatch.delenv(key)


# =============================================================================
# Marker Registrations
# =============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "requires_scipy: marks tests that cross-check against SciPy"
    )


@pytest.fixture
def rng():
    """Seeded random generator."""
    return np.random.default_rng(42)
