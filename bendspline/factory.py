"""
Factory for creating splines from raw data, configuration and curve files.

A curve file is YAML::

    vertices:
      - [0, 0]
      - [1, 1]
      - {position: [2, 0], entry: [1, 0], exit: [1, 0]}
    knots: [0, 1, 3]          # optional, one value per vertex
    tangents:                 # optional, overrides the configuration
      finder: natural
"""

from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Sequence, Union

import yaml

from bendspline.config import HERMITE, SplineConfig, create_default_config
from bendspline.exceptions import (
    ConfigurationError,
    CurveFileNotFoundError,
    InvalidCurveFileError,
    KnotError,
)
from bendspline.hermite import HermiteSpline2d, HermiteVertex
from bendspline.logging import LOG_DEBUG, LOG_INFO
from bendspline.registry import create_tangent_finder


def create_vertex(data: Union[Sequence[float], Mapping[str, Any]]) -> HermiteVertex:
    """Create a vertex from ``[x, y]`` or ``{position, entry, exit}``."""
    if isinstance(data, Mapping):
        if "position" not in data:
            raise ValueError(f"vertex mapping without 'position': {dict(data)}")
        return HermiteVertex(data["position"], data.get("entry"), data.get("exit"))
    return HermiteVertex(data)


def create_spline(
    vertices: Sequence[Union[HermiteVertex, Sequence[float], Mapping[str, Any]]],
    config: Optional[Dict[str, Any]] = None,
) -> HermiteSpline2d:
    """
    Create a Hermite spline from vertex data and a configuration dictionary.

    Args:
        vertices: HermiteVertex objects, ``[x, y]`` pairs or vertex mappings.
        config: Configuration dictionary (see create_default_config). The
            "hermite" finder keeps the tangents given with the vertices.

    Returns:
        The spline with tangents computed.
    """
    config = config or create_default_config()
    spline_config = SplineConfig.from_dict(config)
    spline_config.validate()

    hermite_vertices = [
        v if isinstance(v, HermiteVertex) else create_vertex(v) for v in vertices
    ]

    finder_name = spline_config.tangents.finder
    finder = None
    if finder_name != HERMITE:
        finder = create_tangent_finder(finder_name, spline_config.tangents.tension)

    LOG_DEBUG(
        f"Creating spline with {len(hermite_vertices)} vertices, finder={finder_name}, "
        f"knots={spline_config.knots}"
    )
    return HermiteSpline2d(hermite_vertices, spline_config.knots, finder)


def load_curve(path: Union[str, Path], config: Optional[Dict[str, Any]] = None) -> HermiteSpline2d:
    """
    Load a spline from a YAML curve file.

    Knots and tangent settings in the file override those in ``config``.

    Raises:
        CurveFileNotFoundError: If the file does not exist.
        InvalidCurveFileError: If the content cannot be turned into a spline.
    """
    path = Path(path)
    if not path.exists():
        raise CurveFileNotFoundError(str(path))

    try:
        with open(path, "r") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise InvalidCurveFileError(str(path), f"YAML error: {e}") from e

    if not isinstance(data, dict) or not isinstance(data.get("vertices"), list):
        raise InvalidCurveFileError(str(path), "expected a mapping with a 'vertices' list")

    curve_config = dict(config or create_default_config())
    if data.get("knots") is not None:
        curve_config["knots"] = data["knots"]
    if isinstance(data.get("tangents"), dict):
        curve_config["tangents"] = {**curve_config.get("tangents", {}), **data["tangents"]}

    try:
        spline = create_spline(data["vertices"], curve_config)
    except (ValueError, TypeError, ConfigurationError, KnotError) as e:
        raise InvalidCurveFileError(str(path), str(e)) from e

    LOG_INFO(f"Loaded curve '{path}' with {spline.vertex_count()} vertices")
    return spline
