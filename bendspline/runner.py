"""
Spline evaluation runs.

Samples a spline uniformly over its domain and approximates it by lines,
the two outputs the CLI reports.
"""

from typing import Any, Dict, Optional

import numpy as np

from bendspline.approx import LineToSliceCollector2d, approx_all
from bendspline.config import SplineConfig, create_default_config
from bendspline.logging import LOG_INFO, profile_scope


def sample_spline(spline, num_samples: int) -> np.ndarray:
    """Evaluate ``spline`` at ``num_samples`` evenly spaced parameters.

    Args:
        spline: Any curve with ``at(t)`` and ``knots()``.
        num_samples: Number of samples, at least 2.

    Returns:
        (num_samples, 2) array of points; empty when the spline has no segment.
    """
    if num_samples < 2:
        raise ValueError(f"num_samples must be >= 2, got {num_samples}")

    knots = spline.knots()
    if knots.segment_count() == 0:
        return np.zeros((0, 2))

    ts = np.linspace(knots.tstart(), knots.tend(), num_samples)
    # linspace may overshoot the domain by rounding
    ts[-1] = knots.tend()
    return np.array([spline.at(t) for t in ts])


def run_curve(spline, config: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Sample and approximate a spline.

    Args:
        spline: The spline to evaluate.
        config: Configuration dictionary (see create_default_config).

    Returns:
        Dictionary with segment_count, tstart, tend, samples and lines.
    """
    spline_config = SplineConfig.from_dict(config or create_default_config())
    knots = spline.knots()

    with profile_scope("sampling"):
        samples = sample_spline(spline, spline_config.sampling.num_samples)

    collector = LineToSliceCollector2d()
    with profile_scope("approximation"):
        approx_all(
            spline,
            spline_config.approx.max_dist,
            collector,
            max_depth=spline_config.approx.max_depth,
        )

    LOG_INFO(
        f"Evaluated {knots.segment_count()} segments: "
        f"{len(samples)} samples, {len(collector.lines)} lines"
    )

    return {
        "segment_count": knots.segment_count(),
        "tstart": knots.tstart(),
        "tend": knots.tend(),
        "samples": samples,
        "lines": collector.lines,
    }
