"""
Configuration for bendspline.

Settings are grouped into three sections plus an optional knot list::

    tangents:
      finder: catmull_rom    # hermite, cardinal, catmull_rom, natural
      tension: 0.0           # cardinal only
    approx:
      max_dist: 0.02
      max_depth: 16
    sampling:
      num_samples: 101
    knots: null              # or one increasing value per vertex

Values are layered: built-in defaults, then a YAML file, then environment
variables named ``BENDSPLINE_<SECTION>_<KEY>`` (e.g.
``BENDSPLINE_APPROX_MAX_DIST=0.05``).
"""

from __future__ import annotations

import copy
import math
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

import yaml

from bendspline.exceptions import ConfigNotFoundError, ConfigValidationError
from bendspline.registry import list_tangent_finders

# Tangent mode that keeps the tangents given with the vertices
HERMITE = "hermite"


# =============================================================================
# Configuration Dataclasses
# =============================================================================


@dataclass
class TangentConfig:
    """Tangent finder selection."""

    finder: str = "catmull_rom"
    tension: float = 0.0

    def validate(self) -> None:
        known = {HERMITE, *list_tangent_finders()}
        if self.finder not in known:
            raise ConfigValidationError(
                "tangents.finder", f"must be one of {sorted(known)}", self.finder
            )
        if not math.isfinite(self.tension):
            raise ConfigValidationError("tangents.tension", "must be finite", self.tension)


@dataclass
class ApproxConfig:
    """Polyline approximation settings."""

    max_dist: float = 0.02
    max_depth: int = 16

    def validate(self) -> None:
        if not self.max_dist > 0:
            raise ConfigValidationError("approx.max_dist", "must be > 0", self.max_dist)
        if self.max_depth < 1:
            raise ConfigValidationError("approx.max_depth", "must be >= 1", self.max_depth)


@dataclass
class SamplingConfig:
    num_samples: int = 101

    def validate(self) -> None:
        if self.num_samples < 2:
            raise ConfigValidationError("sampling.num_samples", "must be >= 2", self.num_samples)


@dataclass
class SplineConfig:
    """Complete spline configuration."""

    tangents: TangentConfig = field(default_factory=TangentConfig)
    approx: ApproxConfig = field(default_factory=ApproxConfig)
    sampling: SamplingConfig = field(default_factory=SamplingConfig)

    # Explicit knot values, None for uniform knots
    knots: Optional[List[float]] = None

    def validate(self) -> None:
        """Validate every section and the knot order."""
        self.tangents.validate()
        self.approx.validate()
        self.sampling.validate()

        knots = self.knots or []
        if any(cur <= prev for prev, cur in zip(knots, knots[1:])):
            raise ConfigValidationError("knots", "must be strictly increasing", knots)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tangents": {"finder": self.tangents.finder, "tension": self.tangents.tension},
            "approx": {"max_dist": self.approx.max_dist, "max_depth": self.approx.max_depth},
            "sampling": {"num_samples": self.sampling.num_samples},
            "knots": None if self.knots is None else list(self.knots),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SplineConfig":
        """Build a config from a (possibly partial) dictionary."""
        defaults = cls()
        tangents = _section(data, "tangents")
        approx = _section(data, "approx")
        sampling = _section(data, "sampling")
        knots = data.get("knots")
        if knots is not None and not isinstance(knots, (list, tuple)):
            raise ConfigValidationError("knots", "must be a list", knots)

        return cls(
            tangents=TangentConfig(
                finder=str(tangents.get("finder", defaults.tangents.finder)),
                tension=float(tangents.get("tension", defaults.tangents.tension)),
            ),
            approx=ApproxConfig(
                max_dist=float(approx.get("max_dist", defaults.approx.max_dist)),
                max_depth=int(approx.get("max_depth", defaults.approx.max_depth)),
            ),
            sampling=SamplingConfig(
                num_samples=int(sampling.get("num_samples", defaults.sampling.num_samples)),
            ),
            knots=[float(t) for t in knots] if knots else None,
        )


def _section(data: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    value = data.get(name)
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConfigValidationError(name, "must be a mapping", value)
    return value


_DEFAULT_CONFIG: Dict[str, Any] = SplineConfig().to_dict()


def create_default_config(finder: str = "catmull_rom") -> Dict[str, Any]:
    """Default configuration dictionary using the given tangent finder."""
    config = copy.deepcopy(_DEFAULT_CONFIG)
    config["tangents"]["finder"] = finder
    return config


# =============================================================================
# Configuration Manager
# =============================================================================


def _merge(base: Dict[str, Any], overrides: Mapping[str, Any]) -> Dict[str, Any]:
    """Recursively merge ``overrides`` into ``base`` in place."""
    for key, value in overrides.items():
        if isinstance(base.get(key), dict) and isinstance(value, Mapping):
            _merge(base[key], value)
        else:
            base[key] = value
    return base


class ConfigManager:
    """Loads a SplineConfig from defaults, an optional YAML file and the environment.

    Environment variables take precedence over the file, which takes
    precedence over the defaults. The first underscore after the prefix
    separates section and key, so ``BENDSPLINE_APPROX_MAX_DIST`` sets
    ``approx.max_dist``. ``BENDSPLINE_LOG_*`` belongs to bendspline.logging
    and is skipped.
    """

    ENV_PREFIX = "BENDSPLINE"

    _IGNORED_ENV = {"log_level", "log_format", "log_file"}

    def __init__(self, config_path: Optional[Union[str, Path]] = None):
        self._config_path = Path(config_path) if config_path else None
        self._config: Optional[SplineConfig] = None
        self._raw_config: Dict[str, Any] = {}

    def load(self, validate: bool = True) -> SplineConfig:
        """Resolve all layers and return the typed configuration."""
        raw = create_default_config()
        if self._config_path is not None:
            _merge(raw, self._read_file(self._config_path))
        for key, value in self._env_overrides().items():
            self._apply(raw, key, value)

        self._raw_config = raw
        self._config = SplineConfig.from_dict(raw)
        if validate:
            self._config.validate()
        return self._config

    @staticmethod
    def _read_file(path: Path) -> Dict[str, Any]:
        if not path.exists():
            raise ConfigNotFoundError(str(path))

        with open(path, "r") as f:
            content = yaml.safe_load(f)

        if content is None:
            return {}
        if not isinstance(content, dict):
            raise ConfigValidationError(str(path), "top level must be a mapping")
        return content

    def _env_overrides(self) -> Dict[str, str]:
        prefix = f"{self.ENV_PREFIX}_"
        overrides = {}
        for name, value in os.environ.items():
            if not name.startswith(prefix):
                continue
            key = name[len(prefix):].lower()
            if key not in self._IGNORED_ENV:
                overrides[key] = value
        return overrides

    @classmethod
    def _apply(cls, raw: Dict[str, Any], key: str, value: str) -> None:
        section, _, name = key.partition("_")
        if name and isinstance(raw.get(section), dict):
            raw[section][name] = cls._parse_value(value)
        else:
            raw[key] = cls._parse_value(value)

    @staticmethod
    def _parse_value(value: str) -> Any:
        """Turn an environment string into a bool, int, float or str."""
        lowered = value.lower()
        if lowered in ("true", "yes"):
            return True
        if lowered in ("false", "no"):
            return False
        for convert in (int, float):
            try:
                return convert(value)
            except ValueError:
                continue
        return value

    @property
    def config(self) -> SplineConfig:
        if self._config is None:
            self.load()
        return self._config

    def get(self, key: str, default: Any = None) -> Any:
        """Look up a raw value by dotted path, e.g. ``"approx.max_dist"``."""
        node: Any = self._raw_config
        for part in key.split("."):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return node


def load_config(path: Union[str, Path], validate: bool = True) -> Dict[str, Any]:
    """Load a YAML file (plus environment overrides) as a configuration dictionary."""
    return ConfigManager(path).load(validate=validate).to_dict()


_global_config: Optional[ConfigManager] = None


def get_config() -> ConfigManager:
    """Shared ConfigManager, created on first use."""
    global _global_config
    if _global_config is None:
        _global_config = ConfigManager()
    return _global_config


def init_config(path: Optional[Union[str, Path]] = None) -> ConfigManager:
    """Replace the shared ConfigManager with one reading ``path`` and load it."""
    global _global_config
    _global_config = ConfigManager(path)
    _global_config.load()
    return _global_config
