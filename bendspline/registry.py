"""
Tangent finder registry.

This module maps names such as "catmull_rom" or "natural" to tangent finder
factories, so configuration files and the CLI can select a strategy by name.
"""

from typing import Callable, Dict, List, Optional

from bendspline.exceptions import UnknownTangentFinderError
from bendspline.logging import LOG_DEBUG
from bendspline.tangents import (
    CardinalTangentFinder,
    NaturalTangentFinder,
    TangentFinder,
    catmull_rom_tangent_finder,
)

# Factories take the tension; finders without one ignore it
TangentFinderFactory = Callable[[float], TangentFinder]

TANGENT_FINDERS: Dict[str, TangentFinderFactory] = {}


def register_tangent_finder(name: str, factory: TangentFinderFactory) -> None:
    """Register a tangent finder factory.

    Args:
        name: The name for this tangent finder (e.g., "cardinal").
        factory: Callable taking the tension and returning a TangentFinder.
    """
    TANGENT_FINDERS[name] = factory
    LOG_DEBUG(f"Registered tangent finder '{name}'")


def get_tangent_finder_class(name: str) -> Optional[TangentFinderFactory]:
    """Get the tangent finder factory for a given name, or None."""
    return TANGENT_FINDERS.get(name)


def list_tangent_finders() -> List[str]:
    """List all registered tangent finder names."""
    return list(TANGENT_FINDERS.keys())


def create_tangent_finder(name: str, tension: float = 0.0) -> TangentFinder:
    """Create a registered tangent finder.

    Raises:
        UnknownTangentFinderError: If ``name`` is not registered.
    """
    factory = get_tangent_finder_class(name)
    if factory is None:
        raise UnknownTangentFinderError(name, list_tangent_finders())
    return factory(tension)


def _register_all_tangent_finders():
    """Register the built-in tangent finders."""
    register_tangent_finder("cardinal", CardinalTangentFinder)
    register_tangent_finder("catmull_rom", lambda tension: catmull_rom_tangent_finder())
    register_tangent_finder("natural", lambda tension: NaturalTangentFinder())


# Initialize tangent finders on module load
_register_all_tangent_finders()
