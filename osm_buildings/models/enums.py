"""
Enums for building kinds and roof shapes.

BuildingKind is the closed set of root element shapes a building can
take; RoofShape the roof:shape values the roof parameters know about.
"""

from enum import Enum
from typing import Optional


class BuildingKind(Enum):
    """How the root element of a building is modelled in OSM."""
    WAY = "way"
    MULTIPOLYGON = "multipolygon"
    RELATION = "relation"


class RoofShape(Enum):
    """Roof archetypes with geometry rules."""
    FLAT = "flat"
    DOME = "dome"
    SKILLION = "skillion"
    ONION = "onion"
    GABLED = "gabled"
    PYRAMIDAL = "pyramidal"

    @classmethod
    def from_osm_tag(cls, roof_shape: Optional[str]) -> Optional['RoofShape']:
        """
        Map a roof:shape value to a RoofShape.

        Args:
            roof_shape: Resolved roof shape (may be None)

        Returns:
            RoofShape, or None for values without a rule
        """
        if roof_shape is None:
            return cls.FLAT

        try:
            return cls(roof_shape.lower().strip())
        except ValueError:
            return None
