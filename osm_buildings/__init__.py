"""
OSM Buildings

Turns an OpenStreetMap building (a way, a multipolygon or a building
relation with parts) into a model ready for 3D generation: a local metre
frame centred on the building, per-part footprints, and building and
roof options resolved through part, building and default values.

Can be used as:
- Library: Building.create('way', 123)
- CLI tool: python -m osm_buildings.main way 123
"""

__version__ = "0.1.0"
__author__ = "OSM Buildings Team"

from .config import ModelConfig
from .exceptions import (
    OSMBuildingError,
    InvalidBuildingError,
    MalformedValueError,
    UnsupportedRoofShapeError,
    OSMApiError,
)
from .models.building import Building
from .models.building_part import BuildingPart, MultiBuildingPart

__all__ = [
    'Building',
    'BuildingPart',
    'MultiBuildingPart',
    'ModelConfig',
    'OSMBuildingError',
    'InvalidBuildingError',
    'MalformedValueError',
    'UnsupportedRoofShapeError',
    'OSMApiError',
]
