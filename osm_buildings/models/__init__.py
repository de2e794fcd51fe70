"""
Data models for the OSM building model.

Building and the building parts live in ``models.building`` and
``models.building_part``; they pull in the generators and are not
imported here.
"""

from .geometry import Point2D, BBox, Polygon
from .enums import BuildingKind, RoofShape
from .mesh import MeshData
from .node_table import NodeTable
from .options import (
    BuildingOptions,
    RoofOptions,
    OptionSet,
    BLANK_OPTIONS,
    read_specified_options,
    resolve_options,
)

__all__ = [
    'Point2D', 'BBox', 'Polygon',
    'BuildingKind', 'RoofShape',
    'MeshData',
    'NodeTable',
    'BuildingOptions', 'RoofOptions', 'OptionSet', 'BLANK_OPTIONS',
    'read_specified_options', 'resolve_options',
]
