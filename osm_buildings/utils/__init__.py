"""
Utility functions for the OSM building model.
"""

from .polygon_utils import (
    create_shape,
    create_multipolygon_shape,
    extents,
    width,
    center,
    inscribed_radius,
    point_in_polygon,
    point_in_polygon_with_holes,
    polygon_signed_area,
    footprint_area,
    contains_polygon,
    ensure_ccw,
)
from .units import (
    normalize_length,
    parse_number,
    parse_direction,
    normalize_angle,
)

__all__ = [
    'create_shape',
    'create_multipolygon_shape',
    'extents',
    'width',
    'center',
    'inscribed_radius',
    'point_in_polygon',
    'point_in_polygon_with_holes',
    'polygon_signed_area',
    'footprint_area',
    'contains_polygon',
    'ensure_ccw',
    'normalize_length',
    'parse_number',
    'parse_direction',
    'normalize_angle',
]
