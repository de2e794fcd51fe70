"""
Processing modules for the OSM building model.

Contains building classification and validation, and extents
computation over ways and relations.
"""

from .classifier import classify, is_valid_data, resolve_outline
from .extents import get_extents, collect_node_ids, EMPTY_EXTENTS

__all__ = [
    'classify',
    'is_valid_data',
    'resolve_outline',
    'get_extents',
    'collect_node_ids',
    'EMPTY_EXTENTS',
]
