"""
Input/Output modules for the OSM building model.
"""

from .way_stitcher import WaySegment, stitch_ways
from .osm_document import (
    OSMNode,
    OSMWay,
    OSMMember,
    OSMRelation,
    OSMDocument,
)
from .osm_api import (
    OSMApiClient,
    FileDocumentSource,
    create_document_source,
    validate_bbox,
)

__all__ = [
    # Way stitching
    'WaySegment',
    'stitch_ways',
    # OSM document
    'OSMNode',
    'OSMWay',
    'OSMMember',
    'OSMRelation',
    'OSMDocument',
    # Document sources
    'OSMApiClient',
    'FileDocumentSource',
    'create_document_source',
    'validate_bbox',
]
