"""
Pyramidal roof generator.

Builds a triangle fan from every footprint edge to an apex above the
footprint centroid. The roof sits at its own origin: base at z=0 and
apex at z=depth; the renderer lifts it to the roof elevation.
"""

from typing import Optional
import logging

from ..models.geometry import Point2D, Polygon
from ..models.mesh import MeshData
from ..utils.polygon_utils import ensure_ccw, polygon_centroid

logger = logging.getLogger(__name__)


def generate_pyramidal_roof(
    footprint: Polygon,
    depth: float,
    apex: Optional[Point2D] = None,
    osm_id: Optional[int] = None
) -> MeshData:
    """
    Generate a pyramid fan over a closed footprint ring.

    The ring is rewound counter-clockwise first so every face normal
    points up. A closed ring of N points yields N-1 triangles.

    Args:
        footprint: Part footprint (closed outer ring)
        depth: Apex height above the roof base
        apex: Apex position in plan; defaults to the ring centroid
        osm_id: Part ID stored on the mesh

    Returns:
        MeshData with one apex vertex, the ring vertices and the fan faces
    """
    mesh = MeshData(osm_id=osm_id)
    ring = ensure_ccw(list(footprint.outer_ring))

    if len(ring) < 2:
        logger.warning(f"Part {osm_id}: footprint too small for a pyramid")
        return mesh

    if apex is None:
        apex = polygon_centroid(ring)

    apex_index = mesh.add_vertex(apex.x, apex.y, depth)
    ring_indices = [mesh.add_vertex(p.x, p.y, 0.0) for p in ring]

    for a, b in zip(ring_indices, ring_indices[1:]):
        mesh.add_face([a, b, apex_index])

    logger.debug(f"Part {osm_id}: pyramid with {mesh.triangle_count()} triangles")
    return mesh
