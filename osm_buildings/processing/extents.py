"""
Extents of OSM building elements.

Extents are [left, bottom, right, top] in whatever frame the node table
is in: degrees before reprojection, metres after. Used before
reprojection to pick the home point and the bbox for the inner data
request.
"""

from typing import List, Optional, Set
import logging

from ..io.osm_document import OSMDocument, OSMRelation
from ..models.geometry import BBox
from ..models.node_table import NodeTable
from ..utils.polygon_utils import create_shape, extents as footprint_extents

logger = logging.getLogger(__name__)

# Seed for node-wise accumulation, inverted so any point replaces it
EMPTY_EXTENTS = [180.0, 90.0, -180.0, -90.0]


def get_extents(
    element_id: int,
    document: OSMDocument,
    node_table: NodeTable,
    kind: Optional[str] = None
) -> List[float]:
    """
    Compute the extents of a way or relation.

    - way: extents of its footprint
    - multipolygon relation: union of its outer member ways
    - other relation: every node reachable through its members

    Args:
        element_id: OSM ID
        document: Document holding the element
        node_table: Node coordinates
        kind: 'way' or 'relation' when the id is ambiguous

    Returns:
        [left, bottom, right, top]

    Raises:
        KeyError: if the element is not in the document
    """
    element = document.get_element(element_id, kind)
    if element is None:
        raise KeyError(f"Element {element_id} not found in document")

    if element.kind == 'way':
        return footprint_extents(create_shape(element, node_table))

    if element.tags.get('type') == 'multipolygon':
        return _multipolygon_extents(element, document, node_table)

    return _node_extents(element, document, node_table)


def _multipolygon_extents(
    relation: OSMRelation,
    document: OSMDocument,
    node_table: NodeTable
) -> List[float]:
    bbox: Optional[BBox] = None
    for member in relation.members_with_role('outer'):
        way = document.resolve_member(member)
        if way is None or way.kind != 'way':
            logger.warning(f"Outer member {member.ref} of relation {relation.id} not found")
            continue
        shape = create_shape(way, node_table)
        if shape.is_empty:
            continue
        bbox = shape.bbox if bbox is None else bbox.union(shape.bbox)

    if bbox is None:
        logger.warning(f"Relation {relation.id} has no outer members with nodes")
        return list(EMPTY_EXTENTS)
    return bbox.to_extents()


def _node_extents(
    relation: OSMRelation,
    document: OSMDocument,
    node_table: NodeTable
) -> List[float]:
    left, bottom, right, top = EMPTY_EXTENTS
    for node_id in collect_node_ids(relation, document):
        coords = node_table.get(node_id)
        if coords is None:
            continue
        x, y = coords
        left = min(left, x)
        bottom = min(bottom, y)
        right = max(right, x)
        top = max(top, y)
    return [left, bottom, right, top]


def collect_node_ids(relation: OSMRelation, document: OSMDocument) -> List[int]:
    """
    Every node referenced under a relation, through nested relations.

    Relations already visited are not entered again, so membership
    cycles terminate.
    """
    node_ids: List[int] = []
    visited: Set[int] = set()
    stack = [relation]

    while stack:
        current = stack.pop()
        if current.id in visited:
            continue
        visited.add(current.id)

        for member in current.members:
            if member.type == 'node':
                node_ids.append(member.ref)
                continue
            element = document.resolve_member(member)
            if element is None:
                continue
            if element.kind == 'way':
                node_ids.extend(element.node_ids)
            else:
                stack.append(element)

    return node_ids
