"""
Building classification and validation.

classify() decides how the root element of a building is modelled;
is_valid_data() checks that the data can be assembled at all. A failed
validation aborts the whole building; no partial model is built.
"""

from typing import Optional, Set
import logging

from ..io.osm_document import OSMDocument, OSMElement, OSMRelation
from ..models.enums import BuildingKind

logger = logging.getLogger(__name__)


def classify(element: OSMElement) -> BuildingKind:
    """
    Classify the root element of a building.

    Args:
        element: Root way or relation

    Returns:
        WAY for a way, MULTIPOLYGON for a type=multipolygon relation,
        RELATION for any other relation
    """
    if element.kind == 'way':
        return BuildingKind.WAY
    if element.tags.get('type') == 'multipolygon':
        return BuildingKind.MULTIPOLYGON
    return BuildingKind.RELATION


def resolve_outline(relation: OSMRelation, document: OSMDocument) -> Optional[OSMElement]:
    """The element referenced by the relation's ``outline`` member, if present."""
    member = relation.first_member('outline')
    if member is None:
        return None
    return document.resolve_member(member)


def is_valid_data(element: OSMElement, document: OSMDocument) -> bool:
    """
    Check that a building element can be assembled.

    A root way must be tagged ``building``; every way must reference
    nodes and be closed. For a relation each ``part`` member way is
    checked for nodes and closure (part
    relations recursively); part references missing from the document
    are skipped. A generic building relation must also have a
    resolvable ``outline`` member.

    Args:
        element: Root way or relation
        document: Document holding the element and its members

    Returns:
        True if the data is valid
    """
    if element.kind == 'way':
        if 'building' not in element.tags:
            logger.warning(f"Outer way {element.id} is not a building")
            return False
        return _is_valid_way(element)

    if classify(element) == BuildingKind.RELATION and resolve_outline(element, document) is None:
        logger.warning(f"Relation {element.id} has no resolvable outline member")
        return False

    return _are_parts_valid(element, document, set())


def _is_valid_way(way) -> bool:
    if not way.node_ids:
        logger.warning(f"Way {way.id} has no nodes")
        return False
    if not way.is_closed:
        logger.warning(f"Way {way.id} is not a closed way")
        return False
    return True


def _are_parts_valid(relation: OSMRelation, document: OSMDocument, visited: Set[int]) -> bool:
    if relation.id in visited:
        return True
    visited.add(relation.id)

    for member in relation.members_with_role('part'):
        part = document.resolve_member(member)
        if part is None:
            logger.warning(f"Part {member.ref} of relation {relation.id} not found, skipping")
            continue
        if part.kind == 'way':
            if not _is_valid_way(part):
                return False
        elif not _are_parts_valid(part, document, visited):
            return False

    return True
