"""
Footprint extraction and polygon queries.

Turns a way's node references (or a multipolygon's stitched member
ways) into a closed-ring Polygon using the shared node table, and
answers the questions the building model asks of a footprint:
extents, width, centre and the radius of the largest inscribed circle.
"""

from typing import List, Optional, Tuple
import heapq
import logging
import math

from ..models.geometry import Point2D, Polygon
from ..io.osm_document import OSMDocument, OSMRelation, OSMWay
from ..io.way_stitcher import WaySegment, stitch_ways

logger = logging.getLogger(__name__)


# =============================================================================
# SHAPE CREATION
# =============================================================================

def create_shape(way: OSMWay, node_table) -> Polygon:
    """
    Build the footprint of a way from the node table.

    Node references missing from the table are skipped with a warning.
    The returned ring is closed even if the way is not.

    Args:
        way: OSM way
        node_table: NodeTable (raw or projected)

    Returns:
        Polygon (possibly empty)
    """
    ring = _node_ids_to_points(way.node_ids, node_table, f"way {way.id}")
    return Polygon(_close_ring(ring))


def create_multipolygon_shape(
    relation: OSMRelation,
    document: OSMDocument,
    node_table
) -> Polygon:
    """
    Build the footprint of a multipolygon relation.

    Outer and inner member ways are stitched into rings. The largest
    outer ring becomes the main ring and the others become islands;
    each inner ring is a hole of the outer ring that contains it.

    Args:
        relation: Multipolygon relation
        document: Document holding the member ways
        node_table: NodeTable (raw or projected)

    Returns:
        Polygon (empty if no outer ring could be built)
    """
    outer_rings = _stitched_rings(relation, document, node_table, 'outer')
    if not outer_rings:
        logger.warning(f"Relation {relation.id} has no usable outer ring")
        return Polygon([])

    outer_rings.sort(key=lambda ring: abs(polygon_signed_area(ring)), reverse=True)
    pieces = [Polygon(ring) for ring in outer_rings]

    for hole in _stitched_rings(relation, document, node_table, 'inner'):
        owner = next(
            (piece for piece in pieces if point_in_polygon(hole[0], piece.outer_ring)),
            None
        )
        if owner is None:
            logger.warning(f"Inner ring of relation {relation.id} lies outside every outer ring")
            continue
        owner.holes.append(hole)

    if len(pieces) > 1:
        logger.debug(f"Relation {relation.id} has {len(pieces)} outer rings")

    footprint = pieces[0]
    footprint.islands = pieces[1:]
    return footprint


def _stitched_rings(
    relation: OSMRelation,
    document: OSMDocument,
    node_table,
    role: str
) -> List[List[Point2D]]:
    segments = []
    for member in relation.members_with_role(role):
        way = document.get_element(member.ref, 'way') if member.type == 'way' else None
        if way is None:
            logger.warning(f"{role.capitalize()} way {member.ref} of relation {relation.id} not found")
            continue
        segments.append(WaySegment(way.id, way.node_ids))

    rings = []
    for ring_ids in stitch_ways(segments):
        ring = _node_ids_to_points(ring_ids, node_table, f"relation {relation.id}")
        if len(ring) >= 3:
            rings.append(_close_ring(ring))
    return rings


def _node_ids_to_points(node_ids: List[int], node_table, owner: str) -> List[Point2D]:
    points = []
    for node_id in node_ids:
        coords = node_table.get(node_id)
        if coords is None:
            logger.warning(f"Node {node_id} not found for {owner}")
            continue
        points.append(Point2D(coords[0], coords[1]))
    return points


def _close_ring(ring: List[Point2D]) -> List[Point2D]:
    if ring and ring[0] != ring[-1]:
        return ring + [ring[0]]
    return ring


# =============================================================================
# FOOTPRINT QUERIES
# =============================================================================

def extents(footprint: Polygon) -> List[float]:
    """Return [left, bottom, right, top] over every outer ring."""
    return footprint.bbox.to_extents()


def width(footprint: Polygon) -> float:
    """Largest distance between two footprint vertices."""
    ring = footprint.all_points()
    best = 0.0
    for i in range(len(ring)):
        for j in range(i + 1, len(ring)):
            best = max(best, ring[i].distance_to(ring[j]))
    return best


def center(footprint: Polygon) -> Point2D:
    """Area centroid of the outer ring."""
    return polygon_centroid(footprint.outer_ring)


def inscribed_radius(footprint: Polygon) -> float:
    """Radius of the largest circle that fits inside the footprint."""
    return inscribed_circle(footprint)[1]


def inscribed_circle(footprint: Polygon, precision: Optional[float] = None) -> Tuple[Point2D, float]:
    """
    Find the pole of inaccessibility of a footprint.

    Quadtree search over the bounding box: cells are visited in order of
    the best distance they could still contain and split until no cell
    can beat the current best by more than ``precision``.

    Args:
        footprint: Polygon, holes respected
        precision: Stop tolerance in footprint units
            (default: 1/1000 of the smaller bbox side)

    Returns:
        (centre, radius) tuple
    """
    if footprint.point_count < 4:
        return (center(footprint) if not footprint.is_empty else Point2D(0.0, 0.0), 0.0)

    bbox = footprint.bbox
    cell_size = min(bbox.width, bbox.height)
    if cell_size <= 0:
        return (bbox.center, 0.0)

    if precision is None:
        precision = cell_size / 1000.0

    half = cell_size / 2.0
    queue: List[Tuple[float, int, _Cell]] = []
    counter = 0

    x = bbox.min_x
    while x < bbox.max_x:
        y = bbox.min_y
        while y < bbox.max_y:
            cell = _Cell(x + half, y + half, half, footprint)
            heapq.heappush(queue, (-cell.potential, counter, cell))
            counter += 1
            y += cell_size
        x += cell_size

    centroid = polygon_centroid(footprint.outer_ring)
    best = _Cell(centroid.x, centroid.y, 0.0, footprint)
    bbox_cell = _Cell(bbox.center.x, bbox.center.y, 0.0, footprint)
    if bbox_cell.distance > best.distance:
        best = bbox_cell

    while queue:
        _, _, cell = heapq.heappop(queue)

        if cell.distance > best.distance:
            best = cell

        if cell.potential - best.distance <= precision:
            continue

        half = cell.half / 2.0
        for dx in (-half, half):
            for dy in (-half, half):
                child = _Cell(cell.x + dx, cell.y + dy, half, footprint)
                heapq.heappush(queue, (-child.potential, counter, child))
                counter += 1

    return (Point2D(best.x, best.y), max(best.distance, 0.0))


class _Cell:
    """Square search cell; distance is signed (positive inside)."""

    __slots__ = ('x', 'y', 'half', 'distance', 'potential')

    def __init__(self, x: float, y: float, half: float, footprint: Polygon):
        self.x = x
        self.y = y
        self.half = half
        self.distance = signed_distance(Point2D(x, y), footprint)
        self.potential = self.distance + half * math.sqrt(2)


def signed_distance(point: Point2D, footprint: Polygon) -> float:
    """
    Distance from point to the footprint boundary, negative outside.

    With islands, the best piece wins: a point inside any outer ring is
    inside the footprint. A footprint without a single edge is
    infinitely far away.
    """
    best = -math.inf
    for piece in footprint.pieces():
        rings = [piece.outer_ring] + piece.holes
        nearest = min(
            (point_to_segment_distance(point, ring[i], ring[i + 1])
             for ring in rings
             for i in range(len(ring) - 1)),
            default=None
        )
        if nearest is None:
            continue
        distance = nearest if point_in_polygon_with_holes(point, piece) else -nearest
        best = max(best, distance)
    return best


def contains_polygon(outer: Polygon, inner: Polygon, tolerance: float = 0.0) -> bool:
    """True if every vertex of ``inner`` lies inside or within ``tolerance`` of ``outer``."""
    if outer.is_empty or inner.is_empty:
        return False
    for point in inner.all_points():
        if signed_distance(point, outer) < -tolerance:
            return False
    return True


def footprint_area(footprint: Polygon) -> float:
    """Area of every outer ring minus its holes."""
    total = 0.0
    for piece in footprint.pieces():
        total += abs(polygon_signed_area(piece.outer_ring))
        for hole in piece.holes:
            total -= abs(polygon_signed_area(hole))
    return total


# =============================================================================
# RING HELPERS
# =============================================================================

def point_in_polygon(point: Point2D, ring: List[Point2D]) -> bool:
    """
    Test if point is inside a polygon ring using ray casting algorithm.

    Args:
        point: Point to test
        ring: List of polygon vertices (closed or open)

    Returns:
        True if point is inside or on edge
    """
    n = len(ring)
    if n < 3:
        return False

    inside = False
    j = n - 1

    for i in range(n):
        xi, yi = ring[i].x, ring[i].y
        xj, yj = ring[j].x, ring[j].y

        if point_to_segment_distance(point, ring[i], ring[j]) < 1e-9:
            return True

        if ((yi > point.y) != (yj > point.y)) and \
           (point.x < (xj - xi) * (point.y - yi) / (yj - yi) + xi):
            inside = not inside

        j = i

    return inside


def point_in_polygon_with_holes(point: Point2D, polygon: Polygon) -> bool:
    """True only if inside the outer ring and not inside any hole."""
    if not point_in_polygon(point, polygon.outer_ring):
        return False

    for hole in polygon.holes:
        if point_in_polygon(point, hole):
            return False

    return True


def point_to_segment_distance(point: Point2D, seg_p1: Point2D, seg_p2: Point2D) -> float:
    """
    Compute minimum distance from point to line segment.

    Args:
        point: The point
        seg_p1, seg_p2: Segment endpoints

    Returns:
        Distance from point to nearest point on segment
    """
    dx = seg_p2.x - seg_p1.x
    dy = seg_p2.y - seg_p1.y

    length_sq = dx * dx + dy * dy
    if length_sq < 1e-20:
        return point.distance_to(seg_p1)

    # Project point onto line, clamped to [0, 1]
    t = max(0.0, min(1.0, (
        (point.x - seg_p1.x) * dx +
        (point.y - seg_p1.y) * dy
    ) / length_sq))

    nearest = Point2D(seg_p1.x + t * dx, seg_p1.y + t * dy)
    return point.distance_to(nearest)


def polygon_signed_area(ring: List[Point2D]) -> float:
    """
    Compute signed area using shoelace formula.

    Returns:
        Signed area (positive = CCW, negative = CW)
    """
    n = len(ring)
    if n < 3:
        return 0.0

    area = 0.0
    for i in range(n):
        j = (i + 1) % n
        area += ring[i].x * ring[j].y
        area -= ring[j].x * ring[i].y

    return area / 2.0


def polygon_centroid(ring: List[Point2D]) -> Point2D:
    """
    Area centroid of a ring.

    Falls back to the vertex average for degenerate (zero-area) rings.
    """
    if not ring:
        return Point2D(0.0, 0.0)

    open_ring = ring[:-1] if len(ring) > 1 and ring[0] == ring[-1] else ring
    n = len(open_ring)

    area = polygon_signed_area(open_ring)
    if abs(area) < 1e-12:
        cx = sum(p.x for p in open_ring) / n
        cy = sum(p.y for p in open_ring) / n
        return Point2D(cx, cy)

    cx = 0.0
    cy = 0.0
    for i in range(n):
        p = open_ring[i]
        q = open_ring[(i + 1) % n]
        f = p.x * q.y - q.x * p.y
        cx += (p.x + q.x) * f
        cy += (p.y + q.y) * f

    return Point2D(cx / (6 * area), cy / (6 * area))


def is_clockwise(ring: List[Point2D]) -> bool:
    """True if ring winds clockwise (negative area)."""
    return polygon_signed_area(ring) < 0


def ensure_ccw(ring: List[Point2D]) -> List[Point2D]:
    """Return the ring in counter-clockwise order, reversing if needed."""
    if is_clockwise(ring):
        return list(reversed(ring))
    return ring
