"""
Core geometry types for the OSM building model.

Provides Point2D, BBox and Polygon. Footprints are stored as
closed rings (first point repeated at the end), in whatever coordinate
frame the node table currently holds: lon/lat degrees before
reprojection, local metres after it.
"""

from dataclasses import dataclass, field
from typing import List, Optional
import math


@dataclass(frozen=True, slots=True)
class Point2D:
    """2D point (x = longitude or easting, y = latitude or northing)."""
    x: float
    y: float

    def distance_to(self, other: 'Point2D') -> float:
        """Euclidean distance to another point."""
        dx = self.x - other.x
        dy = self.y - other.y
        return math.sqrt(dx * dx + dy * dy)

    def to_tuple(self) -> tuple:
        return (self.x, self.y)


@dataclass(slots=True)
class BBox:
    """Axis-aligned bounding box in 2D."""
    min_x: float
    min_y: float
    max_x: float
    max_y: float

    def union(self, other: 'BBox') -> 'BBox':
        """Smallest box containing both boxes."""
        return BBox(
            min(self.min_x, other.min_x),
            min(self.min_y, other.min_y),
            max(self.max_x, other.max_x),
            max(self.max_y, other.max_y),
        )

    @property
    def width(self) -> float:
        """Width in X direction."""
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        """Height in Y direction."""
        return self.max_y - self.min_y

    @property
    def center(self) -> Point2D:
        """Center point of bbox."""
        return Point2D(
            (self.min_x + self.max_x) / 2,
            (self.min_y + self.max_y) / 2
        )

    def to_extents(self) -> List[float]:
        """Return as [left, bottom, right, top]."""
        return [self.min_x, self.min_y, self.max_x, self.max_y]

    @staticmethod
    def from_points(points: List[Point2D]) -> 'BBox':
        """Create bbox from a list of points."""
        if not points:
            raise ValueError("Cannot create BBox from empty point list")

        xs = [p.x for p in points]
        ys = [p.y for p in points]
        return BBox(min(xs), min(ys), max(xs), max(ys))


@dataclass
class Polygon:
    """
    2D polygon with optional holes, representing a footprint.

    Attributes:
        outer_ring: Closed list of Point2D forming the outer boundary
        holes: Closed inner rings
        islands: Further disjoint outer rings of the same footprint
            (multipolygons with more than one outer ring), each a
            Polygon with its own holes
        bbox: Cached bounding box over every outer ring (computed on demand)

    Winding is whatever the source way had; callers that care
    (the pyramid fan) normalise it themselves.
    """
    outer_ring: List[Point2D]
    holes: List[List[Point2D]] = field(default_factory=list)
    islands: List['Polygon'] = field(default_factory=list)
    _bbox: Optional[BBox] = field(default=None, repr=False)

    @property
    def bbox(self) -> BBox:
        """Get or compute bounding box."""
        if self._bbox is None:
            self._bbox = BBox.from_points(self.all_points())
        return self._bbox

    @property
    def is_empty(self) -> bool:
        return len(self.outer_ring) == 0

    @property
    def point_count(self) -> int:
        """Number of points in the main outer ring, closing point included."""
        return len(self.outer_ring)

    def pieces(self) -> List['Polygon']:
        """This polygon followed by its islands."""
        return [self] + list(self.islands)

    def all_points(self) -> List[Point2D]:
        """Vertices of every outer ring."""
        points = list(self.outer_ring)
        for island in self.islands:
            points.extend(island.outer_ring)
        return points

    def to_dict(self) -> dict:
        return {
            'outer': [p.to_tuple() for p in self.outer_ring],
            'holes': [[p.to_tuple() for p in hole] for hole in self.holes],
            'islands': [island.to_dict() for island in self.islands],
        }
