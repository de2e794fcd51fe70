"""
Building parts.

A BuildingPart is one extrudable volume: a closed way footprint with
its own walls and roof. MultiBuildingPart is the same for a multipolygon
relation, whose footprint is stitched from member ways.

Both resolve their OptionSet once at construction, against the options
of the outer element they belong to.
"""

from typing import Dict, List, Optional
import logging

from ..exceptions import InvalidBuildingError
from ..generators.building_generator import RenderBundle, generate_render_bundle
from ..generators.roof_parameters import wall_extrusion
from ..io.osm_document import OSMDocument, OSMElement
from ..models.geometry import Point2D, Polygon
from ..models.node_table import NodeTable
from ..models.options import (
    BLANK_OPTIONS,
    OptionSet,
    ResolutionContext,
    read_specified_options,
    resolve_options,
)
from ..utils import polygon_utils

logger = logging.getLogger(__name__)


class BuildingPart:
    """
    A building part modelled by a closed way.

    Args:
        element_id: OSM ID of the way
        document: Document holding the way and its nodes
        node_table: Shared, already reprojected node table
        inherited_options: Resolved options of the outer element
        tags: Tags to read options from (defaults to the element's own)
    """

    kind = 'way'

    def __init__(
        self,
        element_id: int,
        document: OSMDocument,
        node_table: NodeTable,
        inherited_options: Optional[OptionSet] = None,
        tags: Optional[Dict[str, str]] = None
    ):
        self.id = element_id
        self.document = document
        self.node_table = node_table
        self.warnings: List[str] = []
        self._radius: Optional[float] = None

        self.element = self._lookup()
        self.tags = dict(self.element.tags if tags is None else tags)
        self.shape = self.build_shape()

        self.inherited_options = inherited_options or BLANK_OPTIONS
        self.specified_options = read_specified_options(self.tags)
        self.options = resolve_options(
            self.specified_options,
            self.inherited_options,
            ResolutionContext(tags=self.tags, radius=self.calculate_radius),
        )
        self._check_height()

    def _lookup(self) -> OSMElement:
        element = self.document.ways.get(self.id)
        if element is None:
            raise InvalidBuildingError(f"Way {self.id} not found in document")
        return element

    def build_shape(self) -> Polygon:
        """Project the element's geometry into a footprint."""
        return polygon_utils.create_shape(self.element, self.node_table)

    def _check_height(self) -> None:
        inherited_height = self.inherited_options.building.height
        height = self.options.building.height
        if 'building:part' not in self.tags or inherited_height is None:
            return
        if height > inherited_height:
            msg = (f"{self.kind.capitalize()} {self.id} is taller than building. "
                   f"({height}>{inherited_height})")
            logger.warning(msg)
            self.warnings.append(msg)

    # =========================================================================
    # GEOMETRY QUERIES
    # =========================================================================

    def get_width(self) -> float:
        """Largest extent of the footprint in metres."""
        return polygon_utils.width(self.shape)

    def calculate_radius(self) -> float:
        """Radius of the largest circle inside the footprint (cached)."""
        if self._radius is None:
            self._radius = polygon_utils.inscribed_radius(self.shape)
        return self._radius

    def center(self) -> Point2D:
        return polygon_utils.center(self.shape)

    def extents(self) -> List[float]:
        """[left, bottom, right, top] of the projected footprint."""
        return polygon_utils.extents(self.shape)

    def wall_extrusion(self) -> float:
        return wall_extrusion(self.options)

    # =========================================================================
    # OUTPUT
    # =========================================================================

    def render_bundle(self) -> RenderBundle:
        """Build the renderer input for this part."""
        return generate_render_bundle(self)

    def get_info(self) -> dict:
        """JSON-serialisable snapshot of the part."""
        return {
            'id': self.id,
            'type': self.kind,
            'options': self.options.to_dict(),
            'parts': [],
        }

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id}, points={self.shape.point_count})"


class MultiBuildingPart(BuildingPart):
    """A building part modelled by a multipolygon relation."""

    kind = 'multipolygon'

    def _lookup(self) -> OSMElement:
        element = self.document.relations.get(self.id)
        if element is None:
            raise InvalidBuildingError(f"Relation {self.id} not found in document")
        return element

    def build_shape(self) -> Polygon:
        return polygon_utils.create_multipolygon_shape(
            self.element, self.document, self.node_table
        )
