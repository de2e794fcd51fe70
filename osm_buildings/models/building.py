"""
Building assembly.

A Building is the whole modelled structure behind one OSM way or
relation: its home point, the shared node table in the home-centred
metre frame, the outer element and the building parts.

Assembly order:
1. Classify and validate the root element (abort on invalid data)
2. Build the node table and the home point from the raw extents
3. Reproject the node table in place
4. Build the outer element, then the parts, each inheriting the
   outer element's options
"""

from typing import Dict, List, Optional, Tuple, Type
import logging

from ..config import DEFAULT_CONFIG, PART_CONTAINMENT_TOLERANCE, ModelConfig
from ..exceptions import InvalidBuildingError
from ..generators.building_generator import RenderBundle
from ..io.osm_api import create_document_source
from ..io.osm_document import OSMDocument, OSMElement
from ..processing.classifier import classify, is_valid_data, resolve_outline
from ..processing.extents import get_extents
from ..projection import create_projector
from ..utils import polygon_utils
from .building_part import BuildingPart, MultiBuildingPart
from .enums import BuildingKind
from .node_table import NodeTable

logger = logging.getLogger(__name__)

ELEMENT_KINDS = ('way', 'relation')


def _part_class(element: OSMElement) -> Type[BuildingPart]:
    return BuildingPart if element.kind == 'way' else MultiBuildingPart


class Building:
    """
    An OSM building.

    Args:
        element_id: OSM ID of the building way or relation
        document: Document with the building and its surroundings
        element_kind: 'way' or 'relation' when the id is ambiguous
        config: Runtime configuration

    Raises:
        InvalidBuildingError: if the element is missing or its data is invalid
    """

    def __init__(
        self,
        element_id: int,
        document: OSMDocument,
        element_kind: Optional[str] = None,
        config: Optional[ModelConfig] = None
    ):
        self.id = element_id
        self.document = document
        self.config = config or DEFAULT_CONFIG

        root = document.get_element(element_id, element_kind)
        if root is None:
            raise InvalidBuildingError(f"Element {element_id} not found in document")
        self.root = root
        self.type = classify(root)

        if not is_valid_data(root, document):
            raise InvalidBuildingError(f"{root.kind.capitalize()} {element_id} is not valid building data")

        self.node_table = NodeTable.from_document(document)
        self.home = self._compute_home()
        self.projector = create_projector(self.home)
        self.node_table.reposition(self.projector)

        self.outer_element = self._build_outer_element()
        self.parts: List[BuildingPart] = []
        self._add_parts()

        logger.info(
            f"Building {self.id} ({self.type.value}): {len(self.parts)} parts, "
            f"home {self.home[0]:.7f},{self.home[1]:.7f}"
        )

    @classmethod
    def create(
        cls,
        kind: str,
        element_id: int,
        source=None,
        config: Optional[ModelConfig] = None
    ) -> 'Building':
        """
        Fetch a building and everything around it, then assemble it.

        The entity is fetched first; its raw extents select the bbox for
        the surroundings, which are merged into the entity document.

        Args:
            kind: 'way' or 'relation'
            element_id: OSM ID
            source: Document source (defaults to the configured one)
            config: Runtime configuration

        Raises:
            ValueError: for an unknown kind
            OSMApiError: if a fetch fails
            InvalidBuildingError: if the data is not a valid building
        """
        if kind not in ELEMENT_KINDS:
            raise ValueError(f"kind must be one of {ELEMENT_KINDS}, got {kind!r}")

        source = source or create_document_source(config)
        if kind == 'way':
            text = source.get_way_data(element_id)
        else:
            text = source.get_relation_data(element_id)

        document = OSMDocument.from_string(text)
        if document.get_element(element_id, kind) is None:
            raise InvalidBuildingError(f"{kind.capitalize()} {element_id} not found in fetched data")

        extents = get_extents(element_id, document, NodeTable.from_document(document), kind)
        inner = OSMDocument.from_string(source.get_inner_data(*extents))
        document.merge(inner)

        return cls(element_id, document, kind, config)

    def _compute_home(self) -> Tuple[float, float]:
        """The home point is the centre of the outer element's raw extents."""
        left, bottom, right, top = get_extents(self.id, self.document, self.node_table, self.root.kind)
        return ((left + right) / 2, (bottom + top) / 2)

    def _build_outer_element(self) -> BuildingPart:
        if self.type == BuildingKind.WAY:
            return BuildingPart(self.id, self.document, self.node_table)

        if self.type == BuildingKind.MULTIPOLYGON:
            return MultiBuildingPart(self.id, self.document, self.node_table)

        # The outline supplies the geometry, the building relation the tags
        outline = resolve_outline(self.root, self.document)
        tags: Dict[str, str] = dict(outline.tags)
        tags.update(self.root.tags)
        return _part_class(outline)(outline.id, self.document, self.node_table, tags=tags)

    def _add_parts(self) -> None:
        inherited = self.outer_element.options

        if self.type == BuildingKind.RELATION:
            for member in self.root.members_with_role('part'):
                element = self.document.resolve_member(member)
                if element is None:
                    logger.warning(f"Part {member.ref} of relation {self.id} not found, skipping")
                    continue
                self.parts.append(
                    _part_class(element)(element.id, self.document, self.node_table, inherited)
                )
            return

        for element in self.document.find_tagged('building:part'):
            if element is self.root:
                continue
            if self.config.scope_part_scan and not self._is_inside_outer(element):
                logger.debug(f"Skipping {element.kind} {element.id}: outside building {self.id}")
                continue
            self.parts.append(
                _part_class(element)(element.id, self.document, self.node_table, inherited)
            )

    def _is_inside_outer(self, element: OSMElement) -> bool:
        if element.kind == 'way':
            shape = polygon_utils.create_shape(element, self.node_table)
        else:
            shape = polygon_utils.create_multipolygon_shape(element, self.document, self.node_table)
        return polygon_utils.contains_polygon(
            self.outer_element.shape, shape, PART_CONTAINMENT_TOLERANCE
        )

    # =========================================================================
    # OUTPUT
    # =========================================================================

    def renderable_parts(self) -> List[BuildingPart]:
        """The parts, or the outer element alone when there are none."""
        return self.parts if self.parts else [self.outer_element]

    def render_bundles(self) -> List[RenderBundle]:
        """Renderer input for every renderable part."""
        return [part.render_bundle() for part in self.renderable_parts()]

    @property
    def options(self):
        return self.outer_element.options

    def get_info(self) -> dict:
        """JSON-serialisable snapshot of the building and its parts."""
        return {
            'id': self.id,
            'type': self.type.value,
            'options': self.outer_element.options.to_dict(),
            'parts': [part.get_info() for part in self.parts],
        }

    def __repr__(self) -> str:
        return f"Building(id={self.id}, type={self.type.value}, parts={len(self.parts)})"
