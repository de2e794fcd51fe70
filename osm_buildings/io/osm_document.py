"""
OSM XML document model for the building model.

Parses OpenStreetMap XML text (an API ``way/full`` or ``relation/full``
response, a ``map?bbox=`` response, or a saved ``.osm`` file) into a
tree that can be queried by element kind, by tag predicate and by id.
Documents fetched separately can be merged into one.
"""

import xml.etree.ElementTree as ET
from typing import Dict, Iterator, List, Optional, Union
from dataclasses import dataclass, field
import logging

logger = logging.getLogger(__name__)


@dataclass
class OSMNode:
    """An OSM node with geographic coordinates."""
    id: int
    lat: float
    lon: float
    tags: Dict[str, str] = field(default_factory=dict)


@dataclass
class OSMWay:
    """An OSM way with node references and tags."""
    id: int
    node_ids: List[int]
    tags: Dict[str, str] = field(default_factory=dict)

    kind = 'way'

    @property
    def is_closed(self) -> bool:
        return len(self.node_ids) > 0 and self.node_ids[0] == self.node_ids[-1]


@dataclass(frozen=True)
class OSMMember:
    """A relation member reference."""
    type: str
    ref: int
    role: str = ''


@dataclass
class OSMRelation:
    """An OSM relation with members and tags."""
    id: int
    members: List[OSMMember]
    tags: Dict[str, str] = field(default_factory=dict)

    kind = 'relation'

    def members_with_role(self, role: str) -> List[OSMMember]:
        return [m for m in self.members if m.role == role]

    def first_member(self, role: str) -> Optional[OSMMember]:
        for member in self.members:
            if member.role == role:
                return member
        return None


OSMElement = Union[OSMWay, OSMRelation]


class OSMDocument:
    """
    Parsed OSM data.

    Elements keep document order. Lookups by id are kind-qualified when
    the caller knows the kind (relation members always do); otherwise a
    way is preferred over a relation with the same id.
    """

    def __init__(self):
        self.nodes: Dict[int, OSMNode] = {}
        self.ways: Dict[int, OSMWay] = {}
        self.relations: Dict[int, OSMRelation] = {}

    @classmethod
    def from_string(cls, text: Union[str, bytes]) -> 'OSMDocument':
        """Parse OSM XML text. Raises ET.ParseError on malformed XML."""
        root = ET.fromstring(text)
        document = cls()
        document._load(root)
        return document

    @classmethod
    def from_file(cls, filepath: str) -> 'OSMDocument':
        logger.info(f"Parsing OSM file: {filepath}")
        tree = ET.parse(filepath)
        document = cls()
        document._load(tree.getroot())
        return document

    def _load(self, root: ET.Element) -> None:
        for node_elem in root.iter('node'):
            node_id = int(node_elem.get('id'))
            self.nodes[node_id] = OSMNode(
                node_id,
                float(node_elem.get('lat')),
                float(node_elem.get('lon')),
                _read_tags(node_elem),
            )

        for way_elem in root.iter('way'):
            way_id = int(way_elem.get('id'))
            node_ids = [int(nd.get('ref')) for nd in way_elem.findall('nd')]
            self.ways[way_id] = OSMWay(way_id, node_ids, _read_tags(way_elem))

        for rel_elem in root.iter('relation'):
            rel_id = int(rel_elem.get('id'))
            members = [
                OSMMember(m.get('type'), int(m.get('ref')), m.get('role', ''))
                for m in rel_elem.findall('member')
            ]
            self.relations[rel_id] = OSMRelation(rel_id, members, _read_tags(rel_elem))

        logger.debug(
            f"Parsed {len(self.nodes)} nodes, {len(self.ways)} ways, "
            f"{len(self.relations)} relations"
        )

    def merge(self, other: 'OSMDocument') -> 'OSMDocument':
        """
        Merge another document into this one and return self.

        Elements already present are kept; the OSM API returns the same
        version of an element in both the entity and the bbox responses.
        """
        for node_id, node in other.nodes.items():
            self.nodes.setdefault(node_id, node)
        for way_id, way in other.ways.items():
            self.ways.setdefault(way_id, way)
        for rel_id, relation in other.relations.items():
            self.relations.setdefault(rel_id, relation)
        return self

    def get_element(self, element_id: int, kind: Optional[str] = None) -> Optional[OSMElement]:
        """Look up a way or relation by id."""
        if kind == 'way':
            return self.ways.get(element_id)
        if kind == 'relation':
            return self.relations.get(element_id)
        if kind is not None:
            return None
        if element_id in self.ways:
            return self.ways[element_id]
        return self.relations.get(element_id)

    def resolve_member(self, member: OSMMember) -> Optional[OSMElement]:
        return self.get_element(member.ref, member.type)

    def elements(self) -> Iterator[OSMElement]:
        """All ways, then all relations, in document order."""
        yield from self.ways.values()
        yield from self.relations.values()

    def find_tagged(self, key: str, value: Optional[str] = None) -> List[OSMElement]:
        """Ways and relations carrying tag ``key`` (optionally ``key=value``)."""
        return [
            element for element in self.elements()
            if key in element.tags and (value is None or element.tags[key] == value)
        ]


def _read_tags(elem: ET.Element) -> Dict[str, str]:
    return {tag.get('k'): tag.get('v') for tag in elem.findall('tag')}
