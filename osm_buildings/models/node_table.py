"""
Shared node coordinate table.

One table per Building. It is filled once from the document with raw
(lon, lat) pairs, reprojected once in place, and from then on only read
by the building parts, which all hold a reference to the same table.
"""

from typing import Dict, Iterator, Optional, Tuple
import logging

from ..io.osm_document import OSMDocument

logger = logging.getLogger(__name__)

Coordinate = Tuple[float, float]


class NodeTable:
    """Node id -> (x, y); (lon, lat) before reprojection, metres after."""

    def __init__(self, coordinates: Optional[Dict[int, Coordinate]] = None):
        self._coordinates: Dict[int, Coordinate] = dict(coordinates or {})
        self.projected = False

    @classmethod
    def from_document(cls, document: OSMDocument) -> 'NodeTable':
        """Build the raw (lon, lat) table from every node in the document."""
        table = cls({node_id: (node.lon, node.lat) for node_id, node in document.nodes.items()})
        logger.debug(f"Built node table with {len(table)} nodes")
        return table

    def reposition(self, projector) -> None:
        """
        Replace every raw entry with its projected coordinate.

        Args:
            projector: IProjector centred on the building's home point
        """
        if self.projected:
            raise RuntimeError("Node table has already been reprojected")

        for node_id, (lon, lat) in self._coordinates.items():
            self._coordinates[node_id] = projector.project(lat, lon)
        self.projected = True

    def __getitem__(self, node_id: int) -> Coordinate:
        return self._coordinates[node_id]

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._coordinates

    def __len__(self) -> int:
        return len(self._coordinates)

    def __iter__(self) -> Iterator[int]:
        return iter(self._coordinates)

    def get(self, node_id: int) -> Optional[Coordinate]:
        return self._coordinates.get(node_id)
