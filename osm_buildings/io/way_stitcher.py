"""
Way stitcher for OSM multipolygon relations.

Outer and inner members of a multipolygon may be split over several
unordered ways with inconsistent direction. This module chains them
into closed rings of node ids.
"""

from typing import Dict, List, Optional, Set, Tuple
from dataclasses import dataclass
import logging

logger = logging.getLogger(__name__)


@dataclass
class WaySegment:
    """
    A member way reduced to its node ids.

    Attributes:
        way_id: OSM way ID
        node_ids: List of node IDs in order
    """
    way_id: int
    node_ids: List[int]

    @property
    def first_node(self) -> Optional[int]:
        return self.node_ids[0] if self.node_ids else None

    @property
    def last_node(self) -> Optional[int]:
        return self.node_ids[-1] if self.node_ids else None

    @property
    def is_closed(self) -> bool:
        """Check if way forms a closed loop."""
        return len(self.node_ids) >= 3 and self.first_node == self.last_node


def stitch_ways(ways: List[WaySegment]) -> List[List[int]]:
    """
    Stitch member ways into closed rings of node ids.

    Algorithm:
    1. Index every way by its two endpoint nodes
    2. Start a ring from an unused way and keep appending the unused way
       that touches the current end, reversing it where needed
    3. Keep the ring only if it closes on its start node

    Rings that do not close, or have fewer than 3 distinct nodes, are
    dropped with a warning.

    Args:
        ways: Member ways to stitch

    Returns:
        List of closed rings (first node repeated at the end)
    """
    if not ways:
        return []

    if len(ways) == 1 and ways[0].is_closed:
        return [list(ways[0].node_ids)]

    # node_id -> [(way_index, is_first_endpoint)]
    endpoint_index: Dict[int, List[Tuple[int, bool]]] = {}

    for i, way in enumerate(ways):
        if not way.node_ids:
            continue

        endpoint_index.setdefault(way.first_node, []).append((i, True))
        if way.first_node != way.last_node:
            endpoint_index.setdefault(way.last_node, []).append((i, False))

    used: Set[int] = set()
    rings: List[List[int]] = []

    while len(used) < len(ways):
        start_idx = None
        for i in range(len(ways)):
            if i not in used and ways[i].node_ids:
                start_idx = i
                break

        if start_idx is None:
            break

        current_nodes = list(ways[start_idx].node_ids)
        used.add(start_idx)

        if len(current_nodes) < 2:
            logger.warning(f"Way {ways[start_idx].way_id} has fewer than 2 nodes, skipping")
            continue

        # Ring holds every node up to, but excluding, the current end
        ring_nodes: List[int] = current_nodes[:-1]
        current_end = current_nodes[-1]

        for _ in range(len(ways) * 2):
            if current_end == ring_nodes[0]:
                break

            next_way = _find_connecting_way(endpoint_index, current_end, used)
            if next_way is None:
                break

            way_idx, needs_reverse = next_way
            used.add(way_idx)

            next_nodes = ways[way_idx].node_ids
            if needs_reverse:
                next_nodes = list(reversed(next_nodes))

            ring_nodes.append(current_end)
            ring_nodes.extend(next_nodes[1:-1])
            current_end = next_nodes[-1]

        if current_end != ring_nodes[0]:
            logger.warning(
                f"Way stitching failed: ring starting with node {ring_nodes[0]} "
                f"did not close (endpoint {current_end}), skipping"
            )
            continue

        ring_nodes.append(ring_nodes[0])
        if len(ring_nodes) < 4:
            logger.warning(f"Ring has only {len(ring_nodes)} nodes (minimum 4 required), skipping")
            continue

        rings.append(ring_nodes)

    return rings


def _find_connecting_way(
    endpoint_index: Dict[int, List[Tuple[int, bool]]],
    target_node: int,
    used: Set[int],
) -> Optional[Tuple[int, bool]]:
    """
    Find an unused way that touches ``target_node``.

    Returns:
        (way_index, needs_reverse) or None if no connection found
    """
    for way_idx, is_first in endpoint_index.get(target_node, []):
        if way_idx in used:
            continue
        # Matching the last endpoint means the way runs backwards
        return (way_idx, not is_first)

    return None
