"""
Mesh data model for roof primitives.

Provides MeshData, the triangle soup handed to a renderer for roof
shapes that are built directly from the footprint (pyramidal fans).
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple


@dataclass
class MeshData:
    """
    Generated mesh data for one roof.

    Attributes:
        vertices: List of (x, y, z) vertex positions, z up, local frame
        faces: List of face vertex indices (0-based)
        osm_id: Optional part ID for grouping
    """
    vertices: List[Tuple[float, float, float]] = field(default_factory=list)
    faces: List[List[int]] = field(default_factory=list)
    osm_id: Optional[int] = None

    def vertex_count(self) -> int:
        """Get number of vertices."""
        return len(self.vertices)

    def triangle_count(self) -> int:
        """
        Get number of triangles.

        Assumes all faces are triangles.
        """
        return len(self.faces)

    def add_vertex(self, x: float, y: float, z: float) -> int:
        """
        Add a vertex and return its 0-based index.

        Args:
            x, y, z: Vertex coordinates

        Returns:
            Index of the new vertex
        """
        self.vertices.append((x, y, z))
        return len(self.vertices) - 1

    def add_face(self, indices: List[int]) -> None:
        """
        Add a face with given vertex indices.

        Args:
            indices: List of vertex indices (0-based)
        """
        self.faces.append(indices)

    def to_dict(self) -> dict:
        return {'vertices': [list(v) for v in self.vertices], 'faces': self.faces}
