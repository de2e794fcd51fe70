"""
Roof parameterization.

Turns a part's footprint and resolved options into the numbers a
renderer needs for its roof primitive: where the roof starts, how deep
it is, and shape-specific extras (sphere radius and scale, skillion
rotation, pyramid fan).

Shapes without a rule raise UnsupportedRoofShapeError; callers decide
whether that is fatal.
"""

from dataclasses import dataclass
from typing import Callable, Optional
import logging
import math

from ..config import DOME_PHI_LENGTH, ONION_PHI_LENGTH
from ..exceptions import UnsupportedRoofShapeError
from ..models.enums import RoofShape
from ..models.geometry import Point2D, Polygon
from ..models.mesh import MeshData
from ..models.options import OptionSet
from ..utils.polygon_utils import center
from .roof_pyramidal import generate_pyramidal_roof

logger = logging.getLogger(__name__)


@dataclass
class RoofParameters:
    """
    Geometry parameters of one roof.

    Attributes:
        shape: Roof archetype
        elevation: Height of the roof base above the part origin
        depth: Roof height above its base
        center: Footprint centroid (sphere centre or pyramid apex)
        radius: Sphere radius for dome and onion roofs
        vertical_scale: Sphere Z scale so the roof reaches ``depth``
        phi_length: Sphere cap extent in radians from the pole
        angle: Skillion rotation about Z in radians
        pitch: Skillion pitch in degrees (roof:angle)
        mesh: Pyramid fan for pyramidal roofs
    """
    shape: RoofShape
    elevation: float
    depth: float
    center: Optional[Point2D] = None
    radius: Optional[float] = None
    vertical_scale: Optional[float] = None
    phi_length: Optional[float] = None
    angle: Optional[float] = None
    pitch: Optional[float] = None
    mesh: Optional[MeshData] = None

    def to_dict(self) -> dict:
        return {
            'shape': self.shape.value,
            'elevation': self.elevation,
            'depth': self.depth,
            'center': self.center.to_tuple() if self.center else None,
            'radius': self.radius,
            'vertical_scale': self.vertical_scale,
            'phi_length': self.phi_length,
            'angle': self.angle,
            'pitch': self.pitch,
            'triangles': self.mesh.triangle_count() if self.mesh else 0,
        }


def wall_extrusion(options: OptionSet) -> float:
    """
    Height of the wall prism of a part.

    The walls stand on min_height and stop where the roof begins. Flat
    roofs have no roof volume, so their walls run the full height.
    """
    building = options.building
    depth = building.height - building.min_height
    if RoofShape.from_osm_tag(options.roof.shape) != RoofShape.FLAT:
        depth -= options.roof.height
    return depth


def parameterize_roof(
    footprint: Polygon,
    options: OptionSet,
    radius: Callable[[], float],
    osm_id: Optional[int] = None
) -> Optional[RoofParameters]:
    """
    Compute roof parameters for a part.

    Args:
        footprint: Projected part footprint
        options: Resolved part options
        radius: Lazily computed inscribed radius of the footprint
        osm_id: Part ID, for logging and the pyramid mesh

    Returns:
        RoofParameters, or None for flat roofs

    Raises:
        UnsupportedRoofShapeError: if the shape has no geometry rule
    """
    shape = RoofShape.from_osm_tag(options.roof.shape)
    if shape is None or shape == RoofShape.GABLED:
        raise UnsupportedRoofShapeError(options.roof.shape)

    if shape == RoofShape.FLAT:
        return None

    height = options.building.height
    roof_height = options.roof.height

    if shape == RoofShape.DOME:
        return _sphere_roof(shape, footprint, height, roof_height, radius(),
                            DOME_PHI_LENGTH, osm_id)

    if shape == RoofShape.ONION:
        r = radius()
        if roof_height == 0:
            roof_height = r
        return _sphere_roof(shape, footprint, height, roof_height, r,
                            ONION_PHI_LENGTH, osm_id)

    if shape == RoofShape.SKILLION:
        direction = options.roof.direction or 0.0
        return RoofParameters(
            shape=shape,
            elevation=height - roof_height,
            depth=roof_height,
            angle=(360.0 - direction) / 360.0 * 2 * math.pi,
            pitch=options.roof.angle,
        )

    # Pyramidal
    apex = center(footprint)
    return RoofParameters(
        shape=shape,
        elevation=height - roof_height,
        depth=roof_height,
        center=apex,
        mesh=generate_pyramidal_roof(footprint, roof_height, apex, osm_id),
    )


def _sphere_roof(
    shape: RoofShape,
    footprint: Polygon,
    height: float,
    roof_height: float,
    radius: float,
    phi_length: float,
    osm_id: Optional[int]
) -> RoofParameters:
    if radius > 0:
        scale = roof_height / radius
    else:
        logger.warning(f"Part {osm_id}: zero inscribed radius, {shape.value} roof collapsed")
        scale = 0.0

    return RoofParameters(
        shape=shape,
        elevation=height - roof_height,
        depth=roof_height,
        center=center(footprint),
        radius=radius,
        vertical_scale=scale,
        phi_length=phi_length,
    )
