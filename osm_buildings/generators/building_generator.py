"""
Render bundle generator.

Combines a part's footprint, resolved options, wall extrusion, materials
and roof parameters into the RenderBundle a renderer consumes. Roof
shapes without geometry degrade to a bundle without a roof.
"""

from typing import List, Optional
from dataclasses import dataclass, field
import logging

from ..exceptions import UnsupportedRoofShapeError
from ..models.geometry import Polygon
from ..models.options import OptionSet
from .materials import SurfaceMaterial, resolve_roof_material, resolve_wall_material
from .roof_parameters import RoofParameters, parameterize_roof, wall_extrusion

logger = logging.getLogger(__name__)


@dataclass
class RenderBundle:
    """
    Everything a renderer needs for one building part.

    Attributes:
        part_id: OSM ID of the part
        footprint: Projected footprint (metres, home-centred)
        options: Resolved options
        wall_depth: Wall prism height
        wall_base: Z of the wall bottom (min_height)
        wall_material: Wall material
        roof_material: Roof material
        roof: Roof parameters (None for flat or unsupported roofs)
        warnings: Non-fatal problems met while generating
    """
    part_id: int
    footprint: Polygon
    options: OptionSet
    wall_depth: float
    wall_base: float
    wall_material: SurfaceMaterial
    roof_material: SurfaceMaterial
    roof: Optional[RoofParameters] = None
    warnings: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            'id': self.part_id,
            'footprint': self.footprint.to_dict(),
            'options': self.options.to_dict(),
            'wall_depth': self.wall_depth,
            'wall_base': self.wall_base,
            'wall_material': self.wall_material.to_dict(),
            'roof_material': self.roof_material.to_dict(),
            'roof': self.roof.to_dict() if self.roof else None,
            'warnings': list(self.warnings),
        }


def generate_render_bundle(part) -> RenderBundle:
    """
    Generate the render bundle of a building part.

    Args:
        part: BuildingPart with footprint and resolved options

    Returns:
        RenderBundle; an unsupported roof shape is logged and recorded
        in the bundle warnings instead of raised
    """
    options = part.options
    bundle = RenderBundle(
        part_id=part.id,
        footprint=part.shape,
        options=options,
        wall_depth=wall_extrusion(options),
        wall_base=options.building.min_height,
        wall_material=resolve_wall_material(options),
        roof_material=resolve_roof_material(options),
        warnings=list(part.warnings),
    )

    try:
        bundle.roof = parameterize_roof(part.shape, options, part.calculate_radius, part.id)
    except UnsupportedRoofShapeError as e:
        msg = f"Part {part.id}: {e}, rendering without roof"
        logger.warning(msg)
        bundle.warnings.append(msg)

    if bundle.wall_depth < 0:
        msg = f"Part {part.id}: roof taller than the part ({bundle.wall_depth:.2f}m walls)"
        logger.warning(msg)
        bundle.warnings.append(msg)

    return bundle
