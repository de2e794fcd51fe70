"""
Generators for the OSM building model.

Contains roof parameterization, the pyramidal roof fan, material
resolution and the render bundle generator that combines them.
"""

from .roof_parameters import RoofParameters, parameterize_roof, wall_extrusion
from .roof_pyramidal import generate_pyramidal_roof
from .materials import (
    SurfaceMaterial,
    get_base_material,
    resolve_wall_material,
    resolve_roof_material,
)
from .building_generator import RenderBundle, generate_render_bundle

__all__ = [
    'RoofParameters',
    'parameterize_roof',
    'wall_extrusion',
    'generate_pyramidal_roof',
    'SurfaceMaterial',
    'get_base_material',
    'resolve_wall_material',
    'resolve_roof_material',
    'RenderBundle',
    'generate_render_bundle',
]
