"""
Surface materials for walls and roofs.

A renderer-neutral description: base colour plus the few surface
parameters that distinguish glass from brick. Colours are 0xRRGGBB ints
when they come from the base table and the raw OSM string when a
colour tag overrides them (OSM accepts both names and hex codes).
"""

from dataclasses import dataclass, replace
from typing import Optional, Union

from ..models.options import OptionSet

Colour = Union[int, str]

WHITE = 0xffffff


@dataclass(frozen=True)
class SurfaceMaterial:
    """
    Material description handed to the renderer.

    Attributes:
        name: Base material name ('default' when untagged or unknown)
        colour: Base colour or the tagged override; None keeps the
            renderer's own default
        emissive: Emissive colour
        metalness: 0..1, physically based renderers only
        roughness: 0..1, physically based renderers only
        reflectivity: 0..1
        clearcoat: 0..1
        physical: True if the material needs a physically based shader
    """
    name: str
    colour: Optional[Colour] = None
    emissive: int = 0x111111
    metalness: Optional[float] = None
    roughness: Optional[float] = None
    reflectivity: Optional[float] = None
    clearcoat: Optional[float] = None
    physical: bool = False

    def to_dict(self) -> dict:
        colour = self.colour
        if isinstance(colour, int):
            colour = f"#{colour:06x}"
        return {
            'name': self.name,
            'colour': colour,
            'emissive': f"#{self.emissive:06x}",
            'metalness': self.metalness,
            'roughness': self.roughness,
            'reflectivity': self.reflectivity,
            'clearcoat': self.clearcoat,
            'physical': self.physical,
        }


# =============================================================================
# BASE MATERIALS
# =============================================================================

BASE_MATERIALS = {
    'glass': SurfaceMaterial('glass', 0x00374a, emissive=0x011d57,
                              reflectivity=0.1409, clearcoat=1.0, physical=True),
    'grass': SurfaceMaterial('grass', 0x7ec850, emissive=0x000000),
    'bronze': SurfaceMaterial('bronze', 0xcd7f32, emissive=0x000000,
                               metalness=1.0, roughness=0.127, physical=True),
    'copper': SurfaceMaterial('copper', 0xa1c7b6, emissive=0x000000, reflectivity=0.0),
    'stainless_steel': SurfaceMaterial('stainless_steel', 0xaaaaaa, emissive=0xaaaaaa,
                                        metalness=1.0, roughness=0.127, physical=True),
    'brick': SurfaceMaterial('brick', 0xcb4154),
    'concrete': SurfaceMaterial('concrete', 0x555555),
    'marble': SurfaceMaterial('marble', 0xffffff),
}
BASE_MATERIALS['metal'] = replace(BASE_MATERIALS['stainless_steel'], name='metal')

DEFAULT_MATERIAL = SurfaceMaterial('default')


def get_base_material(name: Optional[str]) -> SurfaceMaterial:
    """Look up a base material; unknown and missing names give the default."""
    if not name:
        return DEFAULT_MATERIAL
    return BASE_MATERIALS.get(name.strip().lower(), DEFAULT_MATERIAL)


def resolve_wall_material(options: OptionSet) -> SurfaceMaterial:
    """
    Wall material of a part.

    An explicit colour replaces the base colour. With neither material
    nor colour the walls are white.
    """
    building = options.building
    material = get_base_material(building.material)

    if building.colour:
        return replace(material, colour=building.colour)
    if not building.material:
        return replace(material, colour=WHITE)
    return material


def resolve_roof_material(options: OptionSet) -> SurfaceMaterial:
    """Roof material: roof:material if set, else the wall material; roof:colour wins."""
    roof = options.roof
    if roof.material:
        material = get_base_material(roof.material)
    else:
        material = resolve_wall_material(options)

    if roof.colour:
        return replace(material, colour=roof.colour)
    return material
