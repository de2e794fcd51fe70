"""
Building and roof options with three-tier resolution.

Every field of an OptionSet is resolved independently:

1. specified: read from the element's own OSM tags
2. inherited: taken from the parent outer element's resolved options
3. computed default: a field-specific rule

The first tier that yields a value wins. Height-like fields derive a
specified value from the element's own level counts when no explicit
length is tagged, so a part that says ``building:levels=20`` is not
flattened to its parent's height.
"""

from dataclasses import asdict, dataclass, field, fields
from typing import Any, Callable, Dict, Optional, Tuple

from ..config import (
    LEVEL_HEIGHT,
    DEFAULT_BUILDING_HEIGHT,
    DEFAULT_ELEVATION,
    DEFAULT_MIN_HEIGHT,
    DEFAULT_ROOF_HEIGHT,
    DEFAULT_ROOF_ORIENTATION,
    DEFAULT_ROOF_SHAPE,
)
from ..utils.units import normalize_length, parse_direction, parse_number
from .enums import RoofShape


@dataclass(frozen=True)
class BuildingOptions:
    """Wall-level attributes of a building part."""
    colour: Optional[str] = None
    elevation: Optional[float] = None
    height: Optional[float] = None
    levels: Optional[float] = None
    levels_underground: Optional[float] = None
    material: Optional[str] = None
    min_height: Optional[float] = None
    min_level: Optional[float] = None
    walls: Optional[str] = None


@dataclass(frozen=True)
class RoofOptions:
    """Roof attributes of a building part."""
    angle: Optional[float] = None
    colour: Optional[str] = None
    direction: Optional[float] = None
    height: Optional[float] = None
    levels: Optional[float] = None
    material: Optional[str] = None
    orientation: Optional[str] = None
    shape: Optional[str] = None


@dataclass(frozen=True)
class OptionSet:
    """Resolved (or partially specified) options of one building part."""
    building: BuildingOptions = field(default_factory=BuildingOptions)
    roof: RoofOptions = field(default_factory=RoofOptions)

    def to_dict(self) -> Dict[str, Dict[str, Any]]:
        return {'building': asdict(self.building), 'roof': asdict(self.roof)}


BLANK_OPTIONS = OptionSet()


# =============================================================================
# TAG READING
# =============================================================================

def _normalize_shape(value: str, key: str) -> str:
    return value.strip().lower()


# field -> (tag keys, first present wins; value parser)
BUILDING_TAGS: Dict[str, Tuple[Tuple[str, ...], Optional[Callable]]] = {
    'colour': (('colour', 'building:colour', 'building:facade:colour'), None),
    'elevation': (('ele',), normalize_length),
    'height': (('height',), normalize_length),
    'levels': (('building:levels',), parse_number),
    'levels_underground': (('building:levels:underground',), parse_number),
    'material': (('building:facade:material', 'building:material'), None),
    'min_height': (('min_height',), normalize_length),
    'min_level': (('building:min_level',), parse_number),
    'walls': (('walls',), None),
}

ROOF_TAGS: Dict[str, Tuple[Tuple[str, ...], Optional[Callable]]] = {
    'angle': (('roof:angle',), parse_number),
    'colour': (('roof:colour',), None),
    'direction': (('roof:direction',), parse_direction),
    'height': (('roof:height',), normalize_length),
    'levels': (('roof:levels',), parse_number),
    'material': (('roof:material',), None),
    'orientation': (('roof:orientation',), None),
    'shape': (('roof:shape',), _normalize_shape),
}


def _read_group(tags: Dict[str, str], fields) -> Dict[str, Any]:
    values = {}
    for name, (keys, parser) in fields.items():
        values[name] = None
        for key in keys:
            if key in tags:
                raw = tags[key]
                values[name] = parser(raw, key) if parser else raw
                break
    return values


def read_specified_options(tags: Dict[str, str]) -> OptionSet:
    """
    Read the specified tier from an element's tags.

    Raises:
        MalformedValueError: if a numeric or length tag cannot be parsed
    """
    return OptionSet(
        building=BuildingOptions(**_read_group(tags, BUILDING_TAGS)),
        roof=RoofOptions(**_read_group(tags, ROOF_TAGS)),
    )


# =============================================================================
# RESOLUTION
# =============================================================================

@dataclass
class ResolutionContext:
    """What the computed defaults may look at besides the options."""
    tags: Dict[str, str]
    radius: Callable[[], float]


def first_present(*tiers, default: Callable[[], Any] = lambda: None) -> Any:
    """
    Return the first tier value that is not None, else ``default()``.

    The default is only evaluated when every tier is absent.
    """
    for value in tiers:
        if value is not None:
            return value
    return default()


def _roof_shape(roof: Dict[str, Any]) -> Optional[RoofShape]:
    return RoofShape.from_osm_tag(roof['shape'])


# Ordered roof height rules, first match wins
ROOF_HEIGHT_RULES = [
    ('roof levels', lambda roof, ctx: roof['levels'] is not None,
     lambda roof, ctx: roof['levels'] * LEVEL_HEIGHT),
    ('flat roof', lambda roof, ctx: _roof_shape(roof) == RoofShape.FLAT,
     lambda roof, ctx: 0.0),
    ('round roof', lambda roof, ctx: _roof_shape(roof) in (RoofShape.DOME, RoofShape.PYRAMIDAL),
     lambda roof, ctx: ctx.radius()),
]

ROOF_DEFAULTS: Dict[str, Callable[[Dict[str, Any], ResolutionContext], Any]] = {
    'orientation': lambda roof, ctx: DEFAULT_ROOF_ORIENTATION,
    'shape': lambda roof, ctx: DEFAULT_ROOF_SHAPE,
}

# height and min_height are resolved separately, they need the level rules
BUILDING_DEFAULTS: Dict[str, Callable[[Dict[str, Any], RoofOptions, ResolutionContext], Any]] = {
    'elevation': lambda building, roof, ctx: DEFAULT_ELEVATION,
}


def default_roof_height(roof: Dict[str, Any], ctx: ResolutionContext) -> float:
    for _, matches, compute in ROOF_HEIGHT_RULES:
        if matches(roof, ctx):
            return compute(roof, ctx)
    return DEFAULT_ROOF_HEIGHT


def default_building_height(roof: RoofOptions, ctx: ResolutionContext) -> float:
    if ctx.tags.get('building:part') == 'roof':
        # A roof-only part has no walls
        return roof.height
    return DEFAULT_BUILDING_HEIGHT


def resolve_options(
    specified: OptionSet,
    inherited: OptionSet,
    ctx: ResolutionContext
) -> OptionSet:
    """
    Resolve every field through specified, inherited and default tiers.

    Roof fields are resolved first (shape before height) because the
    building height default and the level-derived height need the
    resolved roof height.

    Args:
        specified: Options read from the element's own tags
        inherited: Resolved options of the parent outer element
        ctx: Tags and footprint radius for computed defaults

    Returns:
        Fully resolved OptionSet
    """
    roof: Dict[str, Any] = {}
    roof_names = [f.name for f in fields(RoofOptions) if f.name != 'height'] + ['height']
    for name in roof_names:
        if name == 'height':
            default = lambda: default_roof_height(roof, ctx)
        elif name in ROOF_DEFAULTS:
            default = lambda name=name: ROOF_DEFAULTS[name](roof, ctx)
        else:
            default = lambda: None
        roof[name] = first_present(
            getattr(specified.roof, name),
            getattr(inherited.roof, name),
            default=default,
        )
    roof_options = RoofOptions(**roof)

    building: Dict[str, Any] = {}
    for f in fields(BuildingOptions):
        name = f.name
        own = getattr(specified.building, name)
        if name == 'height':
            own = first_present(own, default=lambda: _levels_to_height(
                specified.building.levels, roof_options.height))
            default = lambda: default_building_height(roof_options, ctx)
        elif name == 'min_height':
            own = first_present(own, default=lambda: _levels_to_height(
                specified.building.min_level, 0.0))
            default = lambda: DEFAULT_MIN_HEIGHT
        elif name in BUILDING_DEFAULTS:
            default = lambda name=name: BUILDING_DEFAULTS[name](building, roof_options, ctx)
        else:
            default = lambda: None
        building[name] = first_present(own, getattr(inherited.building, name), default=default)

    return OptionSet(building=BuildingOptions(**building), roof=roof_options)


def _levels_to_height(levels: Optional[float], extra: Optional[float]) -> Optional[float]:
    if levels is None:
        return None
    return levels * LEVEL_HEIGHT + (extra or 0.0)
