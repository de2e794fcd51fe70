"""
Parsing of OSM numeric tag values.

Lengths (height, min_height, roof:height, ele) accept plain numbers,
metre suffixes and feet/inches; counts and angles accept plain numbers;
roof:direction additionally accepts compass points. Anything else raises
MalformedValueError instead of turning into NaN further down the line.
"""

from typing import Optional, Union
import math
import re

from ..exceptions import MalformedValueError

FEET_TO_METERS = 0.3048
INCHES_TO_METERS = 0.0254

_NUMBER = r'[-+]?(?:\d+(?:\.\d*)?|\.\d+)'

_METRIC_RE = re.compile(rf'^({_NUMBER})\s*(m|km|cm|mm)?$')
_FEET_SUFFIX_RE = re.compile(rf'^({_NUMBER})\s*ft$')
_FEET_INCHES_RE = re.compile(rf"^({_NUMBER})\s*'\s*(?:({_NUMBER})\s*\")?$")
_INCHES_RE = re.compile(rf'^({_NUMBER})\s*"$')

_METRIC_FACTORS = {
    None: 1.0,
    'm': 1.0,
    'km': 1000.0,
    'cm': 0.01,
    'mm': 0.001,
}

COMPASS_POINTS = {
    'N': 0.0, 'NNE': 22.5, 'NE': 45.0, 'ENE': 67.5,
    'E': 90.0, 'ESE': 112.5, 'SE': 135.0, 'SSE': 157.5,
    'S': 180.0, 'SSW': 202.5, 'SW': 225.0, 'WSW': 247.5,
    'W': 270.0, 'WNW': 292.5, 'NW': 315.0, 'NNW': 337.5,
}


def normalize_length(value: Optional[str], key: str = 'length') -> Optional[float]:
    """
    Convert an OSM length value to meters.

    Examples: '12', '12.5 m', '0.1km', '40 ft', "10'6\"", '6"'.

    Args:
        value: Raw tag value (None if the tag is absent)
        key: Tag key, used in the error message

    Returns:
        Length in meters, or None if value is None

    Raises:
        MalformedValueError: if the value is not a recognised length
    """
    if value is None:
        return None

    length = _parse_length(value.strip())
    if length is None or not math.isfinite(length):
        raise MalformedValueError(key, value)
    return length


def _parse_length(text: str) -> Optional[float]:
    match = _METRIC_RE.match(text)
    if match:
        return float(match.group(1)) * _METRIC_FACTORS[match.group(2)]

    match = _FEET_SUFFIX_RE.match(text)
    if match:
        return float(match.group(1)) * FEET_TO_METERS

    match = _FEET_INCHES_RE.match(text)
    if match:
        feet = float(match.group(1))
        inches = float(match.group(2)) if match.group(2) else 0.0
        return (feet + inches / 12) * FEET_TO_METERS

    match = _INCHES_RE.match(text)
    if match:
        return float(match.group(1)) * INCHES_TO_METERS

    return None


def parse_number(value: Optional[str], key: str = 'number') -> Optional[Union[int, float]]:
    """
    Parse a plain number tag (levels, roof:angle).

    Integral strings stay ints so that levels read back as written.
    """
    if value is None:
        return None

    text = value.strip()
    try:
        number = int(text)
    except ValueError:
        try:
            number = float(text)
        except ValueError:
            raise MalformedValueError(key, value) from None

    # nan, inf and ints too large for a float
    try:
        finite = math.isfinite(number)
    except OverflowError:
        finite = False
    if not finite:
        raise MalformedValueError(key, value)
    return number


def parse_direction(value: Optional[str], key: str = 'roof:direction') -> Optional[float]:
    """
    Parse a direction in degrees clockwise from north.

    Accepts numbers and the 16 compass points.

    Returns:
        Direction in [0, 360), or None if value is None
    """
    if value is None:
        return None

    text = value.strip().upper()
    if text in COMPASS_POINTS:
        return COMPASS_POINTS[text]

    return normalize_angle(float(parse_number(value, key)))


def normalize_angle(angle: float) -> float:
    """
    Normalize angle to [0, 360) degrees.

    Args:
        angle: Angle in degrees

    Returns:
        Normalized angle in [0, 360)
    """
    return angle % 360
