"""
Local tangent-plane projection centred on a building's home point.

The home point (the middle of the building's extents) maps to (0, 0).
Points are placed on a sphere, rotated about the polar axis so the home
meridian faces the viewer, then tilted by the home latitude. The result
is an azimuthal-equidistant-like frame that is accurate at building
scale; x runs east, y runs north, both in metres.
"""

import math
from typing import Sequence, Tuple

from ..config import EARTH_RADIUS_M


def reposition_point(point: Sequence[float], home: Sequence[float]) -> Tuple[float, float]:
    """
    Rotate a lon/lat point so that ``home`` lands on (0, 0).

    Args:
        point: (longitude, latitude) in degrees
        home: (longitude, latitude) of the home point in degrees

    Returns:
        (x, y) tuple in metres
    """
    lon, lat = float(point[0]), float(point[1])
    home_lon, home_lat = float(home[0]), float(home[1])

    phi = math.radians(90 - lat)
    theta = math.radians(lon - home_lon)
    theta_prime = math.radians(home_lat)

    x = EARTH_RADIUS_M * math.sin(theta) * math.sin(phi)
    y = EARTH_RADIUS_M * math.cos(phi)
    z = EARTH_RADIUS_M * math.sin(phi) * math.cos(theta)

    planar = math.sqrt(z ** 2 + y ** 2)
    arg = _atan_ratio(y, z) - theta_prime

    return (x, math.sin(arg) * planar)


def _atan_ratio(y: float, z: float) -> float:
    """atan(y / z), taking the limit at the poles where z is 0."""
    if z == 0:
        if y == 0 or math.isnan(y):
            return math.nan
        return math.copysign(math.pi / 2, y)
    return math.atan(y / z)


class HomeProjector:
    """
    Projector for one building.

    Attributes:
        home_lon: Home point longitude in degrees
        home_lat: Home point latitude in degrees
    """

    def __init__(self, home_lon: float, home_lat: float):
        self.home_lon = home_lon
        self.home_lat = home_lat

    @property
    def home(self) -> Tuple[float, float]:
        return (self.home_lon, self.home_lat)

    def project(self, lat: float, lon: float) -> Tuple[float, float]:
        """
        Project geographic coordinates to the local frame.

        Args:
            lat: Latitude in degrees
            lon: Longitude in degrees

        Returns:
            (x, y) tuple in metres
        """
        return reposition_point((lon, lat), self.home)

    def unproject(self, x: float, y: float) -> Tuple[float, float]:
        """
        Exact inverse of ``project`` for points on the home hemisphere.

        x is the east-west component of the rotated sphere point, so the
        remaining two components share R^2 - x^2; undoing the latitude
        tilt recovers them individually.

        Returns:
            (lat, lon) tuple in degrees
        """
        radius = EARTH_RADIUS_M
        planar = math.sqrt(max(radius ** 2 - x ** 2, 0.0))
        if planar == 0:
            return (0.0, self.home_lon + math.copysign(90.0, x))

        arg = math.asin(max(-1.0, min(1.0, y / planar)))
        tilted = arg + math.radians(self.home_lat)

        sphere_y = planar * math.sin(tilted)
        sphere_z = planar * math.cos(tilted)

        lat = math.degrees(math.asin(max(-1.0, min(1.0, sphere_y / radius))))
        lon = self.home_lon + math.degrees(math.atan2(x, sphere_z))
        return (lat, lon)
