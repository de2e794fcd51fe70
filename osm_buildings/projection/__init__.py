"""
Projection module for the OSM building model.

Provides a pluggable projection interface and the home-point projector
used to turn OSM lon/lat into a building's local metre frame.
"""

from abc import ABC, abstractmethod
from typing import Sequence, Tuple

from .home_projector import HomeProjector, reposition_point


class IProjector(ABC):
    """
    Abstract interface for coordinate projection.

    Implementations convert between WGS84 lat/lon and a local
    planar coordinate system.
    """

    @abstractmethod
    def project(self, lat: float, lon: float) -> Tuple[float, float]:
        """
        Project geographic coordinates to local coordinates.

        Args:
            lat: Latitude in degrees (WGS84)
            lon: Longitude in degrees (WGS84)

        Returns:
            (x, y) tuple in local metres
        """
        pass

    @abstractmethod
    def unproject(self, x: float, y: float) -> Tuple[float, float]:
        """
        Convert local coordinates back to geographic.

        Returns:
            (lat, lon) tuple in degrees (WGS84)
        """
        pass


IProjector.register(HomeProjector)


def create_projector(home: Sequence[float]) -> IProjector:
    """
    Factory function to create the default projector.

    Args:
        home: (longitude, latitude) of the home point

    Returns:
        IProjector implementation
    """
    return HomeProjector(home_lon=home[0], home_lat=home[1])


__all__ = [
    'IProjector',
    'HomeProjector',
    'create_projector',
    'reposition_point',
]
