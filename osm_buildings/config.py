"""
Configuration constants for the OSM building model.

Contains the fixed parameters of the projection, option defaults and
roof geometry, plus the runtime configuration used by the document
source and the building assembler.
"""

import math
from dataclasses import dataclass, field
from typing import List, Optional


# =============================================================================
# PROJECTION
# =============================================================================

# Spherical earth radius (meters)
EARTH_RADIUS_M = 6371 * 1000

# =============================================================================
# HEIGHT AND LEVEL DEFAULTS
# =============================================================================

# Height of one building level / roof level (meters)
LEVEL_HEIGHT = 3.0

# Height of a part with no height, levels, or inherited height (meters)
DEFAULT_BUILDING_HEIGHT = 3.0

DEFAULT_ELEVATION = 0.0
DEFAULT_MIN_HEIGHT = 0.0

# =============================================================================
# ROOF DEFAULTS
# =============================================================================

DEFAULT_ROOF_SHAPE = 'flat'
DEFAULT_ROOF_ORIENTATION = 'along'

# Roof height when no rule applies (skillion, onion, gabled without
# roof:height or roof:levels)
DEFAULT_ROOF_HEIGHT = 0.0

# Onion roofs are a sphere cut off at this colatitude (radians) instead
# of a hemisphere
ONION_PHI_LENGTH = 2.53

# Dome roofs are the upper hemisphere
DOME_PHI_LENGTH = math.pi / 2

# =============================================================================
# PART SCAN
# =============================================================================

# Tolerance (meters) when testing that a building:part lies inside the
# outer footprint; OSM parts often share nodes with the outline.
PART_CONTAINMENT_TOLERANCE = 0.01

# =============================================================================
# OSM API
# =============================================================================

OSM_API_SERVERS = [
    "https://api.openstreetmap.org/api/0.6",
]

# Timeout for a single request (seconds)
DOWNLOAD_TIMEOUT = 60

# Maximum bbox area to prevent accidentally downloading too much data
# (the OSM API itself refuses more than 0.25 deg2)
MAX_BBOX_AREA_DEG2 = 0.25

USER_AGENT = 'OSMBuildings/0.1'


# =============================================================================
# RUNTIME CONFIGURATION
# =============================================================================

@dataclass
class ModelConfig:
    """
    Runtime configuration for fetching and assembling a building.

    Holds the parameters that can be adjusted per run via CLI
    arguments or programmatically.
    """

    # Document source
    api_servers: List[str] = field(default_factory=lambda: list(OSM_API_SERVERS))
    timeout: float = DOWNLOAD_TIMEOUT
    retry_count: int = 2
    user_agent: str = USER_AGENT

    # Read from a local .osm file instead of the API
    osm_path: Optional[str] = None

    # Only keep building:part elements found inside the outer footprint
    # when parts are discovered by scanning the document. False restores
    # the unscoped scan that picks up every building:part in the data.
    scope_part_scan: bool = True

    # Debug/report
    verbose: bool = False

    def __post_init__(self):
        """Validate configuration values."""
        if not self.api_servers:
            raise ValueError("api_servers must not be empty")

        if self.timeout <= 0:
            raise ValueError("timeout must be positive")

        if self.retry_count < 0:
            raise ValueError("retry_count must be non-negative")


# Default configuration instance
DEFAULT_CONFIG = ModelConfig()
