"""
Exceptions raised by the OSM building model.
"""


class OSMBuildingError(Exception):
    """Base class for all building model errors."""
    pass


class InvalidBuildingError(OSMBuildingError):
    """
    Raised when the building data is structurally invalid.

    Unclosed or empty ways, a missing building tag, or a relation whose
    outline cannot be resolved abort the whole building.
    """
    pass


class MalformedValueError(OSMBuildingError, ValueError):
    """Raised when a numeric or length tag value cannot be parsed."""

    def __init__(self, key: str, value: str):
        super().__init__(f"Malformed value for '{key}': {value!r}")
        self.key = key
        self.value = value


class UnsupportedRoofShapeError(OSMBuildingError):
    """Raised when no roof geometry exists for a roof:shape value."""

    def __init__(self, shape: str):
        super().__init__(f"Roof shape '{shape}' is not supported")
        self.shape = shape


class OSMApiError(OSMBuildingError):
    """Raised when OSM data cannot be fetched."""
    pass
