"""
OSM document sources.

OSMApiClient downloads building data from the OpenStreetMap API v0.6:
the full entity (way or relation with all members and nodes) and the
map data inside a bounding box. FileDocumentSource serves the same
calls from a saved .osm file.

Both return raw OSM XML text; parsing is left to OSMDocument.
"""

import time
import urllib.error
import urllib.request
import logging
from typing import List, Optional, Tuple

from ..config import DEFAULT_CONFIG, MAX_BBOX_AREA_DEG2, ModelConfig
from ..exceptions import OSMApiError

logger = logging.getLogger(__name__)

# HTTP statuses that will not change on retry
PERMANENT_HTTP_ERRORS = (400, 404, 410)


def validate_bbox(
    left: float,
    bottom: float,
    right: float,
    top: float
) -> Tuple[bool, str]:
    """
    Validate bounding box coordinates.

    Returns:
        Tuple of (is_valid, error_message)
    """
    # Check coordinate ranges
    if not (-90 <= bottom <= 90 and -90 <= top <= 90):
        return False, "Latitude must be between -90 and 90"

    if not (-180 <= left <= 180 and -180 <= right <= 180):
        return False, "Longitude must be between -180 and 180"

    # Check ordering (a degenerate box is allowed)
    if bottom > top:
        return False, "bottom must not be greater than top"

    if left > right:
        return False, "left must not be greater than right"

    # Check area (the API refuses huge regions)
    area = (top - bottom) * (right - left)
    if area > MAX_BBOX_AREA_DEG2:
        return False, f"Bounding box too large ({area:.4f} deg²). Maximum: {MAX_BBOX_AREA_DEG2} deg²"

    return True, ""


class OSMApiClient:
    """
    Client for the OSM API v0.6.

    Requests rotate through the configured servers on retry.
    """

    def __init__(self, config: Optional[ModelConfig] = None):
        self.config = config or DEFAULT_CONFIG

    def get_way_data(self, way_id: int) -> str:
        """Fetch a way with all of its nodes."""
        return self._fetch(f"/way/{way_id}/full")

    def get_relation_data(self, relation_id: int) -> str:
        """Fetch a relation with all of its members and their nodes."""
        return self._fetch(f"/relation/{relation_id}/full")

    def get_inner_data(self, left: float, bottom: float, right: float, top: float) -> str:
        """
        Fetch everything inside a bounding box.

        Raises:
            OSMApiError: if the bbox is invalid or the download fails
        """
        is_valid, error = validate_bbox(left, bottom, right, top)
        if not is_valid:
            raise OSMApiError(error)
        return self._fetch(f"/map?bbox={left},{bottom},{right},{top}")

    def _fetch(self, path: str) -> str:
        """
        GET a path from the API, retrying on transient failures.

        Raises:
            OSMApiError: after the last attempt failed or on a permanent error
        """
        servers: List[str] = self.config.api_servers
        last_error = ""

        for attempt in range(self.config.retry_count + 1):
            # Rotate through servers on retry
            server = servers[attempt % len(servers)]
            url = server.rstrip('/') + path

            try:
                logger.info(f"Downloading {url} (attempt {attempt + 1})")
                request = urllib.request.Request(
                    url,
                    headers={'User-Agent': self.config.user_agent},
                )
                with urllib.request.urlopen(request, timeout=self.config.timeout) as response:
                    content = response.read()
                logger.info(f"Downloaded {len(content)} bytes")
                return content.decode('utf-8')

            except urllib.error.HTTPError as e:
                last_error = f"HTTP error {e.code}: {e.reason}"
                logger.warning(f"Download failed: {last_error}")
                if e.code in PERMANENT_HTTP_ERRORS:
                    raise OSMApiError(f"{url}: {last_error}") from e

                # Rate limit - wait before retry
                time.sleep(5 if e.code == 429 else 1)

            except urllib.error.URLError as e:
                last_error = f"URL error: {e.reason}"
                logger.warning(f"Download failed: {last_error}")
                time.sleep(1)

            except TimeoutError:
                last_error = "Download timed out"
                logger.warning(f"Download failed: {last_error}")
                time.sleep(1)

        raise OSMApiError(f"{path}: {last_error}")


class FileDocumentSource:
    """
    Document source backed by a local .osm file.

    Every call returns the whole file; the building assembler finds what
    it needs in it, so the file must contain the building's members and
    surroundings.
    """

    def __init__(self, path: str):
        self.path = path
        self._text: Optional[str] = None

    def _read(self) -> str:
        if self._text is None:
            logger.info(f"Reading OSM file: {self.path}")
            try:
                with open(self.path, 'r', encoding='utf-8') as f:
                    self._text = f.read()
            except OSError as e:
                raise OSMApiError(f"Cannot read {self.path}: {e}") from e
        return self._text

    def get_way_data(self, way_id: int) -> str:
        return self._read()

    def get_relation_data(self, relation_id: int) -> str:
        return self._read()

    def get_inner_data(self, left: float, bottom: float, right: float, top: float) -> str:
        return self._read()


def create_document_source(config: Optional[ModelConfig] = None):
    """Pick the file source when an .osm path is configured, else the API."""
    config = config or DEFAULT_CONFIG
    if config.osm_path:
        return FileDocumentSource(config.osm_path)
    return OSMApiClient(config)
