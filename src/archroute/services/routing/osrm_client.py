"""HTTP client for the OSRM route service."""

from __future__ import annotations

import logging
import time
from typing import Sequence

import httpx

from ...config import settings

# OSRM profile names per transport mode. OSRM has no transit profile, so
# public transport routes are walked.
TRANSPORT_PROFILES = {
    "walking": "foot",
    "cycling": "bike",
    "driving": "driving",
    "public_transport": "foot",
}

logger = logging.getLogger(__name__)


class OSRMClient:
    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
        backoff_seconds: float | None = None,
    ) -> None:
        self.base_url = (base_url or settings.osrm_base_url or "").rstrip("/")
        if not self.base_url:
            raise ValueError("OSRM base URL is not configured.")
        self.timeout = timeout if timeout is not None else settings.osrm_timeout_seconds
        self.max_retries = max_retries if max_retries is not None else settings.osrm_max_retries
        self.backoff_seconds = backoff_seconds if backoff_seconds is not None else settings.osrm_backoff_seconds

    def _get_client(self) -> httpx.Client:
        return httpx.Client(timeout=httpx.Timeout(self.timeout, connect=10.0))

    def route(self, coordinates: Sequence[tuple[float, float]], transport_mode: str = "walking") -> dict:
        """Get the street-following route through ``coordinates`` in order.

        Args:
            coordinates: Sequence of (lat, lon) tuples for the route waypoints
            transport_mode: One of the keys of ``TRANSPORT_PROFILES``

        Returns:
            The decoded OSRM JSON response; ``routes[0]`` carries ``geometry``
            (encoded polyline), ``distance`` (meters) and ``duration`` (seconds).
        """
        if len(coordinates) < 2:
            raise ValueError("At least two coordinates are required for OSRM route.")
        profile = TRANSPORT_PROFILES.get(transport_mode)
        if profile is None:
            raise ValueError(f"Unsupported transport mode '{transport_mode}'.")

        # OSRM expects "lon,lat;lon,lat;..."
        coordinate_str = ";".join(f"{lon},{lat}" for lat, lon in coordinates)
        params = {
            "overview": "full",
            "geometries": "polyline",
            "steps": "false",
        }
        url = f"{self.base_url}/route/v1/{profile}/{coordinate_str}"

        client = self._get_client()
        try:
            attempt = 0
            while True:
                try:
                    response = client.get(url, params=params)
                    response.raise_for_status()
                    data = response.json()
                    if data.get("code") != "Ok" or not data.get("routes"):
                        error_msg = data.get("message", "Unknown OSRM route error")
                        raise ValueError(f"OSRM route request failed: {error_msg}")
                    return data
                except (httpx.TimeoutException, httpx.NetworkError) as e:
                    attempt += 1
                    if attempt > self.max_retries:
                        raise ConnectionError(
                            f"Failed to reach OSRM service at {self.base_url}: {e}"
                        ) from e
                    wait_time = self.backoff_seconds * (2 ** (attempt - 1))
                    logger.debug(f"OSRM route error, retrying in {wait_time:.1f}s (attempt {attempt}/{self.max_retries}): {e}")
                    time.sleep(wait_time)
                except httpx.HTTPStatusError as e:
                    attempt += 1
                    if attempt > self.max_retries:
                        raise
                    time.sleep(self.backoff_seconds * attempt)
        finally:
            client.close()


def decode_polyline(polyline: str, precision: int = 5) -> list[tuple[float, float]]:
    """Decode a Google encoded polyline into (lat, lon) tuples."""
    coordinates = []
    factor = 10 ** precision
    index = 0
    lat = 0
    lon = 0

    while index < len(polyline):
        deltas = []
        for _ in range(2):
            shift = 0
            result = 0
            while True:
                b = ord(polyline[index]) - 63
                index += 1
                result |= (b & 0x1F) << shift
                shift += 5
                if b < 0x20:
                    break
            deltas.append(~(result >> 1) if (result & 1) else (result >> 1))
        lat += deltas[0]
        lon += deltas[1]
        coordinates.append((lat / factor, lon / factor))

    return coordinates


def check_health(base_url: str | None = None) -> bool:
    """Check OSRM reachability with a minimal two-point route request."""
    base = base_url or settings.osrm_base_url
    if not base:
        return False
    try:
        test_coords = "13.388860,52.517037;13.397634,52.529407"
        url = f"{base.rstrip('/')}/route/v1/foot/{test_coords}"
        response = httpx.get(url, params={"overview": "false"}, timeout=5.0)
        response.raise_for_status()
        return response.json().get("code") == "Ok"
    except (httpx.HTTPError, ValueError):
        return False
