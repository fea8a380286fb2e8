"""
Address lookups for the ride-sharing board, passed through to Nominatim.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Protocol

import requests

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT = 10  # seconds


class GeocodingError(Exception):
    """Raised when the upstream geocoding service cannot be reached or answers badly."""


class Geocoder(Protocol):
    def geocode(self, address: str) -> Optional[tuple[float, float]]:
        ...

    def reverse(self, lat: float, lon: float) -> Optional[str]:
        ...


@dataclass
class NominatimGeocoder:
    base_url: str
    country_codes: str = "co"
    user_agent: str = "florte-backend/0.1"

    def _get(self, endpoint: str, params: dict):
        url = f"{self.base_url.rstrip('/')}/{endpoint}"
        try:
            response = requests.get(
                url,
                params=params,
                headers={"User-Agent": self.user_agent},
                timeout=REQUEST_TIMEOUT,
            )
            response.raise_for_status()
            return response.json()
        except (requests.RequestException, ValueError) as e:
            logger.error("Geocoding request to %s failed: %s", endpoint, e)
            raise GeocodingError(str(e)) from e

    def geocode(self, address: str) -> Optional[tuple[float, float]]:
        """Returns (lat, lon) for the best match of `address`, or None."""
        data = self._get(
            "search",
            {
                "format": "json",
                "q": address,
                "limit": 1,
                "countrycodes": self.country_codes,
            },
        )
        if not data:
            return None
        return float(data[0]["lat"]), float(data[0]["lon"])

    def reverse(self, lat: float, lon: float) -> Optional[str]:
        data = self._get("reverse", {"format": "json", "lat": lat, "lon": lon})
        if not data:
            return None
        return data.get("display_name")
