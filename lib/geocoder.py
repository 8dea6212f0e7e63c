# =============================================================================
# lib/geocoder.py - Geocoding Client
# =============================================================================
# Resolves a free-form address or postal code to coordinates using the
# MapQuest geocoding HTTP API.
#
# Usage:
#   geocoder = MapQuestGeocoder(api_key="...")
#   loc = geocoder.geocode("02118")
#   loc.longitude, loc.latitude
# =============================================================================

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Protocol

import httpx

from app.exceptions import GeocodingError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GeoLocation:
    """A single geocoding result."""

    latitude: float
    longitude: float
    formatted_address: str = ""
    street: str = ""
    city: str = ""
    state: str = ""
    zipcode: str = ""
    country: str = ""

    def to_geojson(self) -> dict[str, Any]:
        """
        Render as the `location` sub-document stored on a bootcamp.

        GeoJSON points are [longitude, latitude].
        """
        return {
            "type": "Point",
            "coordinates": [self.longitude, self.latitude],
            "formattedAddress": self.formatted_address,
            "street": self.street,
            "city": self.city,
            "state": self.state,
            "zipcode": self.zipcode,
            "country": self.country,
        }


class Geocoder(Protocol):
    """Anything that can turn a query string into a GeoLocation."""

    def geocode(self, query: str) -> GeoLocation: ...


class MapQuestGeocoder:
    """
    Geocoder backed by the MapQuest address endpoint.

    Each call is a single blocking HTTP request; route handlers are sync and
    run in the threadpool.
    """

    def __init__(
        self,
        api_key: str,
        url: str = "https://www.mapquestapi.com/geocoding/v1/address",
        timeout: float = 10.0,
    ):
        self.api_key = api_key
        self.url = url
        self.timeout = timeout

    def geocode(self, query: str) -> GeoLocation:
        """
        Geocode an address or postal code.

        Raises:
            GeocodingError: If the request fails or nothing matches
        """
        try:
            response = httpx.get(
                self.url,
                params={"key": self.api_key, "location": query, "maxResults": 1},
                timeout=self.timeout,
            )
            response.raise_for_status()
            body = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"Geocoding request failed for '{query}': {e}")
            raise GeocodingError(query, str(e))

        location = self._first_location(body)
        if location is None:
            raise GeocodingError(query, "No results")

        logger.debug(f"Geocoded '{query}' -> {location.latitude}, {location.longitude}")
        return location

    @staticmethod
    def _first_location(body: dict[str, Any]) -> GeoLocation | None:
        """Pull the first usable location out of a MapQuest response."""
        status = body.get("info", {}).get("statuscode", 0)
        if status != 0:
            return None

        for result in body.get("results", []):
            for loc in result.get("locations", []):
                lat_lng = loc.get("latLng") or loc.get("displayLatLng")
                if not lat_lng:
                    continue

                street = loc.get("street", "")
                city = loc.get("adminArea5", "")
                state = loc.get("adminArea3", "")
                zipcode = loc.get("postalCode", "")
                country = loc.get("adminArea1", "")
                formatted = ", ".join(
                    part for part in (street, city, f"{state} {zipcode}".strip(), country) if part
                )
                return GeoLocation(
                    latitude=float(lat_lng["lat"]),
                    longitude=float(lat_lng["lng"]),
                    formatted_address=formatted,
                    street=street,
                    city=city,
                    state=state,
                    zipcode=zipcode,
                    country=country,
                )
        return None
