from __future__ import annotations

from typing import Any, Dict, List, Optional

import requests

from ellipsis_meta.config import ExtractorSettings
from ellipsis_meta.core.errors import GeocodingError
from ellipsis_meta.infra.logging_utils import LOGGER
from ellipsis_meta.plugins.base import Address, Geocoder

LOCALITY_KEYS = ("city", "town", "village", "municipality", "county")
ADMIN_AREA_KEYS = ("state", "province", "region")


def _first(address: Dict[str, Any], keys: tuple) -> Optional[str]:
    for key in keys:
        value = address.get(key)
        if value:
            return str(value)
    return None


class NominatimGeocoder(Geocoder):
    """Reverse geocoder backed by the OpenStreetMap Nominatim ``/reverse`` endpoint.

    Nominatim returns a single best match, so ``max_results`` only caps the list at one entry.
    Transport and HTTP failures raise GeocodingError; an unknown location yields an empty list.
    """

    name = "nominatim"

    def __init__(self, settings: Optional[ExtractorSettings] = None, session: Optional[requests.Session] = None) -> None:
        self.settings = settings or ExtractorSettings()
        self.session = session

    def _get(self, url: str, **kwargs: Any) -> requests.Response:
        if self.session is not None:
            return self.session.get(url, **kwargs)
        return requests.get(url, **kwargs)

    def reverse_geocode(self, lat: float, lon: float, max_results: int) -> List[Address]:
        if max_results < 1:
            return []
        params = {
            "lat": f"{lat:.6f}",
            "lon": f"{lon:.6f}",
            "format": "jsonv2",
            "addressdetails": 1,
            "zoom": 14,
            "accept-language": self.settings.geocoder_language,
        }
        headers = {"User-Agent": self.settings.geocoder_user_agent}
        try:
            response = self._get(
                self.settings.geocoder_base_url, params=params, headers=headers, timeout=self.settings.geocoder_timeout
            )
            response.raise_for_status()
            data = response.json()
        except (requests.RequestException, ValueError) as exc:
            raise GeocodingError(f"reverse geocoding failed: {exc}") from exc
        if not isinstance(data, dict) or "error" in data:
            LOGGER.debug("No address for coordinates", extra={"extra_data": {"geocoder": self.name}})
            return []
        address = data.get("address") or {}
        result = Address(
            locality=_first(address, LOCALITY_KEYS),
            admin_area=_first(address, ADMIN_AREA_KEYS),
            country_name=_first(address, ("country",)),
        )
        return [result]
