from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from ellipsis_meta.core.models import ExtractionRecord, ExtractionStats, RawExtraction
from ellipsis_meta.core.privacy import PrivacyLevel
from ellipsis_meta.infra.logging_utils import LOGGER
from ellipsis_meta.plugins.base import Address, Geocoder, MetadataReader

UNKNOWN_REGION = "알 수 없는 지역"
UNKNOWN_LOCATION = "알 수 없는 위치"
LOCATION_UNAVAILABLE = "위치 정보를 가져올 수 없음"

LATITUDE = "computed_latitude"
LONGITUDE = "computed_longitude"
ADDRESS = "computed_address"
ADDRESS_ERROR = "computed_address_error"
ROTATION = "computed_rotation_degrees"
IMAGE_WIDTH = "computed_image_width"
IMAGE_HEIGHT = "computed_image_height"
ASPECT_RATIO = "computed_aspect_ratio"
MEGAPIXELS = "computed_megapixels"


def truncate_coordinate(value: float, places: int = 3) -> float:
    factor = 10 ** places
    return int(value * factor) / factor


def resolve_coordinates(reader: MetadataReader, level: PrivacyLevel) -> Optional[Tuple[float, float]]:
    if level is PrivacyLevel.STRICT:
        return None
    try:
        lat_long = reader.get_lat_long()
    except Exception as exc:
        LOGGER.debug("GPS read failed", extra={"extra_data": {"error": str(exc)}})
        return None
    if lat_long is None:
        return None
    lat, lon = lat_long
    if level is PrivacyLevel.BASIC:
        # roughly 100 m
        return truncate_coordinate(lat), truncate_coordinate(lon)
    return lat, lon


def describe_address(address: Address, level: PrivacyLevel) -> str:
    # BASIC deliberately skips locality for coarser granularity
    if level is PrivacyLevel.BASIC:
        return address.admin_area or address.country_name or UNKNOWN_REGION
    return address.locality or address.admin_area or address.country_name or UNKNOWN_LOCATION


def geocode(geocoder: Geocoder, lat: float, lon: float, level: PrivacyLevel) -> Dict[str, str]:
    try:
        addresses: List[Address] = geocoder.reverse_geocode(lat, lon, 1)
    except Exception as exc:
        LOGGER.warning(
            "Reverse geocoding failed",
            extra={"extra_data": {"geocoder": getattr(geocoder, "name", type(geocoder).__name__), "error": str(exc)}},
        )
        return {ADDRESS_ERROR: str(exc) or type(exc).__name__}
    if not addresses:
        return {ADDRESS_ERROR: "no address found"}
    return {ADDRESS: describe_address(addresses[0], level)}


def geometry(reader: MetadataReader) -> Dict[str, Any]:
    width = reader.get_attribute_int("ImageWidth", 0)
    height = reader.get_attribute_int("ImageLength", 0)
    if width <= 0 or height <= 0:
        return {}
    return {
        IMAGE_WIDTH: width,
        IMAGE_HEIGHT: height,
        ASPECT_RATIO: round(width / height, 3),
        MEGAPIXELS: round(width * height / 1_000_000, 2),
    }


def _rotation(reader: MetadataReader) -> int:
    try:
        return reader.rotation_degrees
    except Exception as exc:
        LOGGER.debug("Rotation read failed", extra={"extra_data": {"error": str(exc)}})
        return 0


def augment(
    raw: RawExtraction,
    reader: MetadataReader,
    geocoder: Geocoder,
    level: PrivacyLevel,
    started_at: float,
    total_tags: int,
    filtered_tags: int,
) -> ExtractionRecord:
    computed: Dict[str, Any] = {}
    coordinates = resolve_coordinates(reader, level)
    if coordinates is not None:
        lat, lon = coordinates
        computed[LATITUDE] = lat
        computed[LONGITUDE] = lon
        computed.update(geocode(geocoder, lat, lon, level))
    rotation = _rotation(reader)
    if rotation:
        computed[ROTATION] = rotation
    computed.update(geometry(reader))
    stats = ExtractionStats.build(
        total_tags=total_tags,
        filtered_tags=filtered_tags,
        extracted=raw.extracted_count,
        total_size=raw.total_size,
        level=level,
        started_at=started_at,
    )
    return ExtractionRecord(raw_values=raw.values, computed=computed, stats=stats)


def location_name(record: ExtractionRecord) -> str:
    if ADDRESS in record.computed:
        return record.computed[ADDRESS]
    if ADDRESS_ERROR in record.computed:
        return LOCATION_UNAVAILABLE
    return ""
