from __future__ import annotations

import math
from typing import Any, BinaryIO, Dict, Optional, Tuple

from PIL import ExifTags, Image, UnidentifiedImageError

from ellipsis_meta.core.errors import StreamOpenError, TagReadError
from ellipsis_meta.plugins.base import MetadataReader

EXIF_IFD = 0x8769
GPS_IFD = 0x8825
INTEROP_IFD = 0xA005

# Catalog names that Pillow spells differently.
PILLOW_ALIASES: Dict[str, str] = {
    "PixelXDimension": "ExifImageWidth",
    "PixelYDimension": "ExifImageHeight",
    "SubSecTime": "SubsecTime",
    "SubSecTimeOriginal": "SubsecTimeOriginal",
    "SubSecTimeDigitized": "SubsecTimeDigitized",
    "FlashpixVersion": "FlashPixVersion",
    "JPEGInterchangeFormat": "JpegIFOffset",
    "JPEGInterchangeFormatLength": "JpegIFByteCount",
    "InteroperabilityIndex": "InteropIndex",
}

ORIENTATION_ROTATION: Dict[int, int] = {3: 180, 4: 180, 5: 270, 6: 90, 7: 90, 8: 270}

COMMENT_PREFIXES = (b"ASCII\x00\x00\x00", b"UNICODE\x00", b"JIS\x00\x00\x00\x00\x00", b"\x00" * 8)


def _format_number(value: float) -> str:
    if value.is_integer():
        return str(int(value))
    return f"{value:g}"


def _stringify(value: Any) -> str:
    if isinstance(value, bytes):
        for prefix in COMMENT_PREFIXES:
            if value.startswith(prefix):
                value = value[len(prefix):]
                break
        return value.decode("utf-8", errors="replace").strip("\x00")
    if isinstance(value, str):
        return value.strip("\x00")
    if isinstance(value, (tuple, list)):
        return ",".join(_stringify(item) for item in value)
    if hasattr(value, "numerator") and hasattr(value, "denominator") and not isinstance(value, int):
        if not value.denominator:
            return f"{value.numerator}/{value.denominator}"
        return _format_number(value.numerator / value.denominator)
    if isinstance(value, float):
        return _format_number(value)
    return str(value)


def _to_float(value: Any) -> float:
    if hasattr(value, "numerator") and hasattr(value, "denominator"):
        if not value.denominator:
            raise ValueError("zero denominator")
        return value.numerator / value.denominator
    if isinstance(value, tuple) and len(value) == 2:
        return value[0] / value[1]
    return float(value)


def _dms_to_decimal(dms: Any, ref: Any) -> Optional[float]:
    if isinstance(ref, bytes):
        ref = ref.decode("ascii", errors="ignore")
    try:
        degrees, minutes, seconds = (_to_float(part) for part in dms)
    except (TypeError, ValueError, ZeroDivisionError):
        return None
    decimal = degrees + minutes / 60.0 + seconds / 3600.0
    if str(ref).strip().upper() in ("S", "W"):
        decimal = -decimal
    return decimal


class PillowExifReader(MetadataReader):
    name = "pillow"

    def __init__(self, values: Dict[str, Any], size: Tuple[int, int]) -> None:
        self.values = values
        self.size = size

    @classmethod
    def from_stream(cls, stream: BinaryIO) -> "PillowExifReader":
        try:
            with Image.open(stream) as img:
                exif = img.getexif()
                values: Dict[str, Any] = {}
                for key, value in exif.items():
                    values[ExifTags.TAGS.get(key, str(key))] = value
                exif_ifd = exif.get_ifd(EXIF_IFD)
                for key, value in exif_ifd.items():
                    values[ExifTags.TAGS.get(key, str(key))] = value
                # Pillow only resolves Interop through a pointer in the Exif IFD
                if INTEROP_IFD in exif_ifd:
                    for key, value in exif.get_ifd(INTEROP_IFD).items():
                        values[ExifTags.TAGS.get(key, str(key))] = value
                for key, value in exif.get_ifd(GPS_IFD).items():
                    values[ExifTags.GPSTAGS.get(key, str(key))] = value
                size = img.size
        except (UnidentifiedImageError, OSError, SyntaxError, ValueError, KeyError) as exc:
            raise StreamOpenError(f"unreadable image metadata: {exc}") from exc
        return cls(values, size)

    def _raw(self, tag: str) -> Any:
        value = self.values.get(PILLOW_ALIASES.get(tag, tag))
        if value is None and tag == "ImageWidth":
            return self.size[0]
        if value is None and tag == "ImageLength":
            return self.size[1]
        return value

    def get_attribute(self, tag: str) -> Optional[str]:
        value = self._raw(tag)
        if value is None:
            return None
        try:
            return _stringify(value)
        except (TypeError, ValueError, ZeroDivisionError) as exc:
            raise TagReadError(tag, str(exc)) from exc

    def get_attribute_int(self, tag: str, default: int) -> int:
        value = self._raw(tag)
        if isinstance(value, (tuple, list)) and value:
            value = value[0]
        if value is None:
            return default
        if isinstance(value, bytes):
            value = value.decode("ascii", errors="ignore")
        try:
            if isinstance(value, str):
                return int(value.strip())
            return int(_to_float(value))
        except (TypeError, ValueError, ZeroDivisionError):
            return default

    def get_lat_long(self) -> Optional[Tuple[float, float]]:
        lat_dms = self.values.get("GPSLatitude")
        lon_dms = self.values.get("GPSLongitude")
        lat_ref = self.values.get("GPSLatitudeRef")
        lon_ref = self.values.get("GPSLongitudeRef")
        if not (lat_dms and lon_dms and lat_ref and lon_ref):
            return None
        lat = _dms_to_decimal(lat_dms, lat_ref)
        lon = _dms_to_decimal(lon_dms, lon_ref)
        if lat is None or lon is None:
            return None
        if not (math.isfinite(lat) and math.isfinite(lon)) or abs(lat) > 90 or abs(lon) > 180:
            return None
        return lat, lon

    @property
    def rotation_degrees(self) -> int:
        return ORIENTATION_ROTATION.get(self.get_attribute_int("Orientation", 1), 0)
