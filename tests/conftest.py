from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

import pytest

from ellipsis_meta.core.errors import GeocodingError, TagReadError
from ellipsis_meta.plugins.base import Address, Geocoder, MetadataReader


class FakeReader(MetadataReader):
    name = "fake"

    def __init__(
        self,
        values: Optional[Dict[str, str]] = None,
        lat_long: Optional[Tuple[float, float]] = None,
        rotation: int = 0,
        failing: Iterable[str] = (),
    ) -> None:
        self.values = values or {}
        self.lat_long = lat_long
        self.rotation = rotation
        self.failing = set(failing)

    def get_attribute(self, tag: str) -> Optional[str]:
        if tag in self.failing:
            raise TagReadError(tag, "unsupported")
        return self.values.get(tag)

    def get_lat_long(self) -> Optional[Tuple[float, float]]:
        return self.lat_long

    def get_attribute_int(self, tag: str, default: int) -> int:
        try:
            return int(self.values[tag])
        except (KeyError, ValueError):
            return default

    @property
    def rotation_degrees(self) -> int:
        return self.rotation


class FakeGeocoder(Geocoder):
    name = "fake"

    def __init__(self, addresses: Optional[List[Address]] = None) -> None:
        self.addresses = addresses or []
        self.calls: List[Tuple[float, float, int]] = []

    def reverse_geocode(self, lat: float, lon: float, max_results: int) -> List[Address]:
        self.calls.append((lat, lon, max_results))
        return self.addresses[:max_results]


class RaisingGeocoder(Geocoder):
    name = "raising"

    def reverse_geocode(self, lat: float, lon: float, max_results: int) -> List[Address]:
        raise GeocodingError("service unavailable")


SEOUL = Address(locality="중구", admin_area="서울특별시", country_name="대한민국")


@pytest.fixture
def seoul_geocoder() -> FakeGeocoder:
    return FakeGeocoder([SEOUL])


@pytest.fixture
def make_jpeg(tmp_path: Path):
    pytest.importorskip("PIL")
    from PIL import Image
    from PIL.TiffImagePlugin import IFDRational

    def _make(
        name: str = "photo.jpg", with_gps: bool = True, orientation: int = 1, size=(40, 30), interop: bool = False
    ) -> Path:
        exif = Image.Exif()
        exif[0x010F] = "Canon"
        exif[0x0110] = "Canon EOS R6"
        exif[0x0131] = "Firmware 1.8"
        exif[0x013B] = "Jane Doe"
        exif[0x0132] = "2024:05:10 14:31:00"
        exif[0x0112] = orientation
        exif_ifd = {
            0x9003: "2024:05:10 14:30:00",
            0x829A: IFDRational(1, 125),
            0x829D: IFDRational(28, 10),
            0x8827: 200,
            0xA431: "SN-0042",
            0xA434: "RF24-105mm F4 L IS USM",
        }
        if interop:
            exif_ifd[0xA005] = {0x0001: "R98"}
        exif[0x8769] = exif_ifd
        if with_gps:
            exif[0x8825] = {
                1: "N",
                2: (IFDRational(37, 1), IFDRational(33, 1), IFDRational(5993, 100)),
                3: "E",
                4: (IFDRational(126, 1), IFDRational(58, 1), IFDRational(4112, 100)),
            }
        path = tmp_path / name
        Image.new("RGB", size, color="red").save(path, exif=exif.tobytes())
        return path

    return _make
