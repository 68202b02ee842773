from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional, Tuple


class MetadataReader(ABC):
    name: str

    @abstractmethod
    def get_attribute(self, tag: str) -> Optional[str]:
        raise NotImplementedError

    @abstractmethod
    def get_lat_long(self) -> Optional[Tuple[float, float]]:
        raise NotImplementedError

    @abstractmethod
    def get_attribute_int(self, tag: str, default: int) -> int:
        raise NotImplementedError

    @property
    @abstractmethod
    def rotation_degrees(self) -> int:
        raise NotImplementedError


@dataclass(frozen=True)
class Address:
    locality: Optional[str] = None
    admin_area: Optional[str] = None
    country_name: Optional[str] = None


class Geocoder(ABC):
    name: str

    @abstractmethod
    def reverse_geocode(self, lat: float, lon: float, max_results: int) -> List[Address]:
        raise NotImplementedError


class NullGeocoder(Geocoder):
    name = "null"

    def reverse_geocode(self, lat: float, lon: float, max_results: int) -> List[Address]:
        return []
