from __future__ import annotations

import json
import time
from dataclasses import asdict, dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from ellipsis_meta.core.privacy import PrivacyLevel
from ellipsis_meta.core.tag_catalog import EXTRACTION_METHOD

COMPUTED_PREFIX = "computed_"
STATS_KEY = "metadata_stats"
ERROR_KEY = "error"


@dataclass(frozen=True)
class RawExtraction:
    values: Dict[str, str] = field(default_factory=dict)
    extracted_count: int = 0
    total_size: int = 0


@dataclass(frozen=True)
class ExtractionStats:
    total_tags_available: int
    filtered_tags_count: int
    privacy_filtered_count: int
    extracted_tags_count: int
    total_data_size_chars: int
    extraction_success_rate: float
    processing_time_ms: int
    privacy_level: str
    extraction_method: str = EXTRACTION_METHOD

    @classmethod
    def build(
        cls,
        total_tags: int,
        filtered_tags: int,
        extracted: int,
        total_size: int,
        level: PrivacyLevel,
        started_at: float,
    ) -> "ExtractionStats":
        rate = round(extracted / filtered_tags * 100, 1) if filtered_tags else 0.0
        elapsed_ms = int((time.perf_counter() - started_at) * 1000)
        return cls(
            total_tags_available=total_tags,
            filtered_tags_count=filtered_tags,
            privacy_filtered_count=total_tags - filtered_tags,
            extracted_tags_count=extracted,
            total_data_size_chars=total_size,
            extraction_success_rate=rate,
            processing_time_ms=max(elapsed_ms, 0),
            privacy_level=level.value,
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ExtractionRecord:
    raw_values: Mapping[str, str]
    computed: Mapping[str, Any]
    stats: ExtractionStats
    error: Optional[str] = None
    # mapping proxies are unhashable
    __hash__ = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        object.__setattr__(self, "raw_values", MappingProxyType(dict(self.raw_values)))
        object.__setattr__(self, "computed", MappingProxyType(dict(self.computed)))

    @classmethod
    def error_record(cls, message: str, level: PrivacyLevel, started_at: float) -> "ExtractionRecord":
        stats = ExtractionStats.build(0, 0, 0, 0, level, started_at)
        return cls(raw_values={}, computed={}, stats=stats, error=message)

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = dict(self.raw_values)
        payload.update(self.computed)
        if self.error is not None:
            payload[ERROR_KEY] = self.error
        payload[STATS_KEY] = self.stats.to_dict()
        return payload

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, sort_keys=True)

    @classmethod
    def from_json(cls, text: str) -> "ExtractionRecord":
        payload: Dict[str, Any] = json.loads(text)
        stats = ExtractionStats(**payload.pop(STATS_KEY))
        error = payload.pop(ERROR_KEY, None)
        computed = {k: v for k, v in payload.items() if k.startswith(COMPUTED_PREFIX)}
        raw = {k: v for k, v in payload.items() if not k.startswith(COMPUTED_PREFIX)}
        return cls(raw_values=raw, computed=computed, stats=stats, error=error)


@dataclass(frozen=True)
class PhotoMetadata:
    photo_date: str
    latitude: Optional[float]
    longitude: Optional[float]
    location_name: str
    exif_json: str
    record: ExtractionRecord
