import json
import time
from dataclasses import FrozenInstanceError

import pytest

from ellipsis_meta.core.models import ExtractionRecord, ExtractionStats
from ellipsis_meta.core.privacy import PrivacyLevel


def _record() -> ExtractionRecord:
    stats = ExtractionStats.build(130, 120, 3, 24, PrivacyLevel.BASIC, time.perf_counter())
    return ExtractionRecord(
        raw_values={"Make": "Canon", "DateTimeOriginal": "2024:05:10 14:30:00", "UserComment": "서울"},
        computed={"computed_latitude": 37.566, "computed_longitude": 126.978, "computed_address": "서울특별시"},
        stats=stats,
    )


def test_serialization_is_flat_with_stats_object() -> None:
    payload = json.loads(_record().to_json())
    assert payload["Make"] == "Canon"
    assert payload["computed_latitude"] == 37.566
    assert payload["metadata_stats"]["privacy_filtered_count"] == 10
    assert payload["metadata_stats"]["extraction_success_rate"] == 2.5
    assert "error" not in payload
    assert "서울특별시" in _record().to_json()


def test_reserialization_is_stable_and_round_trips() -> None:
    record = _record()
    text = record.to_json()
    assert text == record.to_json()
    parsed = ExtractionRecord.from_json(text)
    assert parsed == record
    assert parsed.to_json() == text


def test_record_is_immutable() -> None:
    record = _record()
    with pytest.raises(TypeError):
        record.raw_values["Make"] = "Nikon"  # type: ignore[index]
    with pytest.raises(FrozenInstanceError):
        record.error = "x"  # type: ignore[misc]


def test_error_record() -> None:
    record = ExtractionRecord.error_record("cannot open", PrivacyLevel.STRICT, time.perf_counter())
    payload = json.loads(record.to_json())
    assert payload["error"] == "cannot open"
    assert payload["metadata_stats"]["extraction_success_rate"] == 0.0
    assert payload["metadata_stats"]["privacy_level"] == "strict"
    assert ExtractionRecord.from_json(record.to_json()).error == "cannot open"


def test_record_is_explicitly_unhashable() -> None:
    record = _record()
    assert ExtractionRecord.__hash__ is None
    with pytest.raises(TypeError):
        hash(record)
    assert record == ExtractionRecord.from_json(record.to_json())
