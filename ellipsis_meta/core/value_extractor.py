from __future__ import annotations

from typing import Dict, Iterable, Optional

from ellipsis_meta.core.models import RawExtraction
from ellipsis_meta.infra.logging_utils import LOGGER
from ellipsis_meta.plugins.base import MetadataReader


def _read_tag(reader: MetadataReader, tag: str) -> Optional[str]:
    try:
        value = reader.get_attribute(tag)
        if value is None:
            return None
        text = value if isinstance(value, str) else str(value)
        return text if text.strip() else None
    except Exception as exc:
        # not every tag applies to every format; skip this one only
        LOGGER.debug("Tag read failed", extra={"extra_data": {"tag": tag, "error": str(exc)}})
        return None


def extract_values(reader: MetadataReader, tags: Iterable[str]) -> RawExtraction:
    values: Dict[str, str] = {}
    total_size = 0
    for tag in tags:
        value = _read_tag(reader, tag)
        if value is None:
            continue
        values[tag] = value
        total_size += len(value)
    return RawExtraction(values=values, extracted_count=len(values), total_size=total_size)
