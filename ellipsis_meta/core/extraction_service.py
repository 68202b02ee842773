from __future__ import annotations

import asyncio
import time
from typing import BinaryIO, Callable, Optional, Union

from ellipsis_meta.config import ExtractorSettings
from ellipsis_meta.core.augmenter import LATITUDE, LONGITUDE, augment, location_name
from ellipsis_meta.core.errors import MetadataError
from ellipsis_meta.core.models import ExtractionRecord, PhotoMetadata
from ellipsis_meta.core.privacy import PrivacyLevel, filter_tags
from ellipsis_meta.core.tag_catalog import list_all_tags
from ellipsis_meta.core.timeline import format_photo_date
from ellipsis_meta.core.value_extractor import extract_values
from ellipsis_meta.infra.filesystem import ImageSource, describe_source, detect_magic_extension, open_image_source
from ellipsis_meta.infra.logging_utils import LOGGER
from ellipsis_meta.plugins.base import Geocoder, MetadataReader
from ellipsis_meta.plugins.pillow_reader import PillowExifReader

ReaderFactory = Callable[[BinaryIO], MetadataReader]

DATE_TAGS = ("DateTimeOriginal", "DateTime")


class MetadataExtractor:
    def __init__(
        self,
        geocoder: Geocoder,
        settings: Optional[ExtractorSettings] = None,
        reader_factory: ReaderFactory = PillowExifReader.from_stream,
    ) -> None:
        self.geocoder = geocoder
        self.settings = settings or ExtractorSettings()
        self.reader_factory = reader_factory

    def extract(self, source: ImageSource, privacy_level: Optional[Union[PrivacyLevel, str]] = None) -> PhotoMetadata:
        started_at = time.perf_counter()
        try:
            level = PrivacyLevel.parse(privacy_level if privacy_level is not None else self.settings.privacy_level)
        except ValueError as exc:
            LOGGER.warning("Invalid privacy level", extra={"extra_data": {"error": str(exc)}})
            return self._publish(ExtractionRecord.error_record(str(exc), self.settings.privacy_level, started_at))
        LOGGER.info(
            "Extracting metadata",
            extra={"extra_data": {"source": describe_source(source), "privacy_level": level.value}},
        )
        try:
            with open_image_source(source) as stream:
                LOGGER.debug("Detected image format", extra={"extra_data": {"format": detect_magic_extension(stream)}})
                reader = self.reader_factory(stream)
                record = self._run_pipeline(reader, level, started_at)
        except MetadataError as exc:
            LOGGER.warning("Metadata stream unavailable", extra={"extra_data": {"error": str(exc)}})
            return self._publish(ExtractionRecord.error_record(str(exc), level, started_at))
        except Exception as exc:
            LOGGER.error("Metadata extraction failed", extra={"extra_data": {"error": str(exc)}}, exc_info=True)
            return self._publish(ExtractionRecord.error_record(f"{type(exc).__name__}: {exc}", level, started_at))
        LOGGER.info("Metadata extracted", extra={"extra_data": record.stats.to_dict()})
        return self._publish(record)

    async def extract_async(
        self, source: ImageSource, privacy_level: Optional[Union[PrivacyLevel, str]] = None
    ) -> PhotoMetadata:
        return await asyncio.to_thread(self.extract, source, privacy_level)

    def _run_pipeline(self, reader: MetadataReader, level: PrivacyLevel, started_at: float) -> ExtractionRecord:
        all_tags = list_all_tags()
        filtered = filter_tags(all_tags, level)
        raw = extract_values(reader, filtered)
        return augment(
            raw,
            reader,
            self.geocoder,
            level,
            started_at=started_at,
            total_tags=len(all_tags),
            filtered_tags=len(filtered),
        )

    def _publish(self, record: ExtractionRecord) -> PhotoMetadata:
        raw_date = next((record.raw_values[tag] for tag in DATE_TAGS if tag in record.raw_values), "")
        return PhotoMetadata(
            photo_date=format_photo_date(raw_date, self.settings.date_display_format),
            latitude=record.computed.get(LATITUDE),
            longitude=record.computed.get(LONGITUDE),
            location_name=location_name(record),
            exif_json=record.to_json(),
            record=record,
        )
