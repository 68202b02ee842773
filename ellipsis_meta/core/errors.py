from __future__ import annotations


class MetadataError(Exception):
    """Base class for failures raised inside the metadata pipeline."""


class StreamOpenError(MetadataError):
    pass


class TagReadError(MetadataError):
    def __init__(self, tag: str, reason: str) -> None:
        super().__init__(f"{tag}: {reason}")
        self.tag = tag
        self.reason = reason


class GeocodingError(MetadataError):
    pass
