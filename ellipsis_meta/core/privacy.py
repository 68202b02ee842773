from __future__ import annotations

from enum import Enum
from typing import FrozenSet, Iterable, List, Tuple, Union


class PrivacyLevel(str, Enum):
    NONE = "none"
    BASIC = "basic"
    STRICT = "strict"

    @classmethod
    def parse(cls, value: Union[str, "PrivacyLevel"]) -> "PrivacyLevel":
        if isinstance(value, PrivacyLevel):
            return value
        normalized = str(value).strip().lower()
        for level in cls:
            if normalized in (level.value, level.name.lower()):
                return level
        raise ValueError(f"Unknown privacy level: {value!r}")


# Identity-leaking tags dropped at BASIC; matched by exact name.
BASIC_EXCLUDED_TAGS: FrozenSet[str] = frozenset(
    {
        "CameraOwnerName",
        "BodySerialNumber",
        "LensSerialNumber",
        "Copyright",
        "Artist",
        "Software",
        "ImageUniqueID",
        "UserComment",
    }
)

# STRICT matching is case-insensitive substring matching, e.g. "DateTimeOriginal" passes via "DateTime".
STRICT_ALLOWED_SUBSTRINGS: Tuple[str, ...] = (
    "Exposure",
    "FNumber",
    "ISO",
    "Flash",
    "FocalLength",
    "WhiteBalance",
    "Contrast",
    "Saturation",
    "Sharpness",
    "ColorSpace",
    "DateTime",
    "Orientation",
    "ImageWidth",
    "ImageLength",
)

STRICT_DENIED_SUBSTRINGS: Tuple[str, ...] = ("GPS", "Serial", "Owner", "Copyright", "Artist", "Software", "Computer")


def _contains_any(tag: str, needles: Iterable[str]) -> bool:
    lowered = tag.lower()
    return any(needle.lower() in lowered for needle in needles)


def is_tag_allowed(tag: str, level: PrivacyLevel) -> bool:
    if level is PrivacyLevel.NONE:
        return True
    if level is PrivacyLevel.BASIC:
        return tag not in BASIC_EXCLUDED_TAGS
    return _contains_any(tag, STRICT_ALLOWED_SUBSTRINGS) and not _contains_any(tag, STRICT_DENIED_SUBSTRINGS)


def filter_tags(all_tags: Iterable[str], level: PrivacyLevel) -> List[str]:
    tags = list(all_tags)
    if level is PrivacyLevel.NONE:
        return tags
    return [tag for tag in tags if is_tag_allowed(tag, level)]
