from __future__ import annotations

from datetime import datetime
from typing import Optional

EXIF_DATETIME_FORMAT = "%Y:%m:%d %H:%M:%S"
DEFAULT_DISPLAY_FORMAT = "%Y년 %m월 %d일 %H:%M"


def parse_exif_datetime(raw: str) -> Optional[datetime]:
    try:
        return datetime.strptime(raw.strip(), EXIF_DATETIME_FORMAT)
    except ValueError:
        return None


def format_photo_date(raw: Optional[str], display_format: str = DEFAULT_DISPLAY_FORMAT) -> str:
    if not raw:
        return ""
    parsed = parse_exif_datetime(raw)
    if parsed is None:
        return raw
    return parsed.strftime(display_format)
