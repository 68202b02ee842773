from ellipsis_meta.core.timeline import format_photo_date, parse_exif_datetime


def test_reformats_exif_timestamp() -> None:
    formatted = format_photo_date("2024:05:10 14:30:00")
    assert formatted
    assert formatted == "2024년 05월 10일 14:30"


def test_custom_display_format() -> None:
    assert format_photo_date("2024:05:10 14:30:00", "%d/%m/%Y") == "10/05/2024"


def test_garbage_passes_through() -> None:
    assert format_photo_date("garbage") == "garbage"
    assert format_photo_date("2024-05-10T14:30:00") == "2024-05-10T14:30:00"
    assert parse_exif_datetime("garbage") is None


def test_empty_input() -> None:
    assert format_photo_date("") == ""
    assert format_photo_date(None) == ""
