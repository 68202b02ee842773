import io
from pathlib import Path

import pytest

from ellipsis_meta.core.errors import StreamOpenError
from ellipsis_meta.infra.filesystem import describe_source, detect_magic_extension, open_image_source


def test_path_stream_is_closed_after_block(tmp_path: Path) -> None:
    path = tmp_path / "data.jpg"
    path.write_bytes(b"\xFF\xD8\xFF\xE0payload")
    with open_image_source(path) as stream:
        assert detect_magic_extension(stream) == "jpg"
        assert stream.read(3) == b"\xFF\xD8\xFF"
    assert stream.closed


def test_stream_closed_when_block_raises(tmp_path: Path) -> None:
    path = tmp_path / "data.png"
    path.write_bytes(b"\x89PNG....")
    with pytest.raises(RuntimeError):
        with open_image_source(path) as stream:
            raise RuntimeError("boom")
    assert stream.closed


def test_caller_stream_is_rewound_and_left_open() -> None:
    buffer = io.BytesIO(b"GIF89a....")
    buffer.read(4)
    with open_image_source(buffer) as stream:
        assert stream is buffer
        assert stream.tell() == 0
    assert not buffer.closed


def test_bytes_source() -> None:
    with open_image_source(b"II*\x00rest") as stream:
        assert detect_magic_extension(stream) == "tiff"
    assert describe_source(b"1234") == "<4 bytes>"


@pytest.mark.parametrize("source", [b"", 42])
def test_invalid_sources(source) -> None:
    with pytest.raises(StreamOpenError):
        with open_image_source(source):
            pass


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(StreamOpenError):
        with open_image_source(tmp_path / "missing.jpg"):
            pass
