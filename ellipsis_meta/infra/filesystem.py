from __future__ import annotations

import io
import os
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO, Dict, Iterator, Optional, Union

from ellipsis_meta.core.errors import StreamOpenError

ImageSource = Union[str, "os.PathLike[str]", bytes, bytearray, BinaryIO]

MAGIC_SIGNATURES: Dict[bytes, str] = {
    b"\xFF\xD8\xFF": "jpg",
    b"\x89PNG": "png",
    b"GIF8": "gif",
    b"II*\x00": "tiff",
    b"MM\x00*": "tiff",
    b"RIFF": "webp",
}


def detect_magic_extension(stream: BinaryIO) -> Optional[str]:
    position = stream.tell()
    try:
        prefix = stream.read(8)
    finally:
        stream.seek(position)
    for magic, ext in MAGIC_SIGNATURES.items():
        if prefix.startswith(magic):
            return ext
    return None


def describe_source(source: ImageSource) -> str:
    if isinstance(source, (bytes, bytearray)):
        return f"<{len(source)} bytes>"
    if isinstance(source, (str, os.PathLike)):
        return str(source)
    return getattr(source, "name", None) or repr(source)


@contextmanager
def open_image_source(source: ImageSource) -> Iterator[BinaryIO]:
    """Open ``source`` as a seekable binary stream for the duration of the block.

    Paths are opened and closed here. Caller-owned file objects are rewound but left open
    for the caller to close. Any failure to produce a readable stream raises StreamOpenError.
    """
    owned: Optional[BinaryIO] = None
    try:
        if isinstance(source, (bytes, bytearray)):
            if not source:
                raise StreamOpenError("empty image buffer")
            owned = io.BytesIO(bytes(source))
            stream: BinaryIO = owned
        elif isinstance(source, (str, os.PathLike)):
            path = Path(source)
            owned = path.open("rb")
            stream = owned
        elif hasattr(source, "read"):
            stream = source
            if stream.seekable():
                stream.seek(0)
            else:
                owned = io.BytesIO(stream.read())
                stream = owned
        else:
            raise StreamOpenError(f"unsupported image source type: {type(source).__name__}")
    except StreamOpenError:
        raise
    except (OSError, ValueError) as exc:
        raise StreamOpenError(f"cannot open {describe_source(source)}: {exc}") from exc
    try:
        yield stream
    finally:
        if owned is not None:
            owned.close()
