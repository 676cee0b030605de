"""File read/save capabilities so the session workflow never touches I/O directly."""

from __future__ import annotations

import mimetypes
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from vanish.utils.images import DEFAULT_MEDIA_TYPE, decode_data_uri, extension_for, to_data_uri


class ImageSource(Protocol):
    """Something the user picked to upload."""

    async def read(self) -> str:
        """Return the image as an encoded data URI."""
        ...


class FileSaver(Protocol):
    def save(self, filename: str, data: bytes, media_type: str) -> object:
        """Persist ``data`` under ``filename``; return a handle for the caller."""
        ...


@dataclass
class BytesSource:
    """Bytes already in memory (e.g. a multipart upload body)."""

    data: bytes
    media_type: str | None = None

    async def read(self) -> str:
        return to_data_uri(self.data, self.media_type or DEFAULT_MEDIA_TYPE)


@dataclass
class PathSource:
    path: Path

    async def read(self) -> str:
        media_type, _ = mimetypes.guess_type(self.path.name)
        return to_data_uri(self.path.read_bytes(), media_type or DEFAULT_MEDIA_TYPE)


@dataclass
class SavedFile:
    filename: str
    data: bytes
    media_type: str


class MemorySaver:
    """Keeps the saved file in memory; the HTTP layer streams it back."""

    def __init__(self) -> None:
        self.saved: SavedFile | None = None

    def save(self, filename: str, data: bytes, media_type: str) -> SavedFile:
        self.saved = SavedFile(filename=filename, data=data, media_type=media_type)
        return self.saved


class DirectorySaver:
    """Writes downloads into a local directory."""

    def __init__(self, directory: Path) -> None:
        self.directory = directory

    def save(self, filename: str, data: bytes, media_type: str) -> Path:
        self.directory.mkdir(parents=True, exist_ok=True)
        target = self.directory / filename
        target.write_bytes(data)
        return target


def download_filename(media_type: str, timestamp_ms: int) -> str:
    return f"vanished-{timestamp_ms}.{extension_for(media_type)}"


def save_encoded(saver: FileSaver, image: str, timestamp_ms: int) -> object:
    """Decode a data URI and hand it to ``saver`` with a timestamped name."""
    media_type, data = decode_data_uri(image)
    return saver.save(download_filename(media_type, timestamp_ms), data, media_type)
