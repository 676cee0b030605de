"""Leaf-node helpers for encoded images (base64 data URIs). No engine imports."""

from __future__ import annotations

import base64
import binascii

DEFAULT_MEDIA_TYPE = "image/png"

_EXTENSIONS = {
    "image/png": "png",
    "image/jpeg": "jpg",
    "image/jpg": "jpg",
    "image/webp": "webp",
    "image/gif": "gif",
    "image/bmp": "bmp",
    "image/heic": "heic",
    "image/heif": "heif",
}


def to_data_uri(data: bytes, media_type: str | None = None) -> str:
    """Wrap raw bytes as ``data:<media>;base64,<payload>``."""
    media = media_type or DEFAULT_MEDIA_TYPE
    return f"data:{media};base64,{base64.b64encode(data).decode('ascii')}"


def media_type_of(data_uri: str) -> str:
    """Declared media type of a data URI, defaulting to PNG."""
    header, sep, _ = data_uri.partition(",")
    if not sep or not header.startswith("data:"):
        return DEFAULT_MEDIA_TYPE
    media = header[len("data:"):].split(";", 1)[0].strip()
    return media or DEFAULT_MEDIA_TYPE


def payload_of(data_uri: str) -> str:
    """Base64 payload (the part after the first comma)."""
    _, sep, payload = data_uri.partition(",")
    if not sep:
        raise ValueError("Encoded image has no payload")
    return payload


def decode_data_uri(data_uri: str) -> tuple[str, bytes]:
    """Split a data URI into (media_type, raw bytes)."""
    try:
        raw = base64.b64decode(payload_of(data_uri), validate=True)
    except binascii.Error as e:
        raise ValueError(f"Encoded image payload is not valid base64: {e}") from e
    return media_type_of(data_uri), raw


def extension_for(media_type: str) -> str:
    return _EXTENSIONS.get(media_type.lower(), "png")
