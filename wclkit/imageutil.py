"""Image helpers: type sniffing, decoding, cropping, PNG writing and hashing."""

from __future__ import annotations

import io
from typing import BinaryIO

from PIL import Image

from wclkit.fsutil import get_content_hash_sha256

_SNIFF_LEN = 512
_SUPPORTED_FORMATS = {"PNG": "png", "JPEG": "jpeg", "GIF": "gif"}
_CROPPABLE_MODES = {"RGB", "RGBA", "P", "YCbCr"}

_SIGNATURES: list[tuple[bytes, str]] = [
    (b"\x89PNG\r\n\x1a\n", "image/png"),
    (b"GIF87a", "image/gif"),
    (b"GIF89a", "image/gif"),
    (b"\xff\xd8\xff", "image/jpeg"),
    (b"BM", "image/bmp"),
    (b"\x00\x00\x01\x00", "image/x-icon"),
    (b"\x00\x00\x02\x00", "image/x-icon"),
    (b"%PDF-", "application/pdf"),
    (b"%!PS-Adobe-", "application/postscript"),
    (b"PK\x03\x04", "application/zip"),
    (b"\x1f\x8b\x08", "application/x-gzip"),
]
_BINARY_BYTES = set(range(0x00, 0x09)) | {0x0B} | set(range(0x0E, 0x1B)) | set(range(0x1C, 0x20))


def _detect_content_type(data: bytes) -> str:
    for signature, kind in _SIGNATURES:
        if data.startswith(signature):
            return kind
    if len(data) >= 14 and data[:4] == b"RIFF" and data[8:14] == b"WEBPVP":
        return "image/webp"
    if any(byte in _BINARY_BYTES for byte in data):
        return "application/octet-stream"
    return "text/plain; charset=utf-8"


def get_image_type(filename: str) -> str:
    """Return the MIME type sniffed from the first 512 bytes of the file.

    Raises EOFError if the file is empty.
    """
    with open(filename, "rb") as handle:
        data = handle.read(_SNIFF_LEN)
    if not data:
        raise EOFError(f"{filename} is empty")
    return _detect_content_type(data)


def _decode(handle: BinaryIO, formats: list[str]) -> Image.Image:
    with Image.open(handle, formats=formats) as img:
        img.load()
        return img.copy() if img.format != "GIF" else _keep_format(img)


def _keep_format(img: Image.Image) -> Image.Image:
    copy = img.copy()
    copy.format = img.format
    return copy


def get_image_and_type(filename: str) -> tuple[Image.Image, str]:
    """Decode a PNG, JPEG or GIF file; return the image and its format name."""
    with open(filename, "rb") as handle:
        with Image.open(handle, formats=list(_SUPPORTED_FORMATS)) as img:
            img.load()
            kind = _SUPPORTED_FORMATS[img.format]
            return img.copy(), kind


def get_image(filename: str) -> Image.Image:
    """Decode a file whose sniffed type is PNG, JPEG or GIF.

    Raises ValueError for any other type.
    """
    kind = get_image_type(filename)
    if kind in ("image/jpeg", "image/jpg"):
        formats = ["JPEG"]
    elif kind == "image/gif":
        formats = ["GIF"]
    elif kind == "image/png":
        formats = ["PNG"]
    else:
        raise ValueError(f"unsupported image type: {kind}")
    with open(filename, "rb") as handle:
        return _decode(handle, formats)


def get_image_size(img: Image.Image) -> tuple[int, int]:
    """Return (width, height)."""
    width, height = img.size
    return width, height


def _half(offset: int) -> int:
    half = abs(offset) // 2
    return half if offset >= 0 else -half


def _crop(img: Image.Image, box: tuple[int, int, int, int]) -> Image.Image:
    if img.mode not in _CROPPABLE_MODES:
        raise ValueError("unsupported image type")
    width, height = img.size
    left, top, right, bottom = box
    left, right = sorted((left, right))
    top, bottom = sorted((top, bottom))
    left, top = max(0, left), max(0, top)
    right, bottom = min(width, right), min(height, bottom)
    right, bottom = max(left, right), max(top, bottom)
    return img.crop((left, top, right, bottom))


def crop_image_height(img: Image.Image, offset: int) -> Image.Image:
    """Remove offset pixels of height, half from the top and half from the bottom."""
    width, height = img.size
    if height < offset:
        raise ValueError("offset too large")
    half = _half(offset)
    return _crop(img, (0, half, width, height - half))


def crop_image_width(img: Image.Image, offset: int) -> Image.Image:
    """Remove offset pixels of width, half from the left and half from the right."""
    width, height = img.size
    if width < offset:
        raise ValueError("offset too large")
    half = _half(offset)
    return _crop(img, (half, 0, width - half, height))


def _png_bytes(img: Image.Image) -> bytes:
    buffer = io.BytesIO()
    img.save(buffer, format="PNG")
    return buffer.getvalue()


def write_image_png(img: Image.Image, filename: str) -> None:
    """Write the image to filename as PNG, replacing any existing file."""
    with open(filename, "wb") as handle:
        handle.write(_png_bytes(img))


def get_image_hash(img: Image.Image) -> str:
    """Return the URL-safe base64 SHA-256 of the image's PNG encoding."""
    return get_content_hash_sha256(_png_bytes(img))