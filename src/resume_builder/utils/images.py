"""Profile and signature image loading.

An image reference is an opaque ``data:`` URL string. Files are verified
and downscaled with Pillow before encoding.
"""

from __future__ import annotations

import asyncio
import base64
import io
import logging
from pathlib import Path

from PIL import Image

from resume_builder.errors import ImageDecodeFailure

logger = logging.getLogger(__name__)

MAX_IMAGE_BYTES = 10 * 1024 * 1024
MAX_SIDE_PX = 600

_FORMAT_MIME = {"PNG": "image/png", "JPEG": "image/jpeg", "WEBP": "image/webp", "GIF": "image/gif"}

# Modes each output format can write without conversion.
_FORMAT_MODES = {
    "PNG": ("1", "L", "LA", "P", "RGB", "RGBA"),
    "JPEG": ("L", "RGB"),
    "WEBP": ("RGB", "RGBA"),
    "GIF": ("L", "P"),
}


def encode_image_bytes(data: bytes, max_side: int = MAX_SIDE_PX) -> str:
    """Verify, downscale and encode image bytes as a data URL.

    Raises:
        ImageDecodeFailure: the bytes are not a readable, re-encodable image.
    """
    if not data:
        raise ImageDecodeFailure("Image file is empty")
    if len(data) > MAX_IMAGE_BYTES:
        raise ImageDecodeFailure(f"Image is larger than {MAX_IMAGE_BYTES // (1024 * 1024)} MB")
    try:
        with Image.open(io.BytesIO(data)) as probe:
            probe.verify()
        # verify() leaves the image unusable; reopen to decode pixels.
        image = Image.open(io.BytesIO(data))
        image.load()
    except (OSError, SyntaxError, Image.DecompressionBombError) as exc:
        raise ImageDecodeFailure(f"Unreadable image: {exc}") from exc

    fmt = image.format if image.format in _FORMAT_MIME else "PNG"
    output = io.BytesIO()
    try:
        if image.mode not in _FORMAT_MODES[fmt]:
            image = image.convert("RGB" if fmt == "JPEG" else "RGBA")
        image.thumbnail((max_side, max_side))
        image.save(output, format=fmt, optimize=True)
    except (OSError, ValueError) as exc:
        raise ImageDecodeFailure(f"Cannot encode image: {exc}") from exc
    encoded = base64.b64encode(output.getvalue()).decode("ascii")
    logger.debug("Encoded %s image %dx%d (%d bytes)", fmt, *image.size, len(output.getvalue()))
    return f"data:{_FORMAT_MIME[fmt]};base64,{encoded}"


def encode_image_file(path: str | Path, max_side: int = MAX_SIDE_PX) -> str:
    try:
        data = Path(path).read_bytes()
    except OSError as exc:
        raise ImageDecodeFailure(f"Cannot read {path}: {exc}") from exc
    return encode_image_bytes(data, max_side)


async def load_image_reference(path: str | Path, max_side: int = MAX_SIDE_PX) -> str:
    """Read and encode an image file off the event loop."""
    return await asyncio.to_thread(encode_image_file, path, max_side)
