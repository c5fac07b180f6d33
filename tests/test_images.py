"""Tests for profile image loading."""

from __future__ import annotations

import base64
import io
from unittest.mock import patch

import pytest
from PIL import Image

from resume_builder.errors import ImageDecodeFailure
from resume_builder.utils.images import (
    MAX_IMAGE_BYTES,
    encode_image_bytes,
    encode_image_file,
    load_image_reference,
)


def _png_bytes(size: tuple[int, int] = (40, 20)) -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", size, (200, 30, 30)).save(buf, format="PNG")
    return buf.getvalue()


def _decode(data_url: str) -> Image.Image:
    payload = data_url.split(",", 1)[1]
    return Image.open(io.BytesIO(base64.b64decode(payload)))


class TestEncodeImageBytes:
    def test_png_data_url(self):
        url = encode_image_bytes(_png_bytes())
        assert url.startswith("data:image/png;base64,")
        assert _decode(url).size == (40, 20)

    def test_large_image_downscaled(self):
        url = encode_image_bytes(_png_bytes((1200, 600)), max_side=300)
        assert _decode(url).size == (300, 150)

    def test_jpeg_keeps_format(self):
        buf = io.BytesIO()
        Image.new("RGB", (10, 10)).save(buf, format="JPEG")
        assert encode_image_bytes(buf.getvalue()).startswith("data:image/jpeg;base64,")

    @pytest.mark.parametrize("data", [b"", b"not an image at all"])
    def test_unreadable_bytes(self, data):
        with pytest.raises(ImageDecodeFailure):
            encode_image_bytes(data)

    def test_cmyk_tiff_converted(self):
        buf = io.BytesIO()
        Image.new("CMYK", (10, 10)).save(buf, format="TIFF")
        url = encode_image_bytes(buf.getvalue())
        assert url.startswith("data:image/png;base64,")
        assert _decode(url).mode in ("RGB", "RGBA")

    def test_encode_failure_is_decode_failure(self):
        with patch.object(Image.Image, "save", side_effect=OSError("cannot write")):
            with pytest.raises(ImageDecodeFailure, match="Cannot encode"):
                encode_image_bytes(_png_bytes())

    def test_too_large(self):
        with pytest.raises(ImageDecodeFailure, match="larger than"):
            encode_image_bytes(b"\0" * (MAX_IMAGE_BYTES + 1))


class TestFiles:
    def test_encode_file(self, tmp_path):
        path = tmp_path / "photo.png"
        path.write_bytes(_png_bytes())
        assert encode_image_file(path).startswith("data:image/png")

    def test_missing_file(self, tmp_path):
        with pytest.raises(ImageDecodeFailure, match="Cannot read"):
            encode_image_file(tmp_path / "missing.png")

    async def test_async_loader(self, tmp_path):
        path = tmp_path / "photo.png"
        path.write_bytes(_png_bytes())
        assert (await load_image_reference(path)).startswith("data:image/png")

    async def test_async_loader_failure(self, tmp_path):
        path = tmp_path / "photo.png"
        path.write_text("garbage")
        with pytest.raises(ImageDecodeFailure):
            await load_image_reference(path)
