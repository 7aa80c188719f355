"""Image decoding helpers."""

from __future__ import annotations

from io import BytesIO

from PIL import Image

from photo_search.domain.models import ImageBuffer


class ImageDecodeError(ValueError):
    """Raised when downloaded bytes are not an image Pillow can read."""


def decode_image(raw: bytes) -> ImageBuffer:
    """Fully decode ``raw`` and wrap it with its dimensions and format."""

    if not raw:
        raise ImageDecodeError("Empty image payload")
    try:
        with Image.open(BytesIO(raw)) as image:
            image.load()
            width, height = image.size
            image_format = image.format or "unknown"
    except Exception as exc:  # noqa: BLE001 - Pillow plugins raise SyntaxError, struct.error, etc.
        raise ImageDecodeError(f"Cannot decode image: {exc}") from exc
    return ImageBuffer(data=raw, width=width, height=height, format=image_format)


__all__ = ["ImageDecodeError", "decode_image"]
