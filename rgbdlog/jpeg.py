"""JPEG decoding into blue-green-red byte order."""

from __future__ import annotations

import io

import numpy as np
from PIL import Image, UnidentifiedImageError


class JPEGDecodeError(ValueError):
    """Raised when data cannot be decoded as a JPEG image."""


def decode_jpeg_bgr(data: bytes) -> np.ndarray:
    """Decode JPEG bytes into a ``(height, width, 3)`` uint8 array in BGR order."""
    try:
        with Image.open(io.BytesIO(data)) as image:
            if image.format != "JPEG":
                raise JPEGDecodeError(f"not a JPEG image: {image.format}")
            rgb = np.asarray(image.convert("RGB"), dtype=np.uint8)
    except (UnidentifiedImageError, OSError, SyntaxError) as exc:
        raise JPEGDecodeError("JPEG decoding error") from exc
    return np.ascontiguousarray(rgb[..., ::-1])