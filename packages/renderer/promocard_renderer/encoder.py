"""PNG serialization of a finished canvas."""

from __future__ import annotations

from io import BytesIO

from PIL import Image

from .errors import EncodeError


def encode(canvas: Image.Image) -> bytes:
    snapshot = canvas.copy()
    buf = BytesIO()
    try:
        snapshot.save(buf, format="PNG")
    except (OSError, ValueError, KeyError) as exc:
        raise EncodeError(f"Cannot encode {snapshot.mode} canvas as PNG: {exc}") from exc
    return buf.getvalue()
