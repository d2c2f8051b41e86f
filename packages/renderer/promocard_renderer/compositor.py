"""Background fit-and-crop and overlay composition onto the template canvas."""

from __future__ import annotations

import math
from io import BytesIO

from PIL import Image, UnidentifiedImageError

from .errors import ImageDecodeError
from .models import BackgroundPlacement, TemplateConfig

_DECODE_ERRORS = (UnidentifiedImageError, OSError, EOFError, SyntaxError, ValueError, Image.DecompressionBombError)


def decode_image(data: bytes) -> Image.Image:
    """Fully decode ``data`` to RGBA; truncated or unknown formats raise ImageDecodeError."""
    try:
        image = Image.open(BytesIO(data))
        image.load()
        image = image.convert("RGBA")
    except _DECODE_ERRORS as exc:
        raise ImageDecodeError(f"Image is not decodable: {exc}") from exc
    if image.width < 1 or image.height < 1:
        raise ImageDecodeError("Image has no pixels")
    return image


def new_canvas(template: TemplateConfig) -> Image.Image:
    return Image.new("RGBA", template.size, (0, 0, 0, 0))


def fit_background(width: int, height: int, template: TemplateConfig) -> BackgroundPlacement:
    """Width-locked uniform scale, vertically centered in source pixels.

    ``offset_y`` goes negative when the scaled image is taller than the
    canvas; the excess is cropped top and bottom.
    """
    scale = template.width / width
    offset_y = math.trunc((template.height / scale - height) / 2)
    return BackgroundPlacement(
        scale=scale,
        offset_y=offset_y,
        dest_width=template.width,
        dest_height=round(height * scale),
    )


def composite(canvas: Image.Image, background: Image.Image, overlay: Image.Image) -> BackgroundPlacement:
    template = TemplateConfig(width=canvas.width, height=canvas.height)
    placement = fit_background(background.width, background.height, template)

    # Output pixel (x, y) samples source (x / scale, y / scale - offset_y).
    inv = 1.0 / placement.scale
    layer = background.convert("RGBA").transform(
        canvas.size,
        Image.Transform.AFFINE,
        (inv, 0.0, 0.0, 0.0, inv, -placement.offset_y),
        resample=Image.Resampling.BILINEAR,
    )
    canvas.alpha_composite(layer)

    canvas.alpha_composite(overlay.convert("RGBA"), dest=(0, 0))
    return placement
