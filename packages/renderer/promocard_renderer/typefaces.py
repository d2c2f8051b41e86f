"""Typeface loading from bundled font bytes."""

from __future__ import annotations

from io import BytesIO

from PIL import ImageFont

from .assets import AssetProvider
from .errors import FontLoadError
from .models import TextStyle


def load_typeface(assets: AssetProvider, style: TextStyle) -> ImageFont.FreeTypeFont:
    # Parsed per call: FreeType faces are not shared between concurrent renders.
    data = assets.get_asset(style.asset)
    try:
        return ImageFont.truetype(BytesIO(data), style.size, layout_engine=ImageFont.Layout.BASIC)
    except (OSError, ValueError) as exc:
        raise FontLoadError(f"Cannot load typeface {style.asset}: {exc}") from exc
