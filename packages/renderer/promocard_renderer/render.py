"""Render entry point: decode, composite, fit caption, encode."""

from __future__ import annotations

import logging

from .assets import AssetProvider, default_assets
from .compositor import composite, decode_image, new_canvas
from .encoder import encode
from .errors import AssetDecodeError, ImageDecodeError
from .layouts import DEFAULT_TEMPLATE, get_layout
from .models import Composition, TemplateConfig, Variant
from .text_fit import draw_fitted

logger = logging.getLogger("promocard.renderer")


def compose(
    caption: str,
    variant: Variant,
    background_bytes: bytes,
    assets: AssetProvider | None = None,
    template: TemplateConfig | None = None,
) -> Composition:
    assets = assets or default_assets()
    template = template or DEFAULT_TEMPLATE

    background = decode_image(background_bytes)

    overlay_name = get_layout(variant.kind).overlay_asset
    try:
        overlay = decode_image(assets.get_asset(overlay_name))
    except ImageDecodeError as exc:
        raise AssetDecodeError(overlay_name, str(exc.__cause__ or exc)) from exc

    canvas = new_canvas(template)
    placement = composite(canvas, background, overlay)
    texts = draw_fitted(canvas, caption, variant, assets)
    return Composition(canvas=canvas, background=placement, texts=texts)


def render(
    caption: str,
    variant: Variant,
    background_bytes: bytes,
    assets: AssetProvider | None = None,
    template: TemplateConfig | None = None,
) -> bytes:
    composition = compose(caption, variant, background_bytes, assets=assets, template=template)
    data = encode(composition.canvas)
    logger.debug(
        "rendered",
        extra={"event": "render_complete", "variant": variant.kind.value, "caption_len": len(caption), "bytes": len(data)},
    )
    return data
