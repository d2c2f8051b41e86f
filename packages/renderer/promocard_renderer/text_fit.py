"""Caption fitting: measure, squeeze horizontally past the variant budget, draw centered."""

from __future__ import annotations

import logging

from PIL import Image, ImageDraw, ImageFont

from .assets import AssetProvider
from .layouts import BODY_STYLE, CAPTION_BASELINE_Y, HIGHLIGHT_ANCHOR, HIGHLIGHT_STYLE, get_layout
from .models import TextPlacement, Variant, VariantKind
from .typefaces import load_typeface

logger = logging.getLogger("promocard.renderer")

RUN_CHARS = 32


def measure(font: ImageFont.FreeTypeFont, text: str) -> float:
    """Advance width of ``text`` at the font's natural scale."""
    if not text:
        return 0.0
    return float(font.getlength(text))


def squeeze_factor(measured_width: float, threshold: float) -> float:
    """Horizontal scale that brings ``measured_width`` down to ``threshold``.

    Not clamped: an overflow larger than the measured width would give a
    non-positive factor, which only a non-positive threshold can produce.
    """
    if measured_width <= threshold:
        return 1.0
    overflow = measured_width - threshold
    return 1.0 - overflow / measured_width


def draw_text(
    canvas: Image.Image,
    text: str,
    font: ImageFont.FreeTypeFont,
    fill: tuple[int, int, int, int],
    anchor: tuple[int, int],
    scale_x: float = 1.0,
    role: str = "caption",
) -> TextPlacement:
    """Draw ``text`` centered on ``anchor[0]`` with its baseline on ``anchor[1]``.

    Glyph coverage is rasterized at natural size, then only the x axis of the
    mask is resampled by ``scale_x``; heights and vertical metrics are kept.
    Long text is rasterized in runs of ``RUN_CHARS`` characters so the
    natural-size mask stays bounded however far the caption is squeezed.
    """
    measured = measure(font, text)
    placement = TextPlacement(
        role=role,
        text=text,
        anchor=anchor,
        fill=fill,
        measured_width=measured,
        scale_x=scale_x,
    )

    pen_x = anchor[0] - placement.rendered_width / 2
    advance = 0.0
    for start in range(0, len(text), RUN_CHARS):
        run = text[start : start + RUN_CHARS]
        _draw_run(canvas, run, font, fill, pen_x + advance * scale_x, anchor[1], scale_x)
        advance += font.getlength(run)
    return placement


def _draw_run(
    canvas: Image.Image,
    run: str,
    font: ImageFont.FreeTypeFont,
    fill: tuple[int, int, int, int],
    pen_x: float,
    baseline_y: int,
    scale_x: float,
) -> None:
    left, top, right, bottom = font.getbbox(run, anchor="ls")
    if right <= left or bottom <= top:
        return

    mask = Image.new("L", (right - left, bottom - top), 0)
    draw = ImageDraw.Draw(mask)
    draw.fontmode = "L"
    draw.text((-left, -top), run, font=font, fill=255, anchor="ls")

    if scale_x != 1.0:
        squeezed_width = max(1, round(mask.width * scale_x))
        mask = mask.resize((squeezed_width, mask.height), Image.Resampling.BOX)

    canvas.paste(fill, (round(pen_x + left * scale_x), baseline_y + top), mask)


def draw_fitted(
    canvas: Image.Image,
    text: str,
    variant: Variant,
    assets: AssetProvider,
) -> list[TextPlacement]:
    layout = get_layout(variant.kind)
    placements: list[TextPlacement] = []

    if variant.kind == VariantKind.HIGHLIGHT:
        highlight_font = load_typeface(assets, HIGHLIGHT_STYLE)
        placements.append(
            draw_text(
                canvas,
                variant.highlight or "",
                highlight_font,
                HIGHLIGHT_STYLE.fill,
                HIGHLIGHT_ANCHOR,
                role="highlight",
            )
        )

    body_font = load_typeface(assets, BODY_STYLE)
    measured = measure(body_font, text)
    scale_x = squeeze_factor(measured, layout.width_threshold)
    if scale_x != 1.0:
        logger.debug(
            "caption squeezed",
            extra={
                "event": "caption_squeezed",
                "measured_width": round(measured, 1),
                "threshold": layout.width_threshold,
                "scale_x": round(scale_x, 4),
            },
        )

    placements.append(
        draw_text(
            canvas,
            text,
            body_font,
            BODY_STYLE.fill,
            (layout.anchor_x, CAPTION_BASELINE_Y),
            scale_x=scale_x,
            role="caption",
        )
    )
    return placements
