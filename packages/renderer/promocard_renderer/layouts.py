"""Fixed template layout: overlay, fit band and anchors per variant."""

from __future__ import annotations

from .models import TemplateConfig, TextStyle, VariantKind, VariantLayout

DEFAULT_TEMPLATE = TemplateConfig()

DEFAULT_BACKGROUND_ASSET = "bg_1.png"

CAPTION_BASELINE_Y = 1010
HIGHLIGHT_ANCHOR = (292, 1004)

BLACK = (0, 0, 0, 255)
WHITE = (255, 255, 255, 255)

BODY_STYLE = TextStyle(asset="font_1.ttf", size=72, fill=BLACK)
HIGHLIGHT_STYLE = TextStyle(asset="font_2.ttf", size=54, fill=WHITE)

LAYOUTS: dict[VariantKind, VariantLayout] = {
    VariantKind.NORMAL: VariantLayout(
        overlay_asset="overlay_1.png",
        width_threshold=1200.0,
        anchor_x=807,
    ),
    VariantKind.HIGHLIGHT: VariantLayout(
        overlay_asset="overlay_2.png",
        width_threshold=1000.0,
        anchor_x=900,
    ),
}

REQUIRED_ASSETS: tuple[str, ...] = (
    DEFAULT_BACKGROUND_ASSET,
    LAYOUTS[VariantKind.NORMAL].overlay_asset,
    LAYOUTS[VariantKind.HIGHLIGHT].overlay_asset,
    BODY_STYLE.asset,
    HIGHLIGHT_STYLE.asset,
)


def get_layout(kind: VariantKind) -> VariantLayout:
    return LAYOUTS[kind]
