"""Renderer package for the promotional card template."""

from .assets import AssetProvider, default_assets
from .compositor import composite, decode_image, fit_background
from .encoder import encode
from .errors import AssetDecodeError, AssetMissingError, EncodeError, FontLoadError, ImageDecodeError, PromoCardError
from .layouts import DEFAULT_TEMPLATE, REQUIRED_ASSETS, get_layout
from .models import Composition, TemplateConfig, TextPlacement, Variant, VariantKind
from .render import compose, render
from .text_fit import draw_fitted, squeeze_factor

__all__ = [
    "AssetDecodeError",
    "AssetMissingError",
    "AssetProvider",
    "Composition",
    "DEFAULT_TEMPLATE",
    "EncodeError",
    "FontLoadError",
    "ImageDecodeError",
    "PromoCardError",
    "REQUIRED_ASSETS",
    "TemplateConfig",
    "TextPlacement",
    "Variant",
    "VariantKind",
    "compose",
    "composite",
    "decode_image",
    "default_assets",
    "draw_fitted",
    "encode",
    "fit_background",
    "get_layout",
    "render",
    "squeeze_factor",
]
