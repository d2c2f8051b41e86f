"""Render failure taxonomy. Every error is terminal for the call that raised it."""

from __future__ import annotations


class PromoCardError(Exception):
    """Base class for render and service failures."""


class AssetMissingError(PromoCardError):
    """A required bundled asset is absent (deployment defect)."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Asset not found: {name}")
        self.name = name


class ImageDecodeError(PromoCardError):
    """Caller-supplied background bytes are not a decodable image."""


class FontLoadError(PromoCardError):
    """Bundled font bytes do not parse into a usable typeface."""


class EncodeError(PromoCardError):
    """The finished canvas could not be serialized."""


class AssetDecodeError(PromoCardError):
    """A bundled image asset is present but does not decode (deployment defect)."""

    def __init__(self, name: str, reason: str) -> None:
        super().__init__(f"Asset {name} is not a decodable image: {reason}")
        self.name = name
