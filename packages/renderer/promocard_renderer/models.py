"""Typed renderer models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from PIL import Image


class VariantKind(str, Enum):
    NORMAL = "normal"
    HIGHLIGHT = "highlight"


@dataclass(frozen=True)
class Variant:
    """Template mode; carries the highlight string only in the HIGHLIGHT case."""

    kind: VariantKind = VariantKind.NORMAL
    highlight: str | None = None

    def __post_init__(self) -> None:
        if self.kind == VariantKind.HIGHLIGHT and self.highlight is None:
            raise ValueError("Highlight variant requires highlight text")
        if self.kind == VariantKind.NORMAL and self.highlight is not None:
            raise ValueError("Normal variant takes no highlight text")

    @classmethod
    def normal(cls) -> Variant:
        return cls(VariantKind.NORMAL)

    @classmethod
    def highlighted(cls, text: str) -> Variant:
        return cls(VariantKind.HIGHLIGHT, text)

    @classmethod
    def from_highlight(cls, text: str | None) -> Variant:
        if text is None:
            return cls.normal()
        return cls.highlighted(text)


@dataclass(frozen=True)
class TemplateConfig:
    width: int = 1440
    height: int = 1080

    @property
    def size(self) -> tuple[int, int]:
        return (self.width, self.height)


@dataclass(frozen=True)
class TextStyle:
    asset: str
    size: int
    fill: tuple[int, int, int, int]


@dataclass(frozen=True)
class VariantLayout:
    overlay_asset: str
    width_threshold: float
    anchor_x: int


@dataclass(frozen=True)
class BackgroundPlacement:
    scale: float
    offset_y: int
    dest_width: int
    dest_height: int

    @property
    def dest_top(self) -> float:
        return self.offset_y * self.scale


@dataclass(frozen=True)
class TextPlacement:
    role: str
    text: str
    anchor: tuple[int, int]
    fill: tuple[int, int, int, int]
    measured_width: float
    scale_x: float

    @property
    def rendered_width(self) -> float:
        return self.measured_width * self.scale_x


@dataclass
class Composition:
    canvas: Image.Image
    background: BackgroundPlacement
    texts: list[TextPlacement]
