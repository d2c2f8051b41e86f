import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "renderer"))

from promocard_renderer.layouts import get_layout
from promocard_renderer.models import Variant, VariantKind


class VariantTests(unittest.TestCase):
    def test_from_highlight(self):
        self.assertEqual(Variant.from_highlight(None), Variant.normal())
        variant = Variant.from_highlight("Sale")
        self.assertEqual(variant.kind, VariantKind.HIGHLIGHT)
        self.assertEqual(variant.highlight, "Sale")

    def test_empty_highlight_still_selects_highlight(self):
        self.assertEqual(Variant.from_highlight("").kind, VariantKind.HIGHLIGHT)

    def test_payload_only_in_highlight_case(self):
        with self.assertRaises(ValueError):
            Variant(VariantKind.HIGHLIGHT)
        with self.assertRaises(ValueError):
            Variant(VariantKind.NORMAL, "text")

    def test_layouts(self):
        normal = get_layout(VariantKind.NORMAL)
        self.assertEqual((normal.width_threshold, normal.anchor_x), (1200.0, 807))
        self.assertEqual(normal.overlay_asset, "overlay_1.png")
        highlight = get_layout(VariantKind.HIGHLIGHT)
        self.assertEqual((highlight.width_threshold, highlight.anchor_x), (1000.0, 900))
        self.assertEqual(highlight.overlay_asset, "overlay_2.png")


if __name__ == "__main__":
    unittest.main()
