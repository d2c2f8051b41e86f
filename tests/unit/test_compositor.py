import sys
import unittest
from io import BytesIO
from pathlib import Path

from PIL import Image

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "renderer"))

from promocard_renderer.compositor import composite, decode_image, fit_background, new_canvas
from promocard_renderer.errors import ImageDecodeError
from promocard_renderer.models import TemplateConfig

TEMPLATE = TemplateConfig()
CLEAR = (0, 0, 0, 0)


def _png_bytes(image: Image.Image) -> bytes:
    buf = BytesIO()
    image.save(buf, format="PNG")
    return buf.getvalue()


def _gradient(width: int, height: int) -> Image.Image:
    img = Image.new("RGB", (width, height))
    img.putdata([((x * 7) % 256, (y * 5) % 256, (x + y) % 256) for y in range(height) for x in range(width)])
    return img


class FitBackgroundTests(unittest.TestCase):
    def test_scale_is_width_locked(self):
        for width, height in [(1000, 500), (1000, 5000), (2880, 100), (1440, 1080)]:
            placement = fit_background(width, height, TEMPLATE)
            self.assertAlmostEqual(placement.scale, 1440 / width)
            self.assertEqual(placement.dest_width, 1440)

    def test_short_background_is_centered(self):
        placement = fit_background(1000, 500, TEMPLATE)
        self.assertAlmostEqual(placement.scale, 1.44)
        self.assertEqual(placement.offset_y, 125)
        self.assertAlmostEqual(placement.dest_top, 180.0)
        self.assertEqual(placement.dest_height, 720)

    def test_tall_background_gets_negative_offset(self):
        placement = fit_background(720, 2000, TEMPLATE)
        self.assertEqual(placement.scale, 2.0)
        self.assertEqual(placement.offset_y, -730)
        self.assertLess(placement.dest_top, 0)

    def test_offset_truncates_toward_zero(self):
        # (1080 / 1.0 - 1081) / 2 == -0.5
        self.assertEqual(fit_background(1440, 1081, TEMPLATE).offset_y, 0)
        self.assertEqual(fit_background(1440, 1077, TEMPLATE).offset_y, 1)


class CompositeTests(unittest.TestCase):
    def test_short_background_leaves_bands_clear(self):
        canvas = new_canvas(TEMPLATE)
        background = Image.new("RGB", (720, 270), (255, 0, 0))
        overlay = Image.new("RGBA", TEMPLATE.size, CLEAR)

        placement = composite(canvas, background, overlay)

        self.assertEqual(placement.offset_y, 135)
        self.assertEqual(canvas.getpixel((10, 100)), CLEAR)
        self.assertEqual(canvas.getpixel((700, 540)), (255, 0, 0, 255))
        self.assertEqual(canvas.getpixel((700, 1000)), CLEAR)

    def test_tall_background_is_cropped_not_rejected(self):
        canvas = new_canvas(TEMPLATE)
        background = Image.new("RGB", (720, 2000), (0, 128, 0))
        overlay = Image.new("RGBA", TEMPLATE.size, CLEAR)

        composite(canvas, background, overlay)

        self.assertEqual(canvas.getpixel((10, 10)), (0, 128, 0, 255))
        self.assertEqual(canvas.getpixel((720, 540)), (0, 128, 0, 255))
        self.assertEqual(canvas.getpixel((700, 1070)), (0, 128, 0, 255))

    def test_overlay_drawn_unscaled_over_background(self):
        canvas = new_canvas(TEMPLATE)
        background = Image.new("RGB", (360, 270), (255, 0, 0))
        overlay = Image.new("RGBA", TEMPLATE.size, CLEAR)
        overlay.paste((0, 0, 255, 255), (100, 100, 110, 110))

        composite(canvas, background, overlay)

        self.assertEqual(canvas.getpixel((105, 105)), (0, 0, 255, 255))
        self.assertEqual(canvas.getpixel((111, 105)), (255, 0, 0, 255))
        self.assertEqual(canvas.getpixel((99, 105)), (255, 0, 0, 255))


class DecodeTests(unittest.TestCase):
    def test_decodes_png(self):
        image = decode_image(_png_bytes(_gradient(64, 32)))
        self.assertEqual(image.size, (64, 32))
        self.assertEqual(image.mode, "RGBA")

    def test_truncated_png_rejected(self):
        data = _png_bytes(_gradient(200, 200))
        with self.assertRaises(ImageDecodeError):
            decode_image(data[: len(data) // 2])

    def test_garbage_rejected(self):
        with self.assertRaises(ImageDecodeError):
            decode_image(b"definitely not an image")
        with self.assertRaises(ImageDecodeError):
            decode_image(b"")


if __name__ == "__main__":
    unittest.main()
