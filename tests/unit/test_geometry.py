import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "logo"))

from zeekr_logo.geometry import Color, EdgeInsets, Rect, Size, apply_contain_fit, inscribe_center


class ColorTests(unittest.TestCase):
    def test_hex_round_trip_forms(self):
        self.assertEqual(Color.from_hex("#FF8000"), Color(255, 128, 0, 255))
        self.assertEqual(Color.from_hex("80FFFFFF"), Color(255, 255, 255, 128))
        self.assertEqual(Color(1, 2, 3, 4).to_hex(), "#04010203")

    def test_invalid_hex(self):
        with self.assertRaises(ValueError):
            Color.from_hex("#12345")
        with self.assertRaises(ValueError):
            Color.from_hex("white")

    def test_lerp_clamps_channels(self):
        black = Color(0, 0, 0)
        white = Color(255, 255, 255)
        self.assertEqual(Color.lerp(black, white, 2.0), white)
        self.assertEqual(Color.lerp(black, white, -1.0), Color(0, 0, 0, 255))

    def test_with_opacity(self):
        self.assertEqual(Color(255, 255, 255).with_opacity(0.0).alpha, 0)
        self.assertEqual(Color(255, 255, 255).with_opacity(0.5).alpha, 128)


class RectTests(unittest.TestCase):
    def test_basic_properties(self):
        rect = Rect.from_ltwh(10, 20, 100, 50)
        self.assertEqual(rect.right, 110)
        self.assertEqual(rect.bottom, 70)
        self.assertEqual(rect.center.dx, 60)
        self.assertEqual(rect.center.dy, 45)
        self.assertEqual(rect.inflate(5), Rect(5, 15, 115, 75))

    def test_lerp(self):
        a = Rect(0, 0, 10, 10)
        b = Rect(10, 10, 30, 30)
        self.assertEqual(Rect.lerp(a, b, 0.5), Rect(5, 5, 20, 20))


class FitTests(unittest.TestCase):
    def test_contain_wide_source_in_square(self):
        fitted = apply_contain_fit(Size(446, 112), Size(223, 223))
        self.assertAlmostEqual(fitted.width, 223)
        self.assertAlmostEqual(fitted.height, 56)

    def test_contain_tall_destination(self):
        fitted = apply_contain_fit(Size(290, 192), Size(145, 400))
        self.assertAlmostEqual(fitted.width, 145)
        self.assertAlmostEqual(fitted.height, 96)

    def test_inscribe_center(self):
        rect = inscribe_center(Size(40, 20), Rect(0, 0, 100, 100))
        self.assertEqual(rect, Rect(30, 40, 70, 60))


class EdgeInsetsTests(unittest.TestCase):
    def test_deflate_and_scale(self):
        insets = EdgeInsets(1, 2, 3, 4)
        self.assertEqual(insets.deflate_size(Size(10, 10)), Size(6, 4))
        self.assertEqual(insets * 2, EdgeInsets(2, 4, 6, 8))
        self.assertTrue(EdgeInsets.all(6).deflate_size(Size(12, 20)).is_empty)


if __name__ == "__main__":
    unittest.main()
