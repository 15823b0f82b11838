import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "logo"))

from zeekr_logo.decoration import LogoDecoration, LogoStyle, blend, next_style
from zeekr_logo.geometry import Color, EdgeInsets

RED = Color(255, 0, 0)
BLUE = Color(0, 0, 255)


class LogoDecorationTests(unittest.TestCase):
    def test_position_derived_from_style(self):
        self.assertEqual(LogoDecoration(style=LogoStyle.MARK_ONLY).position, 0.0)
        self.assertEqual(LogoDecoration(style=LogoStyle.HORIZONTAL).position, 1.0)
        self.assertEqual(LogoDecoration(style=LogoStyle.STACKED).position, -1.0)
        self.assertEqual(LogoDecoration().opacity, 1.0)

    def test_equality_ignores_margin_and_style(self):
        a = LogoDecoration(color=RED, margin=EdgeInsets.all(4))
        b = LogoDecoration(color=RED, margin=EdgeInsets.all(12))
        self.assertEqual(a, b)
        self.assertEqual(hash(a), hash(b))
        c = LogoDecoration(color=RED, style=LogoStyle.HORIZONTAL, position=0.0)
        self.assertEqual(a, c)
        self.assertNotEqual(a, LogoDecoration(color=BLUE))
        self.assertNotEqual(a, LogoDecoration(color=RED, opacity=0.5))

    def test_invalid_values_fail_fast(self):
        with self.assertRaises(AssertionError):
            LogoDecoration(opacity=1.5)
        with self.assertRaises(AssertionError):
            LogoDecoration(position=float("nan"))

    def test_transition_flags(self):
        self.assertTrue(LogoDecoration().is_complex)
        self.assertTrue(LogoDecoration(position=0.3).in_transition)
        self.assertTrue(LogoDecoration(opacity=0.2).in_transition)
        self.assertIn("transition", LogoDecoration(position=0.5, opacity=0.5).describe())
        self.assertNotIn("transition", LogoDecoration().describe())

    def test_next_style_round_robin(self):
        self.assertEqual(next_style(LogoStyle.MARK_ONLY), LogoStyle.HORIZONTAL)
        self.assertEqual(next_style(LogoStyle.HORIZONTAL), LogoStyle.STACKED)
        self.assertEqual(next_style(LogoStyle.STACKED), LogoStyle.MARK_ONLY)

    def test_parse_style(self):
        self.assertEqual(LogoStyle.parse("markOnly"), LogoStyle.MARK_ONLY)
        self.assertEqual(LogoStyle.parse("STACKED"), LogoStyle.STACKED)
        with self.assertRaises(ValueError):
            LogoStyle.parse("diagonal")


class BlendTests(unittest.TestCase):
    def setUp(self):
        self.a = LogoDecoration(color=RED, text_color=RED, style=LogoStyle.STACKED, margin=EdgeInsets.all(10))
        self.b = LogoDecoration(color=BLUE, text_color=BLUE, style=LogoStyle.HORIZONTAL)

    def test_identity_endpoints(self):
        self.assertIs(blend(self.a, self.b, 0.0), self.a)
        self.assertIs(blend(self.a, self.b, 1.0), self.b)

    def test_same_reference_short_circuits(self):
        for t in (-1.0, 0.0, 0.3, 1.0, 2.0):
            self.assertIs(blend(self.a, self.a, t), self.a)

    def test_equal_values_blend_to_equal_value(self):
        copy = LogoDecoration(color=RED, text_color=RED, style=LogoStyle.STACKED)
        for t in (0.25, 0.5, 0.75):
            self.assertEqual(blend(self.a, copy, t), self.a)

    def test_both_none(self):
        self.assertIsNone(blend(None, None, 0.5))

    def test_fade_in(self):
        result = blend(None, self.a, 0.25)
        self.assertEqual(result.color, RED)
        self.assertEqual(result.position, -1.0)
        self.assertEqual(result.style, LogoStyle.STACKED)
        self.assertAlmostEqual(result.opacity, 0.25)
        self.assertEqual(result.margin, EdgeInsets.all(2.5))

    def test_fade_out(self):
        result = blend(self.a, None, 0.25)
        self.assertEqual(result.position, -1.0)
        self.assertAlmostEqual(result.opacity, 0.75)
        self.assertEqual(result.margin, EdgeInsets.all(2.5))

    def test_general_case(self):
        result = blend(self.a, self.b, 0.5)
        self.assertAlmostEqual(result.position, 0.0)
        self.assertEqual(result.color, Color(127, 0, 127))
        self.assertEqual(result.margin, EdgeInsets.all(5))
        self.assertEqual(result.style, LogoStyle.HORIZONTAL)
        self.assertEqual(blend(self.a, self.b, 0.49).style, LogoStyle.STACKED)

    def test_opacity_clamped_position_not(self):
        faded = LogoDecoration(style=LogoStyle.HORIZONTAL, position=1.0, opacity=0.5)
        mark = LogoDecoration()
        over = blend(mark, faded, 1.5)
        self.assertAlmostEqual(over.position, 1.5)
        self.assertGreaterEqual(over.opacity, 0.0)
        under = blend(mark, faded, -1.0)
        self.assertAlmostEqual(under.position, -1.0)
        self.assertLessEqual(under.opacity, 1.0)
        for t in (-3.0, -0.5, 0.5, 1.5, 4.0):
            for result in (blend(mark, faded, t), blend(None, faded, t), blend(faded, None, t)):
                self.assertTrue(0.0 <= result.opacity <= 1.0)

    def test_lerp_from_and_to(self):
        self.assertIs(self.b.lerp_from(self.a, 1.0), self.b)
        self.assertIs(self.a.lerp_to(self.b, 0.0), self.a)


if __name__ == "__main__":
    unittest.main()
