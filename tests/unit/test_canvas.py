import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "logo"))

from zeekr_logo.canvas import LinearGradient, PathBuilder, RecordingCanvas, Restore, Save, SaveLayer
from zeekr_logo.geometry import WHITE, Offset, Rect


class RecordingCanvasTests(unittest.TestCase):
    def test_saved_scope_restores_on_exception(self):
        canvas = RecordingCanvas()
        with self.assertRaises(KeyError):
            with canvas.saved():
                canvas.translate(1, 2)
                raise KeyError("boom")
        self.assertEqual(canvas.depth, 0)
        self.assertIsInstance(canvas.commands[0], Save)
        self.assertIsInstance(canvas.commands[-1], Restore)

    def test_nested_layers(self):
        canvas = RecordingCanvas()
        with canvas.layer(Rect(0, 0, 10, 10), opacity=0.5):
            self.assertEqual(canvas.depth, 1)
            with canvas.saved():
                self.assertEqual(canvas.depth, 2)
        self.assertEqual(canvas.depth, 0)
        self.assertEqual(canvas.commands[0], SaveLayer(Rect(0, 0, 10, 10), 0.5))
        self.assertEqual(canvas.commands[-2:], [Restore(), Restore()])

    def test_unbalanced_restore(self):
        with self.assertRaises(RuntimeError):
            RecordingCanvas().restore()

    def test_uniform_scale(self):
        canvas = RecordingCanvas()
        canvas.scale(3)
        self.assertEqual((canvas.commands[0].sx, canvas.commands[0].sy), (3, 3))


class PathTests(unittest.TestCase):
    def test_builder_splits_subpaths(self):
        path = (
            PathBuilder()
            .move_to(0, 0)
            .line_to(4, 0)
            .line_to(4, 4)
            .close()
            .move_to(10, 10)
            .line_to(11, 10)
            .build()
        )
        # Degenerate two-point subpaths are dropped.
        self.assertEqual(len(path.subpaths), 1)
        self.assertEqual(path.bounds(), Rect(0, 0, 4, 4))

    def test_gradient_requires_matching_stops(self):
        with self.assertRaises(ValueError):
            LinearGradient(Offset(0, 0), Offset(1, 0), (WHITE, WHITE), (0.0,))


if __name__ == "__main__":
    unittest.main()
