import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "logo"))
sys.path.insert(0, str(ROOT / "packages" / "core"))

from zeekr_core.cycler import StyleCycler, StyleNotifier
from zeekr_logo.decoration import LogoStyle


class StyleNotifierTests(unittest.TestCase):
    def test_listener_fires_only_on_change(self):
        notifier = StyleNotifier()
        seen = []
        notifier.add_listener(seen.append)
        notifier.value = LogoStyle.MARK_ONLY
        notifier.value = LogoStyle.STACKED
        self.assertEqual(seen, [LogoStyle.STACKED])

    def test_remove_listener(self):
        notifier = StyleNotifier()
        seen = []
        notifier.add_listener(seen.append)
        notifier.remove_listener(seen.append)
        notifier.value = LogoStyle.HORIZONTAL
        self.assertEqual(seen, [])

    def test_use_after_dispose(self):
        notifier = StyleNotifier()
        notifier.dispose()
        self.assertTrue(notifier.disposed)
        with self.assertRaises(RuntimeError):
            notifier.value = LogoStyle.STACKED
        with self.assertRaises(RuntimeError):
            notifier.add_listener(print)


class StyleCyclerTests(unittest.TestCase):
    def test_cycle_order(self):
        cycler = StyleCycler()
        self.assertEqual(cycler.notifier.value, LogoStyle.MARK_ONLY)
        self.assertEqual(
            [cycler.tick() for _ in range(4)],
            [LogoStyle.HORIZONTAL, LogoStyle.STACKED, LogoStyle.MARK_ONLY, LogoStyle.HORIZONTAL],
        )

    def test_virtual_time_schedule(self):
        cycler = StyleCycler(period_s=3.0)
        seen = []
        cycler.notifier.add_listener(seen.append)
        fired = 0
        for now in (0.0, 1.5, 2.9, 3.0, 5.0, 6.0, 9.0, 12.0):
            while fired < cycler.due_ticks(now):
                cycler.tick()
                fired += 1
        self.assertEqual(
            seen,
            [LogoStyle.HORIZONTAL, LogoStyle.STACKED, LogoStyle.MARK_ONLY, LogoStyle.HORIZONTAL],
        )

    def test_due_ticks(self):
        cycler = StyleCycler(period_s=3.0)
        self.assertEqual(cycler.period_ms, 3000)
        self.assertEqual(cycler.due_ticks(-1.0), 0)
        self.assertEqual(cycler.due_ticks(2.999), 0)
        self.assertEqual(cycler.due_ticks(3.0), 1)
        self.assertEqual(cycler.due_ticks(10.0), 3)

    def test_close_stops_ticks(self):
        with StyleCycler() as cycler:
            cycler.tick()
        self.assertTrue(cycler.closed)
        self.assertTrue(cycler.notifier.disposed)
        self.assertIsNone(cycler.tick())
        cycler.close()

    def test_rejects_non_positive_period(self):
        with self.assertRaises(ValueError):
            StyleCycler(period_s=0)


if __name__ == "__main__":
    unittest.main()
