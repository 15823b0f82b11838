import json
import sys
import tempfile
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "logo"))
sys.path.insert(0, str(ROOT / "packages" / "core"))

from zeekr_core.config import CONFIG_VERSION, AppConfig, load_config, save_config
from zeekr_logo.curves import FAST_OUT_SLOW_IN
from zeekr_logo.decoration import LogoStyle
from zeekr_logo.geometry import Color


class ConfigTests(unittest.TestCase):
    def test_load_default_when_missing(self):
        with tempfile.TemporaryDirectory() as tmp:
            cfg = load_config(Path(tmp) / "missing.json")
            self.assertIsInstance(cfg, AppConfig)
            self.assertEqual(cfg.logo.style, "markOnly")
            self.assertEqual(cfg.animation.cycle_period_ms, 3000)
            self.assertEqual(cfg.ui.width_factor, 0.5)
            self.assertIs(cfg.animation.curve_fn(), FAST_OUT_SLOW_IN)

    def test_save_and_reload(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            cfg = load_config(path)
            cfg.logo.style = "stacked"
            cfg.animation.duration_ms = 400
            save_config(cfg, path)
            reloaded = load_config(path)
            self.assertEqual(reloaded.logo.style, "stacked")
            self.assertEqual(reloaded.animation.duration_ms, 400)
            self.assertEqual(reloaded.config_version, CONFIG_VERSION)

    def test_migrate_v1_shape(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            old = {"color": "#FFFF0000", "style": "horizontal", "duration_ms": 300}
            path.write_text(json.dumps(old), encoding="utf-8")
            cfg = load_config(path)
            self.assertEqual(cfg.config_version, 2)
            self.assertEqual(cfg.logo.color, "#FFFF0000")
            self.assertEqual(cfg.logo.style, "horizontal")
            self.assertEqual(cfg.animation.duration_ms, 300)

    def test_invalid_values_normalized(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            raw = {
                "config_version": 2,
                "logo": {"color": "not-a-color", "style": "diagonal"},
                "animation": {"curve": "wobbly", "cycle_period_ms": 10},
                "render": {"supersample": 9},
            }
            path.write_text(json.dumps(raw), encoding="utf-8")
            cfg = load_config(path)
            self.assertEqual(cfg.logo.color, "#FFFFFFFF")
            self.assertEqual(cfg.logo.style, "markOnly")
            self.assertEqual(cfg.animation.curve, "fastOutSlowIn")
            self.assertEqual(cfg.animation.cycle_period_ms, 250)
            self.assertEqual(cfg.render.supersample, 4)

    def test_unreadable_file_falls_back(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            path.write_text("{not json", encoding="utf-8")
            self.assertEqual(load_config(path), AppConfig())

    def _load_raw(self, raw):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            path.write_text(json.dumps(raw), encoding="utf-8")
            with self.assertLogs("zeekr", level="WARNING") as logs:
                cfg = load_config(path)
        return cfg, logs

    def test_wrong_type_size_falls_back(self):
        cfg, logs = self._load_raw({"logo": {"size": "big", "style": "stacked"}})
        self.assertIsNone(cfg.logo.size)
        self.assertEqual(cfg.logo.style, "stacked")
        self.assertEqual(logs.records[0].event, "config_invalid")

    def test_wrong_type_duration_falls_back(self):
        cfg, _logs = self._load_raw({"animation": {"duration_ms": "fast", "cycle_period_ms": 1000}})
        self.assertEqual(cfg.animation.duration_ms, 750)
        self.assertEqual(cfg.animation.cycle_period_ms, 1000)

    def test_non_object_root_falls_back(self):
        cfg, logs = self._load_raw([1, 2])
        self.assertEqual(cfg, AppConfig())
        self.assertEqual(logs.records[0].event, "config_invalid")

    def test_non_object_section_falls_back(self):
        cfg, _logs = self._load_raw({"config_version": 2, "ui": 5, "render": {"supersample": True}})
        self.assertEqual(cfg.ui.width_factor, 0.5)
        self.assertEqual(cfg.render.supersample, 2)

    def test_unhashable_curve_and_bad_version(self):
        cfg, _logs = self._load_raw({"config_version": "two", "animation": {"curve": ["linear"]}, "style": "stacked"})
        self.assertEqual(cfg.animation.curve, "fastOutSlowIn")
        self.assertEqual(cfg.logo.style, "stacked")

    def test_non_finite_number_falls_back(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            path.write_text('{"config_version": 2, "ui": {"width_factor": NaN}}', encoding="utf-8")
            cfg = load_config(path)
        self.assertEqual(cfg.ui.width_factor, 0.5)

    def test_decoration_from_config(self):
        cfg = AppConfig()
        cfg.logo.text_color = "#80102030"
        cfg.logo.style = "stacked"
        decoration = cfg.logo.decoration()
        self.assertEqual(decoration.style, LogoStyle.STACKED)
        self.assertEqual(decoration.text_color, Color(0x10, 0x20, 0x30, 0x80))
        self.assertEqual(decoration.position, -1.0)


if __name__ == "__main__":
    unittest.main()
