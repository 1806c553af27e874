import tempfile
import unittest
from pathlib import Path

from config_io import load_json_config
from config_parsing import parse_maze_config, parse_viewer_settings
from models import DifficultyConfig, Tier
from utils import as_color, clamp_float, clamp_int, deep_get


class TestDifficultyConfig(unittest.TestCase):

    def test_defaults(self):
        cfg = DifficultyConfig.from_dict({})
        self.assertEqual(cfg, DifficultyConfig())
        self.assertEqual(cfg.size, 8)
        self.assertEqual(cfg.tier, Tier.BALANCED)
        self.assertTrue(cfg.optimize_path)

    def test_tier_preset_densities(self):
        cfg = DifficultyConfig.from_dict({"tier": "Complex"})
        self.assertEqual(cfg.tier, Tier.COMPLEX)
        self.assertEqual((cfg.min_wall_density, cfg.max_wall_density), (0.40, 0.75))

    def test_explicit_densities_override_preset(self):
        cfg = DifficultyConfig.from_dict(
            {"tier": "open", "min_wall_density": 0.1, "max_wall_density": 0.2}
        )
        self.assertEqual((cfg.min_wall_density, cfg.max_wall_density), (0.1, 0.2))

    def test_reversed_band_swapped(self):
        cfg = DifficultyConfig.from_dict({"min_wall_density": 0.6, "max_wall_density": 0.3})
        self.assertEqual((cfg.min_wall_density, cfg.max_wall_density), (0.3, 0.6))

    def test_clamping(self):
        self.assertEqual(DifficultyConfig.from_dict({"size": 1}).size, 2)
        self.assertEqual(DifficultyConfig.from_dict({"size": 1000}).size, 64)
        cfg = DifficultyConfig.from_dict({"min_wall_density": -1, "max_wall_density": 4})
        self.assertEqual((cfg.min_wall_density, cfg.max_wall_density), (0.0, 1.0))

    def test_bad_values_fall_back(self):
        cfg = DifficultyConfig.from_dict({"size": "big", "tier": "nightmare"})
        self.assertEqual(cfg.size, 8)
        self.assertEqual(cfg.tier, Tier.BALANCED)

    def test_config_is_immutable(self):
        cfg = DifficultyConfig()
        with self.assertRaises(Exception):
            cfg.size = 10

    def test_to_dict_round_trip(self):
        cfg = DifficultyConfig.for_tier(Tier.OPEN, size=6, optimize_path=False)
        self.assertEqual(DifficultyConfig.from_dict(cfg.to_dict()), cfg)


class TestConfigParsing(unittest.TestCase):

    def test_parse_maze_config_section(self):
        cfg = parse_maze_config({"maze": {"size": 10, "tier": "open"}})
        self.assertEqual(cfg.size, 10)
        self.assertEqual(cfg.tier, Tier.OPEN)

    def test_parse_maze_config_missing_section(self):
        self.assertEqual(parse_maze_config({"maze": "nope"}), DifficultyConfig())

    def test_viewer_defaults(self):
        s = parse_viewer_settings({})
        self.assertEqual((s.window_w, s.window_h), (640, 720))
        self.assertEqual(s.step_ms, 500)
        self.assertEqual(s.tile_size, 64)
        self.assertFalse(s.show_path)
        self.assertEqual(s.bg, (18, 20, 28))

    def test_viewer_overrides(self):
        s = parse_viewer_settings(
            {
                "window": {"width": 800, "title": "Level 2", "bg": [0, 0, 300]},
                "render": {"step_ms": 250, "show_path": True, "tile_size": "x"},
            }
        )
        self.assertEqual(s.window_w, 800)
        self.assertEqual(s.title, "Level 2")
        self.assertEqual(s.bg, (0, 0, 255))
        self.assertEqual(s.step_ms, 250)
        self.assertTrue(s.show_path)
        self.assertEqual(s.tile_size, 64)

    def test_helpers(self):
        self.assertEqual(deep_get({"a": {"b": 3}}, "a.b", None), 3)
        self.assertEqual(deep_get({"a": {"b": 3}}, "a.c", "d"), "d")
        self.assertEqual(as_color("red", (1, 2, 3)), (1, 2, 3))
        self.assertEqual(as_color([1, "x", 3], (9, 9, 9)), (9, 9, 9))
        self.assertEqual(clamp_int(300, 0, 255), 255)
        self.assertEqual(clamp_float(-0.5, 0.0, 1.0), 0.0)
        self.assertEqual(clamp_float(1.5, 0.0, 1.0), 1.0)
        self.assertEqual(clamp_float(0.3, 0.0, 1.0), 0.3)


class TestConfigIO(unittest.TestCase):

    def test_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            load_json_config(Path("does-not-exist.json"))

    def test_invalid_json_exits(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            path.write_text('{"maze": {,}', encoding="utf-8")
            with self.assertRaises(SystemExit):
                load_json_config(path)

    def test_loads_object(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            path.write_text('{"maze": {"size": 5}}', encoding="utf-8")
            self.assertEqual(load_json_config(path), {"maze": {"size": 5}})

    def test_shipped_config_parses(self):
        root = Path(__file__).resolve().parent.parent
        cfg = load_json_config(root / "config.json")
        self.assertEqual(parse_maze_config(cfg).size, 8)


if __name__ == "__main__":
    unittest.main()
