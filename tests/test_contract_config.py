from __future__ import annotations

import os
import unittest
from unittest import mock

from daygrid.config import GridConfig, config_from_dict, config_from_env


class TestGridConfigContract(unittest.TestCase):
    def test_defaults(self) -> None:
        cfg = config_from_dict(None)
        self.assertEqual(cfg, GridConfig())
        self.assertEqual((cfg.window_start_min, cfg.window_end_min), (480, 1020))
        self.assertEqual(cfg.grid_height_px, 9 * 60 * 2.0)

    def test_clamps_and_fallbacks(self) -> None:
        cfg = config_from_dict(
            {
                "day_start_hour": 18,
                "day_end_hour": 6,
                "pixels_per_minute": -1,
                "snap_minutes": 0,
                "event_gap_px": -3,
            }
        )
        self.assertEqual((cfg.day_start_hour, cfg.day_end_hour), (0, 24))
        self.assertEqual(cfg.pixels_per_minute, 2.0)
        self.assertEqual(cfg.snap_minutes, 15)
        self.assertEqual(cfg.event_gap_px, 0)

    def test_env_overlay(self) -> None:
        env = {"DAYGRID_DAY_WINDOW": "07:00-19:00", "DAYGRID_PX_PER_MIN": "1.5", "DAYGRID_SNAP": "10"}
        with mock.patch.dict(os.environ, env):
            cfg = config_from_env({"min_height_px": 20})
        self.assertEqual((cfg.day_start_hour, cfg.day_end_hour), (7, 19))
        self.assertEqual(cfg.pixels_per_minute, 1.5)
        self.assertEqual(cfg.snap_minutes, 10)
        self.assertEqual(cfg.min_height_px, 20)

    def test_env_window_must_be_whole_hours(self) -> None:
        with mock.patch.dict(os.environ, {"DAYGRID_DAY_WINDOW": "07:30-19:00"}):
            with self.assertRaises(ValueError):
                config_from_env()


if __name__ == "__main__":
    unittest.main(verbosity=2)
