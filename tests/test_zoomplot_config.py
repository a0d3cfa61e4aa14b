from __future__ import annotations

from pathlib import Path
import tempfile
import unittest

from zoomplot import InteractionConfig, PlotConfig, PlotConfigError, PlotStyle, load_plot_config
from zoomplot.config import parse_plot_config
from zoomplot.surface import FontSpec


class PlotConfigTests(unittest.TestCase):
    def test_defaults_match_widget_constants(self) -> None:
        config = PlotConfig()
        self.assertEqual(config.style.axis_margin_px, 40.0)
        self.assertEqual(config.style.tick_length_px, 5.0)
        self.assertEqual(config.style.label_offset_px, 15.0)
        self.assertEqual(config.style.series_color, (0, 255, 0, 255))
        self.assertEqual(config.style.frame_color, (99, 99, 99, 255))
        self.assertEqual(config.interaction.default_y_range, (-100.0, 100.0))
        self.assertEqual(config.interaction.scroll_clamp, 10.0)
        self.assertEqual(config.interaction.zoom_rate, 0.01)

    def test_load_from_toml(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            path = Path(td) / "plot.toml"
            path.write_text(
                "\n".join(
                    [
                        "[style]",
                        "series_color = [255, 128, 0]",
                        "axis_margin_px = 48",
                        "font = { size_px = 12, family = \"monospace\" }",
                        "",
                        "[interaction]",
                        "default_y_range = [0, 1]",
                        "zoom_rate = 0.02",
                        "label_warning_threshold = 8",
                    ]
                ),
                encoding="utf-8",
            )
            config = load_plot_config(path)
        self.assertEqual(config.style.series_color, (255, 128, 0, 255))
        self.assertEqual(config.style.axis_margin_px, 48.0)
        self.assertEqual(config.style.font, FontSpec(size_px=12.0, family="monospace"))
        self.assertEqual(config.interaction.default_y_range, (0.0, 1.0))
        self.assertEqual(config.interaction.zoom_rate, 0.02)
        self.assertEqual(config.interaction.label_warning_threshold, 8)
        self.assertEqual(config.style.tick_length_px, PlotStyle().tick_length_px)

    def test_missing_file(self) -> None:
        with self.assertRaises(FileNotFoundError):
            load_plot_config("/nonexistent/zoomplot.toml")

    def test_invalid_toml(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            path = Path(td) / "bad.toml"
            path.write_text("[style\n", encoding="utf-8")
            with self.assertRaises(PlotConfigError):
                load_plot_config(path)

    def test_unknown_keys_are_logged_and_ignored(self) -> None:
        with self.assertLogs("zoomplot.config", level="WARNING") as logs:
            config = parse_plot_config({"style": {"sparkle": True}, "extras": {}})
        self.assertEqual(config, PlotConfig())
        self.assertEqual(len(logs.records), 2)

    def test_type_errors(self) -> None:
        with self.assertRaises(PlotConfigError):
            parse_plot_config({"style": {"series_color": [300, 0, 0]}})
        with self.assertRaises(PlotConfigError):
            parse_plot_config({"style": {"axis_margin_px": "wide"}})
        with self.assertRaises(PlotConfigError):
            parse_plot_config({"interaction": {"default_y_range": [1]}})
        with self.assertRaises(PlotConfigError):
            parse_plot_config({"interaction": {"label_warning_threshold": 1.5}})
        with self.assertRaises(PlotConfigError):
            parse_plot_config({"style": []})
        with self.assertRaises(PlotConfigError):
            InteractionConfig(scroll_clamp=0.0)
        with self.assertRaises(PlotConfigError):
            InteractionConfig(zoom_rate=-0.01)
        with self.assertRaises(PlotConfigError):
            InteractionConfig(zoom_rate=0.1)
        with self.assertRaises(PlotConfigError):
            parse_plot_config({"interaction": {"zoom_rate": 0.0}})


if __name__ == "__main__":
    unittest.main()
