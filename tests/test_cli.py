from __future__ import annotations

import contextlib
import io
from pathlib import Path
import tempfile
import unittest

import numpy as np
from PIL import Image

from main import main, scripted_events, sine_samples
from zoomplot import ScreenPoint


class CliTests(unittest.TestCase):
    def test_ticks_command(self) -> None:
        out = io.StringIO()
        with contextlib.redirect_stdout(out):
            rc = main(["ticks", "0", "100"])
        self.assertEqual(rc, 0)
        self.assertEqual(out.getvalue().strip(), "0 25 50 75 100")

    def test_ticks_command_zero_width(self) -> None:
        out = io.StringIO()
        with contextlib.redirect_stdout(out):
            main(["ticks", "5", "5"])
        self.assertEqual(out.getvalue().strip(), "5")

    def test_render_with_drag_writes_png(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            target = Path(td) / "plot.png"
            out = io.StringIO()
            with contextlib.redirect_stdout(out):
                rc = main(["render", str(target), "--samples", "50", "--drag", "20"])
            self.assertEqual(rc, 0)
            with Image.open(target) as img:
                self.assertEqual(img.size, (480, 240))
        self.assertIn("y_range=(-83.333, 116.667)", out.getvalue())

    def test_render_with_config_and_scroll(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            cfg = Path(td) / "plot.toml"
            cfg.write_text("[interaction]\ndefault_y_range = [0, 10]\n", encoding="utf-8")
            target = Path(td) / "plot.png"
            out = io.StringIO()
            with contextlib.redirect_stdout(out):
                main(["render", str(target), "--no-yticks", "--scroll", "10", "--config", str(cfg)])
            self.assertTrue(target.exists())
        self.assertIn("y_range=(0.500, 9.500)", out.getvalue())
        self.assertIn("ticks=[]", out.getvalue())

    def test_sine_samples_shape(self) -> None:
        samples = sine_samples(20)
        self.assertEqual(samples.shape, (20, 2))
        self.assertTrue(np.all(np.abs(samples[:, 1]) <= 80.0))
        self.assertEqual(sine_samples(0).shape, (0, 2))

    def test_scripted_drag_presses_moves_and_releases(self) -> None:
        batches = scripted_events(ScreenPoint(10.0, 10.0), 5.0, 0.0)
        kinds = [[e.event_type for e in batch] for batch in batches]
        self.assertEqual(kinds, [["pointer_move", "click"], ["pointer_move"], ["click"]])


if __name__ == "__main__":
    unittest.main()
