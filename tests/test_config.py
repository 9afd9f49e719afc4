import json
import math

import pytest

from mandelart.config import RenderConfig, load_config, normalise_config
from mandelart.errors import ConfigError
from mandelart.viewport import ViewportSpec


class TestNormaliseConfig:

    def test_defaults(self):
        cfg = normalise_config({})
        assert (cfg.focus_x, cfg.focus_y, cfg.range) == (-1.0, 0.005, 0.00005)
        assert (cfg.width, cfg.height) == (1920, 1080)
        assert cfg.algorithm == "mandelbrot"
        assert cfg.zoom == 0.99
        assert cfg.frames == 1
        assert cfg.threads >= 1

    def test_overrides_and_coercion(self):
        cfg = normalise_config({"focus_x": "0.25", "width": "64", "height": 48.0, "frames": 3,
                                "threads": 2, "algorithm": "Mandelbrot", "zoom": None})
        assert cfg == RenderConfig(focus_x=0.25, focus_y=0.005, range=0.00005, width=64, height=48,
                                   algorithm="mandelbrot", zoom=0.99, frames=3, threads=2)

    def test_viewport(self):
        cfg = normalise_config({"focus_x": -0.5, "focus_y": 0.0, "range": 3.0, "width": 8, "height": 6})
        assert cfg.viewport() == ViewportSpec(focus_x=-0.5, focus_y=0.0, range=3.0, width=8, height=6)

    @pytest.mark.parametrize("key, value", [
        ("width", 0),
        ("height", -4),
        ("frames", 2.5),
        ("threads", "many"),
        ("width", True),
        ("range", 0),
        ("range", -1.0),
        ("focus_x", "abc"),
        ("focus_y", math.nan),
        ("zoom", math.inf),
        ("algorithm", "julia"),
        ("colour", "red"),
    ])
    def test_invalid(self, key, value):
        with pytest.raises(ConfigError):
            normalise_config({key: value})

    def test_config_error_is_value_error(self):
        with pytest.raises(ValueError):
            normalise_config({"width": 0})


class TestLoadConfig:

    def test_no_path(self):
        assert load_config(None) == {}

    def test_reads_json_object(self, tmp_path):
        path = tmp_path / "cfg.json"
        path.write_text(json.dumps({"width": 32, "zoom": 0.5}), encoding="utf-8")
        assert load_config(str(path)) == {"width": 32, "zoom": 0.5}

    def test_rejects_non_object(self, tmp_path):
        path = tmp_path / "cfg.json"
        path.write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(ConfigError):
            load_config(str(path))

    def test_rejects_bad_json(self, tmp_path):
        path = tmp_path / "cfg.json"
        path.write_text("{width: 3", encoding="utf-8")
        with pytest.raises(ConfigError):
            load_config(str(path))

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError):
            load_config(str(tmp_path / "nope.json"))
