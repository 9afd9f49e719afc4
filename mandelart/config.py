import json
import math
import os
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional

from mandelart.errors import ConfigError
from mandelart.rules import available_rules
from mandelart.viewport import ViewportSpec

def _default_threads() -> int:
    return os.cpu_count() or 1

@dataclass(frozen=True)
class RenderConfig:
    focus_x: float = -1.0
    focus_y: float = 0.005
    range: float = 0.00005
    width: int = 1920
    height: int = 1080
    algorithm: str = "mandelbrot"
    zoom: float = 0.99
    frames: int = 1
    threads: int = field(default_factory=_default_threads)

    def viewport(self) -> ViewportSpec:
        return ViewportSpec(focus_x=self.focus_x, focus_y=self.focus_y, range=self.range,
                            width=self.width, height=self.height)

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)

def load_config(config_path: Optional[str]) -> Dict[str, Any]:
    if not config_path:
        return {}
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            cfg = json.load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read config {config_path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Config {config_path} is not valid JSON: {e}") from e
    if not isinstance(cfg, dict):
        raise ConfigError("Config JSON must be an object.")
    return cfg

def _as_float(cfg: Dict[str, Any], key: str) -> float:
    value = cfg[key]
    try:
        out = float(value)
    except (TypeError, ValueError):
        raise ConfigError(f"{key}: {value!r} must be a floating point value!") from None
    if not math.isfinite(out):
        raise ConfigError(f"{key}: {value!r} must be finite.")
    return out

def _as_positive_int(cfg: Dict[str, Any], key: str) -> int:
    value = cfg[key]
    if isinstance(value, bool):
        raise ConfigError(f"{key}: {value!r} must be a positive integral value!")
    try:
        out = int(value)
    except (TypeError, ValueError):
        raise ConfigError(f"{key}: {value!r} must be a positive integral value!") from None
    if out != value and not isinstance(value, str):
        raise ConfigError(f"{key}: {value!r} must be a positive integral value!")
    if out <= 0:
        raise ConfigError(f"{key}: {value!r} must be a positive integral value!")
    return out

def normalise_config(cfg: Dict[str, Any]) -> RenderConfig:
    """Merge ``cfg`` over the defaults and validate it.

    Keys set to ``None`` fall back to their default. Unknown keys are
    rejected so that typos in a JSON config do not pass silently.
    """
    defaults = RenderConfig().as_dict()
    unknown = sorted(set(cfg) - set(defaults))
    if unknown:
        raise ConfigError(f"Unknown config field(s): {', '.join(unknown)}")

    merged = dict(defaults)
    merged.update({k: v for k, v in cfg.items() if v is not None})

    range_ = _as_float(merged, "range")
    if range_ <= 0:
        raise ConfigError(f"range: {merged['range']!r} must be greater than zero.")

    algorithm = str(merged["algorithm"]).strip().lower()
    if algorithm not in available_rules():
        raise ConfigError(f"Unknown algorithm {merged['algorithm']!r}; available: {', '.join(available_rules())}")

    return RenderConfig(
        focus_x=_as_float(merged, "focus_x"),
        focus_y=_as_float(merged, "focus_y"),
        range=range_,
        width=_as_positive_int(merged, "width"),
        height=_as_positive_int(merged, "height"),
        algorithm=algorithm,
        zoom=_as_float(merged, "zoom"),
        frames=_as_positive_int(merged, "frames"),
        threads=_as_positive_int(merged, "threads"),
    )
