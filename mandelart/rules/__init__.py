from __future__ import annotations

from typing import Callable, Dict, List

from mandelart.errors import ConfigError
from mandelart.rules.base import BOUNDED, EscapeRule
from mandelart.rules.mandelbrot import MAX_ITER, Mandelbrot

_RULES: Dict[str, Callable[[], EscapeRule]] = {
    "mandelbrot": Mandelbrot,
}


def available_rules() -> List[str]:
    return sorted(_RULES)


def get_rule(name: str) -> EscapeRule:
    key = str(name).strip().lower()
    if key not in _RULES:
        raise ConfigError(f"Unknown algorithm {name!r}; available: {', '.join(available_rules())}")
    return _RULES[key]()


__all__ = ["BOUNDED", "EscapeRule", "MAX_ITER", "Mandelbrot", "available_rules", "get_rule"]
