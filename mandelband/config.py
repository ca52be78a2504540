import json
import math
import os
from typing import Any, Callable, Dict, Optional, Tuple, TypeVar

from mandelband.model import ImageDimensions, PlaneRegion, RenderConfig

T = TypeVar("T")

DEFAULT_MAX_ITERATIONS = 255
# kernels count in int64 and scale counts by 255
MAX_ITERATIONS_CAP = (2 ** 63 - 1) // 255


class ConfigError(ValueError):
    """Render parameters could not be parsed or describe an impossible render."""


def parse_pair(target: str, separator: str, kind: Callable[[str], T]) -> Optional[Tuple[T, T]]:
    """
    Parse `target` as "<left><separator><right>", like "400x600" or "1.0,0.5",
    converting both halves with `kind`. Returns None unless there is exactly
    one separator and both halves convert.
    """
    left, sep, right = target.partition(separator)
    if not sep or separator in right:
        return None
    try:
        return kind(left), kind(right)
    except ValueError:
        return None


def parse_complex(target: str) -> Optional[complex]:
    """Parse "re,im" into a complex number, or None."""
    pair = parse_pair(target, ",", float)
    if pair is None:
        return None
    return complex(pair[0], pair[1])


def load_config(config_path: Optional[str]) -> Dict[str, Any]:
    if not config_path:
        return {}
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            cfg = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Config {config_path} is not valid JSON: {e}") from e
    if not isinstance(cfg, dict):
        raise ConfigError("Config JSON must be an object.")
    return cfg


def _positive_int(cfg: Dict[str, Any], key: str) -> int:
    value = cfg[key]
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise ConfigError(f"{key} must be an integer, got {value!r}.")
    try:
        out = int(value)
    except ValueError as e:
        raise ConfigError(f"{key} must be an integer, got {value!r}.") from e
    if out <= 0:
        raise ConfigError(f"{key} must be positive, got {out}.")
    return out


def _point(cfg: Dict[str, Any], key: str) -> complex:
    value = cfg[key]
    if isinstance(value, str):
        point = parse_complex(value)
        if point is None:
            raise ConfigError(f"error parsing {key.replace('_', ' ')} value {value!r}, expected RE,IM.")
    elif isinstance(value, (list, tuple)) and len(value) == 2:
        try:
            point = complex(float(value[0]), float(value[1]))
        except (TypeError, ValueError) as e:
            raise ConfigError(f"{key} must be [re, im], got {value!r}.") from e
    else:
        raise ConfigError(f"{key} must be \"re,im\" or [re, im], got {value!r}.")
    if not (math.isfinite(point.real) and math.isfinite(point.imag)):
        raise ConfigError(f"{key} must be finite, got {value!r}.")
    return point


def _dimensions(cfg: Dict[str, Any]) -> ImageDimensions:
    if "pixels" in cfg:
        pair = parse_pair(str(cfg["pixels"]), "x", int)
        if pair is None:
            raise ConfigError(f"error parsing image dimensions {cfg['pixels']!r}, expected WIDTHxHEIGHT.")
        cfg = dict(cfg, width=pair[0], height=pair[1])
    for r in ("width", "height"):
        if r not in cfg:
            raise ConfigError(f"Missing config field: {r}")
    return ImageDimensions(width=_positive_int(cfg, "width"), height=_positive_int(cfg, "height"))


def normalise_config(cfg: Dict[str, Any]) -> Tuple[RenderConfig, str]:
    """
    Validate a raw parameter mapping and build the RenderConfig plus the
    output path. Every ConfigError is raised here so the render itself never
    sees a bad value.
    """
    for r in ("output", "upper_left", "lower_right"):
        if r not in cfg:
            raise ConfigError(f"Missing config field: {r}")

    dimensions = _dimensions(cfg)
    upper_left = _point(cfg, "upper_left")
    lower_right = _point(cfg, "lower_right")
    if not upper_left.real < lower_right.real:
        raise ConfigError("upper_left must lie left of lower_right (upper_left.re < lower_right.re).")
    if not upper_left.imag > lower_right.imag:
        raise ConfigError("upper_left must lie above lower_right (upper_left.im > lower_right.im).")

    out = dict(cfg)
    out.setdefault("threads", os.cpu_count() or 1)
    out.setdefault("max_iterations", DEFAULT_MAX_ITERATIONS)

    max_iterations = _positive_int(out, "max_iterations")
    if max_iterations > MAX_ITERATIONS_CAP:
        raise ConfigError(f"max_iterations must be at most {MAX_ITERATIONS_CAP}, got {max_iterations}.")

    config = RenderConfig(
        dimensions=dimensions,
        region=PlaneRegion(upper_left=upper_left, lower_right=lower_right),
        max_iterations=max_iterations,
        worker_count=_positive_int(out, "threads"),
    )
    return config, str(cfg["output"])
