import json
import os
import platform
import sys
import time
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

import importlib.metadata as importlib_metadata

from mandelband.model import RenderConfig

@dataclass(frozen=True)
class RunManifest:
    started_utc: str
    config: Dict[str, Any]
    python: Dict[str, Any]
    packages: Dict[str, str]
    system: Dict[str, Any]
    result: Dict[str, Any]

def _utc_iso() -> str:
    return time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime())

def _safe_pkg_version(name: str) -> Optional[str]:
    try:
        return importlib_metadata.version(name)
    except importlib_metadata.PackageNotFoundError:
        return None

def _config_dict(config: RenderConfig) -> Dict[str, Any]:
    ul = config.region.upper_left
    lr = config.region.lower_right
    return {
        "width": config.dimensions.width,
        "height": config.dimensions.height,
        "upper_left": [ul.real, ul.imag],
        "lower_right": [lr.real, lr.imag],
        "max_iterations": config.max_iterations,
        "threads": config.worker_count,
    }

def build_manifest(*, config: RenderConfig, summary: Dict[str, Any]) -> RunManifest:
    pkgs = {}
    for name in ["numpy", "numba", "Pillow", "tqdm"]:
        v = _safe_pkg_version(name)
        if v:
            pkgs[name] = v

    return RunManifest(
        started_utc=_utc_iso(),
        config=_config_dict(config),
        python={"version": sys.version, "executable": sys.executable},
        packages=pkgs,
        system={"platform": platform.platform(), "machine": platform.machine(), "cpu_count": os.cpu_count()},
        result=dict(summary),
    )

def write_manifest(path: str, manifest: RunManifest) -> None:
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(asdict(manifest), f, indent=2, sort_keys=True)
