"""Settings loading with bundled defaults and external override support.

Settings are plain YAML.  The first file found in this order wins:

1. an explicit ``path`` passed to :func:`load_settings`
2. the file named by the ``BREPKIT_CONFIG`` environment variable
3. the user config file (``~/.config/brepkit/settings.yaml``, or
   ``%APPDATA%/brepkit/settings.yaml`` on Windows)
4. the bundled ``brepkit/data/settings.yaml``

Values missing from an override file fall back to the bundled defaults.

Example:
    export BREPKIT_CONFIG="$HOME/projects/cad/brepkit.yaml"
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field, fields
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

__all__ = [
    "BREPKIT_CONFIG",
    "MeshSettings",
    "DisplaySettings",
    "Settings",
    "load_settings",
    "clear_cache",
]

# Environment variable name for a custom settings file
BREPKIT_CONFIG = "BREPKIT_CONFIG"

_BUNDLED_SETTINGS = Path(__file__).parent / "data" / "settings.yaml"

SCHEMA_VERSION = 1


@dataclass(frozen=True)
class MeshSettings:
    linear_deflection: float = 0.1
    angular_deflection: float = 0.5


@dataclass(frozen=True)
class DisplaySettings:
    face_color: int = 0xDEDEDE
    edge_color: int = 0x333333
    vertex_color: int = 0xFF4500
    vertex_size: float = 5.0
    line_width: float = 1.0
    dash_scale: float = 100.0
    dash_size: float = 100.0
    gap_size: float = 100.0
    polygon_offset_factor: float = -4.0
    polygon_offset_units: float = -4.0


@dataclass(frozen=True)
class Settings:
    tolerance: float = 1e-6
    mesh: MeshSettings = field(default_factory=MeshSettings)
    display: DisplaySettings = field(default_factory=DisplaySettings)

    @classmethod
    def from_dict(cls, data: Dict[str, Any], base: Optional["Settings"] = None) -> "Settings":
        """Build settings from a parsed YAML mapping layered over ``base``."""
        base = base or cls()
        data = dict(data)
        version = data.pop("schema_version", SCHEMA_VERSION)
        if version != SCHEMA_VERSION:
            raise ValueError(f"Unsupported settings schema_version {version!r}")

        _reject_unknown(data, {"tolerance", "mesh", "display"}, "settings")
        mesh = _merge_section(MeshSettings, base.mesh, data.get("mesh") or {}, "mesh")
        display = _merge_section(DisplaySettings, base.display, data.get("display") or {}, "display")
        tolerance = float(data.get("tolerance", base.tolerance))
        if tolerance <= 0:
            raise ValueError(f"tolerance must be positive, got {tolerance}")
        return cls(tolerance=tolerance, mesh=mesh, display=display)


def _reject_unknown(data: Dict[str, Any], allowed, where: str) -> None:
    unknown = sorted(set(data) - set(allowed))
    if unknown:
        raise ValueError(f"Unknown key(s) in {where}: {unknown}")


def _merge_section(section_cls, base, data: Dict[str, Any], where: str):
    if not isinstance(data, dict):
        raise ValueError(f"Section '{where}' must be a mapping")
    names = {f.name: f.type for f in fields(section_cls)}
    _reject_unknown(data, names, where)
    values = {}
    for name in names:
        current = getattr(base, name)
        raw = data.get(name, current)
        values[name] = type(current)(raw)
    return section_cls(**values)


def _user_settings_path() -> Path:
    if sys.platform == "win32":
        config_base = Path(os.environ.get("APPDATA", "~")).expanduser()
    else:
        config_base = Path.home() / ".config"
    return config_base / "brepkit" / "settings.yaml"


def _load_yaml(path: Path) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid settings format in {path}: expected dict at root")
    return data


def _resolve_path(path: Optional[Path]) -> Optional[Path]:
    if path is not None:
        if not path.exists():
            raise FileNotFoundError(f"Settings file not found: {path}")
        return path

    env_path = os.environ.get(BREPKIT_CONFIG)
    if env_path:
        candidate = Path(env_path).expanduser()
        if not candidate.exists():
            raise FileNotFoundError(f"{BREPKIT_CONFIG} points at a missing file: {candidate}")
        return candidate

    user = _user_settings_path()
    if user.is_file():
        return user
    return None


@lru_cache(maxsize=8)
def _load_settings_cached(path_str: Optional[str], env_path: Optional[str]) -> Settings:
    defaults = Settings.from_dict(_load_yaml(_BUNDLED_SETTINGS))
    path = _resolve_path(Path(path_str) if path_str else None)
    if path is None:
        return defaults
    return Settings.from_dict(_load_yaml(path), base=defaults)


def load_settings(path: Optional[Union[str, Path]] = None) -> Settings:
    """Load settings, layering the first override file found over the defaults."""
    return _load_settings_cached(
        str(path) if path is not None else None,
        os.environ.get(BREPKIT_CONFIG),
    )


def clear_cache() -> None:
    """Forget cached settings; call after editing a settings file."""
    _load_settings_cached.cache_clear()
