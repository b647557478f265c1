# src/hatetris/utils/paths.py
from __future__ import annotations

from importlib.resources import files
from pathlib import Path


def package_root() -> Path:
    """
    Return the installed hatetris package directory.

    Bundled YAML (rotation systems, game presets) ships as package data
    beside the code, so this works for editable and regular installs alike.
    """
    return Path(str(files("hatetris")))


def assets_dir() -> Path:
    """
    Return package_root/assets (must exist).
    """
    p = package_root() / "assets"
    if not p.is_dir():
        raise FileNotFoundError(f"Assets directory not found: {p}")
    return p


def rotation_systems_dir() -> Path:
    p = assets_dir() / "rotation_systems"
    if not p.is_dir():
        raise FileNotFoundError(f"Rotation systems directory not found: {p}")
    return p


def configs_dir() -> Path:
    return package_root() / "configs"


def resolve_config_path(raw: str) -> Path:
    """
    Resolve a config path that may be absolute, cwd-relative, or a bare name
    of a bundled preset under package_root/configs (with or without .yaml).
    """
    s = str(raw).strip().strip('"').strip("'")
    if not s:
        raise ValueError("empty path")

    p_raw = Path(s)
    if p_raw.is_absolute():
        return p_raw.resolve()

    candidates = [p_raw.resolve(), (configs_dir() / p_raw).resolve()]
    # also accept "configs/<name>"
    if p_raw.parts and p_raw.parts[0].lower() == "configs" and len(p_raw.parts) > 1:
        candidates.append((configs_dir() / Path(*p_raw.parts[1:])).resolve())
    if p_raw.suffix == "":
        candidates.append((configs_dir() / f"{p_raw.name}.yaml").resolve())

    for cand in candidates:
        if cand.is_file():
            return cand

    tried = "\n".join(f"  - {c}" for c in candidates)
    raise FileNotFoundError(f"path not found. tried:\n{tried}")


__all__ = ["package_root", "assets_dir", "rotation_systems_dir", "configs_dir", "resolve_config_path"]
