"""Project configuration loader for acfbuild.

Reads ``acfbuild.toml`` from the project root so that build scripts do not
have to pass the libacfutils and SDK locations on every invocation.  The file
is optional: without it every setting falls back to its default and the
current directory is treated as the root.

Example ``acfbuild.toml``::

    [paths]
    acfutils = "vendor/libacfutils"
    xplane_sdk = "vendor/SDK"

    [target]
    env = "ACFBUILD_TARGET_OS"
    # platform = "linux"   # pin the target instead of reading the environment

Usage::

    from acfbuild.config import load_config

    cfg = load_config()
    cfg.acfutils_root       # Path or None
    cfg.target_env          # "ACFBUILD_TARGET_OS"
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from acfbuild.platform import TARGET_ENV_VAR

CONFIG_FILENAME = "acfbuild.toml"


@dataclass
class BuildConfig:
    """Parsed project configuration with resolved paths."""

    # Directory holding acfbuild.toml (or cwd when there is none)
    root: Path

    # --- [paths] ---
    acfutils_root: Path | None = None
    sdk_root: Path | None = None

    # --- [target] ---
    target_env: str = TARGET_ENV_VAR
    platform_id: str | None = None

    # Path of the file that was loaded, if any
    config_path: Path | None = None


def _resolve(root: Path, rel: str | None) -> Path | None:
    """Resolve a path relative to project root."""
    if rel is None:
        return None
    p = Path(rel)
    if p.is_absolute():
        return p
    return root / p


def _table(raw: dict, name: str) -> dict:
    """Return the ``[name]`` table, or an empty one when it is absent."""
    value = raw.get(name, {})
    if not isinstance(value, dict):
        raise ValueError(f"'{name}' must be a table, got {type(value).__name__}")
    return value


def _str(table: dict, section: str, key: str, default: str | None = None) -> str | None:
    value = table.get(key, default)
    if value is not None and not isinstance(value, str):
        raise ValueError(f"'{section}.{key}' must be a string, got {type(value).__name__}")
    return value


def _find_root(start: Path | None = None) -> Path | None:
    """Walk up from *start* (or cwd) to the directory holding acfbuild.toml.

    Returns ``None`` when no parent has one.
    """
    candidate = (start or Path.cwd()).resolve()
    while True:
        if (candidate / CONFIG_FILENAME).exists():
            return candidate
        if candidate == candidate.parent:
            return None
        candidate = candidate.parent


def load_config(root: Path | None = None) -> BuildConfig:
    """Load acfbuild.toml.

    Args:
        root: Directory to search from.  Defaults to the current directory;
              parent directories are searched as well.

    Raises:
        tomllib.TOMLDecodeError: the file exists but is not valid TOML.
        ValueError: a table or key has the wrong type.
    """
    found = _find_root(root)
    if found is None:
        return BuildConfig(root=(root or Path.cwd()).resolve())

    toml_path = found / CONFIG_FILENAME
    with open(toml_path, "rb") as f:
        raw = tomllib.load(f)

    paths = _table(raw, "paths")
    target = _table(raw, "target")

    return BuildConfig(
        root=found,
        acfutils_root=_resolve(found, _str(paths, "paths", "acfutils")),
        sdk_root=_resolve(found, _str(paths, "paths", "xplane_sdk")),
        target_env=_str(target, "target", "env", TARGET_ENV_VAR),
        platform_id=_str(target, "target", "platform"),
        config_path=toml_path,
    )
