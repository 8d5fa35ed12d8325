"""Shared CLI utilities for acfbuild commands.

Provides common Typer options, config-loading helpers, platform resolution
and standardised output / error helpers so that every command gets the same
``--platform`` handling, error reporting and output formats.

Usage in a command module::

    import typer
    from acfbuild.cli import PlatformOption, get_config, resolve_platform

    app = typer.Typer()

    @app.command()
    def main(platform_id: str | None = PlatformOption) -> None:
        cfg = get_config()
        plat = resolve_platform(cfg, platform_id)
        ...
"""

from __future__ import annotations

import contextlib
import json
import os
import shlex
from enum import Enum
from pathlib import Path
from typing import Any, NoReturn

import typer
from rich.console import Console
from rich.markup import escape

from acfbuild.config import CONFIG_FILENAME, BuildConfig, load_config
from acfbuild.platform import Platform, PlatformError, current_platform, resolve


class OutputFormat(str, Enum):
    lines = "lines"
    shell = "shell"
    json = "json"


# ---------------------------------------------------------------------------
# Re-usable Typer options
# ---------------------------------------------------------------------------

PlatformOption: str | None = typer.Option(
    None,
    "--platform",
    "-p",
    help="Target platform (windows, macos, linux). Overrides acfbuild.toml and the environment.",
)

AcfutilsOption: Path | None = typer.Option(
    None, "--acfutils", help="libacfutils root (default: paths.acfutils in acfbuild.toml)."
)

SdkOption: Path | None = typer.Option(
    None, "--sdk", help="X-Plane SDK root (default: paths.xplane_sdk in acfbuild.toml)."
)

OutputFormatOption: OutputFormat = typer.Option(
    OutputFormat.lines, "--format", "-f", help="Output format."
)

OutputOption: Path | None = typer.Option(
    None, "--output", "-o", help="Write to this file instead of stdout."
)

JsonOption: bool = typer.Option(False, "--json", help="Output results as JSON.")

VerboseOption: bool = typer.Option(
    False, "--verbose", "-v", help="Report how the platform was resolved on stderr."
)


# ---------------------------------------------------------------------------
# Standardised output helpers
# ---------------------------------------------------------------------------

_err_console = Console(stderr=True)


def error_exit(msg: str, *, json_mode: bool = False, code: int = 1) -> NoReturn:
    """Print *msg* as an error and ``raise typer.Exit(code)``."""
    if json_mode:
        print(json.dumps({"error": msg}, indent=2))
    else:
        _err_console.print(f"[red bold]error:[/red bold] {escape(msg)}")
    raise typer.Exit(code=code)


def json_print(data: dict[str, Any] | list[Any]) -> None:
    """Print *data* as pretty-printed JSON to stdout."""
    print(json.dumps(data, indent=2))


def render(items: list[str], fmt: OutputFormat, *, key: str, platform: Platform) -> str:
    """Render an argument list in the requested output format."""
    if fmt is OutputFormat.json:
        return json.dumps({"platform": platform.value, key: items}, indent=2) + "\n"
    if fmt is OutputFormat.shell:
        return shlex.join(items) + "\n"
    return "".join(f"{item}\n" for item in items)


def emit(
    items: list[str],
    fmt: OutputFormat,
    output: Path | None,
    *,
    key: str,
    platform: Platform,
    json_mode: bool = False,
) -> None:
    """Write rendered *items* to *output*, or to stdout when it is ``None``."""
    text = render(items, fmt, key=key, platform=platform)
    if output is None:
        typer.echo(text, nl=False)
        return
    try:
        write_atomic(output, text)
    except OSError as exc:
        error_exit(f"cannot write {output}: {exc}", json_mode=json_mode)
    _err_console.print(f"[dim]wrote {len(items)} entries to {escape(str(output))}[/dim]")


def write_atomic(path: Path, text: str) -> None:
    """Replace *path* with *text* in one step so readers never see a partial file."""
    tmp = path.with_name(f".{path.name}.tmp")
    try:
        tmp.write_text(text, encoding="utf-8")
        os.replace(tmp, path)
    except BaseException:
        with contextlib.suppress(OSError):
            tmp.unlink()
        raise


# ---------------------------------------------------------------------------
# Config and platform resolution
# ---------------------------------------------------------------------------


def get_config(root: Path | None = None, *, json_mode: bool = False) -> BuildConfig:
    """Load acfbuild.toml, reporting a malformed file as a CLI error."""
    try:
        return load_config(root)
    except ValueError as exc:
        error_exit(f"Invalid {CONFIG_FILENAME}: {exc}", json_mode=json_mode)


def resolve_platform(
    cfg: BuildConfig,
    platform_id: str | None = None,
    *,
    json_mode: bool = False,
    verbose: bool = False,
) -> Platform:
    """Resolve the target platform for a command.

    Precedence: explicit ``--platform``, then ``[target].platform`` in
    acfbuild.toml, then the target environment variable.
    """
    try:
        if platform_id is not None:
            plat, source = resolve(platform_id), "--platform"
        elif cfg.platform_id is not None:
            plat, source = resolve(cfg.platform_id), CONFIG_FILENAME
        else:
            plat, source = current_platform(var=cfg.target_env), f"${cfg.target_env}"
    except PlatformError as exc:
        error_exit(str(exc), json_mode=json_mode)
    if verbose:
        _err_console.print(f"[dim]target platform: {plat.value} (from {source})[/dim]")
    return plat


def require_roots(
    cfg: BuildConfig,
    acfutils: Path | None,
    sdk: Path | None,
    *,
    json_mode: bool = False,
) -> tuple[Path, Path]:
    """Return the libacfutils and SDK roots, preferring command-line values."""
    aux_root = acfutils if acfutils is not None else cfg.acfutils_root
    sdk_root = sdk if sdk is not None else cfg.sdk_root
    if aux_root is None:
        error_exit(
            f"acfutils root not configured (use --acfutils or set paths.acfutils in {CONFIG_FILENAME})",
            json_mode=json_mode,
        )
    if sdk_root is None:
        error_exit(
            f"X-Plane SDK root not configured (use --sdk or set paths.xplane_sdk in {CONFIG_FILENAME})",
            json_mode=json_mode,
        )
    return aux_root, sdk_root
