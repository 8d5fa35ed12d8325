"""show.py – Overview of everything acfbuild derives for the target.

Prints a Rich table with the resolved platform, include directories,
preprocessor definitions and link libraries, or the same data as JSON.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.table import Table

from acfbuild.cli import (
    AcfutilsOption,
    JsonOption,
    PlatformOption,
    SdkOption,
    get_config,
    json_print,
    require_roots,
    resolve_platform,
)
from acfbuild.flags import BASE_CFLAGS, include_dirs, xplm_definitions
from acfbuild.libraries import derive_link_libraries
from acfbuild.platform import Platform, short_tag


def build_summary(platform: Platform, aux_root: Path, sdk_root: Path) -> dict[str, Any]:
    """Collect the derived settings for *platform* into a plain dict."""
    return {
        "platform": platform.value,
        "short_tag": short_tag(platform),
        "include_dirs": include_dirs(platform, aux_root, sdk_root),
        "cflags": [*BASE_CFLAGS, *platform.profile.cflags],
        "definitions": xplm_definitions(platform),
        "libs": derive_link_libraries(platform),
    }


def _render_table(summary: dict[str, Any]) -> Table:
    table = Table(title=f"acfbuild: {summary['platform']} ({summary['short_tag']})")
    table.add_column("Setting", style="cyan", no_wrap=True)
    table.add_column("Value")
    table.add_row("Include dirs", "\n".join(summary["include_dirs"]))
    table.add_row("Compiler flags", " ".join(summary["cflags"]))
    table.add_row("Definitions", " ".join(summary["definitions"]))
    table.add_row("Libraries", " ".join(summary["libs"]))
    return table


app = typer.Typer(
    help="Show the resolved platform, include paths, definitions and libraries.",
    rich_markup_mode="rich",
)


@app.command()
def main(
    platform_id: str | None = PlatformOption,
    acfutils: Path | None = AcfutilsOption,
    sdk: Path | None = SdkOption,
    json_output: bool = JsonOption,
) -> None:
    """Show everything derived for the target platform."""
    cfg = get_config(json_mode=json_output)
    plat = resolve_platform(cfg, platform_id, json_mode=json_output)
    aux_root, sdk_root = require_roots(cfg, acfutils, sdk, json_mode=json_output)
    summary = build_summary(plat, aux_root, sdk_root)
    if json_output:
        json_print(summary)
        return
    Console().print(_render_table(summary))
