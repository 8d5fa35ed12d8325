"""flags.py – Compiler flags for building against libacfutils and the XPLM SDK.

Produces the ordered argument list a plugin build passes to its C compiler
(or to a bindings generator running clang):

1. ``-I`` include directories for libacfutils and the SDK headers
2. fixed flags shared by every platform
3. platform-specific flags from the platform profile
4. ``-D`` XPLM definitions: the IBM/LIN/APL identity triple, then the
   API-version macros

The exact strings and their order are what consumers rely on.
"""

from __future__ import annotations

import os
from pathlib import Path

import typer

from acfbuild.cli import (
    AcfutilsOption,
    JsonOption,
    OutputFormat,
    OutputFormatOption,
    OutputOption,
    PlatformOption,
    SdkOption,
    VerboseOption,
    emit,
    get_config,
    require_roots,
    resolve_platform,
)
from acfbuild.platform import Platform, short_tag

# Always present, platform independent.
BASE_CFLAGS: tuple[str, ...] = (
    "-std=c11",
    "-DLZMA_API_STATIC",
    "-DPCRE2_STATIC",
    "-DPCRE2_CODE_UNIT_WIDTH=8",
)

# SDK API levels the plugin is built against, oldest first.
XPLM_API_DEFINITIONS: tuple[str, ...] = (
    "XPLM200=1",
    "XPLM210=1",
    "XPLM300=1",
    "XPLM301=1",
    "XPLM302=1",
    "XPLM303=1",
)


def _join(root: str | os.PathLike[str], *parts: str) -> str:
    """Join path parts with ``/`` without touching the filesystem."""
    base = os.fspath(root)
    if len(base) > 1:
        base = base.rstrip("/")
    if base == "/":
        return "/" + "/".join(parts)
    return "/".join((base, *parts))


def include_dirs(
    platform: Platform,
    aux_lib_root: str | os.PathLike[str],
    sdk_root: str | os.PathLike[str],
) -> list[str]:
    """Return the header search directories, in search order."""
    return [
        _join(aux_lib_root, "include"),
        _join(aux_lib_root, short_tag(platform), "include"),
        _join(sdk_root, "CHeaders", "XPLM"),
        _join(sdk_root, "CHeaders", "Widgets"),
    ]


def xplm_definitions(platform: Platform) -> list[str]:
    """Return the XPLM preprocessor definitions in bare ``NAME=VALUE`` form.

    Exactly one of IBM/LIN/APL is ``1``. The API-version definitions follow
    and are identical for every platform.
    """
    return [*platform.profile.identity, *XPLM_API_DEFINITIONS]


def derive_compile_flags(
    platform: Platform,
    aux_lib_root: str | os.PathLike[str],
    sdk_root: str | os.PathLike[str],
) -> list[str]:
    """Build the full compiler argument list for *platform*.

    Paths are used for string construction only and are never checked for
    existence.
    """
    flags = [f"-I{d}" for d in include_dirs(platform, aux_lib_root, sdk_root)]
    flags.extend(BASE_CFLAGS)
    flags.extend(platform.profile.cflags)
    flags.extend(f"-D{d}" for d in xplm_definitions(platform))
    return flags


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------

app = typer.Typer(
    help="Print compiler flags for the target platform.",
    rich_markup_mode="rich",
    epilog="""\
[bold]Examples:[/bold]
  acfbuild cflags                           Flags for $ACFBUILD_TARGET_OS
  acfbuild cflags -p macos --format shell   One line, shell-quoted
  acfbuild cflags --acfutils libacfutils --sdk SDK
  acfbuild cflags --defines-only            Bare XPLM definitions (IBM=1 ...)

[dim]Paths default to paths.acfutils and paths.xplane_sdk in acfbuild.toml.[/dim]""",
)


@app.command()
def main(
    platform_id: str | None = PlatformOption,
    acfutils: Path | None = AcfutilsOption,
    sdk: Path | None = SdkOption,
    defines_only: bool = typer.Option(
        False, "--defines-only", help="Print only the XPLM definitions, without -D."
    ),
    fmt: OutputFormat = OutputFormatOption,
    output: Path | None = OutputOption,
    json_output: bool = JsonOption,
    verbose: bool = VerboseOption,
) -> None:
    """Print the compiler flags for the target platform, one per line."""
    if json_output:
        fmt = OutputFormat.json
    cfg = get_config(json_mode=json_output)
    plat = resolve_platform(cfg, platform_id, json_mode=json_output, verbose=verbose)
    if defines_only:
        flags = xplm_definitions(plat)
    else:
        aux_root, sdk_root = require_roots(cfg, acfutils, sdk, json_mode=json_output)
        flags = derive_compile_flags(plat, aux_root, sdk_root)
    emit(flags, fmt, output, key="cflags", platform=plat, json_mode=json_output)
