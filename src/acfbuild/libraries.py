"""libraries.py – Link library list for plugins using libacfutils.

The list is assembled in a fixed order; platform-specific entries are taken
from the platform profile and slotted in at their positions. Linkers that
resolve static archives left to right depend on this order, so it must not
be sorted or de-duplicated by consumers.

macOS links OpenGL as a framework. That entry is written as
``framework=OpenGL``; :func:`linker_args` expands it to
``-framework OpenGL``.
"""

from __future__ import annotations

from pathlib import Path

import typer

from acfbuild.cli import (
    JsonOption,
    OutputFormat,
    OutputFormatOption,
    OutputOption,
    PlatformOption,
    VerboseOption,
    emit,
    get_config,
    resolve_platform,
)
from acfbuild.platform import Platform

FRAMEWORK_PREFIX = "framework="

# libacfutils itself and the graphics/geo stack it is built on.
COMMON_LIBS: tuple[str, ...] = (
    "acfutils",
    "lzma",
    "iconv",
    "cairo",
    "pixman-1",
    "freetype",
    "png16",
    "shp",
    "proj",
)

TLS_LIBS: tuple[str, ...] = ("curl", "ssl", "crypto")
ZLIB = "z"
XML_REGEX_LIBS: tuple[str, ...] = ("xml2", "pcre2-8")


def derive_link_libraries(platform: Platform) -> list[str]:
    """Return the ordered library names to link for *platform*."""
    profile = platform.profile
    libs = [*COMMON_LIBS, profile.glew_lib, *TLS_LIBS]
    libs.extend(profile.gdi_libs)
    libs.append(ZLIB)
    libs.extend(profile.net_libs)
    libs.extend(profile.thread_libs)
    libs.extend(XML_REGEX_LIBS)
    libs.extend(profile.system_libs)
    libs.append(profile.opengl_lib)
    return libs


def is_framework(name: str) -> bool:
    return name.startswith(FRAMEWORK_PREFIX)


def framework_name(name: str) -> str:
    """Strip the ``framework=`` prefix from a framework reference."""
    if not is_framework(name):
        raise ValueError(f"Not a framework reference: {name!r}")
    return name[len(FRAMEWORK_PREFIX):]


def linker_args(platform: Platform) -> list[str]:
    """Render the library list as linker arguments (``-lfoo``, ``-framework Foo``)."""
    args: list[str] = []
    for name in derive_link_libraries(platform):
        if is_framework(name):
            args.extend(("-framework", framework_name(name)))
        else:
            args.append(f"-l{name}")
    return args


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------

app = typer.Typer(
    help="Print the link library list for the target platform.",
    rich_markup_mode="rich",
    epilog="""\
[bold]Examples:[/bold]
  acfbuild libs                     Library names, one per line
  acfbuild libs -p windows --json   JSON object with platform and libs
  acfbuild libs --linker            As linker arguments (-lfoo, -framework Foo)""",
)


@app.command()
def main(
    platform_id: str | None = PlatformOption,
    linker: bool = typer.Option(
        False, "--linker", "-l", help="Print as linker arguments instead of bare names."
    ),
    fmt: OutputFormat = OutputFormatOption,
    output: Path | None = OutputOption,
    json_output: bool = JsonOption,
    verbose: bool = VerboseOption,
) -> None:
    """Print the libraries to link for the target platform, in link order."""
    if json_output:
        fmt = OutputFormat.json
    cfg = get_config(json_mode=json_output)
    plat = resolve_platform(cfg, platform_id, json_mode=json_output, verbose=verbose)
    libs = linker_args(plat) if linker else derive_link_libraries(plat)
    emit(libs, fmt, output, key="libs", platform=plat, json_mode=json_output)
