"""main.py – Umbrella CLI entry point for acfbuild.

Imports and registers all subcommand typer apps from a single registry.

Single-command modules are registered as flat ``app.command()`` entries;
only true multi-command modules (currently only ``cfg``) use ``add_typer()``.
"""

import importlib

import typer

from acfbuild import __version__
from acfbuild.cli import PlatformOption, get_config, resolve_platform
from acfbuild.platform import short_tag

app = typer.Typer(
    help="Compiler flags and link libraries for X-Plane plugins built on libacfutils.",
    rich_markup_mode="rich",
    epilog="""\
[bold]Typical use in a build script:[/bold]
  export ACFBUILD_TARGET_OS=linux
  cc $(acfbuild cflags --format shell) -c plugin.c
  cc -shared plugin.o $(acfbuild libs --linker --format shell)

[dim]Paths and the target variable are read from acfbuild.toml.
Run 'acfbuild cfg init' to create one, or 'acfbuild <cmd> --help' for details.[/dim]""",
)

# ---------------------------------------------------------------------------
# Subcommand registry
# ---------------------------------------------------------------------------

_SINGLE_COMMANDS: list[tuple[str, str, str]] = [
    ("cflags", "acfbuild.flags", "Print compiler flags for the target platform."),
    ("libs", "acfbuild.libraries", "Print the link library list for the target platform."),
    ("show", "acfbuild.show", "Show everything derived for the target platform."),
]

_MULTI_COMMANDS: list[tuple[str, str, str]] = [
    ("cfg", "acfbuild.cfg", "Read and edit acfbuild.toml programmatically."),
]


for _name, _module, _help in _SINGLE_COMMANDS:
    _mod = importlib.import_module(_module)
    _epilog = getattr(_mod.app.info, "epilog", None)
    if not isinstance(_epilog, str):
        _epilog = None
    app.command(name=_name, help=_help, epilog=_epilog)(_mod.main)

for _name, _module, _help in _MULTI_COMMANDS:
    _mod = importlib.import_module(_module)
    app.add_typer(_mod.app, name=_name, help=_help)


@app.command("platform")
def platform_cmd(platform_id: str | None = PlatformOption) -> None:
    """Print the resolved target platform and its short tag."""
    plat = resolve_platform(get_config(), platform_id)
    typer.echo(f"{plat.value} {short_tag(plat)}")


@app.command("version")
def version() -> None:
    """Print the acfbuild version."""
    typer.echo(__version__)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
