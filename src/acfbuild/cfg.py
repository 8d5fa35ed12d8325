"""acfbuild cfg: Programmatic editor for acfbuild.toml.

Uses tomlkit for format-preserving round-trip editing (comments,
ordering, and whitespace are retained).

Usage::

    acfbuild cfg init --acfutils vendor/libacfutils --sdk vendor/SDK
    acfbuild cfg path
    acfbuild cfg show [KEY]
    acfbuild cfg set paths.xplane_sdk /opt/XPSDK
    acfbuild cfg set target.platform linux
"""

from pathlib import Path

import tomlkit
import typer

from acfbuild.config import CONFIG_FILENAME, _find_root
from acfbuild.platform import TARGET_ENV_VAR, UnrecognizedPlatformError, resolve

# Keys whose values must be a platform identifier.
_PLATFORM_KEYS = {"target.platform"}

# Keys read as paths or names; never coerced to int or bool.
_STRING_KEYS = {"paths.acfutils", "paths.xplane_sdk", "target.env", "target.platform"}

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _require_root() -> Path:
    """Locate the project root or exit with an error."""
    root = _find_root()
    if root is None:
        typer.secho(
            f"Error: Could not find {CONFIG_FILENAME} in any parent directory.\n"
            "Run 'acfbuild cfg init' to create one.",
            fg=typer.colors.RED,
            err=True,
        )
        raise typer.Exit(code=1)
    return root


def _load_toml(root: Path | None = None) -> tuple[tomlkit.TOMLDocument, Path]:
    """Load acfbuild.toml as a tomlkit document, preserving formatting."""
    if root is None:
        root = _require_root()
    toml_path = root / CONFIG_FILENAME
    if not toml_path.exists():
        typer.secho(f"Error: {toml_path} not found.", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    doc = tomlkit.parse(toml_path.read_text(encoding="utf-8"))
    return doc, toml_path


def _save_toml(doc: tomlkit.TOMLDocument, path: Path) -> None:
    """Write tomlkit document back, preserving formatting."""
    path.write_text(tomlkit.dumps(doc), encoding="utf-8")


def _new_document(acfutils: str, sdk: str, env: str) -> tomlkit.TOMLDocument:
    """Build a fresh acfbuild.toml document with explanatory comments."""
    doc = tomlkit.document()
    doc.add(tomlkit.comment("acfbuild project configuration"))

    paths = tomlkit.table()
    paths.add(tomlkit.comment("Relative paths are resolved against this file's directory"))
    paths.add("acfutils", acfutils)
    paths.add("xplane_sdk", sdk)
    doc.add("paths", paths)

    target = tomlkit.table()
    target.add(tomlkit.comment("Variable the build tool sets to windows, macos or linux"))
    target.add("env", env)
    doc.add("target", target)
    return doc


def _parse_value(value: str) -> str | int | bool:
    """Coerce a command-line value to bool or int where it looks like one."""
    if value.lower() in ("true", "false"):
        return value.lower() == "true"
    try:
        return int(value)
    except ValueError:
        return value


# ---------------------------------------------------------------------------
# Typer app
# ---------------------------------------------------------------------------

app = typer.Typer(
    help="Read and edit acfbuild.toml programmatically.",
    rich_markup_mode="rich",
    epilog="""\
[bold]Examples:[/bold]
  acfbuild cfg init --acfutils libacfutils --sdk SDK   Create acfbuild.toml
  acfbuild cfg show paths.acfutils                      Read a config value
  acfbuild cfg set target.platform macos                Pin the target platform
  acfbuild cfg path                                     Print path to acfbuild.toml

[dim]Supports dotted key paths for nested TOML tables (e.g. 'paths.xplane_sdk').[/dim]""",
)


@app.command("init")
def init(
    acfutils: str = typer.Option("libacfutils", "--acfutils", help="libacfutils root."),
    sdk: str = typer.Option("SDK", "--sdk", help="X-Plane SDK root."),
    env: str = typer.Option(
        TARGET_ENV_VAR, "--env", help="Environment variable naming the target OS."
    ),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing file."),
) -> None:
    """Create acfbuild.toml in the current directory."""
    toml_path = Path.cwd() / CONFIG_FILENAME
    if toml_path.exists() and not force:
        typer.secho(
            f"{CONFIG_FILENAME} already exists (use --force to overwrite).",
            fg=typer.colors.YELLOW,
        )
        return
    _save_toml(_new_document(acfutils, sdk, env), toml_path)
    typer.secho(f"Created {toml_path}", fg=typer.colors.GREEN)


@app.command("path")
def path() -> None:
    """Print the path of the acfbuild.toml in use."""
    typer.echo(str(_require_root() / CONFIG_FILENAME))


@app.command("show")
def show(
    key: str | None = typer.Argument(
        None, help="Dot-separated key to show, e.g. 'paths.acfutils'"
    ),
) -> None:
    """Show the current config, or a specific key."""
    doc, _ = _load_toml()

    if key is None:
        typer.echo(tomlkit.dumps(doc))
        return

    current = doc
    for part in key.split("."):
        if isinstance(current, dict) and part in current:
            current = current[part]
        else:
            typer.secho(f"Key '{key}' not found.", fg=typer.colors.RED, err=True)
            raise typer.Exit(code=1)

    if isinstance(current, dict):
        typer.echo(tomlkit.dumps(current))
    else:
        typer.echo(str(current))


@app.command("set")
def set_value(
    key: str = typer.Argument(..., help="Dot-separated key, e.g. 'paths.xplane_sdk'."),
    value: str = typer.Argument(..., help="Value to set."),
) -> None:
    """Set a scalar config key."""
    if key in _PLATFORM_KEYS:
        try:
            resolve(value)
        except UnrecognizedPlatformError as exc:
            typer.secho(f"Error: {exc}", fg=typer.colors.RED, err=True)
            raise typer.Exit(code=1) from exc

    doc, toml_path = _load_toml()

    parts = key.split(".")
    current = doc
    for part in parts[:-1]:
        if part not in current:
            current[part] = tomlkit.table()
        current = current[part]

    parsed_value = value if key in _STRING_KEYS else _parse_value(value)
    current[parts[-1]] = parsed_value
    _save_toml(doc, toml_path)
    typer.secho(f"Set {key} = {parsed_value!r}", fg=typer.colors.GREEN)
