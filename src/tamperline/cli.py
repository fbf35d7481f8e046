# src/tamperline/cli.py
"""tamperline command line interface.

Entry point for the tamperline CLI tool.
"""

from __future__ import annotations

import json
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any, TextIO

import typer
from dynaconf.vendor.ruamel.yaml.parser import ParserError as YamlParserError
from dynaconf.vendor.ruamel.yaml.scanner import ScannerError as YamlScannerError
from pydantic import ValidationError

from tamperline import __version__
from tamperline.contracts import InvalidAllowedValuesError
from tamperline.core.config import TamperlineSettings, load_settings

if TYPE_CHECKING:
    from tamperline.plugins.manager import PluginManager

__all__ = [
    "app",
    "load_settings",
]

_plugin_manager_cache: PluginManager | None = None


def _get_plugin_manager() -> PluginManager:
    """Get the plugin manager with built-in and entry-point tampers registered."""
    global _plugin_manager_cache

    from tamperline.plugins.manager import PluginManager

    if _plugin_manager_cache is None:
        manager = PluginManager()
        manager.register_builtin_plugins()
        manager.load_entrypoint_plugins()
        _plugin_manager_cache = manager
    return _plugin_manager_cache


app = typer.Typer(
    name="tamperline",
    help="tamperline: configuration-driven value rewriting for ingestion pipelines.",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"tamperline version {__version__}")
        raise typer.Exit()


def _load_dotenv(env_file: Path | None = None) -> bool:
    """Load environment variables from a .env file.

    Raises:
        typer.Exit: If an explicit env_file does not exist.
    """
    from dotenv import load_dotenv

    if env_file is not None:
        if not env_file.exists():
            typer.secho(f"Error: .env file not found: {env_file}", fg=typer.colors.RED, err=True)
            raise typer.Exit(1)
        return load_dotenv(env_file, override=False)

    return load_dotenv(override=False)


@app.callback()
def main(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    no_dotenv: bool = typer.Option(
        False,
        "--no-dotenv",
        help="Skip loading .env file.",
    ),
    env_file: Path | None = typer.Option(
        None,
        "--env-file",
        help="Path to .env file (skips automatic search).",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose/debug logging.",
    ),
    json_logs: bool = typer.Option(
        False,
        "--json-logs",
        help="Output structured JSON logs (for machine processing).",
    ),
) -> None:
    """tamperline: configuration-driven value rewriting for ingestion pipelines."""
    from tamperline.core.logging import configure_logging

    configure_logging(json_output=json_logs, level="DEBUG" if verbose else "INFO")

    if not no_dotenv:
        _load_dotenv(env_file=env_file)
    elif env_file is not None:
        typer.secho("Warning: --env-file ignored because --no-dotenv is set.", fg=typer.colors.YELLOW, err=True)


def _load_settings_or_exit(settings: str) -> TamperlineSettings:
    """Load settings, turning every expected failure into a clean exit."""
    settings_path = Path(settings).expanduser()
    try:
        return load_settings(settings_path)
    except (YamlParserError, YamlScannerError) as e:
        typer.echo(f"YAML syntax error in {settings}: {e.problem}", err=True)
        raise typer.Exit(1) from None
    except FileNotFoundError:
        typer.echo(f"Error: Settings file not found: {settings}", err=True)
        raise typer.Exit(1) from None
    except ValidationError as e:
        typer.echo("Configuration errors:", err=True)
        for error in e.errors():
            loc = ".".join(str(x) for x in error["loc"])
            typer.echo(f"  - {loc}: {error['msg']}", err=True)
        raise typer.Exit(1) from None


def _read_items(stream: TextIO) -> list[dict[str, Any]]:
    """Parse JSON lines into items.

    Raises:
        typer.Exit: On a line that is not a JSON object.
    """
    items: list[dict[str, Any]] = []
    for line_no, line in enumerate(stream, start=1):
        if not line.strip():
            continue
        try:
            item = json.loads(line)
        except json.JSONDecodeError as e:
            typer.echo(f"Error: line {line_no} is not valid JSON: {e.msg}", err=True)
            raise typer.Exit(1) from None
        if not isinstance(item, dict):
            typer.echo(f"Error: line {line_no} must be a JSON object, got {type(item).__name__}", err=True)
            raise typer.Exit(1)
        items.append(item)
    return items


@app.command()
def apply(
    settings: str = typer.Option(
        ...,
        "--settings",
        "-s",
        help="Path to settings YAML file.",
    ),
    input_path: Path | None = typer.Option(
        None,
        "--input",
        "-i",
        help="JSON lines file of items (default: stdin).",
    ),
    strict: bool = typer.Option(
        False,
        "--strict",
        help="Exit with status 1 if any tamper rejected a value.",
    ),
) -> None:
    """Run the configured tampers over JSON line items, writing JSON lines."""
    from tamperline.engine.runner import TamperRunner
    from tamperline.plugins.config_base import PluginConfigError

    config = _load_settings_or_exit(settings)

    try:
        runner = TamperRunner.from_settings(config, _get_plugin_manager())
    except PluginConfigError as e:
        typer.echo(f"Error instantiating tampers: {e}", err=True)
        raise typer.Exit(1) from None

    if input_path is not None:
        if not input_path.exists():
            typer.echo(f"Error: Input file not found: {input_path}", err=True)
            raise typer.Exit(1)
        with input_path.open(encoding="utf-8") as f:
            items = _read_items(f)
    else:
        items = _read_items(sys.stdin)

    error_count = 0
    try:
        for result in runner.process_all(items):
            typer.echo(json.dumps(result.item, ensure_ascii=False))
            for error in result.errors:
                error_count += 1
                typer.echo(f"Warning: {error.field} ({error.plugin}): {error.message}", err=True)
    finally:
        runner.close()

    if strict and error_count:
        raise typer.Exit(1)


@app.command()
def validate(
    settings: str = typer.Option(
        ...,
        "--settings",
        "-s",
        help="Path to settings YAML file.",
    ),
) -> None:
    """Validate settings and every tamper's options without processing items."""
    from tamperline.engine.runner import TamperRunner
    from tamperline.plugins.config_base import PluginConfigError

    config = _load_settings_or_exit(settings)

    try:
        runner = TamperRunner.from_settings(config, _get_plugin_manager())
    except PluginConfigError as e:
        typer.echo(f"Error instantiating tampers: {e}", err=True)
        raise typer.Exit(1) from None
    runner.close()

    tamper_count = sum(len(chain) for chain in config.fields.values())
    typer.echo(f"Configuration valid: {len(config.fields)} field(s), {tamper_count} tamper(s).")


# === Replacement-pairs tables ===

table_app = typer.Typer(help="Replacement-pairs table commands.")
app.add_typer(table_app, name="table")


@table_app.command("check")
def table_check(
    path: Path = typer.Argument(..., help="Text file of replacement pairs, one per line."),
    previous: Path | None = typer.Option(
        None,
        "--previous",
        "-p",
        help="Previous version of the pairs, to report removed keys.",
    ),
    has_data: bool = typer.Option(
        False,
        "--has-data",
        help="The target field already holds data (positional keys are refused).",
    ),
    in_use: list[str] | None = typer.Option(
        None,
        "--in-use",
        help="Key referenced by stored data. Repeatable.",
    ),
) -> None:
    """Parse a replacement-pairs file and print it in normalized form."""
    from tamperline.core.allowed_values import format_table, parse_table, removed_keys, validate_allowed_values

    for p in (path, previous):
        if p is not None and not p.exists():
            typer.echo(f"Error: File not found: {p}", err=True)
            raise typer.Exit(1)

    used = set(in_use or [])
    try:
        old_table = parse_table(previous.read_text(encoding="utf-8"), has_data=False) if previous is not None else None
        table = validate_allowed_values(
            path.read_text(encoding="utf-8"),
            has_data=has_data,
            previous=old_table,
            values_in_use=lambda keys: any(key in used for key in keys),
        )
    except InvalidAllowedValuesError as e:
        location = f" (line {e.line + 1})" if e.line is not None else ""
        typer.echo(f"Error: {e}{location}", err=True)
        raise typer.Exit(1) from None

    if table:
        typer.echo(format_table(table))
    if old_table is not None:
        lost = sorted(removed_keys(old_table, table))
        if lost:
            typer.echo(f"Removed keys: {', '.join(lost)}", err=True)


# === Plugins ===

plugins_app = typer.Typer(help="Plugin management commands.")
app.add_typer(plugins_app, name="plugins")


@dataclass(frozen=True)
class PluginInfo:
    """Metadata for a registered tamper.

    Attributes:
        name: The plugin identifier used in settings files.
        label: Human-readable title.
        category: Listing group.
        description: First line of the plugin's docstring.
    """

    name: str
    label: str
    category: str
    description: str


def _build_plugin_registry() -> list[PluginInfo]:
    """Describe every registered tamper."""
    from tamperline.plugins.discovery import get_plugin_description

    return [
        PluginInfo(
            name=cls.name,
            label=cls.label or cls.name,
            category=str(cls.category),
            description=get_plugin_description(cls),
        )
        for cls in _get_plugin_manager().get_tampers()
    ]


@plugins_app.command("list")
def plugins_list(
    category: str | None = typer.Option(
        None,
        "--category",
        "-c",
        help="Only show tampers in this category.",
    ),
) -> None:
    """List available tampers."""
    plugins = _build_plugin_registry()
    if category is not None:
        plugins = [p for p in plugins if p.category.lower() == category.lower()]

    if not plugins:
        typer.echo("(none available)")
        return

    for plugin in sorted(plugins, key=lambda p: (p.category, p.name)):
        typer.echo(f"  {plugin.name:28} [{plugin.category}] {plugin.label} - {plugin.description}")


if __name__ == "__main__":
    app()
