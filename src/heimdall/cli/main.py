"""
Main CLI entry point for Heimdall.

Provides the command-line interface using Click: load a captured exchange
record and export it as plain text, Markdown or HTML.
"""

import json as _json
import logging as _logging
import pathlib as _pathlib
import sys as _sys
import typing as _typing

import click as _click
import pydantic as _pydantic
import rich.console as _rich_console
import rich.logging as _rich_logging
import rich.syntax as _rich_syntax
import yaml as _yaml

import heimdall
import heimdall.config as config
import heimdall.export as export
import heimdall.summary as summary

_logger = _logging.getLogger(__name__)

# Custom Click context settings for better help formatting
CONTEXT_SETTINGS: dict[str, _typing.Any] = {
    "help_option_names": ["-h", "--help"],
    "max_content_width": 100,
}

_LOG_LEVELS: dict[str, int] = {
    "debug": _logging.DEBUG,
    "info": _logging.INFO,
    "warning": _logging.WARNING,
    "error": _logging.ERROR,
}

FORMAT_CHOICES = [export_format.value for export_format in export.ExportFormat]


def _configure_logging(level: int) -> None:
    """Send log records to stderr through rich."""
    handler = _rich_logging.RichHandler(
        console=_rich_console.Console(stderr=True),
        show_path=False,
    )
    _logging.basicConfig(level=level, format="%(message)s", handlers=[handler], force=True)


def _resolve_format(
    format_name: str | None,
    output: _pathlib.Path | None,
    settings: config.Settings,
) -> export.ExportFormat:
    """Pick the export format: --format, then the output suffix, then the configured default."""
    if format_name is not None:
        return export.ExportFormat(format_name)
    if output is not None:
        from_suffix = export.ExportFormat.from_path(output)
        if from_suffix is not None:
            return from_suffix
    return export.ExportFormat(settings.default_format)


@_click.group(context_settings=CONTEXT_SETTINGS)
@_click.version_option(heimdall.__version__, "-v", "--version", prog_name="heimdall")
@_click.option("--verbose", is_flag=True, help="Enable debug logging")
@_click.pass_context
def cli(ctx: _click.Context, verbose: bool) -> None:
    """Heimdall - export captured network requests as shareable documents."""
    try:
        settings = config.Settings()
    except (config.ConfigFileError, _pydantic.ValidationError) as e:
        raise _click.ClickException(str(e)) from None

    level = _logging.DEBUG if verbose else _LOG_LEVELS[settings.logging.level]
    _configure_logging(level)

    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings


@cli.command(name="export")
@_click.argument(
    "record_path",
    metavar="RECORD",
    type=_click.Path(exists=True, dir_okay=False, path_type=_pathlib.Path),
)
@_click.option(
    "-f",
    "--format",
    "format_name",
    type=_click.Choice(FORMAT_CHOICES),
    default=None,
    help="Document format (default: from --output suffix, then config)",
)
@_click.option(
    "-o",
    "--output",
    type=_click.Path(dir_okay=False, writable=True, path_type=_pathlib.Path),
    default=None,
    help="Write the document to a file instead of stdout",
)
@_click.option("--title", type=str, default=None, help="Document title")
@_click.pass_context
def export_cmd(
    ctx: _click.Context,
    record_path: _pathlib.Path,
    format_name: str | None,
    output: _pathlib.Path | None,
    title: str | None,
) -> None:
    """Export a captured exchange RECORD (JSON or YAML).

    Examples:
        heimdall export exchange.json                # Plain text to stdout
        heimdall export exchange.json -f markdown    # Markdown to stdout
        heimdall export exchange.yaml -o report.html # HTML file
    """
    settings: config.Settings = ctx.obj["settings"]
    export_format = _resolve_format(format_name, output, settings)

    try:
        record = summary.load_record(record_path)
    except summary.RecordError as e:
        raise _click.ClickException(str(e)) from None

    document = export.export_summary(
        summary.build_summary(record),
        export_format,
        title=title or settings.export.title,
    )

    if output is None:
        _click.echo(document, nl=False)
        return

    try:
        output.write_text(document, encoding="utf-8")
    except OSError as e:
        raise _click.ClickException(f"Cannot write {output}: {e}") from None
    _logger.info("Wrote %s export to %s", export_format.value, output)


@cli.command()
def formats() -> None:
    """List supported document formats."""
    for export_format in export.ExportFormat:
        _click.echo(f"{export_format.value:<10} {export_format.suffix}")


@cli.group(name="config")
def config_cmd() -> None:
    """Configuration commands."""


@config_cmd.command(name="show")
@_click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@_click.pass_context
def config_show(ctx: _click.Context, as_json: bool) -> None:
    """Show effective configuration from all sources.

    Examples:
        heimdall config show         # YAML (colorized on a terminal)
        heimdall config show --json  # JSON
    """
    settings: config.Settings = ctx.obj["settings"]
    full_config = settings.model_dump(mode="json")

    if as_json:
        _click.echo(_json.dumps(full_config, indent=2))
        return

    yaml_text = _yaml.dump(full_config, default_flow_style=False, sort_keys=False)
    if _sys.stdout.isatty():
        console = _rich_console.Console()
        console.print(
            _rich_syntax.Syntax(yaml_text, "yaml", theme="monokai", background_color="default")
        )
    else:
        _click.echo(yaml_text, nl=False)


def main() -> None:
    """Console script entry point."""
    cli()


if __name__ == "__main__":
    main()
