"""CLI command implementations"""

import logging
import sys
from pathlib import Path
from typing import Annotated, Optional

import structlog
import typer

from semmark.config import Settings, load_config
from semmark.core.convert import convert_to_markup, strip_markup
from semmark.core.parse import parse_content
from semmark.core.pipeline import run_render, run_validate


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling."""
    try:
        return load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))


def _read(source: str) -> str:
    """Read a UTF-8 text file, or stdin when source is '-'."""
    try:
        if source == "-":
            return sys.stdin.read()
        return Path(source).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        _fail(f"Cannot read {source}", e)


def main_callback(
    log_level: Annotated[Optional[str], typer.Option("--log-level", help="DEBUG, INFO, WARNING, ERROR")] = None,
    ):
    """Semantic markup parsing with thread and wiki views."""
    settings = _settings(overrides={"log_level": log_level.upper() if log_level else None})
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, settings.log_level)),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


def parse_cmd(
    source: Annotated[str, typer.Argument(help="Text file to parse, or - for stdin")],
    ):
    """Print blocks, plain text, and metadata as JSON."""
    typer.echo(parse_content(_read(source)).model_dump_json(indent=2))


def strip_cmd(
    source: Annotated[str, typer.Argument(help="Text file to strip, or - for stdin")],
    ):
    """Print text with every matched tag pair reduced to its content."""
    typer.echo(strip_markup(_read(source)))


def wrap_cmd(
    source: Annotated[str, typer.Argument(help="Text file to wrap, or - for stdin")],
    wiki_primary: Annotated[bool, typer.Option("--wiki-primary", help="Wrap in a wiki-primary tag pair")] = False,
    ):
    """Print plain text converted to markup."""
    typer.echo(convert_to_markup(_read(source), make_wiki_primary=wiki_primary))


def render_cmd(
    path: Annotated[str, typer.Argument(help="File or directory to render")],
    view: Annotated[Optional[str], typer.Option("--view", help="thread or wiki")] = None,
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory")] = None,
    fmt: Annotated[Optional[str], typer.Option("--format", help="md or json")] = None,
    nesting: Annotated[Optional[int], typer.Option("--max-nesting", help="Max heading depth for sections")] = None,
    decorate: Annotated[Optional[bool], typer.Option("--decorate/--no-decorate", help="Label wiki blocks")] = None,
    ):
    """Render documents for a view into the output directory."""
    settings = _settings(overrides={
        "view_mode": view, "output_dir": out, "output_format": fmt,
        "max_nesting": nesting, "decorate": decorate,
    })
    output_dir = Path(settings.output_dir)
    try:
        results = run_render(
            path, settings.view_mode, output_dir, settings.output_format,
            settings.max_nesting, settings.decorate,
        )
    except RuntimeError as e:
        _fail(str(e))
    if not results:
        typer.echo(f"No .md/.mdx files found under {path}.")
        raise typer.Exit(1)
    for src, out_file in results:
        typer.echo(f"  {src} -> {out_file}")
    typer.echo(f"Rendered {len(results)} document(s) to {output_dir}/ ({settings.view_mode} view)")


def validate_cmd(
    path: Annotated[str, typer.Argument(help="File or directory to validate")],
    ):
    """Check tag balance and consensus percentages; exit 1 if anything is invalid."""
    try:
        results = run_validate(path)
    except RuntimeError as e:
        _fail(str(e))
    invalid = 0
    for src, result in results:
        if result.is_valid:
            continue
        invalid += 1
        for error in result.errors:
            typer.echo(f"{src}: {error}")
    typer.echo(f"Validated {len(results)} document(s), {invalid} invalid")
    if invalid:
        raise typer.Exit(1)
