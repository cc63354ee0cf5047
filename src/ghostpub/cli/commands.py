"""CLI command implementations"""

import json
from pathlib import Path
from typing import Annotated, Optional

import typer

from ghostpub.config import Settings, load_config
from ghostpub.core.frontmatter import parse_frontmatter
from ghostpub.core.pipeline import convert_text, load_media_map, run_convert, run_import, run_record


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


def _media(path: Optional[str]) -> dict[str, str]:
    try:
        return load_media_map(Path(path) if path else None)
    except (OSError, ValueError) as e:
        _fail("Could not load media map", e)


def _read(path: str) -> str:
    try:
        return Path(path).read_text(encoding="utf-8")
    except OSError as e:
        _fail(f"Could not read {path}", e)


def convert_cmd(
    path: Annotated[str, typer.Argument(help="Markdown file or directory to convert")],
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory")] = None,
    media_map: Annotated[Optional[str], typer.Option("--media-map", help="YAML/JSON file mapping media names to URLs")] = None,
    placeholder: Annotated[Optional[str], typer.Option("--placeholder", help="Text for unresolved media; '{name}' is replaced")] = None,
    ):
    """Write HTML, Lexical JSON and post payload JSON for each markdown file."""
    settings = _settings(overrides={"output_dir": out, "media_placeholder": placeholder})
    media = _media(media_map)
    output_dir = Path(settings.output_dir)
    try:
        results = run_convert(path, output_dir, settings, media)
    except RuntimeError as e:
        _fail(str(e))
    if not results:
        typer.echo(f"No markdown files found at {path}.")
        raise typer.Exit(1)
    for src, written in results:
        typer.echo(f"  {src} -> {', '.join(p.name for p in written)}")
    typer.echo(f"Converted {len(results)} document(s) to {output_dir}/")


def import_cmd(
    post: Annotated[str, typer.Argument(help="Post JSON file (API response or bare post)")],
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory")] = None,
    ):
    """Write a downloaded post as markdown with frontmatter (paragraphs and headings only)."""
    settings = _settings(overrides={"output_dir": out})
    try:
        out_file = run_import(Path(post), Path(settings.output_dir), settings)
    except RuntimeError as e:
        _fail(str(e))
    typer.echo(f"  {post} -> {out_file}")


def record_cmd(
    post: Annotated[str, typer.Argument(help="Saved post JSON file (API response or bare post)")],
    path: Annotated[str, typer.Argument(help="Markdown file whose frontmatter is updated in place")],
    ):
    """Write the id, status and timestamps of a saved post back into a markdown file."""
    settings = _settings()
    try:
        md_path = run_record(Path(post), Path(path), settings)
    except RuntimeError as e:
        _fail(str(e))
    typer.echo(f"  {post} -> {md_path}")


def frontmatter_cmd(
    path: Annotated[str, typer.Argument(help="Markdown file")],
    ):
    """Print the parsed frontmatter as JSON."""
    settings = _settings()
    fm = parse_frontmatter(_read(path), settings.passthrough_fields)
    typer.echo(json.dumps(fm, indent=2, ensure_ascii=False))


def html_cmd(
    path: Annotated[str, typer.Argument(help="Markdown file")],
    media_map: Annotated[Optional[str], typer.Option("--media-map", help="YAML/JSON file mapping media names to URLs")] = None,
    ):
    """Print the HTML rendering of a markdown file."""
    settings = _settings()
    try:
        conv = convert_text(_read(path), settings, _media(media_map))
    except ValueError as e:
        _fail(f"Could not convert {path}", e)
    typer.echo(conv.html)
