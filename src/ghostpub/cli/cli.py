"""CLI entrypoint: Typer app definition and command registration"""

from typing import Annotated

import typer

from ghostpub.cli.commands import convert_cmd, frontmatter_cmd, html_cmd, import_cmd, record_cmd
from ghostpub.config import load_config
from ghostpub.logging_utils import configure_logging


app = typer.Typer(name="ghostpub", no_args_is_help=True, help="Markdown to Ghost Lexical/HTML conversion")


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")] = False,
    ):
    """Configure logging before any command runs."""
    if verbose:
        configure_logging("DEBUG")
        return
    try:
        configure_logging(load_config().log_level)
    except ValueError:
        configure_logging("WARNING")


app.command(name="convert")(convert_cmd)
app.command(name="import")(import_cmd)
app.command(name="record")(record_cmd)
app.command(name="frontmatter")(frontmatter_cmd)
app.command(name="html")(html_cmd)
