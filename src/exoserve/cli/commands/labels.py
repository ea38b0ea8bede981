"""CLI command listing the exercise each page belongs to."""

from __future__ import annotations

import sys

import click

from exoserve.config.defaults import DEFAULT_SERVER_CONFIG
from exoserve.config.loader import load_document_bytes, resolve_server_config
from exoserve.lib.errors import ExoServeError
from exoserve.lib.logging_config import setup_logging
from exoserve.lib.pdf_processor.page_extractor import ExerciseExtractor
from exoserve.models.config import ServerConfig


@click.command()
@click.option(
    "--document",
    "-d",
    type=click.Path(dir_okay=False),
    default=None,
    help="Source exercise PDF (default: $EXOSERVE_DOCUMENT)",
)
@click.option(
    "--markers-only",
    is_flag=True,
    help="Only list pages that carry an exercise heading",
)
def labels(document: str | None, markers_only: bool) -> None:
    """List every page with the exercise it belongs to.

    Pages after an exercise heading belong to that exercise until the next
    heading. Pages before the first heading belong to no exercise ("-").
    """
    setup_logging(quiet=True)

    try:
        config = resolve_server_config(
            ServerConfig(document=document), DEFAULT_SERVER_CONFIG
        )
        extractor = ExerciseExtractor(load_document_bytes(config.document))
        page_labels = extractor.list_labels()
    except ExoServeError as e:
        click.secho(f"Error: {e}", fg="red", err=True)
        sys.exit(1)

    for page in page_labels:
        if markers_only and page.marker is None:
            continue
        exercise = "-" if page.exercise is None else str(page.exercise)
        heading = "*" if page.marker is not None else " "
        click.echo(f"{page.index + 1:5d} {heading} {exercise}")
