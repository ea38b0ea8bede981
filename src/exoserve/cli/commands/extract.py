"""CLI command for extracting exercises to a file.

Implements the 'exoserve extract' command, the offline counterpart of the
HTTP endpoint.
"""

from __future__ import annotations

import sys
from pathlib import Path

import click

from exoserve.config.defaults import DEFAULT_SERVER_CONFIG
from exoserve.config.loader import load_document_bytes, resolve_server_config
from exoserve.lib.errors import (
    ExoServeError,
    InputValidationError,
    MissingExerciseError,
)
from exoserve.lib.logging_config import get_logger, setup_logging
from exoserve.lib.pdf_processor.page_extractor import ExerciseExtractor
from exoserve.models.config import ServerConfig
from exoserve.serve.gateway import parse_exercise_numbers

logger = get_logger(__name__)


@click.command()
@click.argument("exercises", type=str)
@click.option(
    "--document",
    "-d",
    type=click.Path(dir_okay=False),
    default=None,
    help="Source exercise PDF (default: $EXOSERVE_DOCUMENT)",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, writable=True),
    default=None,
    help="Output file (default: <exercises>.pdf)",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def extract(
    exercises: str, document: str | None, output: str | None, verbose: bool
) -> None:
    """Write the pages of the given exercises to a new PDF.

    EXERCISES is a comma-separated list of exercise numbers.

    Example:

        exoserve extract 12,47,105 --document exercises.pdf -o td3.pdf
    """
    setup_logging(verbose=verbose, quiet=not verbose)

    try:
        numbers = parse_exercise_numbers(f"/{exercises}")
    except InputValidationError as e:
        click.secho(f"Error: {e}", fg="red", err=True)
        sys.exit(1)

    out_path = Path(output) if output else Path(f"{exercises.replace(',', '_')}.pdf")

    try:
        config = resolve_server_config(
            ServerConfig(document=document), DEFAULT_SERVER_CONFIG
        )
        extractor = ExerciseExtractor(load_document_bytes(config.document))
        data = extractor.extract(numbers)
    except MissingExerciseError as e:
        click.secho(f"Error: {e}", fg="red", err=True)
        sys.exit(1)
    except ExoServeError as e:
        logger.error(f"Extraction failed: {e}", exc_info=verbose)
        click.secho(f"Error: {e}", fg="red", err=True)
        sys.exit(1)

    out_path.write_bytes(data)
    click.secho(
        f"Wrote {len(numbers)} exercise(s) to {out_path} ({len(data)} bytes)",
        fg="green",
    )
