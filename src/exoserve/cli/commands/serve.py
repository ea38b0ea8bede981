"""CLI command for serving exercises via HTTP.

Implements the 'exoserve serve' command, which exposes the exercise
extractor over HTTP.
"""

from __future__ import annotations

import asyncio
import sys

import click

from exoserve.config.defaults import DEFAULT_SERVER_CONFIG
from exoserve.config.loader import load_document_bytes, resolve_server_config
from exoserve.lib.errors import ConfigError, ExoServeError
from exoserve.lib.logging_config import get_logger, setup_logging
from exoserve.models.config import ServerConfig

logger = get_logger(__name__)


@click.command()
@click.option(
    "--addr",
    "-a",
    type=str,
    default=None,
    help="Address to bind to, as HOST:PORT (default: 127.0.0.1:3000)",
)
@click.option(
    "--document",
    "-d",
    type=click.Path(dir_okay=False),
    default=None,
    help="Source exercise PDF (default: $EXOSERVE_DOCUMENT)",
)
@click.option(
    "--debug/--no-debug",
    default=None,
    help="Enable debug logging",
)
def serve(addr: str | None, document: str | None, debug: bool | None) -> None:
    """Start an HTTP server serving exercise extracts.

    Example:

        exoserve serve --document exercises.pdf

        exoserve serve --document exercises.pdf --addr 0.0.0.0:8080

    Request a comma-separated list of exercise numbers, with an optional
    extension:

        GET /105            exercise 105

        GET /12,47,105.pdf  exercises 12, 47 and 105
    """
    try:
        cli_config = ServerConfig(addr=addr, document=document, debug=debug)
        config = resolve_server_config(cli_config, DEFAULT_SERVER_CONFIG)
    except (ConfigError, ValueError) as e:
        click.secho("Error: Invalid configuration", fg="red", err=True)
        click.echo(f"  {str(e)}", err=True)
        sys.exit(1)

    debug_enabled = bool(config.debug)
    setup_logging(verbose=debug_enabled, quiet=False)

    logger.info(
        f"Serve command invoked: addr={config.addr}, "
        f"document={config.document}, debug={debug_enabled}"
    )

    try:
        document_bytes = load_document_bytes(config.document)
        asyncio.run(
            _run_server(
                document_bytes=document_bytes,
                host=config.host,
                port=config.port,
                debug=debug_enabled,
            )
        )
    except ConfigError as e:
        logger.error(f"Configuration error: {e}", exc_info=True)
        click.secho("Error: Failed to load source document", fg="red", err=True)
        click.echo(f"  {str(e)}", err=True)
        sys.exit(1)
    except ExoServeError as e:
        logger.error(f"Source document error: {e}", exc_info=True)
        click.secho(f"Error: {str(e)}", fg="red", err=True)
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("Server interrupted by user (Ctrl+C)")
        click.echo()
        click.secho("Server stopped.", fg="yellow")
        sys.exit(130)


async def _run_server(
    document_bytes: bytes,
    host: str,
    port: int,
    debug: bool,
) -> None:
    """Run the HTTP server.

    Args:
        document_bytes: Raw bytes of the source exercise PDF.
        host: Host to bind to.
        port: Port to listen on.
        debug: Enable debug mode.
    """
    import uvicorn

    from exoserve.serve.server import ExerciseServer

    server = ExerciseServer(
        document_bytes=document_bytes,
        host=host,
        port=port,
        debug=debug,
    )

    app = server.create_app()
    await server.start()

    _display_startup_info(host, port, server.document_pages)

    config = uvicorn.Config(
        app=app,
        host=host,
        port=port,
        log_level="debug" if debug else "info",
    )
    server_instance = uvicorn.Server(config)

    try:
        await server_instance.serve()
    finally:
        await server.stop()


def _display_startup_info(host: str, port: int, document_pages: int) -> None:
    """Display server startup information.

    Args:
        host: Host the server is bound to.
        port: Port the server is listening on.
        document_pages: Number of pages in the source document.
    """
    click.echo()
    click.secho("=" * 60, fg="cyan")
    click.secho("  exoserve", fg="cyan", bold=True)
    click.secho("=" * 60, fg="cyan")
    click.echo()
    click.echo(f"  Document: {document_pages} pages")
    click.echo(f"  URL:      http://{host}:{port}")
    click.echo()
    click.secho("  Endpoints:", bold=True)
    click.echo("    GET  /<n>[,<n>...][.pdf]   Extract exercises")
    click.echo("    GET  /health               Health check")
    click.echo("    GET  /ready                Readiness check")
    click.echo()
    click.secho("  Press Ctrl+C to stop", fg="yellow")
    click.secho("=" * 60, fg="cyan")
    click.echo()
