"""Exercise server implementation.

Provides the FastAPI application factory and server lifecycle management
for serving exercise extracts over HTTP.
"""

from __future__ import annotations

from datetime import datetime, timezone

from fastapi import FastAPI
from fastapi.responses import Response

from exoserve.lib.logging_config import get_logger
from exoserve.lib.pdf_processor.page_extractor import ExerciseExtractor
from exoserve.serve.gateway import ExerciseGateway
from exoserve.serve.guard import ExtractorGuard
from exoserve.serve.middleware import ErrorHandlingMiddleware, LoggingMiddleware
from exoserve.serve.models import HealthResponse, ServerState

logger = get_logger(__name__)


class ExerciseServer:
    """HTTP server for extracting exercises from one source document.

    The ExerciseServer wraps a FastAPI application and owns the guarded
    extractor shared by all requests.

    Attributes:
        host: The hostname to bind to.
        port: The port to listen on.
        guard: Exclusive-access guard around the extractor.
        gateway: Request gateway serving extraction requests.
        state: The current server state.
    """

    def __init__(
        self,
        document_bytes: bytes,
        host: str = "127.0.0.1",
        port: int = 3000,
        debug: bool = False,
    ) -> None:
        """Initialize the exercise server.

        Args:
            document_bytes: Raw bytes of the source exercise PDF.
            host: The hostname to bind to (default: 127.0.0.1 for security).
                  Use 0.0.0.0 to expose to all network interfaces.
            port: The port to listen on (default: 3000).
            debug: Enable debug logging (default: False).
        """
        self.host = host
        self.port = port
        self.debug = debug

        # Warn if binding to all interfaces
        if host == "0.0.0.0":  # noqa: S104
            logger.warning(
                "Server binding to 0.0.0.0 exposes it to all network interfaces. "
                "Use 127.0.0.1 for local-only access."
            )

        self.guard = ExtractorGuard(ExerciseExtractor(document_bytes))
        self.gateway = ExerciseGateway(self.guard)
        self.state = ServerState.INITIALIZING
        self.document_pages = 0
        self._app: FastAPI | None = None
        self._start_time: datetime | None = None

    @property
    def is_ready(self) -> bool:
        """Check if the server is ready to accept requests."""
        return (
            self.state in (ServerState.READY, ServerState.RUNNING)
            and not self.guard.poisoned
        )

    @property
    def uptime_seconds(self) -> float:
        """Return server uptime in seconds."""
        if self._start_time is None:
            return 0.0
        delta = datetime.now(timezone.utc) - self._start_time
        return delta.total_seconds()

    def create_app(self) -> FastAPI:
        """Create and configure the FastAPI application.

        The source document is decoded once here so that a broken document
        is reported at startup rather than on the first request.

        Returns:
            Configured FastAPI application instance.

        Raises:
            ExoServeError: If the source document cannot be read.
        """
        self.document_pages = self.guard.extractor.page_count()

        app = FastAPI(
            title="exoserve",
            description="Serves selected exercises of a PDF exercise collection",
            version="0.1.0",
            docs_url=None,
            redoc_url=None,
        )

        # Middleware order matters: Starlette executes in reverse order of addition.
        # Request flow:  Logging -> ErrorHandling -> Handler
        app.add_middleware(ErrorHandlingMiddleware, debug=self.debug)
        app.add_middleware(LoggingMiddleware, debug=self.debug)

        # Health endpoints must be registered before the catch-all route.
        self._register_health_endpoints(app)
        self._register_extract_endpoint(app)

        self._app = app
        self.state = ServerState.READY

        logger.info(
            f"FastAPI app created for a source document of "
            f"{self.document_pages} pages"
        )

        return app

    def _register_health_endpoints(self, app: FastAPI) -> None:
        """Register health check endpoints.

        Args:
            app: The FastAPI application.
        """

        @app.get("/health", response_model=HealthResponse, tags=["Health"])
        async def health() -> HealthResponse:
            """Basic health check endpoint."""
            return HealthResponse(
                status="healthy" if self.is_ready else "unhealthy",
                document_pages=self.document_pages,
                extractor_poisoned=self.guard.poisoned,
                uptime_seconds=self.uptime_seconds,
            )

        @app.get("/ready", tags=["Health"])
        async def ready() -> dict[str, bool]:
            """Readiness check endpoint for orchestrators."""
            return {"ready": self.is_ready}

    def _register_extract_endpoint(self, app: FastAPI) -> None:
        """Register the catch-all exercise extraction endpoint.

        The handler is synchronous: Starlette runs it in its threadpool and
        the guard serializes extractions.

        Args:
            app: The FastAPI application.
        """

        @app.get("/{selection:path}", tags=["Exercises"])
        def extract(selection: str) -> Response:
            """Return a PDF with the exercises named in the path."""
            result = self.gateway.handle(f"/{selection}")
            return Response(
                content=result.body,
                status_code=result.status,
                media_type=result.media_type,
            )

    async def start(self) -> None:
        """Start the server and begin accepting requests.

        This method should be called after create_app() to transition
        the server to the RUNNING state.
        """
        if self._app is None:
            self.create_app()

        self._start_time = datetime.now(timezone.utc)
        self.state = ServerState.RUNNING

        logger.info(f"Exercise server started at http://{self.host}:{self.port}")

    async def stop(self) -> None:
        """Stop the server.

        Transitions through SHUTTING_DOWN to STOPPED state.
        """
        self.state = ServerState.SHUTTING_DOWN
        logger.info(f"Exercise server stopping after {self.uptime_seconds:.0f}s")
        self.state = ServerState.STOPPED
        logger.info("Exercise server stopped.")

