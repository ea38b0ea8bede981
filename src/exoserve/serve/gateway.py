"""Request gateway for the exercise server.

Turns an untrusted request path such as "/12,47,105.pdf" into a validated
list of exercise numbers, runs the extraction through the ExtractorGuard and
maps every outcome to a status code and body.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from exoserve.config.defaults import (
    INTERNAL_ERROR_BODY,
    NOT_FOUND_BODY,
    PDF_MEDIA_TYPE,
)
from exoserve.lib.errors import (
    ExoServeError,
    InputValidationError,
    MissingExerciseError,
    ResourceError,
)
from exoserve.lib.logging_config import get_logger
from exoserve.lib.pdf_processor.marker_scanner import parse_label
from exoserve.serve.guard import ExtractorGuard

logger = get_logger(__name__)

TEXT_MEDIA_TYPE = "text/plain"

# Trailing format token, e.g. ".pdf"; must start with a letter so that it
# cannot swallow digits of a label.
_EXTENSION_PATTERN = re.compile(r"\.[A-Za-z][A-Za-z0-9]*$")


@dataclass(frozen=True)
class GatewayResponse:
    """Outcome of a gateway request.

    Attributes:
        status: HTTP status code
        body: Response body
        media_type: Content type of the body
    """

    status: int
    body: bytes
    media_type: str

    @classmethod
    def not_found(cls) -> GatewayResponse:
        """Create a 404 plain text response."""
        return cls(404, NOT_FOUND_BODY.encode(), TEXT_MEDIA_TYPE)

    @classmethod
    def internal_error(cls) -> GatewayResponse:
        """Create a 500 plain text response."""
        return cls(500, INTERNAL_ERROR_BODY.encode(), TEXT_MEDIA_TYPE)


def parse_exercise_numbers(path: str) -> list[int]:
    """Parse a request path into a list of distinct exercise numbers.

    Grammar: /<label>[,<label>]*[.<ext>] where each label is an optionally
    signed decimal integer and the extension is ignored.

    Args:
        path: Request path, including the leading slash

    Returns:
        Exercise numbers in request order

    Raises:
        InputValidationError: If the path is malformed or repeats a label
    """
    if not path.startswith("/"):
        raise InputValidationError(f"Path must start with '/': {path!r}")

    selection = _EXTENSION_PATTERN.sub("", path[1:])
    numbers: list[int] = []
    for part in selection.split(","):
        number = parse_label(part)
        if number is None:
            raise InputValidationError(f"Invalid exercise number {part!r}")
        numbers.append(number)

    if len(set(numbers)) != len(numbers):
        raise InputValidationError(f"Duplicate exercise numbers in {path!r}")
    return numbers


class ExerciseGateway:
    """Validates requests and serializes them onto the shared extractor."""

    def __init__(self, guard: ExtractorGuard) -> None:
        """Initialize the gateway.

        Args:
            guard: Guard owning the shared extractor
        """
        self.guard = guard

    def handle(self, path: str) -> GatewayResponse:
        """Serve one extraction request.

        Args:
            path: Request path, e.g. "/12,47,105.pdf"

        Returns:
            GatewayResponse with the PDF on success, or a plain text error
        """
        try:
            numbers = parse_exercise_numbers(path)
        except InputValidationError as e:
            logger.debug(f"Rejected request {path!r}: {e}")
            return GatewayResponse.not_found()

        try:
            with self.guard.acquire() as extractor:
                data = extractor.extract(numbers)
        except MissingExerciseError as e:
            logger.info(f"Request {path!r}: {e}")
            return GatewayResponse.not_found()
        except ResourceError as e:
            logger.error(f"Request {path!r}: {e}")
            return GatewayResponse.internal_error()
        except ExoServeError as e:
            logger.error(f"Extraction failed for {path!r}: {e}")
            return GatewayResponse.internal_error()
        except Exception as e:
            # The guard is already poisoned; report instead of crashing the worker.
            logger.error(f"Unexpected error for {path!r}: {e}")
            return GatewayResponse.internal_error()

        return GatewayResponse(200, data, PDF_MEDIA_TYPE)
