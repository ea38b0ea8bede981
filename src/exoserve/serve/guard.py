"""Exclusive access to the shared exercise extractor.

Filtering mutates a freshly decoded document in place, and extractions are
run one at a time process-wide. ExtractorGuard owns the single extractor
and hands it out under a lock.

An unexpected exception escaping an extraction poisons the guard: the
extractor is considered unusable and every later acquisition fails with
ResourceError until the process restarts. Typed exoserve errors are normal
outcomes and leave the guard healthy.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager

from exoserve.lib.errors import ExoServeError, ResourceError
from exoserve.lib.logging_config import get_logger
from exoserve.lib.pdf_processor.page_extractor import ExerciseExtractor

logger = get_logger(__name__)


class ExtractorGuard:
    """Single-writer lock around an ExerciseExtractor with poisoning.

    Attributes:
        extractor: The guarded extractor; only use it through acquire()
    """

    def __init__(self, extractor: ExerciseExtractor) -> None:
        """Initialize the guard.

        Args:
            extractor: The extractor to guard
        """
        self.extractor = extractor
        self._lock = threading.Lock()
        self._poisoned = False

    @property
    def poisoned(self) -> bool:
        """Return True once an unexpected failure has poisoned the guard."""
        return self._poisoned

    @contextmanager
    def acquire(self) -> Iterator[ExerciseExtractor]:
        """Hold the lock and yield the extractor.

        Yields:
            The guarded extractor

        Raises:
            ResourceError: If the guard has been poisoned
        """
        with self._lock:
            if self._poisoned:
                raise ResourceError("Extractor unavailable after a previous failure")
            try:
                yield self.extractor
            except ExoServeError:
                raise
            except Exception:
                self._poisoned = True
                logger.error(
                    "Unexpected failure during extraction; extractor poisoned",
                    exc_info=True,
                )
                raise
