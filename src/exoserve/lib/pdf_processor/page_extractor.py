"""Exercise extraction using pypdf.

This module builds a new PDF that contains only the pages belonging to a set
of requested exercises. A page belongs to the exercise whose heading was
most recently drawn, in document order, so an exercise spanning several
pages is extracted whole even though only its first page carries the
heading.

The source bytes are never modified: every extraction decodes a fresh
document, filters its page tree in place and serializes it once.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from io import BytesIO

from pypdf import PdfReader, PdfWriter
from pypdf.errors import PyPdfError
from pypdf.generic import DictionaryObject

from exoserve.lib.errors import (
    DocumentError,
    MissingExerciseError,
    SerializationError,
    StructuralError,
)
from exoserve.lib.logging_config import get_logger
from exoserve.lib.pdf_processor.marker_scanner import read_page_label
from exoserve.lib.pdf_processor.page_tree import (
    count_leaves,
    filter_page_tree,
    iter_leaves,
)

logger = get_logger(__name__)


@dataclass
class MatchState:
    """Traversal state threaded through the page predicate.

    Attributes:
        requested: Exercise numbers to keep
        unseen: Requested exercise numbers not yet found in the document
        active_label: Exercise number of the most recent heading, None
            before the first heading
    """

    requested: frozenset[int]
    unseen: set[int] = field(default_factory=set)
    active_label: int | None = None

    @classmethod
    def for_request(cls, exercise_numbers: Iterable[int]) -> "MatchState":
        """Create a fresh state for a set of requested exercise numbers."""
        requested = frozenset(exercise_numbers)
        return cls(requested=requested, unseen=set(requested))

    def __call__(self, page: DictionaryObject) -> bool:
        """Update the active label from a page and report whether to keep it."""
        label = read_page_label(page)
        if label is not None:
            self.active_label = label
            self.unseen.discard(label)
        return self.active_label is not None and self.active_label in self.requested


@dataclass(frozen=True)
class PageLabel:
    """Exercise labelling of a single page.

    Attributes:
        index: Zero-based page index in document order
        marker: Exercise number drawn on this page, if any
        exercise: Exercise number the page belongs to, if any
    """

    index: int
    marker: int | None
    exercise: int | None


class ExerciseExtractor:
    """Extracts exercises from an immutable source document."""

    def __init__(self, document_bytes: bytes) -> None:
        """Initialize the extractor.

        Args:
            document_bytes: Raw bytes of the source PDF
        """
        self.document_bytes = bytes(document_bytes)

    def _open(self) -> tuple[DictionaryObject, DictionaryObject, PdfReader]:
        try:
            reader = PdfReader(BytesIO(self.document_bytes))
            catalog = reader.root_object
        except (PyPdfError, ValueError, KeyError) as e:
            raise DocumentError(f"Could not decode source document: {e}") from e

        if not isinstance(catalog, DictionaryObject):
            raise StructuralError("document has no catalog")
        tree = catalog.get("/Pages")
        tree = tree.get_object() if tree is not None else None
        if not isinstance(tree, DictionaryObject):
            raise StructuralError("catalog has no /Pages dictionary")
        return catalog, tree, reader

    def extract(self, exercise_numbers: Iterable[int]) -> bytes:
        """Build a PDF containing only the requested exercises.

        Args:
            exercise_numbers: Exercise numbers to keep

        Returns:
            Bytes of the filtered PDF

        Raises:
            DocumentError: If the source cannot be decoded
            StructuralError: If the page tree has an unexpected shape
            MissingExerciseError: If a requested exercise is not in the document
            SerializationError: If the filtered document cannot be written
        """
        state = MatchState.for_request(exercise_numbers)
        logger.debug(f"Extracting exercises {sorted(state.requested)}")

        catalog, tree, reader = self._open()
        try:
            removed = filter_page_tree(tree, state)
        except PyPdfError as e:
            raise DocumentError(f"Could not read page tree: {e}") from e

        if state.unseen:
            # The partially filtered reader is dropped along with this frame.
            logger.warning(f"Requested exercises not found: {sorted(state.unseen)}")
            raise MissingExerciseError(list(state.unseen))

        # Bookmarks may point at pages that were just removed.
        if "/Outlines" in catalog:
            del catalog["/Outlines"]

        try:
            writer = PdfWriter(clone_from=reader)
            output = BytesIO()
            writer.write(output)
        except (PyPdfError, ValueError, KeyError, TypeError) as e:
            raise SerializationError(f"Could not write filtered document: {e}") from e

        data = output.getvalue()
        logger.info(
            f"Extracted exercises {sorted(state.requested)}: "
            f"removed {removed} pages, {len(data)} bytes"
        )
        return data

    def list_labels(self) -> list[PageLabel]:
        """Report, for every page in document order, its exercise number.

        The document is not modified.

        Returns:
            One PageLabel per page

        Raises:
            DocumentError: If the source cannot be decoded
            StructuralError: If the page tree has an unexpected shape
        """
        _, tree, _ = self._open()
        labels: list[PageLabel] = []
        active: int | None = None
        try:
            for index, page in enumerate(iter_leaves(tree)):
                marker = read_page_label(page)
                if marker is not None:
                    active = marker
                labels.append(PageLabel(index=index, marker=marker, exercise=active))
        except PyPdfError as e:
            raise DocumentError(f"Could not read page tree: {e}") from e
        return labels

    def page_count(self) -> int:
        """Return the number of pages in the source document."""
        _, tree, _ = self._open()
        try:
            return count_leaves(tree)
        except PyPdfError as e:
            raise DocumentError(f"Could not read page tree: {e}") from e
