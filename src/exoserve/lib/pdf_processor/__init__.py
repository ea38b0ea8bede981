"""PDF processing utilities for exoserve.

This package provides the exercise extraction pipeline:

- **Marker scanning**: Find the exercise number drawn on a page by looking
  for the "Exercice" heading in its content stream. Both the kerned and the
  plain typesetting of the heading are recognized.

- **Page tree filtering**: Walk a PDF page tree in document order, delete
  rejected leaves in place and keep every /Count consistent.

- **Exercise extraction**: Decode the source document, keep the pages of
  the requested exercises, drop stale bookmarks and write the result.

Example:
    from exoserve.lib.pdf_processor import ExerciseExtractor

    extractor = ExerciseExtractor(Path("exercises.pdf").read_bytes())
    pdf_bytes = extractor.extract([12, 47, 105])

Functions:
    read_exercise_number: Parse the exercise number from content bytes
    filter_page_tree: Filter a page tree in place
"""

from exoserve.lib.pdf_processor.marker_scanner import (
    read_exercise_number,
    read_page_content,
    read_page_label,
)
from exoserve.lib.pdf_processor.page_extractor import (
    ExerciseExtractor,
    MatchState,
    PageLabel,
)
from exoserve.lib.pdf_processor.page_tree import (
    KeepLeaf,
    RemoveLeaf,
    SubtreeResult,
    count_leaves,
    filter_page_tree,
)

__all__ = [
    "ExerciseExtractor",
    "KeepLeaf",
    "MatchState",
    "PageLabel",
    "RemoveLeaf",
    "SubtreeResult",
    "count_leaves",
    "filter_page_tree",
    "read_exercise_number",
    "read_page_content",
    "read_page_label",
]
