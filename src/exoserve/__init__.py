"""exoserve - Serve selected exercises from a PDF exercise collection.

exoserve extracts the pages of chosen exercises from a fixed exercise PDF
and returns them as a new, valid PDF. Pages are attributed to exercises by
the "Exercice N" heading drawn in their content.

Main features:
- HTTP server: GET /12,47,105.pdf returns those three exercises
- Page tree filtering that keeps every /Count consistent
- CLI commands to extract exercises to a file and list page labels
"""

from exoserve.lib.errors import (
    ConfigError,
    ExoServeError,
    MissingExerciseError,
    StructuralError,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "ConfigError",
    "ExoServeError",
    "MissingExerciseError",
    "StructuralError",
]
