"""Custom exception hierarchy for exoserve configuration and extraction."""


class ExoServeError(Exception):
    """Base exception for all exoserve errors.

    All exoserve-specific exceptions inherit from this class, enabling
    centralized exception handling in the gateway and the CLI.
    """

    pass


class ConfigError(ExoServeError):
    """Exception raised for configuration errors.

    This exception is raised when configuration resolution fails, such as a
    malformed bind address or an unreadable source document.

    Attributes:
        field: The configuration field that caused the error
        message: Human-readable error message describing the issue
    """

    def __init__(self, field: str, message: str) -> None:
        """Initialize ConfigError with field and message.

        Args:
            field: Configuration field name where error occurred
            message: Descriptive error message
        """
        self.field = field
        self.message = message
        super().__init__(f"Configuration error in '{field}': {message}")


class InputValidationError(ExoServeError):
    """Exception raised when a requested exercise list is malformed.

    Covers unparsable labels and duplicate labels. Raised before any
    document work begins.
    """

    def __init__(self, message: str) -> None:
        """Create a validation error for a request path."""
        self.message = message
        super().__init__(message)


class ExtractError(ExoServeError):
    """Base exception for failures while extracting exercises from a document.

    Any ExtractError aborts the whole extraction; no partial output is
    ever produced.
    """

    pass


class DocumentError(ExtractError):
    """Exception raised when the source document cannot be decoded."""

    pass


class StructuralError(ExtractError):
    """Exception raised when the page tree does not have the expected shape.

    Attributes:
        message: Human-readable error message
    """

    def __init__(self, message: str) -> None:
        """Create a structural error describing the offending node."""
        self.message = message
        super().__init__(f"Invalid page tree: {message}")


class MissingExerciseError(ExtractError):
    """Exception raised when requested exercises never appear in the document.

    Attributes:
        missing: Sorted list of exercise numbers that were never observed
    """

    def __init__(self, missing: list[int]) -> None:
        """Initialize MissingExerciseError with the unseen exercise numbers.

        Args:
            missing: Exercise numbers that were requested but not found
        """
        self.missing = sorted(missing)
        numbers = ", ".join(str(n) for n in self.missing)
        super().__init__(f"Exercises not found in document: {numbers}")


class SerializationError(ExtractError):
    """Exception raised when the filtered document cannot be written out."""

    pass


class ResourceError(ExoServeError):
    """Exception raised when the shared extractor cannot be acquired.

    Once the extractor guard is poisoned by an unexpected failure, every
    later acquisition raises this error until the process restarts.
    """

    pass
