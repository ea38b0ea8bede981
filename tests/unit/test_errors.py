"""Tests for custom exception hierarchy in exoserve.lib.errors."""

from exoserve.lib.errors import (
    ConfigError,
    DocumentError,
    ExoServeError,
    ExtractError,
    InputValidationError,
    MissingExerciseError,
    ResourceError,
    SerializationError,
    StructuralError,
)


class TestExoServeError:
    """Tests for base ExoServeError exception."""

    def test_exoserve_error_creates_with_message(self) -> None:
        """Test that ExoServeError can be created with a message."""
        error = ExoServeError("Test error message")
        assert str(error) == "Test error message"

    def test_exoserve_error_is_exception(self) -> None:
        """Test that ExoServeError is an Exception subclass."""
        assert isinstance(ExoServeError("Test"), Exception)


class TestConfigError:
    """Tests for ConfigError exception."""

    def test_config_error_formats_message_with_field(self) -> None:
        """Test that ConfigError formats messages with field information."""
        error = ConfigError("addr", "invalid port 'abc'")
        assert str(error) == "Configuration error in 'addr': invalid port 'abc'"

    def test_config_error_keeps_attributes(self) -> None:
        """Test that field and message are available separately."""
        error = ConfigError("document", "missing")
        assert error.field == "document"
        assert error.message == "missing"

    def test_config_error_is_exoserve_error(self) -> None:
        """Test that ConfigError is an ExoServeError subclass."""
        assert isinstance(ConfigError("field", "msg"), ExoServeError)


class TestExtractErrors:
    """Tests for the extraction error family."""

    def test_extract_errors_share_base(self) -> None:
        """Test that every extraction failure is an ExtractError."""
        for error in (
            DocumentError("bad"),
            StructuralError("bad"),
            MissingExerciseError([1]),
            SerializationError("bad"),
        ):
            assert isinstance(error, ExtractError)
            assert isinstance(error, ExoServeError)

    def test_structural_error_message(self) -> None:
        """Test that StructuralError prefixes its message."""
        error = StructuralError("unexpected node type /Foo")
        assert error.message == "unexpected node type /Foo"
        assert str(error) == "Invalid page tree: unexpected node type /Foo"

    def test_missing_exercise_error_sorts_numbers(self) -> None:
        """Test that MissingExerciseError lists unseen exercises in order."""
        error = MissingExerciseError([105, -2, 12])
        assert error.missing == [-2, 12, 105]
        assert str(error) == "Exercises not found in document: -2, 12, 105"


class TestRequestErrors:
    """Tests for errors raised outside of extraction."""

    def test_input_validation_error_is_not_extract_error(self) -> None:
        """Test that malformed input is distinct from extraction failures."""
        error = InputValidationError("Invalid exercise number 'a'")
        assert error.message == "Invalid exercise number 'a'"
        assert not isinstance(error, ExtractError)

    def test_resource_error_is_exoserve_error(self) -> None:
        """Test that ResourceError belongs to the hierarchy."""
        error = ResourceError("poisoned")
        assert isinstance(error, ExoServeError)
        assert not isinstance(error, ExtractError)
