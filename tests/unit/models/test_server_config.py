"""Tests for the ServerConfig model and bind address parsing."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from exoserve.models.config import ServerConfig, split_addr


class TestSplitAddr:
    """Tests for split_addr."""

    @pytest.mark.parametrize(
        ("addr", "expected"),
        [
            ("127.0.0.1:3000", ("127.0.0.1", 3000)),
            ("localhost:1", ("localhost", 1)),
            ("0.0.0.0:65535", ("0.0.0.0", 65535)),
            ("[::1]:8080", ("::1", 8080)),
        ],
    )
    def test_valid(self, addr: str, expected: tuple[str, int]) -> None:
        """Test well-formed addresses."""
        assert split_addr(addr) == expected

    @pytest.mark.parametrize(
        "addr",
        ["3000", ":3000", "localhost:", "localhost:0", "localhost:65536", "host:-1"],
    )
    def test_invalid(self, addr: str) -> None:
        """Test malformed addresses."""
        with pytest.raises(ValueError):
            split_addr(addr)


class TestServerConfig:
    """Tests for ServerConfig."""

    def test_all_fields_optional(self) -> None:
        """Test that an empty config is valid."""
        config = ServerConfig()
        assert config.addr is None
        assert config.document is None
        assert config.debug is None

    def test_document_coerced_to_path(self) -> None:
        """Test that the document path is a Path."""
        config = ServerConfig(document="ex.pdf")
        assert config.document == Path("ex.pdf")

    def test_invalid_addr_rejected(self) -> None:
        """Test that validation runs on addr."""
        with pytest.raises(ValidationError):
            ServerConfig(addr="nope")

    def test_extra_fields_forbidden(self) -> None:
        """Test that unknown fields are rejected."""
        with pytest.raises(ValidationError):
            ServerConfig(port=3000)

    def test_host_requires_addr(self) -> None:
        """Test that host and port need an address."""
        with pytest.raises(ValueError):
            _ = ServerConfig().host
