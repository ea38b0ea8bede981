"""Server configuration model."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator


def split_addr(addr: str) -> tuple[str, int]:
    """Split a HOST:PORT bind address.

    IPv6 hosts may be written in brackets, e.g. "[::1]:3000".

    Args:
        addr: Address string

    Returns:
        Tuple of (host, port)

    Raises:
        ValueError: If the address is not HOST:PORT or the port is out of range
    """
    host, sep, port_text = addr.rpartition(":")
    if not sep or not host:
        raise ValueError(f"expected HOST:PORT, got '{addr}'")
    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]
    if not port_text.isdigit():
        raise ValueError(f"invalid port '{port_text}'")
    port = int(port_text)
    if not 1 <= port <= 65535:
        raise ValueError(f"port {port} out of range (1-65535)")
    return host, port


class ServerConfig(BaseModel):
    """Resolved configuration for the exercise server and CLI commands."""

    model_config = ConfigDict(extra="forbid")

    addr: str | None = Field(
        default=None, description="Address to bind to, as HOST:PORT"
    )
    document: Path | None = Field(
        default=None, description="Path to the source exercise PDF"
    )
    debug: bool | None = Field(default=None, description="Enable debug logging")

    @field_validator("addr")
    @classmethod
    def validate_addr(cls, v: str | None) -> str | None:
        """Validate that addr is a usable HOST:PORT pair."""
        if v is not None:
            split_addr(v)
        return v

    @property
    def host(self) -> str:
        """Host part of addr."""
        if self.addr is None:
            raise ValueError("addr is not set")
        return split_addr(self.addr)[0]

    @property
    def port(self) -> int:
        """Port part of addr."""
        if self.addr is None:
            raise ValueError("addr is not set")
        return split_addr(self.addr)[1]
