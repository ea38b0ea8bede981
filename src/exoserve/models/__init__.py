"""Pydantic models for exoserve configuration."""

from exoserve.models.config import ServerConfig

__all__ = ["ServerConfig"]
