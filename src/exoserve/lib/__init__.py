"""Shared utilities and error handling for exoserve."""

from exoserve.lib.errors import (
    ConfigError,
    ExoServeError,
    ExtractError,
    MissingExerciseError,
    StructuralError,
)

__all__ = [
    "ConfigError",
    "ExoServeError",
    "ExtractError",
    "MissingExerciseError",
    "StructuralError",
]
