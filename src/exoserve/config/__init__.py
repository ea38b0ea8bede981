"""Configuration loading and defaults for exoserve.

Main components:
- resolve_server_config: Merge CLI flags, EXOSERVE_* variables and defaults
- load_document_bytes: Read the source exercise PDF once at startup
- DEFAULT_SERVER_CONFIG: Built-in defaults
"""

from exoserve.config.defaults import DEFAULT_SERVER_CONFIG
from exoserve.config.loader import load_document_bytes, resolve_server_config

__all__ = [
    "DEFAULT_SERVER_CONFIG",
    "load_document_bytes",
    "resolve_server_config",
]
