"""Configuration resolution for exoserve.

Settings come from three places. CLI flags win over EXOSERVE_* environment
variables, which win over the built-in defaults.
"""

import logging
import os
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from exoserve.lib.errors import ConfigError
from exoserve.models.config import ServerConfig

logger = logging.getLogger(__name__)

# Environment variable to field name mapping
ENV_VAR_MAP = {
    "addr": "EXOSERVE_ADDR",
    "document": "EXOSERVE_DOCUMENT",
    "debug": "EXOSERVE_DEBUG",
}


def _parse_env_value(field_name: str, value: str) -> Any:
    """Parse environment variable value to appropriate type.

    Args:
        field_name: Name of the field (used to determine type)
        value: String value from environment variable

    Returns:
        Parsed value in correct type (bool, Path, or str)
    """
    if field_name == "debug":
        return value.lower() in ("true", "1", "yes", "on")
    elif field_name == "document":
        return Path(value)
    else:
        return value


def _get_env_value(
    field_name: str, env_vars: os._Environ[str] | dict[str, str]
) -> Any | None:
    """Get environment variable value for a field.

    Args:
        field_name: Name of field to get
        env_vars: Environment variables mapping

    Returns:
        Parsed value or None if not found or empty
    """
    env_var_name = ENV_VAR_MAP.get(field_name)
    if not env_var_name or not env_vars.get(env_var_name):
        return None

    try:
        return _parse_env_value(field_name, env_vars[env_var_name])
    except (ValueError, KeyError):
        return None


def resolve_server_config(
    cli_config: ServerConfig | None,
    defaults: dict[str, Any],
    env_vars: os._Environ[str] | dict[str, str] | None = None,
) -> ServerConfig:
    """Resolve server configuration with priority hierarchy.

    Configuration priority (highest to lowest):
    1. CLI flags (cli_config)
    2. Environment variables (EXOSERVE_* vars)
    3. Built-in defaults

    Args:
        cli_config: Config built from CLI flags (optional)
        defaults: Dictionary of default values
        env_vars: Environment mapping, os.environ when omitted

    Returns:
        Resolved ServerConfig with all fields populated

    Raises:
        ConfigError: If the resolved values are invalid
    """
    env = os.environ if env_vars is None else env_vars
    resolved: dict[str, Any] = {}

    for field in ServerConfig.model_fields:
        # Priority 1: CLI flag
        if cli_config and getattr(cli_config, field, None) is not None:
            resolved[field] = getattr(cli_config, field)
        # Priority 2: Environment variable
        elif (env_value := _get_env_value(field, env)) is not None:
            resolved[field] = env_value
        # Priority 3: Built-in default
        else:
            resolved[field] = defaults.get(field)

    try:
        config = ServerConfig(**resolved)
    except PydanticValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first.get("loc", ())) or "config"
        raise ConfigError(field, first.get("msg", str(e))) from e

    logger.debug(f"Resolved server config: {config.model_dump()}")
    return config


def load_document_bytes(path: Path | None) -> bytes:
    """Read the source exercise document once, at startup.

    Args:
        path: Path to the PDF, as resolved from configuration

    Returns:
        Raw document bytes

    Raises:
        ConfigError: If no path is configured or the file cannot be read
    """
    if path is None:
        raise ConfigError(
            "document",
            "No source document configured. "
            "Pass --document or set EXOSERVE_DOCUMENT.",
        )
    try:
        data = path.read_bytes()
    except OSError as e:
        raise ConfigError("document", f"Cannot read '{path}': {e}") from e

    logger.info(f"Loaded source document {path} ({len(data)} bytes)")
    return data
