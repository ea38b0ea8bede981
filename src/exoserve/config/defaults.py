"""Default configuration values for exoserve."""

# Server configuration defaults
DEFAULT_SERVER_CONFIG: dict[str, str | bool | None] = {
    "addr": "127.0.0.1:3000",
    "document": None,
    "debug": False,
}

PDF_MEDIA_TYPE = "application/pdf"
NOT_FOUND_BODY = "Not found"
INTERNAL_ERROR_BODY = "Internal server error"
