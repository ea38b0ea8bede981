"""Server runtime package for serving exercise extracts via HTTP.

This package provides the FastAPI application, the request gateway that
parses exercise selections, and the guard that serializes access to the
shared extractor.
"""

__all__: list[str] = []
