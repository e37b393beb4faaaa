"""Error types raised while regenerating the API reference page.

Every failure is fatal for the run; the CLI turns these into a non-zero exit.
"""


class ApiDocsError(Exception):
    """Base class for all api-docs-updater failures."""


class FetchError(ApiDocsError):
    """The source document could not be retrieved (network, TLS, timeout, HTTP status, file IO)."""


class DecodeError(ApiDocsError):
    """The retrieved body is not valid structured data or not an OpenAPI-shaped document."""


class RegionNotFoundError(ApiDocsError):
    """A required marker is missing from the target HTML document."""

    def __init__(self, marker: str, path: str | None = None):
        self.marker = marker
        self.path = path
        where = f" in {path}" if path else ""
        super().__init__(f"Could not find API Reference section marker{where}: {marker!r}")
