"""Retrieve and decode the source API description.

A single attempt is made; there is no retry. Transport problems and
undecodable bodies are reported as distinct error types.
"""

import json
from pathlib import Path
from urllib.parse import urlparse

import httpx
import yaml

from api_docs_updater.errors import DecodeError, FetchError

from .base import SourceDocument
from .swagger import parse_openapi

YAML_SUFFIXES = (".yaml", ".yml")


def fetch_document(
    source: str,
    timeout: float = 30.0,
    transport: httpx.BaseTransport | None = None,
) -> dict:
    """Fetch a JSON (or YAML) API description from a URL or a local file."""
    if _is_remote(source):
        text = _fetch_remote(source, timeout, transport)
    else:
        text = _read_local(source)
    return decode_document(text, yaml_body=_is_yaml(source))


def load_source_document(
    source: str,
    timeout: float = 30.0,
    transport: httpx.BaseTransport | None = None,
) -> SourceDocument:
    """Fetch, decode and validate the API description in one step."""
    return parse_openapi(fetch_document(source, timeout=timeout, transport=transport))


def decode_document(text: str, yaml_body: bool = False) -> dict:
    """Decode a response body into a mapping.

    Raises DecodeError if the body is malformed or its root is not an object.
    """
    try:
        data = yaml.safe_load(text) if yaml_body else json.loads(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        kind = "YAML" if yaml_body else "JSON"
        raise DecodeError(f"Failed to parse Swagger {kind}: {e}") from e

    if not isinstance(data, dict):
        raise DecodeError(f"Expected a JSON object at the document root, got {type(data).__name__}")
    return data


def _fetch_remote(url: str, timeout: float, transport: httpx.BaseTransport | None) -> str:
    try:
        with httpx.Client(timeout=timeout, transport=transport, follow_redirects=True) as client:
            response = client.get(url, headers={"Accept": "application/json"})
            response.raise_for_status()
            return response.text
    except httpx.TimeoutException as e:
        raise FetchError(f"Timed out after {timeout}s fetching {url}") from e
    except httpx.HTTPStatusError as e:
        raise FetchError(f"{url} returned HTTP {e.response.status_code}") from e
    except httpx.HTTPError as e:
        raise FetchError(f"Failed to fetch {url}: {e}") from e


def _read_local(source: str) -> str:
    path = Path(urlparse(source).path) if source.startswith("file://") else Path(source)
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise FetchError(f"Failed to read {path}: {e}") from e


def _is_remote(source: str) -> bool:
    return urlparse(source).scheme in ("http", "https")


def _is_yaml(source: str) -> bool:
    return urlparse(source).path.lower().endswith(YAML_SUFFIXES)
