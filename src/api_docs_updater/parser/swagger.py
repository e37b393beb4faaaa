"""OpenAPI / Swagger document parser.

Turns a decoded OpenAPI 3.x / Swagger 2.0 mapping into a SourceDocument and
flattens it into one ApiEndpoint per (path, method, tag).
"""

import re

from pydantic import ValidationError

from api_docs_updater.errors import DecodeError

from .base import (
    DEFAULT_TAG,
    ApiEndpoint,
    ApiInfo,
    Operation,
    Param,
    Response,
    SourceDocument,
    TagInfo,
)

OPENAPI_METHODS = ("GET", "PUT", "POST", "DELETE", "OPTIONS", "HEAD", "PATCH", "TRACE")
RENDERED_METHODS = ("GET", "POST", "PUT", "DELETE", "PATCH")


def parse_openapi(data: dict) -> SourceDocument:
    """Validate a decoded document and build a SourceDocument from it.

    Raises DecodeError when the document does not have the expected shape.
    """
    doc = _mapping(data, "document")
    try:
        return SourceDocument(
            info=_parse_info(doc.get("info")),
            servers=_parse_servers(doc.get("servers")),
            tags=_parse_tags(doc.get("tags")),
            paths=_parse_paths(doc.get("paths")),
        )
    except ValidationError as e:
        raise DecodeError(f"Invalid API description: {e}") from e


def normalize_endpoints(doc: SourceDocument) -> list[ApiEndpoint]:
    """Flatten paths into endpoints, keeping only the methods that get rendered.

    Order is path declaration order, then method order, then the operation's tag order.
    """
    endpoints = []
    for path, methods in doc.paths.items():
        for method, operation in methods.items():
            if method.upper() not in RENDERED_METHODS:
                continue

            search_text = build_search_text(
                method,
                path,
                operation.summary,
                operation.description,
                operation.parameters,
            )
            for tag in operation.tags or [DEFAULT_TAG]:
                endpoints.append(
                    ApiEndpoint(
                        method=method.upper(),
                        path=path,
                        tag=tag,
                        operation=operation,
                        search_text=search_text,
                    )
                )
    return endpoints


def build_search_text(
    method: str,
    path: str,
    summary: str,
    description: str,
    parameters: list[Param],
) -> str:
    """Build the lower-cased keyword string used for client-side filtering."""
    parts = [
        method.lower(),
        re.sub(r"[/{}-]", " ", path.lower()),
        (summary or "").lower(),
        (description or "").lower(),
        *(p.name.lower() for p in parameters),
    ]
    return re.sub(r"\s+", " ", " ".join(parts)).strip()


def _mapping(value, where: str) -> dict:
    if not isinstance(value, dict):
        raise DecodeError(f"Expected an object for {where}, got {type(value).__name__}")
    return value


def _sequence(value, where: str) -> list:
    if value is None:
        return []
    if not isinstance(value, list):
        raise DecodeError(f"Expected a list for {where}, got {type(value).__name__}")
    return value


def _text(value) -> str:
    return "" if value is None else str(value)


def _parse_info(info) -> ApiInfo:
    if info is None:
        return ApiInfo()
    info = _mapping(info, "info")
    return ApiInfo(title=_text(info.get("title")), version=_text(info.get("version")))


def _parse_servers(servers) -> list[str]:
    result = []
    for server in _sequence(servers, "servers"):
        url = _mapping(server, "servers[]").get("url")
        if url:
            result.append(str(url))
    return result


def _parse_tags(tags) -> list[TagInfo]:
    result = []
    for tag in _sequence(tags, "tags"):
        tag = _mapping(tag, "tags[]")
        result.append(
            TagInfo(name=_text(tag.get("name")) or None, description=_text(tag.get("description")))
        )
    return result


def _parse_paths(paths) -> dict[str, dict[str, Operation]]:
    if paths is None:
        return {}
    result = {}
    for path, methods in _mapping(paths, "paths").items():
        operations = {}
        for method, operation in _mapping(methods, f"paths[{path!r}]").items():
            # path-level keys such as "parameters", "summary" or "$ref" are not operations
            if str(method).upper() not in OPENAPI_METHODS:
                continue
            operations[str(method).upper()] = _parse_operation(
                _mapping(operation, f"{str(method).upper()} {path}")
            )
        result[str(path)] = operations
    return result


def _parse_operation(operation: dict) -> Operation:
    tags = [str(t) for t in _sequence(operation.get("tags"), "tags")]
    return Operation(
        summary=_text(operation.get("summary")),
        description=_text(operation.get("description")),
        tags=tags or [DEFAULT_TAG],
        parameters=_parse_parameters(_sequence(operation.get("parameters"), "parameters")),
        responses=_parse_responses(operation.get("responses")),
    )


def _parse_parameters(params: list) -> list[Param]:
    result = []
    for p in params:
        p = _mapping(p, "parameters[]")
        schema = p.get("schema") or {}
        # Swagger 2.0 puts the type on the parameter itself
        param_type = schema.get("type") if isinstance(schema, dict) else None
        result.append(
            Param(
                name=p.get("name"),
                location=_text(p.get("in")) or "query",
                required=bool(p.get("required", False)),
                param_type=_text(param_type or p.get("type")) or "string",
                description=_text(p.get("description")),
            )
        )
    return result


def _parse_responses(responses) -> dict[str, Response]:
    if responses is None:
        return {}
    result = {}
    for status_code, resp in _mapping(responses, "responses").items():
        description = resp.get("description") if isinstance(resp, dict) else None
        result[str(status_code)] = Response(description=_text(description))
    return result
