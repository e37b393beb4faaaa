"""Data models for a parsed OpenAPI document.

The parser fills in every optional field with its default once, at decode
time, so the renderers never have to second-guess the shape of the data.
"""

from pydantic import BaseModel, ConfigDict

DEFAULT_TAG = "Other"


class Param(BaseModel):
    """A single API parameter (query, path, header, or cookie)."""

    model_config = ConfigDict(frozen=True)

    name: str
    location: str = "query"  # query / path / header / cookie
    required: bool = False
    param_type: str = "string"  # string / integer / boolean / array / object
    description: str = ""


class Response(BaseModel):
    model_config = ConfigDict(frozen=True)

    description: str = ""


class Operation(BaseModel):
    """One method + path combination as declared in the document."""

    model_config = ConfigDict(frozen=True)

    summary: str = ""
    description: str = ""
    tags: list[str] = [DEFAULT_TAG]
    parameters: list[Param] = []
    responses: dict[str, Response] = {}  # {status_code: Response}


class ApiInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str = ""
    version: str = ""


class TagInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    description: str = ""


class SourceDocument(BaseModel):
    """The whole API description, immutable once parsed."""

    model_config = ConfigDict(frozen=True)

    info: ApiInfo = ApiInfo()
    servers: list[str] = []  # base URLs, first one is the default
    tags: list[TagInfo] = []
    paths: dict[str, dict[str, Operation]] = {}  # {path: {METHOD: Operation}}

    @property
    def declared_tags(self) -> list[str]:
        return [t.name for t in self.tags]


class ApiEndpoint(BaseModel):
    """One (path, method, tag) entry ready for rendering."""

    model_config = ConfigDict(frozen=True)

    method: str  # GET / POST / PUT / DELETE / PATCH
    path: str  # /api/users/{id}
    tag: str
    operation: Operation
    search_text: str = ""
