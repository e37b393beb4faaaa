"""Runtime configuration for the API reference updater."""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_SOURCE_URL = "https://api.sportsvisio-api.com/api-docs/public-json"
DEFAULT_HTML_FILE = Path("docs") / "index.html"
DEFAULT_FALLBACK_BASE_URL = "https://api.sportsvisio-api.com"
DEFAULT_TIMEOUT = 30.0

BODY_START_MARKER = '<div id="no-results">No endpoints match your search.</div>'
BODY_END_MARKER = "</section>\n\n<!-- Changelog -->"
SIDEBAR_START_MARKER = '<div class="sidebar-section">API Reference</div>'
SIDEBAR_END_MARKER = '<div class="sidebar-section">More</div>'


class Markers(BaseModel):
    """Literal boundary strings of the two replaceable regions in the page."""

    model_config = ConfigDict(frozen=True)

    body_start: str = BODY_START_MARKER
    body_end: str = BODY_END_MARKER
    sidebar_start: str = SIDEBAR_START_MARKER
    sidebar_end: str = SIDEBAR_END_MARKER


class UpdaterConfig(BaseModel):
    """Everything one regeneration run needs; passed explicitly into the pipeline."""

    model_config = ConfigDict(frozen=True)

    source_url: str = DEFAULT_SOURCE_URL
    html_file: Path = DEFAULT_HTML_FILE
    timeout: float = Field(DEFAULT_TIMEOUT, gt=0)
    fallback_base_url: str = DEFAULT_FALLBACK_BASE_URL
    markers: Markers = Markers()
