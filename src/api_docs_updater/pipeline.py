"""End-to-end regeneration: fetch -> normalize -> group -> render -> splice."""

from pathlib import Path

import httpx
from pydantic import BaseModel, ConfigDict

from api_docs_updater.config import UpdaterConfig
from api_docs_updater.generator.grouping import count_endpoints, group_by_tag
from api_docs_updater.generator.html import base_url_for, render_api_reference
from api_docs_updater.generator.sidebar import render_sidebar_links
from api_docs_updater.parser.base import ApiEndpoint, SourceDocument
from api_docs_updater.parser.fetch import load_source_document
from api_docs_updater.parser.swagger import normalize_endpoints
from api_docs_updater.splicer import update_document


class RenderedReference(BaseModel):
    model_config = ConfigDict(frozen=True)

    groups: dict[str, list[ApiEndpoint]]
    body_html: str
    nav_html: str

    @property
    def endpoint_count(self) -> int:
        return count_endpoints(self.groups)


class UpdateReport(BaseModel):
    """What a run did, for the CLI to report."""

    title: str
    version: str
    endpoint_count: int
    tag_count: int
    sidebar_updated: bool
    written: bool
    html_file: Path


def render_reference(doc: SourceDocument, fallback_base_url: str) -> RenderedReference:
    """Render body and sidebar markup from a parsed document without touching any file."""
    groups = group_by_tag(normalize_endpoints(doc), doc.declared_tags)
    return RenderedReference(
        groups=groups,
        body_html=render_api_reference(groups, base_url_for(doc, fallback_base_url)),
        nav_html=render_sidebar_links(groups),
    )


def update_api_reference(
    config: UpdaterConfig,
    transport: httpx.BaseTransport | None = None,
    dry_run: bool = False,
) -> UpdateReport:
    """Regenerate the API reference in config.html_file from config.source_url.

    Any ApiDocsError aborts the run before the page is written.
    """
    doc = load_source_document(config.source_url, timeout=config.timeout, transport=transport)
    rendered = render_reference(doc, config.fallback_base_url)
    result = update_document(
        config.html_file,
        rendered.body_html,
        rendered.nav_html,
        config.markers,
        write=not dry_run,
    )
    return UpdateReport(
        title=doc.info.title,
        version=doc.info.version,
        endpoint_count=rendered.endpoint_count,
        tag_count=len(rendered.groups),
        sidebar_updated=result.sidebar_updated,
        written=not dry_run,
        html_file=config.html_file,
    )
