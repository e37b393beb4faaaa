"""Sidebar navigation for the API reference tag sections."""

from api_docs_updater.generator.html import escape_html, tag_anchor
from api_docs_updater.parser.base import ApiEndpoint


def badge_class(endpoints: list[ApiEndpoint]) -> str:
    """The group's only HTTP method in lower case, or "mixed"."""
    methods = {ep.method.lower() for ep in endpoints}
    if len(methods) == 1:
        return methods.pop()
    return "mixed"


def render_sidebar_links(groups: dict[str, list[ApiEndpoint]]) -> str:
    html = ""
    for tag_name, endpoints in groups.items():
        html += (
            f'  <a href="#{escape_html(tag_anchor(tag_name))}" class="sidebar-link" onclick="closeMobile()">'
            f"{escape_html(tag_name)} "
            f'<span class="link-badge {badge_class(endpoints)}">{len(endpoints)}</span></a>\n'
        )
    return html
