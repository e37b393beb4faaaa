"""HTML renderer for the API reference section.

All functions are pure. Any text taken from the API description goes through
escape_html before it is placed in markup; the surrounding structure is ours.
"""

import re

from api_docs_updater.parser.base import ApiEndpoint, Param, Response, SourceDocument

BODY_METHODS = ("POST", "PUT", "PATCH")


def escape_html(text: str | None) -> str:
    if not text:
        return ""
    return (
        str(text)
        .replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
    )


def method_class(method: str) -> str:
    return method.lower()


def tag_anchor(tag_name: str) -> str:
    """Anchor id shared by a tag section and its sidebar link."""
    return "tag-" + re.sub(r"\s+", "-", tag_name.lower())


def base_url_for(doc: SourceDocument, fallback: str) -> str:
    """First declared server URL, or the fallback when the document declares none."""
    return doc.servers[0] if doc.servers else fallback


def render_parameters_table(parameters: list[Param]) -> str:
    if not parameters:
        return ""

    html = (
        "<h4>Parameters</h4>\n"
        '<table class="param-table"><thead><tr><th>Name</th><th>In</th><th>Type</th>'
        "<th>Required</th><th>Description</th></tr></thead><tbody>\n"
    )
    for param in parameters:
        required = 'Yes<span class="param-required">*</span>' if param.required else "No"
        html += (
            f'<tr><td><span class="param-name">{escape_html(param.name)}</span></td>'
            f'<td><span class="param-in">{escape_html(param.location)}</span></td>'
            f'<td><span class="param-type">{escape_html(param.param_type or "string")}</span></td>'
            f"<td>{required}</td><td>{escape_html(param.description)}</td></tr>\n"
        )
    html += "</tbody></table>\n"
    return html


def response_code_class(code: str) -> str:
    """Badge class for a status code; non-numeric codes ("default", "2XX") count as success."""
    try:
        value = int(code)
    except ValueError:
        return "success"
    if 400 <= value < 500:
        return "client-error"
    if value >= 500:
        return "server-error"
    return "success"


def render_response_codes(responses: dict[str, Response]) -> str:
    if not responses:
        return ""

    html = '<div class="response-codes">'
    for code, response in responses.items():
        html += (
            f'<span class="response-code {response_code_class(code)}">'
            f"{escape_html(code)} {escape_html(response.description)}</span>"
        )
    html += "</div>\n"
    return html


def render_curl_example(method: str, path: str, base_url: str) -> str:
    """Unescaped curl snippet; path placeholders like {id} are left as-is."""
    method = method.upper()
    curl = f'curl -X {method} "{base_url}{path}" \\\n  -H "Authorization: Bearer YOUR_TOKEN"'
    if method in BODY_METHODS:
        curl += ' \\\n  -H "Content-Type: application/json" \\\n  -d \'{}\''
    return curl


def render_endpoint_card(endpoint: ApiEndpoint, base_url: str) -> str:
    op = endpoint.operation
    curl = render_curl_example(endpoint.method, endpoint.path, base_url)
    return (
        f'<div class="endpoint-card" data-search="{escape_html(endpoint.search_text)}">\n'
        '<div class="endpoint-header" onclick="toggleEndpoint(this)">\n'
        f'<span class="method-badge {method_class(endpoint.method)}">{endpoint.method.upper()}</span>\n'
        f'<span class="endpoint-path">{escape_html(endpoint.path)}</span>\n'
        f'<span class="endpoint-summary">{escape_html(op.summary)}</span>\n'
        '<span class="endpoint-chevron">&#9654;</span>\n'
        "</div>\n"
        '<div class="endpoint-body">\n'
        f'<p class="endpoint-desc">{escape_html(op.description)}</p>\n'
        f"{render_parameters_table(op.parameters)}\n"
        f"{render_response_codes(op.responses)}\n"
        '<div class="code-block"><div class="code-block-header"><span>curl</span>'
        '<button class="copy-btn" onclick="copyCode(this)">Copy</button></div>\n'
        f"<pre><code>{escape_html(curl)}</code></pre></div>\n"
        "</div></div>\n"
    )


def render_tag_group(tag_name: str, endpoints: list[ApiEndpoint], base_url: str) -> str:
    count = len(endpoints)
    name = escape_html(tag_name)
    html = (
        f"<!-- {name} -->\n"
        f'<div class="tag-group" id="{escape_html(tag_anchor(tag_name))}">\n'
        f'<div class="tag-group-header"><h3>{name}</h3>'
        f'<span class="tag-count">{count} endpoint{"" if count == 1 else "s"}</span></div>\n'
        "\n"
    )
    for ep in endpoints:
        html += render_endpoint_card(ep, base_url)
        html += "\n"
    html += "</div>\n"
    return html


def render_api_reference(groups: dict[str, list[ApiEndpoint]], base_url: str) -> str:
    """Body markup for the whole reference: every tag section in group order."""
    html = "\n"
    for tag_name, endpoints in groups.items():
        html += render_tag_group(tag_name, endpoints, base_url)
        html += "\n"
    return html
