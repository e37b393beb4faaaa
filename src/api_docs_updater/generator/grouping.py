"""Group normalized endpoints into tag sections."""

from api_docs_updater.parser.base import ApiEndpoint


def group_by_tag(
    endpoints: list[ApiEndpoint],
    declared_tags: list[str] | None = None,
) -> dict[str, list[ApiEndpoint]]:
    """Group endpoints by tag.

    Declared tags come first in their declared order, tags only seen on
    operations follow in first-seen order. Tags without endpoints are dropped.
    """
    groups: dict[str, list[ApiEndpoint]] = {tag: [] for tag in declared_tags or []}
    for ep in endpoints:
        groups.setdefault(ep.tag, []).append(ep)
    return {tag: eps for tag, eps in groups.items() if eps}


def count_endpoints(groups: dict[str, list[ApiEndpoint]]) -> int:
    return sum(len(eps) for eps in groups.values())
