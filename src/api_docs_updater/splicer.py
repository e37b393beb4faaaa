"""Replace the marker-delimited API reference regions of the HTML page.

The page is never written unless the body region was found, and the write
goes through a temp file + rename so readers never see a half-written page.
"""

import os
import tempfile
from pathlib import Path
from typing import NamedTuple

from api_docs_updater.config import Markers
from api_docs_updater.errors import RegionNotFoundError


class Region(NamedTuple):
    """A document split around one replaceable region.

    prefix ends with the start marker, suffix begins with the end marker.
    """

    prefix: str
    content: str
    suffix: str

    def replace(self, content: str) -> str:
        return self.prefix + content + self.suffix


class SpliceResult(NamedTuple):
    text: str
    sidebar_updated: bool


def locate_region(text: str, start_marker: str, end_marker: str) -> Region | None:
    """Split text at the first start marker and the first end marker after it."""
    start = text.find(start_marker)
    if start == -1:
        return None
    content_start = start + len(start_marker)
    end = text.find(end_marker, content_start)
    if end == -1:
        return None
    return Region(text[:content_start], text[content_start:end], text[end:])


def splice_document(
    text: str,
    body_html: str,
    nav_html: str,
    markers: Markers = Markers(),
    path: str | None = None,
) -> SpliceResult:
    """Put freshly rendered body and sidebar markup into the page text.

    The body region is required; a missing sidebar region leaves the
    sidebar as it was and is reported through sidebar_updated.
    """
    body = locate_region(text, markers.body_start, markers.body_end)
    if body is None:
        missing = markers.body_start if markers.body_start not in text else markers.body_end
        raise RegionNotFoundError(missing, path)
    text = body.replace("\n" + body_html)

    sidebar = locate_region(text, markers.sidebar_start, markers.sidebar_end)
    if sidebar is None:
        return SpliceResult(text, False)
    return SpliceResult(sidebar.replace("\n" + nav_html + "\n  "), True)


def write_atomic(path: Path, text: str) -> None:
    """Write text to path via a sibling temp file and an atomic rename."""
    path = Path(path)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(text)
        os.chmod(tmp_name, path.stat().st_mode & 0o777 if path.exists() else _default_mode())
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


def _default_mode() -> int:
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def update_document(
    path: Path,
    body_html: str,
    nav_html: str,
    markers: Markers = Markers(),
    write: bool = True,
) -> SpliceResult:
    """Read the page, splice both regions and write it back in place."""
    path = Path(path)
    # bytes outside the regions, line endings included, must round-trip unchanged
    original = path.read_bytes().decode("utf-8")
    result = splice_document(original, body_html, nav_html, markers, path=str(path))
    if write:
        write_atomic(path, result.text)
    return result
