import os
from pathlib import Path

import pytest

from api_docs_updater.config import (
    BODY_END_MARKER,
    BODY_START_MARKER,
    SIDEBAR_END_MARKER,
    SIDEBAR_START_MARKER,
    Markers,
)
from api_docs_updater.errors import RegionNotFoundError
from api_docs_updater.splicer import locate_region, splice_document, update_document, write_atomic

FIXTURES = Path(__file__).parent / "fixtures"

BODY = "\n<!-- Items -->\n<div>new body</div>\n\n"
NAV = '  <a href="#tag-items" class="sidebar-link">Items</a>\n'


def _page() -> str:
    return (FIXTURES / "index.html").read_text(encoding="utf-8")


class TestLocateRegion:
    def test_three_parts(self):
        region = locate_region("aa[START]middle[END]zz", "[START]", "[END]")
        assert region.prefix == "aa[START]"
        assert region.content == "middle"
        assert region.suffix == "[END]zz"
        assert region.replace("new") == "aa[START]new[END]zz"

    def test_end_marker_before_start_is_ignored(self):
        assert locate_region("[END] x [START] y", "[START]", "[END]") is None

    def test_missing_markers(self):
        assert locate_region("no markers here", "[START]", "[END]") is None
        assert locate_region("[START] only", "[START]", "[END]") is None


class TestSpliceDocument:
    def test_replaces_body_and_sidebar(self):
        result = splice_document(_page(), BODY, NAV)

        assert result.sidebar_updated is True
        assert "stale content" not in result.text
        assert 'href="#tag-old"' not in result.text
        assert BODY_START_MARKER + "\n" + BODY + BODY_END_MARKER in result.text
        assert SIDEBAR_START_MARKER + "\n" + NAV + "\n  " + SIDEBAR_END_MARKER in result.text

    def test_content_outside_regions_untouched(self):
        page = _page()
        text = splice_document(page, BODY, NAV).text

        head = page[: page.index(SIDEBAR_START_MARKER)]
        tail = page[page.index(BODY_END_MARKER):]
        assert text.startswith(head)
        assert text.endswith(tail)
        assert '<a href="#intro" class="sidebar-link">Introduction</a>' in text
        assert '<input id="endpoint-search" type="search" placeholder="Search endpoints">' in text

    def test_idempotent(self):
        once = splice_document(_page(), BODY, NAV).text
        twice = splice_document(once, BODY, NAV).text
        assert twice == once

    def test_markers_preserved_after_many_runs(self):
        text = _page()
        for _ in range(3):
            text = splice_document(text, BODY, NAV).text
        for marker in (BODY_START_MARKER, BODY_END_MARKER, SIDEBAR_START_MARKER, SIDEBAR_END_MARKER):
            assert text.count(marker) == 1

    def test_missing_body_start_marker(self):
        page = _page().replace(BODY_START_MARKER, "")
        with pytest.raises(RegionNotFoundError) as exc_info:
            splice_document(page, BODY, NAV)
        assert exc_info.value.marker == BODY_START_MARKER

    def test_missing_body_end_marker(self):
        page = _page().replace("<!-- Changelog -->", "<!-- History -->")
        with pytest.raises(RegionNotFoundError) as exc_info:
            splice_document(page, BODY, NAV)
        assert exc_info.value.marker == BODY_END_MARKER

    def test_missing_sidebar_is_skipped(self):
        page = _page().replace(SIDEBAR_END_MARKER, '<div class="sidebar-section">Extras</div>')
        result = splice_document(page, BODY, NAV)

        assert result.sidebar_updated is False
        assert "new body" in result.text
        assert 'href="#tag-old"' in result.text

    def test_custom_markers(self):
        markers = Markers(body_start="<!-- a -->", body_end="<!-- b -->", sidebar_start="[s]", sidebar_end="[e]")
        result = splice_document("[s]old[e]<!-- a -->old<!-- b -->", "BODY", "NAV", markers)
        assert result.text == "[s]\nNAV\n  [e]<!-- a -->\nBODY<!-- b -->"


class TestUpdateDocument:
    def test_writes_in_place(self, tmp_path):
        target = tmp_path / "index.html"
        target.write_text(_page(), encoding="utf-8")

        result = update_document(target, BODY, NAV)

        assert target.read_text(encoding="utf-8") == result.text
        assert "new body" in target.read_text(encoding="utf-8")
        assert [p.name for p in tmp_path.iterdir()] == ["index.html"]

    def test_missing_marker_leaves_file_untouched(self, tmp_path):
        target = tmp_path / "index.html"
        original = _page().replace(BODY_START_MARKER, "").encode("utf-8")
        target.write_bytes(original)

        with pytest.raises(RegionNotFoundError):
            update_document(target, BODY, NAV)

        assert target.read_bytes() == original
        assert [p.name for p in tmp_path.iterdir()] == ["index.html"]

    def test_no_write(self, tmp_path):
        target = tmp_path / "index.html"
        target.write_text(_page(), encoding="utf-8")

        result = update_document(target, BODY, NAV, write=False)

        assert "new body" in result.text
        assert target.read_text(encoding="utf-8") == _page()

    def test_crlf_outside_regions_round_trips(self, tmp_path):
        head = (
            "<html>\r\n<nav>\r\n" + SIDEBAR_START_MARKER + "\r\n  <a>old</a>\r\n  " + SIDEBAR_END_MARKER
            + "\r\n</nav>\r\n<section>\r\n" + BODY_START_MARKER
        )
        tail = BODY_END_MARKER + "\r\n<footer>x</footer>\r\n</html>\r\n"
        target = tmp_path / "index.html"
        target.write_bytes((head + "\r\nstale\r\n" + tail).encode("utf-8"))

        update_document(target, BODY, NAV)

        written = target.read_bytes()
        assert written.startswith("<html>\r\n<nav>\r\n".encode("utf-8") + SIDEBAR_START_MARKER.encode("utf-8"))
        assert written.endswith(tail.encode("utf-8"))
        assert b"\r\n</nav>\r\n<section>\r\n" in written
        assert b"stale" not in written


class TestWriteAtomic:
    def test_keeps_permissions(self, tmp_path):
        target = tmp_path / "page.html"
        target.write_text("old", encoding="utf-8")
        os.chmod(target, 0o644)

        write_atomic(target, "new")

        assert target.read_text(encoding="utf-8") == "new"
        assert target.stat().st_mode & 0o777 == 0o644

    def test_creates_missing_file(self, tmp_path):
        target = tmp_path / "fresh.html"
        write_atomic(target, "content")
        assert target.read_text(encoding="utf-8") == "content"

    def test_new_file_gets_umask_default_mode(self, tmp_path):
        target = tmp_path / "fresh.html"
        old_umask = os.umask(0o022)
        try:
            write_atomic(target, "content")
        finally:
            os.umask(old_umask)
        assert target.stat().st_mode & 0o777 == 0o644
