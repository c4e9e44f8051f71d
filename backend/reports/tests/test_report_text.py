"""
Unit tests for report body helpers.
"""

from __future__ import annotations

from reports.services import describe_changes
from reports.text import html_from_plain, strip_html, summary_from_html


class TestReportText:

    def test_strip_html_drops_markup_and_scripts(self):
        html = "<style>p{color:red}</style><p>Első</p><script>alert(1)</script><p>  Második\n sor</p>"
        assert strip_html(html) == "Első Második sor"

    def test_summary_is_truncated_with_ellipsis(self):
        body = "<p>" + ("a" * 200) + "</p>"
        summary = summary_from_html(body)
        assert summary == "a" * 160 + "…"

    def test_short_summary_is_untouched(self):
        assert summary_from_html("<p>Rövid</p>") == "Rövid"
        assert summary_from_html("<p></p>") == ""

    def test_html_from_plain_escapes_and_keeps_breaks(self):
        assert html_from_plain("a < b & c\nvége") == "<p>a &lt; b &amp; c<br/>vége</p>"


class TestDescribeChanges:

    BASE = {"tags": ["Drog"], "involved": [], "vehicles": [], "full_text": "<p>x</p>"}

    def test_no_changes(self):
        assert describe_changes(self.BASE, dict(self.BASE)) == "—"

    def test_lists_each_changed_part(self):
        after = {
            "tags": [],
            "involved": [{"cid": 1, "name": "A", "role": "other"}],
            "vehicles": ["ABC 123"],
            "full_text": "<p>xyz</p>",
        }
        assert describe_changes(self.BASE, after) == "tagek, érintettek, járművek, tartalom (8→10 karakter)"
