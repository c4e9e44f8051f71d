"""
HTML helpers for report bodies.

Report bodies are stored as HTML produced by the tablet editor.  Search,
summaries and diff lengths work on the plain text.
"""

from __future__ import annotations

import html
import re

from core.constants import engine_setting

_STYLE_RE = re.compile(r"<style[\s\S]*?>[\s\S]*?</style>", re.IGNORECASE)
_SCRIPT_RE = re.compile(r"<script[\s\S]*?>[\s\S]*?</script>", re.IGNORECASE)
_TAG_RE = re.compile(r"<[^>]+>")
_SPACE_RE = re.compile(r"\s+")


def strip_html(value: str) -> str:
    """Drop markup, ``<style>`` and ``<script>`` blocks; collapse whitespace."""
    text = _STYLE_RE.sub("", value or "")
    text = _SCRIPT_RE.sub("", text)
    text = _TAG_RE.sub(" ", text)
    return _SPACE_RE.sub(" ", text).strip()


def summary_from_html(value: str) -> str:
    text = strip_html(value)
    length = engine_setting("REPORT_SUMMARY_LENGTH")
    if len(text) > length:
        return text[:length] + "…"
    return text


def html_from_plain(text: str) -> str:
    """Wrap plain text in a paragraph, escaping markup and keeping line breaks."""
    escaped = html.escape(str(text), quote=False)
    return "<p>" + escaped.replace("\n", "<br/>") + "</p>"
