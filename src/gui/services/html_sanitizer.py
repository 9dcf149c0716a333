"""HTML sanitization for rendered step documentation.

Step descriptions are authored by whoever wrote the tour and end up in an
HTML pane, so the fragment is cleaned with BeautifulSoup before display:
script/style elements, ``on*`` handlers, inline styles and ``javascript:``
links are stripped.
"""

from __future__ import annotations

from typing import Iterable

from bs4 import BeautifulSoup  # type: ignore

__all__ = ["sanitize_html"]

_DROP_TAGS = ("script", "style", "iframe", "object", "embed")


def _iter_attrs(tag) -> Iterable[str]:
    # Copy names; attributes are popped while iterating
    return list(tag.attrs.keys())


def sanitize_html(html: str) -> str:
    """Return ``html`` with active content removed."""
    soup = BeautifulSoup(html, "html.parser")

    for tag_name in _DROP_TAGS:
        for t in soup.find_all(tag_name):
            t.decompose()

    for tag in soup.find_all(True):
        for attr in _iter_attrs(tag):
            low = attr.lower()
            if low.startswith("on") or low == "style":
                tag.attrs.pop(attr, None)
                continue
            if low in {"href", "src"}:
                val = tag.attrs.get(attr, "")
                if isinstance(val, list):
                    val = val[0] if val else ""
                if isinstance(val, str) and val.strip().lower().startswith("javascript:"):
                    tag.attrs.pop(attr, None)

    return str(soup)
