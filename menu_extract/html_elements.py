# menu_extract/html_elements.py
"""
HTML → ElementDescriptor adapter for scraped restaurant pages.

The pipeline consumes a DOM-like tree, never markup. This converts already
fetched HTML with BeautifulSoup ("html.parser", no lxml needed) and keeps only
what the structured strategy reads: tag, own text, attributes, children.
Script / style / noscript / template subtrees are dropped.
"""

from __future__ import annotations

import re
from typing import List, Optional

from bs4 import BeautifulSoup, CData, Comment, Declaration, Doctype, NavigableString, ProcessingInstruction, Tag

from .menu_types import ElementDescriptor

SKIP_TAGS = {"script", "style", "noscript", "template", "head"}
_NON_TEXT = (Comment, CData, Declaration, Doctype, ProcessingInstruction)
_WS_RE = re.compile(r"\s+")


def _attr_value(value) -> str:
    if isinstance(value, (list, tuple)):
        return " ".join(str(v) for v in value)
    return str(value)


def _convert(tag: Tag) -> Optional[ElementDescriptor]:
    if tag.name in SKIP_TAGS:
        return None
    own: List[str] = []
    children: List[ElementDescriptor] = []
    for node in tag.children:
        if isinstance(node, Tag):
            child = _convert(node)
            if child is not None:
                children.append(child)
        elif isinstance(node, NavigableString) and not isinstance(node, _NON_TEXT):
            own.append(str(node))
    return ElementDescriptor(
        tag=tag.name.lower(),
        text=_WS_RE.sub(" ", " ".join(own)).strip(),
        children=tuple(children),
        attributes={k: _attr_value(v) for k, v in tag.attrs.items()},
    )


def elements_from_html(html: str) -> List[ElementDescriptor]:
    """Top-level elements of the document body (or fragment) in document order."""
    if not html or not html.strip():
        return []
    soup = BeautifulSoup(html, "html.parser")
    root = soup.body or soup
    out: List[ElementDescriptor] = []
    for node in root.children:
        if isinstance(node, Tag):
            el = _convert(node)
            if el is not None:
                out.append(el)
    return out
