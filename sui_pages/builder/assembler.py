"""Inject style and script units into a built document and serialize it."""

from __future__ import annotations

import typing as typ

if typ.TYPE_CHECKING:
    from bs4 import BeautifulSoup, Tag

    from .models import BuildResult, ScriptNode, StyleNode


def assemble(result: BuildResult) -> str:
    """Return the final markup for ``result``.

    Styles are appended to their placement target before scripts, each in
    build order. A target missing from the document (for fragment builds
    without ``<head>`` or ``<body>``) falls back to the end of the document.
    """
    doc = result.document
    for style in result.styles:
        tag = _new_tag(doc, "style", style)
        tag.string = style.source
        _target(doc, style.parent).append(tag)
    for script in result.scripts:
        tag = _new_tag(doc, "script", script)
        if script.source:
            tag.string = script.source
        _target(doc, script.parent).append(tag)
    return str(doc)


def _new_tag(doc: BeautifulSoup, name: str, unit: StyleNode | ScriptNode) -> Tag:
    return doc.new_tag(name, attrs=dict(unit.attrs))


def _target(doc: BeautifulSoup, name: str) -> Tag:
    found = doc.find(name)
    return found if found is not None else doc


__all__ = ["assemble"]
