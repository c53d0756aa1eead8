"""Markup parsing helpers built on BeautifulSoup.

Every soup is parsed with Python's ``html.parser`` and single-valued
attributes, so ``class`` values round-trip as plain strings and attribute
order is preserved in the order the source declares them.
"""

from __future__ import annotations

import re
import typing as typ

from bs4 import BeautifulSoup, NavigableString, ParserRejectedMarkup, Tag

from sui_pages._constants import COMPONENT_ATTR, DOCUMENT_PLACEHOLDER

from .asset_rewriter import apply_asset_root
from .errors import DocumentParseError
from .models import RenderMode

if typ.TYPE_CHECKING:
    from bs4 import PageElement

    from .models import BuildOption, Page
else:  # pragma: no cover - type-checking fallback
    PageElement = typ.Any

IDENTIFIER_SPLIT_PATTERN = re.compile(r"[^A-Za-z0-9]+")


def make_soup(html: str) -> BeautifulSoup:
    """Parse ``html`` without any document normalisation."""
    return BeautifulSoup(html, "html.parser", multi_valued_attributes=None)


def render_html(page: Page, option: BuildOption) -> str:
    """Return the markup for ``page``, spliced into its document for page builds."""
    html = page.html
    if (
        option.mode is RenderMode.PAGE
        and not option.ignore_document
        and page.document
    ):
        html = page.document.replace(DOCUMENT_PLACEHOLDER, page.html, 1)
    return apply_asset_root(html, option)


def parse_document(html: str) -> BeautifulSoup:
    """Parse a page's rendered markup into a mutable document.

    Raises
    ------
    DocumentParseError
        If the markup is not text or the parser rejects it.
    """
    if not isinstance(html, str):
        msg = f"expected markup text, got {type(html).__name__}"
        raise DocumentParseError(msg)
    try:
        return make_soup(html)
    except ParserRejectedMarkup as exc:
        msg = f"unable to parse page markup: {exc}"
        raise DocumentParseError(msg) from exc


def parse_fragment(html: str) -> Tag:
    """Parse a component fragment and return its single root element.

    Fragments with several top-level nodes, bare text, or no element at all
    are wrapped in a ``<div>`` so props can always be attached to one root.
    A root that is itself a component reference is wrapped as well, so it is
    resolved like any other descendant.
    """
    soup = parse_document(html)
    significant = [node for node in soup.contents if not _is_blank(node)]
    if (
        len(significant) == 1
        and isinstance(significant[0], Tag)
        and not significant[0].has_attr(COMPONENT_ATTR)
    ):
        return significant[0]

    wrapper = soup.new_tag("div")
    for node in list(soup.contents):
        wrapper.append(node.extract())
    soup.append(wrapper)
    return wrapper


def is_attached(node: PageElement, root: PageElement) -> bool:
    """Return ``True`` when ``node`` is still reachable from ``root``."""
    current = node
    while current is not None:
        if current is root:
            return True
        current = current.parent
    return False


def namespace(name: str, sequence: int) -> str:
    """Return the namespace for one expansion of ``name``.

    >>> namespace("/flowbite/edit/select", 3)
    'ns_flowbite_edit_select_3'
    """
    slug = IDENTIFIER_SPLIT_PATTERN.sub("_", name).strip("_") or "page"
    return f"ns_{slug}_{sequence}"


def component_name(name: str) -> str:
    """Return the component identity (a JS identifier) for ``name``.

    >>> component_name("/flowbite/edit/select")
    'FlowbiteEditSelect'
    >>> component_name("Select")
    'Select'
    """
    segments = [seg for seg in IDENTIFIER_SPLIT_PATTERN.split(name) if seg]
    identity = "".join(seg[:1].upper() + seg[1:] for seg in segments)
    if not identity or identity[0].isdigit():
        identity = f"_{identity}"
    return identity


def _is_blank(node: PageElement) -> bool:
    return type(node) is NavigableString and not node.strip()


__all__ = [
    "component_name",
    "is_attached",
    "make_soup",
    "namespace",
    "parse_document",
    "parse_fragment",
    "render_html",
]
