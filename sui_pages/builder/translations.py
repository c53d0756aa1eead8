"""Harvest translatable strings from resolved markup and compiled scripts.

Keys are derived from the owning namespace and from node, attribute, and match
positions only, so rebuilding unchanged input yields identical keys:

- ``<ns>_index_<node>`` for elements marked ``s:trans`` and ``::`` text nodes
- ``<ns>_index_attr_<node>_<attr>`` for ``::``-prefixed attribute values
- ``<ns>_index_attr_<node>_<attr>_<match>`` for ``'::…'`` fragments in values
- ``<ns>_script_<match>`` for ``L("…")`` calls in compiled scripts
"""

from __future__ import annotations

import re
import typing as typ

import msgspec.json as msgspec_json
from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PreformattedString, Script, Stylesheet

from sui_pages._constants import (
    JIT_ATTR,
    TRANS_ATTR,
    TRANS_ATTRS_ATTR,
    TRANS_NODE_ATTR,
    TRANSLATION_SENTINEL,
)

from .models import Translation

if typ.TYPE_CHECKING:
    from bs4 import PageElement
else:  # pragma: no cover - type-checking fallback
    PageElement = typ.Any

LANG_FUNC_PATTERN = re.compile(r"""L\s*\(\s*["'](.*?)["']\s*\)""")
LANG_ATTR_PATTERN = re.compile(r"'::(.*?)'")
RESERVED_TRANS_ATTRS = frozenset({TRANS_ATTR, TRANS_NODE_ATTR, TRANS_ATTRS_ATTR})


def harvest_script(code: str, namespace: str) -> list[Translation]:
    """Return one translation per ``L("…")`` call in ``code``.

    >>> harvest_script("alert(L('Saved'))", "ns_page_1")
    [Translation(key='ns_page_1_script_0', message='Saved', type='script', name=None)]
    """
    return [
        Translation(
            key=f"{namespace}_script_{index}",
            message=match.group(1),
            type="script",
        )
        for index, match in enumerate(LANG_FUNC_PATTERN.finditer(code))
    ]


def harvest_node(root: Tag, namespace: str) -> list[Translation]:
    """Extract translations under ``root`` and rewrite nodes to carry their keys.

    Node indices come from a snapshot of ``root`` and its descendants taken
    before any rewriting, so inserted wrappers never shift later indices.
    Deferred component subtrees are skipped.
    """
    translations: list[Translation] = []
    nodes: list[PageElement] = [root, *root.descendants]
    for index, node in enumerate(nodes):
        if _in_deferred(node):
            continue
        if isinstance(node, Tag):
            translations.extend(_harvest_element(node, index, namespace))
        elif _is_text(node):
            translations.extend(_harvest_text(node, index, namespace))
    return translations


def _harvest_element(tag: Tag, index: int, namespace: str) -> list[Translation]:
    translations: list[Translation] = []
    if TRANS_ATTR in tag.attrs:
        kind = str(tag.get(TRANS_ATTR) or "").strip() or "html"
        key = f"{namespace}_index_{index}"
        translations.append(
            Translation(key=key, message=tag.get_text().strip(), type=kind)
        )
        tag[TRANS_NODE_ATTR] = key
        del tag[TRANS_ATTR]

    keys: dict[str, list[str]] = {}
    for attr_index, (name, value) in enumerate(list(tag.attrs.items())):
        if name in RESERVED_TRANS_ATTRS or not isinstance(value, str):
            continue
        base = f"{namespace}_index_attr_{index}_{attr_index}"
        if value.startswith(TRANSLATION_SENTINEL):
            message = value[len(TRANSLATION_SENTINEL) :]
            translations.append(
                Translation(key=base, message=message, type="attr", name=name)
            )
            keys.setdefault(name, []).append(base)
            tag[name] = message
            continue

        matches = list(LANG_ATTR_PATTERN.finditer(value))
        for match_index, match in enumerate(matches):
            key = f"{base}_{match_index}"
            translations.append(
                Translation(key=key, message=match.group(1), type="attr", name=name)
            )
            keys.setdefault(name, []).append(key)
        if matches:
            tag[name] = LANG_ATTR_PATTERN.sub(r"'\1'", value)

    if keys:
        tag[TRANS_ATTRS_ATTR] = msgspec_json.encode(keys).decode("utf-8")
    return translations


def _harvest_text(
    node: NavigableString, index: int, namespace: str
) -> list[Translation]:
    text = str(node)
    if not text.strip().startswith(TRANSLATION_SENTINEL):
        return []

    key = f"{namespace}_index_{index}"
    rewritten = text.replace(TRANSLATION_SENTINEL, "", 1)
    parent = node.parent
    sole_child = (
        isinstance(parent, Tag)
        and not isinstance(parent, BeautifulSoup)
        and TRANS_NODE_ATTR not in parent.attrs
        and all(child is node or _is_blank(child) for child in parent.contents)
    )
    if sole_child:
        parent[TRANS_NODE_ATTR] = key
        node.replace_with(rewritten)
    else:
        span = _soup_of(node).new_tag("span", attrs={TRANS_NODE_ATTR: key})
        span.string = rewritten
        node.replace_with(span)
    return [Translation(key=key, message=rewritten.strip(), type="text")]


def _is_text(node: PageElement) -> bool:
    return isinstance(node, NavigableString) and not isinstance(
        node, (PreformattedString, Script, Stylesheet)
    )


def _is_blank(node: PageElement) -> bool:
    return _is_text(node) and not node.strip()


def _in_deferred(node: PageElement) -> bool:
    if isinstance(node, Tag) and node.get(JIT_ATTR) == "true":
        return True
    return node.find_parent(attrs={JIT_ATTR: "true"}) is not None


def _soup_of(node: PageElement) -> BeautifulSoup:
    current = node
    while current is not None and not isinstance(current, BeautifulSoup):
        current = current.parent
    if current is None:  # pragma: no cover - detached nodes are never harvested
        msg = "cannot harvest a node detached from its document"
        raise ValueError(msg)
    return current


__all__ = ["LANG_ATTR_PATTERN", "LANG_FUNC_PATTERN", "harvest_node", "harvest_script"]
