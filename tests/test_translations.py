"""Unit tests for translation harvesting.

The fixture markup below yields this node numbering (the root is ``0``)::

    0 div, 1 p[s:trans], 2 "Hello", 3 input, 4 span, 5 "::Welcome",
    6 p, 7 "Hi ", 8 b, 9 "x", 10 "::Bye"

Harvesting under the ``ns_p`` namespace gives keys such as ``ns_p_index_1``.
"""

from __future__ import annotations

import msgspec.json as msgspec_json

from sui_pages.builder.document import make_soup
from sui_pages.builder.models import Translation
from sui_pages.builder.translations import harvest_node, harvest_script

MARKUP = (
    "<div>"
    "<p s:trans>Hello</p>"
    "<input placeholder=\"::Name\" title=\"a '::One' b '::Two'\">"
    "<span>::Welcome</span>"
    "<p>Hi <b>x</b>::Bye</p>"
    "</div>"
)


def _harvest(markup: str = MARKUP) -> tuple[object, list[Translation]]:
    root = make_soup(markup).div
    return root, harvest_node(root, "ns_p")


def test_marked_element_is_keyed_by_position() -> None:
    """``s:trans`` elements are keyed and rewritten to ``s:trans-node``."""
    root, translations = _harvest()
    assert translations[0] == Translation("ns_p_index_1", "Hello", "html")
    first = root.find("p")
    assert first["s:trans-node"] == "ns_p_index_1"
    assert not first.has_attr("s:trans")


def test_attribute_values_are_keyed_and_stripped() -> None:
    """Prefixed and quoted ``::`` attribute values produce attribute keys."""
    root, translations = _harvest()
    attr_keys = [(t.key, t.message, t.name) for t in translations if t.type == "attr"]
    assert attr_keys == [
        ("ns_p_index_attr_3_0", "Name", "placeholder"),
        ("ns_p_index_attr_3_1_0", "One", "title"),
        ("ns_p_index_attr_3_1_1", "Two", "title"),
    ]
    field = root.input
    assert field["placeholder"] == "Name"
    assert field["title"] == "a 'One' b 'Two'"
    assert msgspec_json.decode(field["s:trans-attrs"]) == {
        "placeholder": ["ns_p_index_attr_3_0"],
        "title": ["ns_p_index_attr_3_1_0", "ns_p_index_attr_3_1_1"],
    }
    assert ", " not in field["s:trans-attrs"], "expected compact JSON"


def test_text_nodes_mark_their_parent_or_a_wrapper() -> None:
    """A sole text child marks its parent; mixed content gets a ``<span>``."""
    root, translations = _harvest()
    texts = [(t.key, t.message) for t in translations if t.type == "text"]
    assert texts == [("ns_p_index_5", "Welcome"), ("ns_p_index_10", "Bye")]

    welcome = root.find(attrs={"s:trans-node": "ns_p_index_5"})
    assert welcome.name == "span"
    assert welcome.get_text() == "Welcome"

    wrapper = root.find(attrs={"s:trans-node": "ns_p_index_10"})
    assert wrapper.name == "span", "expected mixed content to be wrapped"
    assert wrapper.parent.name == "p"
    assert wrapper.get_text() == "Bye"


def test_keys_are_deterministic() -> None:
    """Harvesting the same markup twice yields identical keys."""
    _, first = _harvest()
    _, second = _harvest()
    assert [t.key for t in first] == [t.key for t in second]


def test_deferred_subtrees_are_skipped() -> None:
    """Markup inside a deferred component is left for client-side resolution."""
    root, translations = _harvest(
        '<div><div is="[{ $props.kind }]" s:jit="true"><p s:trans>Later</p></div>'
        "<p s:trans>Now</p></div>"
    )
    assert [t.message for t in translations] == ["Now"]
    assert root.find("p").has_attr("s:trans")


def test_script_calls_are_numbered_in_order() -> None:
    """Each ``L("...")`` call in a script yields one key."""
    code = "const a = L(\"Save\");\nconst b = L( 'Cancel' );\n"
    assert harvest_script(code, "ns_Select_2") == [
        Translation("ns_Select_2_script_0", "Save", "script"),
        Translation("ns_Select_2_script_1", "Cancel", "script"),
    ]
