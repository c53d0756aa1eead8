"""Unit tests for style collection and selector scoping."""

from __future__ import annotations

import pytest

from sui_pages.builder import BuildContext, BuildOption, CompileError
from sui_pages.builder.compilers import CssCompiler
from sui_pages.builder.models import Page
from sui_pages.builder.styles import STYLE_ATTRS, build_styles, scope_selectors


def _page(css: str) -> Page:
    return Page(route="/Select", template_id="default", css=css)


def test_scope_selectors_leaves_at_rules_and_keyframes() -> None:
    """Rules inside ``@media`` are scoped; keyframe steps are not."""
    css = (
        "@media (min-width: 10px) { .a { color: red; } }\n"
        "@keyframes spin { from { opacity: 0; } 50% { opacity: 1; } }"
    )
    scoped = scope_selectors(css, "Select")
    assert "@media (min-width: 10px) { [s\\:cn=Select] .a {" in scoped
    assert "@keyframes spin { from {" in scoped, scoped
    assert "[s\\:cn=Select] from" not in scoped
    assert " 50% {" in scoped


def test_component_styles_are_scoped_and_rewritten() -> None:
    """Component styles get the identity scope and a rewritten asset root."""
    ctx = BuildContext()
    option = BuildOption(asset_root="/static/").for_component("Select")
    [style] = build_styles(
        _page(".select { background: url(@assets/x.png); }"),
        ctx,
        option,
        CssCompiler(),
        "Select",
        "ns_Select_2",
    )
    assert style.source == "[s\\:cn=Select] .select { background: url(/static/x.png); }"
    assert style.parent == "head"
    assert style.namespace == "ns_Select_2"
    assert style.attrs == STYLE_ATTRS


def test_page_styles_are_not_scoped() -> None:
    """Top-level page styles apply to the whole document."""
    [style] = build_styles(
        _page("main { display: grid; }"),
        BuildContext(),
        BuildOption(),
        CssCompiler(),
        "__page",
        "ns_index_1",
    )
    assert style.source == "main { display: grid; }"


def test_styles_are_emitted_once_per_identity() -> None:
    """A second request for the same identity yields nothing."""
    ctx = BuildContext()
    option = BuildOption().for_component("Select")
    page = _page(".select { color: red; }")
    first = build_styles(page, ctx, option, CssCompiler(), "Select", "ns_Select_2")
    second = build_styles(page, ctx, option, CssCompiler(), "Select", "ns_Select_3")
    assert len(first) == 1
    assert second == [], "expected the duplicate style to be suppressed"


def test_asset_rewriting_can_be_disabled() -> None:
    """``ignore_asset_root`` leaves placeholders for a later stage."""
    option = BuildOption(asset_root="/static", ignore_asset_root=True)
    [style] = build_styles(
        _page("body { background: url(@assets/bg.png); }"),
        BuildContext(),
        option,
        CssCompiler(),
        "__page",
        "ns_index_1",
    )
    assert "@assets/bg.png" in style.source


def test_minified_output() -> None:
    """Minification removes comments and redundant whitespace."""
    option = BuildOption(style_minify=True)
    [style] = build_styles(
        _page("/* theme */\nmain , aside {\n  color: red;\n  margin: 0;\n}\n"),
        BuildContext(),
        option,
        CssCompiler(),
        "__page",
        "ns_index_1",
    )
    assert style.source == "main,aside{color: red;margin: 0}"


def test_unbalanced_braces_fail_to_compile() -> None:
    """Compiler errors propagate to the caller."""
    with pytest.raises(CompileError, match="unclosed block"):
        build_styles(
            _page("main { color: red;"),
            BuildContext(),
            BuildOption(),
            CssCompiler(),
            "__page",
            "ns_index_1",
        )


def test_scope_selectors_ignores_braces_in_comments() -> None:
    """Commented-out rules neither get scoped nor confuse later selectors."""
    scoped = scope_selectors("/* a { b } */ .x { color: red; }", "S")
    assert scoped == " [s\\:cn=S] .x { color: red; }", scoped
