"""Compile page and component stylesheets into style units."""

from __future__ import annotations

import re
import typing as typ

from sui_pages._constants import COMPONENT_NAME_ATTR

from .asset_rewriter import apply_asset_root
from .compilers import CSS_COMMENT_PATTERN
from .models import StyleNode

if typ.TYPE_CHECKING:
    from .compilers import SourceCompiler
    from .context import BuildContext
    from .models import BuildOption, Page

SELECTOR_PATTERN = re.compile(
    r"(?P<lead>^|[{};])(?P<space>\s*)(?P<selector>[^{};@\s][^{};]*?)(?P<trail>\s*)\{"
)
KEYFRAME_STEP_PATTERN = re.compile(r"^(from|to|\d+(\.\d+)?%)$", re.IGNORECASE)
STYLE_ATTRS = [("rel", "stylesheet"), ("type", "text/css")]


def scope_selectors(css: str, component: str) -> str:
    """Prefix every rule selector in ``css`` with the component attribute.

    Each selector of a comma-separated list is scoped individually; at-rule
    preludes and keyframe steps are left as they are. Comments are dropped
    first so braces inside them are never mistaken for rule boundaries.

    >>> scope_selectors(".a, .b { color: red }", "Select")
    '[s\\\\:cn=Select] .a, [s\\\\:cn=Select] .b { color: red }'
    """
    css = CSS_COMMENT_PATTERN.sub("", css)
    scope = "[{}={}]".format(COMPONENT_NAME_ATTR.replace(":", "\\:"), component)

    def _repl(match: re.Match[str]) -> str:
        parts = [part.strip() for part in match.group("selector").split(",")]
        scoped = ", ".join(
            part if KEYFRAME_STEP_PATTERN.match(part) else f"{scope} {part}"
            for part in parts
        )
        return (
            f"{match.group('lead')}{match.group('space')}{scoped}"
            f"{match.group('trail')}{{"
        )

    return SELECTOR_PATTERN.sub(_repl, css)


def build_styles(
    page: Page,
    ctx: BuildContext,
    option: BuildOption,
    compiler: SourceCompiler,
    component: str,
    namespace: str,
) -> list[StyleNode]:
    """Return the style unit for ``component``, or nothing if already emitted.

    Raises
    ------
    CompileError
        Propagated from the CSS compiler.
    """
    if not page.css or not ctx.claim_style(component):
        return []

    code = apply_asset_root(page.css, option)
    if option.component_name:
        code = scope_selectors(code, option.component_name)
    result = compiler.compile(code, minify=option.style_minify)
    return [
        StyleNode(
            namespace=namespace,
            component=component,
            source=result.output,
            parent="head",
            attrs=list(STYLE_ATTRS),
        )
    ]


__all__ = ["STYLE_ATTRS", "build_styles", "scope_selectors"]
