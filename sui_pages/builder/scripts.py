"""Compile page and component scripts into script units."""

from __future__ import annotations

import textwrap
import typing as typ

from sui_pages._constants import PAGE_COMPONENT

from .asset_rewriter import apply_asset_root
from .models import ScriptNode

if typ.TYPE_CHECKING:
    from .compilers import Compilers
    from .context import BuildContext
    from .models import BuildOption, Page

SCRIPT_TYPE = ("type", "text/javascript")
EXTERNAL_PREFIXES = ("http://", "https://", "//", "/")


def wrap_component(code: str, component: str) -> str:
    """Wrap ``code`` in a named initializer function with normalised indentation.

    >>> print(wrap_component("init();", "Select"), end="")
    function Select(){
      init();
    }
    """
    body = textwrap.indent(textwrap.dedent(code).strip("\n"), "  ")
    return f"function {component}(){{\n{body}\n}}\n"


def import_source(path: str, asset_root: str) -> str:
    """Return the ``src`` used for an import reported by the compiler."""
    if path.startswith(EXTERNAL_PREFIXES):
        return path
    return f"{asset_root.rstrip('/')}/{path.removeprefix('./')}"


def build_scripts(
    page: Page,
    ctx: BuildContext,
    option: BuildOption,
    compilers: Compilers,
    component: str,
    namespace: str,
) -> list[ScriptNode]:
    """Return the script units for ``component``, or nothing if already emitted.

    External imports come first, followed by the inline body. Page scripts
    are placed in ``body``; component scripts are wrapped in a function named
    after the component and placed in ``head``.

    Raises
    ------
    CompileError
        Propagated from the JS or TypeScript compiler.
    """
    if not page.js and not page.ts:
        return []
    if not ctx.claim_script(component):
        return []

    if page.ts:
        result = compilers.ts.compile(page.ts, minify=option.script_minify)
    else:
        result = compilers.js.compile(page.js, minify=option.script_minify)

    scripts = [
        ScriptNode(
            namespace=namespace,
            component=component,
            source="",
            parent="head",
            attrs=[("src", import_source(src, option.asset_root)), SCRIPT_TYPE],
        )
        for src in result.imports
    ]

    code = apply_asset_root(result.output, option)
    parent = "body"
    if component != PAGE_COMPONENT:
        parent = "head"
        code = wrap_component(code, component)
    if code.strip():
        scripts.append(
            ScriptNode(
                namespace=namespace,
                component=component,
                source=code,
                parent=parent,
                attrs=[SCRIPT_TYPE],
            )
        )
    return scripts


__all__ = ["build_scripts", "import_source", "wrap_component"]
