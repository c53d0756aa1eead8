"""Recursive page and component builder.

The builder flattens a page and the components it references into one
document, plus deduplicated style, script, and translation units.
"""

from .assembler import assemble
from .compilers import (
    CompileResult,
    Compilers,
    CssCompiler,
    JsCompiler,
    SourceCompiler,
    UnconfiguredCompiler,
)
from .context import BuildContext
from .errors import (
    CompileError,
    ComponentResolutionError,
    CyclicComponentError,
    DocumentParseError,
    ExpressionError,
    PageLoadError,
    PageNotFoundError,
    SuiBuildError,
)
from .expressions import ExpressionEvaluator, JinjaExpressionEvaluator
from .models import (
    BuildOption,
    BuildResult,
    Page,
    RenderMode,
    ScriptNode,
    StyleNode,
    Translation,
)
from .page_builder import PageBuilder, build_page

__all__ = [
    "BuildContext",
    "BuildOption",
    "BuildResult",
    "CompileError",
    "CompileResult",
    "Compilers",
    "ComponentResolutionError",
    "CssCompiler",
    "CyclicComponentError",
    "DocumentParseError",
    "ExpressionError",
    "ExpressionEvaluator",
    "JinjaExpressionEvaluator",
    "JsCompiler",
    "Page",
    "PageBuilder",
    "PageLoadError",
    "PageNotFoundError",
    "RenderMode",
    "ScriptNode",
    "SourceCompiler",
    "StyleNode",
    "SuiBuildError",
    "Translation",
    "UnconfiguredCompiler",
    "assemble",
    "build_page",
]
