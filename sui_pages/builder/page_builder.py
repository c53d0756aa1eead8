"""High-level orchestration for building one page.

:class:`PageBuilder` renders a page's own markup, expands every nested
component reference through :class:`~sui_pages.builder.components.ComponentResolver`,
harvests translations, and collects the page's own style and script units.
The result bundles the flattened document with every asset and diagnostic a
downstream assembler needs.

Example
-------
>>> from sui_pages.builder import BuildOption, PageBuilder
>>> from sui_pages.registry import InMemoryRegistry
>>> registry = InMemoryRegistry()
>>> page = registry.add("/index", html='<main><div is="Card"></div></main>')
>>> _ = registry.add("/Card", html="<article>card</article>")
>>> result = PageBuilder(registry).build(page, BuildOption(asset_root="/static"))
>>> result.document.article["s:cn"]
'Card'
"""

from __future__ import annotations

import logging
import typing as typ

from sui_pages._constants import PAGE_COMPONENT

from .compilers import Compilers
from .components import ComponentResolver
from .context import BuildContext
from .document import namespace, parse_document, render_html
from .errors import SuiBuildError
from .expressions import JinjaExpressionEvaluator
from .models import BuildOption, BuildResult
from .scripts import build_scripts
from .styles import build_styles
from .translations import harvest_node, harvest_script

if typ.TYPE_CHECKING:
    from sui_pages.registry import PageRegistry

    from .expressions import ExpressionEvaluator
    from .models import Page

logger = logging.getLogger(__name__)


class PageBuilder:
    """Build pages into flattened documents plus style and script units."""

    def __init__(
        self,
        registry: PageRegistry,
        *,
        compilers: Compilers | None = None,
        evaluator: ExpressionEvaluator | None = None,
    ) -> None:
        """Initialize the builder with its collaborators.

        Parameters
        ----------
        registry : PageRegistry
            Resolves component names to pages.
        compilers : Compilers, optional
            CSS, JS, and TypeScript compilers; defaults to the built-in set.
        evaluator : ExpressionEvaluator, optional
            Evaluator for spread properties and slots; defaults to Jinja2.
        """
        self.registry = registry
        self.compilers = compilers or Compilers()
        self.evaluator = evaluator or JinjaExpressionEvaluator()
        self.resolver = ComponentResolver(registry, self.compilers, self.evaluator)

    def build(
        self,
        page: Page,
        option: BuildOption | None = None,
        ctx: BuildContext | None = None,
    ) -> BuildResult:
        """Build ``page`` and everything it references.

        Parameters
        ----------
        page : Page
            The top-level page to build.
        option : BuildOption, optional
            Build configuration; defaults to ``BuildOption()``.
        ctx : BuildContext, optional
            Context to accumulate into; a fresh one is created when omitted.

        Returns
        -------
        BuildResult
            The flattened document, style, script, and translation units, the
            deferred component names, and every non-fatal warning.

        Raises
        ------
        SuiBuildError
            For fatal failures (top-level parse errors, compiler errors, and
            component cycles). ``exc.warnings`` holds the warnings recorded
            before the failure.
        """
        ctx = ctx if ctx is not None else BuildContext()
        option = option or BuildOption()
        try:
            return self._build(page, option, ctx)
        except SuiBuildError as exc:
            exc.warnings = list(ctx.warnings)
            logger.error("build of %s failed: %s", page.route, exc)
            raise

    def _build(
        self, page: Page, option: BuildOption, ctx: BuildContext
    ) -> BuildResult:
        first_script = len(ctx.scripts)
        first_style = len(ctx.styles)
        first_translation = len(ctx.translations)

        with ctx.entering(page.route):
            ns = namespace(page.name, ctx.next_sequence())
            doc = parse_document(render_html(page, option))
            self.resolver.resolve(doc, page, ctx, option)
            ctx.translations.extend(harvest_node(doc, ns))

            ctx.scripts.extend(
                build_scripts(page, ctx, option, self.compilers, PAGE_COMPONENT, ns)
            )
            ctx.styles.extend(
                build_styles(page, ctx, option, self.compilers.css, PAGE_COMPONENT, ns)
            )

        scripts = ctx.scripts[first_script:]
        for script in scripts:
            if script.source:
                ctx.translations.extend(
                    harvest_script(script.source, script.namespace)
                )

        logger.debug(
            "built %s: %d styles, %d scripts, %d warnings",
            page.route,
            len(ctx.styles) - first_style,
            len(scripts),
            len(ctx.warnings),
        )
        return BuildResult(
            document=doc,
            namespace=ns,
            styles=ctx.styles[first_style:],
            scripts=scripts,
            translations=ctx.translations[first_translation:],
            warnings=list(ctx.warnings),
            jit_components=set(ctx.jit_components),
        )


def build_page(
    page: Page,
    registry: PageRegistry,
    option: BuildOption | None = None,
    **collaborators: typ.Any,
) -> BuildResult:
    """Build ``page`` with a fresh :class:`PageBuilder` and context."""
    return PageBuilder(registry, **collaborators).build(page, option)


__all__ = ["PageBuilder", "build_page"]
