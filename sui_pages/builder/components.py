"""Resolve component references (``<div is="Name">``) into rendered markup.

Resolution is depth-first: each inlined reference is rendered as a component,
its own references are resolved before it is spliced back in place of the
reference node. The candidate list is snapshotted before any replacement;
nodes that were detached by an earlier replacement, already processed, or
nested inside a deferred component are skipped.
"""

from __future__ import annotations

import logging
import typing as typ

from bs4 import Comment

from sui_pages._constants import (
    COMPONENT_ATTR,
    COMPONENT_NAME_ATTR,
    JIT_ATTR,
    JIT_ROOT_ATTR,
    NAMESPACE_ATTR,
    PARSED_ATTR,
    READY_ATTR,
)

from .document import (
    component_name,
    is_attached,
    namespace,
    parse_fragment,
    render_html,
)
from .errors import ComponentResolutionError
from .expressions import render_slots
from .props import copy_props
from .scripts import build_scripts
from .styles import build_styles
from .translations import harvest_node

if typ.TYPE_CHECKING:
    from bs4 import Tag

    from sui_pages.registry import PageRegistry

    from .compilers import Compilers
    from .context import BuildContext
    from .expressions import ExpressionEvaluator
    from .models import BuildOption, Page

logger = logging.getLogger(__name__)


class ComponentResolver:
    """Expand every component reference inside a document."""

    def __init__(
        self,
        registry: PageRegistry,
        compilers: Compilers,
        evaluator: ExpressionEvaluator,
    ) -> None:
        self.registry = registry
        self.compilers = compilers
        self.evaluator = evaluator

    def resolve(
        self, root: Tag, page: Page, ctx: BuildContext, option: BuildOption
    ) -> None:
        """Resolve the component references under ``root`` in place.

        Lookup and load failures replace the reference with a diagnostic
        comment and are recorded as warnings.

        Raises
        ------
        CyclicComponentError
            If a component includes itself directly or transitively.
        CompileError
            If a component's style or script fails to compile.
        """
        for node in list(root.find_all(attrs={COMPONENT_ATTR: True})):
            if node.get(PARSED_ATTR) == "true" or not is_attached(node, root):
                continue
            if node.find_parent(attrs={JIT_ATTR: "true"}) is not None:
                continue

            name = str(node.get(COMPONENT_ATTR) or "").strip()
            node[PARSED_ATTR] = "true"

            if ctx.is_jit_component(name):
                node[JIT_ATTR] = "true"
                node[JIT_ROOT_ATTR] = option.asset_root
                ctx.add_jit_component(name)
                continue

            try:
                component = self.registry.page(page.template_id, name)
            except ComponentResolutionError as exc:
                node.replace_with(Comment(f" {_comment_safe(str(exc))} "))
                ctx.warn(f"{page.template_id}{page.route}: {exc}")
                continue

            component.parent = page
            self.build_as_component(node, component, name, ctx, option)

    def build_as_component(
        self,
        node: Tag,
        component: Page,
        name: str,
        ctx: BuildContext,
        option: BuildOption,
    ) -> Tag:
        """Render ``component`` for the reference ``node`` and splice it in.

        Returns
        -------
        Tag
            The root element of the rendered component, now in ``node``'s place.
        """
        identity = ctx.identity_for(component.route, component_name(name))
        with ctx.entering(component.route):
            ns = namespace(name, ctx.next_sequence())
            logger.debug("expanding %s as %s (%s)", component.route, identity, ns)
            opt = option.for_component(identity)
            root = parse_fragment(render_html(component, opt))

            ctx.styles.extend(
                build_styles(component, ctx, opt, self.compilers.css, identity, ns)
            )
            ctx.scripts.extend(
                build_scripts(component, ctx, opt, self.compilers, identity, ns)
            )

            copy_props(
                component,
                ctx,
                node,
                root,
                self.evaluator,
                extra=[
                    (NAMESPACE_ATTR, ns),
                    (COMPONENT_NAME_ATTR, identity),
                    (READY_ATTR, f"{identity}()"),
                ],
            )
            self.resolve(root, component, ctx, opt)
            render_slots(root, {"$props": component.props}, self.evaluator, ctx)
            ctx.translations.extend(harvest_node(root, ns))

        node.replace_with(root)
        return root


def _comment_safe(text: str) -> str:
    return text.replace("--", "- -")


__all__ = ["ComponentResolver"]
