"""Copy component-reference attributes onto the rendered component root."""

from __future__ import annotations

import collections.abc as cabc
import logging
import typing as typ

from sui_pages._constants import (
    COMPONENT_ATTR,
    INTERNAL_ATTR_PREFIX,
    PARSED_ATTR,
    PROP_PREFIX,
    SPREAD_PREFIX,
)

from .errors import ExpressionError
from .expressions import stringify

if typ.TYPE_CHECKING:
    from bs4 import Tag

    from .context import BuildContext
    from .expressions import ExpressionEvaluator
    from .models import Page

logger = logging.getLogger(__name__)

SPREAD_EXPRESSION_PREFIX = f"{SPREAD_PREFIX}[{{"


def is_reserved(name: str) -> bool:
    """Return ``True`` for bookkeeping attributes that never become props."""
    return (
        name.startswith(INTERNAL_ATTR_PREFIX)
        or name == COMPONENT_ATTR
        or name == PARSED_ATTR
    )


def copy_props(
    page: Page,
    ctx: BuildContext,
    source: Tag,
    target: Tag,
    evaluator: ExpressionEvaluator,
    extra: cabc.Sequence[tuple[str, str]] = (),
) -> None:
    """Populate ``page.props`` from ``source`` and mirror them onto ``target``.

    Literal attributes are copied verbatim. Spread attributes
    (``...[{expr}]``) are evaluated against the parent page's props; a
    mapping result is merged key by key. Spread failures are recorded as
    warnings and skipped. ``extra`` attributes are set last so props can
    never override them.
    """
    for name, value in list(source.attrs.items()):
        if is_reserved(name):
            continue
        if name.startswith(SPREAD_EXPRESSION_PREFIX):
            _spread(page, ctx, name[len(SPREAD_PREFIX) :], target, evaluator)
            continue
        _set_prop(page, target, name, stringify(value))

    for name, value in extra:
        target[name] = value


def _spread(
    page: Page,
    ctx: BuildContext,
    expression: str,
    target: Tag,
    evaluator: ExpressionEvaluator,
) -> None:
    parent = page.parent
    data = {"$props": dict(parent.props) if parent is not None else {}}
    try:
        value = evaluator.evaluate(expression, data)
    except ExpressionError as exc:
        ctx.warn(f"{page.route}: {exc}")
        return

    if not isinstance(value, cabc.Mapping):
        ctx.warn(
            f"{page.route}: spread {expression!r} evaluated to "
            f"{type(value).__name__}, expected a mapping"
        )
        return

    for key, item in value.items():
        if isinstance(key, str):
            _set_prop(page, target, key, stringify(item))
        else:
            logger.debug("skipping non-string spread key %r in %s", key, page.route)


def _set_prop(page: Page, target: Tag, name: str, value: str) -> None:
    page.props[name] = value
    target[PROP_PREFIX.format(name=name)] = value


__all__ = ["copy_props", "is_reserved"]
