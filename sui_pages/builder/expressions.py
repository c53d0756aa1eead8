"""Expression evaluation for spread properties and ``[{ ... }]`` slots.

Expressions are evaluated with Jinja2's sandboxed expression compiler. Data
bindings are keyed with a leading ``$`` (``$props``); because ``$`` is not a
valid Jinja identifier, each ``$name`` is exposed to Jinja as ``dollar_name``.
Undefined names and attributes are errors rather than empty values.
"""

from __future__ import annotations

import collections.abc as cabc
import re
import typing as typ

import msgspec.json as msgspec_json
from bs4 import NavigableString, Tag
from jinja2 import StrictUndefined, TemplateError, Undefined
from jinja2.sandbox import SandboxedEnvironment

from sui_pages._constants import JIT_ATTR

from .errors import ExpressionError

if typ.TYPE_CHECKING:
    from .context import BuildContext

SLOT_PATTERN = re.compile(r"\[\{([^\}]+)\}\]")
DOLLAR_BINDING_PATTERN = re.compile(r"\$([A-Za-z_]\w*)")
EVALUATION_ERRORS = (TemplateError, ArithmeticError, LookupError, TypeError, ValueError)


class ExpressionEvaluator(typ.Protocol):
    """Evaluate an expression against a ``$``-keyed data context."""

    def evaluate(self, expression: str, data: cabc.Mapping[str, typ.Any]) -> typ.Any:
        """Return the expression's value or raise ``ExpressionError``."""
        ...


class JinjaExpressionEvaluator:
    """Evaluate expressions with a sandboxed Jinja2 environment."""

    def __init__(self) -> None:
        self.env = SandboxedEnvironment(undefined=StrictUndefined)

    def evaluate(self, expression: str, data: cabc.Mapping[str, typ.Any]) -> typ.Any:
        """Evaluate ``expression`` (with or without ``[{ }]`` delimiters).

        Raises
        ------
        ExpressionError
            If the expression does not parse, references an undefined value,
            or raises while evaluating.
        """
        source = DOLLAR_BINDING_PATTERN.sub(r"dollar_\1", strip_delimiters(expression))
        context = {
            DOLLAR_BINDING_PATTERN.sub(r"dollar_\1", key): value
            for key, value in data.items()
        }
        try:
            compiled = self.env.compile_expression(source, undefined_to_none=False)
            value = compiled(**context)
        except EVALUATION_ERRORS as exc:
            msg = f"unable to evaluate {expression!r}: {exc}"
            raise ExpressionError(msg) from exc
        if isinstance(value, Undefined):
            msg = f"unable to evaluate {expression!r}: value is undefined"
            raise ExpressionError(msg)
        return value


def strip_delimiters(expression: str) -> str:
    """Return ``expression`` without surrounding ``[{`` and ``}]`` markers."""
    text = expression.strip()
    if text.startswith("[{") and text.endswith("}]"):
        text = text[2:-2]
    return text.strip()


def stringify(value: typ.Any) -> str:
    """Render an evaluated value as attribute or text content."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (cabc.Mapping, list, tuple)):
        return msgspec_json.encode(value).decode("utf-8")
    return str(value)


def render_slots(
    root: Tag,
    data: cabc.Mapping[str, typ.Any],
    evaluator: ExpressionEvaluator,
    ctx: BuildContext,
) -> None:
    """Substitute ``[{ expr }]`` placeholders in text and attributes under ``root``.

    Deferred component subtrees are left untouched. A placeholder that fails
    to evaluate is replaced by an empty string and recorded as a warning, so
    every placeholder is resolved exactly once.
    """

    def _replace(match: re.Match[str]) -> str:
        try:
            return stringify(evaluator.evaluate(match.group(1), data))
        except ExpressionError as exc:
            ctx.warn(str(exc))
            return ""

    texts = [
        node
        for node in root.find_all(string=SLOT_PATTERN)
        if type(node) is NavigableString and not _is_deferred(node)
    ]
    for node in texts:
        node.replace_with(SLOT_PATTERN.sub(_replace, str(node)))

    for tag in [root, *root.find_all(True)]:
        if _is_deferred(tag):
            continue
        for key, value in list(tag.attrs.items()):
            if isinstance(value, str) and SLOT_PATTERN.search(value):
                tag[key] = SLOT_PATTERN.sub(_replace, value)


def _is_deferred(node: NavigableString | Tag) -> bool:
    if isinstance(node, Tag) and node.get(JIT_ATTR) == "true":
        return True
    return node.find_parent(attrs={JIT_ATTR: "true"}) is not None


__all__ = [
    "SLOT_PATTERN",
    "ExpressionEvaluator",
    "JinjaExpressionEvaluator",
    "render_slots",
    "stringify",
    "strip_delimiters",
]
