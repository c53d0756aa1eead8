"""Per-build mutable state shared by every recursive resolution step.

A :class:`BuildContext` is created once per top-level build and passed by
reference through the whole call tree. It is not thread-safe; independent
builds must each own their own context.
"""

from __future__ import annotations

import contextlib
import dataclasses as dc
import logging
import re
import typing as typ

from .errors import CyclicComponentError

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .models import ScriptNode, StyleNode, Translation

logger = logging.getLogger(__name__)

JIT_TOKEN_PATTERN = re.compile(r"\{\{.*?\}\}|\[\{.*?\}\]", re.DOTALL)


@dc.dataclass(slots=True)
class BuildContext:
    """Accumulator threaded through one build invocation.

    Attributes
    ----------
    sequence : int
        Monotonic counter bumped once per page or component expansion.
    style_unique : set[str]
        Component identities that already emitted a style unit.
    script_unique : set[str]
        Component identities that already emitted a script unit.
    jit_components : set[str]
        Literal (templated) names of deferred components.
    warnings : list[str]
        Non-fatal diagnostics in the order they occurred.
    styles, scripts, translations : list
        Output records collected across the whole build.
    identities : dict[str, str]
        Component identity mapped to the route that owns it.
    """

    sequence: int = 0
    style_unique: set[str] = dc.field(default_factory=set)
    script_unique: set[str] = dc.field(default_factory=set)
    jit_components: set[str] = dc.field(default_factory=set)
    warnings: list[str] = dc.field(default_factory=list)
    styles: list[StyleNode] = dc.field(default_factory=list)
    scripts: list[ScriptNode] = dc.field(default_factory=list)
    translations: list[Translation] = dc.field(default_factory=list)
    identities: dict[str, str] = dc.field(default_factory=dict)
    _stack: list[str] = dc.field(default_factory=list, repr=False)

    def next_sequence(self) -> int:
        """Advance the sequence counter and return the new value."""
        self.sequence += 1
        return self.sequence

    def warn(self, message: str) -> None:
        """Record a non-fatal diagnostic and log it."""
        self.warnings.append(message)
        logger.warning(message)

    @staticmethod
    def is_jit_component(name: str) -> bool:
        """Return ``True`` when ``name`` contains a template token."""
        return JIT_TOKEN_PATTERN.search(name) is not None

    def add_jit_component(self, name: str) -> None:
        self.jit_components.add(name)

    def identity_for(self, route: str, identity: str) -> str:
        """Return the component identity owned by ``route``.

        The first route to derive ``identity`` keeps it. A different route
        deriving the same identity receives a numbered variant (``AB_2``) so
        two component types never share an initializer or a style scope.
        """
        owners = {owner: name for name, owner in self.identities.items()}
        if route in owners:
            return owners[route]
        candidate = identity
        suffix = 1
        while candidate in self.identities:
            suffix += 1
            candidate = f"{identity}_{suffix}"
        if candidate != identity:
            self.warn(
                f"{route}: identity {identity!r} is already used by "
                f"{self.identities[identity]}; using {candidate!r}"
            )
        self.identities[candidate] = route
        return candidate

    def claim_style(self, component: str) -> bool:
        """Mark ``component`` as styled; return ``False`` if it already was."""
        if component in self.style_unique:
            return False
        self.style_unique.add(component)
        return True

    def claim_script(self, component: str) -> bool:
        """Mark ``component`` as scripted; return ``False`` if it already was."""
        if component in self.script_unique:
            return False
        self.script_unique.add(component)
        return True

    @contextlib.contextmanager
    def entering(self, route: str) -> cabc.Iterator[None]:
        """Track ``route`` as in progress, failing on re-entry.

        Raises
        ------
        CyclicComponentError
            If ``route`` is already being built further up the call stack.
        """
        if route in self._stack:
            raise CyclicComponentError([*self._stack, route])
        self._stack.append(route)
        try:
            yield
        finally:
            self._stack.pop()


__all__ = ["JIT_TOKEN_PATTERN", "BuildContext"]
