"""Shared dataclasses used by the page build pipeline."""

from __future__ import annotations

import dataclasses as dc
import enum
import typing as typ
import weakref

if typ.TYPE_CHECKING:
    from bs4 import BeautifulSoup
else:  # pragma: no cover - type-checking fallback
    BeautifulSoup = typ.Any


class RenderMode(enum.StrEnum):
    """Whether a build renders a routable page or a component fragment."""

    PAGE = "page"
    COMPONENT = "component"


@dc.dataclass(frozen=True, slots=True)
class BuildOption:
    """Immutable configuration snapshot threaded through one build.

    Attributes
    ----------
    asset_root : str
        Public path that replaces the ``@assets`` placeholder.
    ignore_asset_root : bool
        Leave ``@assets`` placeholders untouched when ``True``.
    ignore_document : bool
        Render the page body without its wrapping document.
    style_minify : bool
        Ask the CSS compiler to minify its output.
    script_minify : bool
        Ask the JS/TS compiler to minify its output.
    component_name : str, optional
        Component identity used to scope compiled selectors.
    mode : RenderMode
        ``PAGE`` for top-level builds, ``COMPONENT`` for nested fragments.
    """

    asset_root: str = ""
    ignore_asset_root: bool = False
    ignore_document: bool = False
    style_minify: bool = False
    script_minify: bool = False
    component_name: str | None = None
    mode: RenderMode = RenderMode.PAGE

    def for_component(self, component: str) -> BuildOption:
        """Return a copy configured to render ``component`` as a fragment."""
        return dc.replace(
            self,
            ignore_document=True,
            component_name=component,
            mode=RenderMode.COMPONENT,
        )


@dc.dataclass(slots=True)
class StyleNode:
    """One emitted stylesheet.

    Attributes
    ----------
    namespace : str
        Namespace of the expansion that first emitted the style.
    component : str
        Component identity the style belongs to (``__page`` for pages).
    source : str
        Compiled CSS text.
    parent : str
        Placement target, such as ``"head"``.
    attrs : list[tuple[str, str]]
        Ordered attributes applied to the emitted tag.
    """

    namespace: str
    component: str
    source: str
    parent: str = "head"
    attrs: list[tuple[str, str]] = dc.field(default_factory=list)


@dc.dataclass(slots=True)
class ScriptNode:
    """One emitted script, either inline (``source``) or external (``src`` attr)."""

    namespace: str
    component: str
    source: str
    parent: str = "head"
    attrs: list[tuple[str, str]] = dc.field(default_factory=list)

    @property
    def is_external(self) -> bool:
        """Return ``True`` when the script references an external file."""
        return any(key == "src" for key, _ in self.attrs)


@dc.dataclass(frozen=True, slots=True)
class Translation:
    """A translatable message harvested from markup or script source."""

    key: str
    message: str
    type: str
    name: str | None = None


@dc.dataclass(slots=True, weakref_slot=True)
class Page:
    """A routable unit of markup with its optional style and script sources.

    ``props`` is filled by the property propagator when the page is rendered
    as a component. ``parent`` is a weak back-reference to the page that
    referenced this one and is only used to evaluate spread properties.
    """

    route: str
    template_id: str
    html: str = ""
    css: str = ""
    js: str = ""
    ts: str = ""
    document: str | None = None
    props: dict[str, str] = dc.field(default_factory=dict)
    _parent_ref: weakref.ref[Page] | None = dc.field(
        default=None, repr=False, compare=False
    )

    @property
    def parent(self) -> Page | None:
        """Return the referencing page while it is still alive."""
        if self._parent_ref is None:
            return None
        return self._parent_ref()

    @parent.setter
    def parent(self, value: Page | None) -> None:
        self._parent_ref = weakref.ref(value) if value is not None else None

    @property
    def name(self) -> str:
        """Return the route without its leading slash."""
        return self.route.lstrip("/")


@dc.dataclass(slots=True)
class BuildResult:
    """Everything a build hands to the downstream assembler."""

    document: BeautifulSoup
    namespace: str
    styles: list[StyleNode]
    scripts: list[ScriptNode]
    translations: list[Translation]
    warnings: list[str]
    jit_components: set[str]


__all__ = [
    "BuildOption",
    "BuildResult",
    "Page",
    "RenderMode",
    "ScriptNode",
    "StyleNode",
    "Translation",
]
