"""Resolve component names to pages.

Two registries are provided. :class:`InMemoryRegistry` keeps page sources in
memory and is convenient for embedding and tests. :class:`LocalTemplateRegistry`
reads templates from disk using the layout::

    <root>/<template>/__document.html          optional page wrapper
    <root>/<template>/<route>/<leaf>.html      page markup (required)
    <root>/<template>/<route>/<leaf>.css       optional stylesheet
    <root>/<template>/<route>/<leaf>.js|.ts    optional script (one of)

where ``<leaf>`` is the last segment of ``<route>``.

Examples
--------
>>> registry = InMemoryRegistry()
>>> _ = registry.add("/Card", html="<article></article>")
>>> registry.page("default", "Card").route
'/Card'
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from sui_pages.builder.errors import PageLoadError, PageNotFoundError
from sui_pages.builder.models import Page

if typ.TYPE_CHECKING:
    from pathlib import Path

DOCUMENT_FILENAME = "__document.html"
DEFAULT_TEMPLATE = "default"


class PageRegistry(typ.Protocol):
    """Look up a fresh, loaded page for a component name."""

    def page(self, template_id: str, name: str) -> Page:
        """Return a new Page, raising ``ComponentResolutionError`` on failure."""
        ...


def normalize_route(name: str) -> str:
    """Return ``name`` as an absolute route.

    >>> normalize_route("flowbite/edit/select/")
    '/flowbite/edit/select'
    """
    return "/" + name.strip().strip("/")


def _check_sources(page: Page) -> Page:
    if page.js.strip() and page.ts.strip():
        msg = f"page {page.route!r} declares both JavaScript and TypeScript sources"
        raise PageLoadError(msg)
    return page


class InMemoryRegistry:
    """Registry backed by a dictionary of page prototypes."""

    def __init__(
        self, template_id: str = DEFAULT_TEMPLATE, document: str | None = None
    ) -> None:
        self.template_id = template_id
        self.document = document
        self._pages: dict[tuple[str, str], Page] = {}

    def add(
        self,
        route: str,
        *,
        html: str = "",
        css: str = "",
        js: str = "",
        ts: str = "",
        template_id: str | None = None,
    ) -> Page:
        """Register sources for ``route`` and return a fresh page for it."""
        template = template_id or self.template_id
        prototype = Page(
            route=normalize_route(route),
            template_id=template,
            html=html,
            css=css,
            js=js,
            ts=ts,
            document=self.document,
        )
        self._pages[(template, prototype.route)] = prototype
        return self.page(template, prototype.route)

    def page(self, template_id: str, name: str) -> Page:
        """Return a fresh copy of the page registered for ``name``.

        Raises
        ------
        PageNotFoundError
            If nothing is registered for ``name`` in ``template_id``.
        PageLoadError
            If the registered page has both JS and TypeScript sources.
        """
        route = normalize_route(name)
        prototype = self._pages.get((template_id, route))
        if prototype is None or not name.strip():
            msg = f"component {name!r} not found in template {template_id!r}"
            raise PageNotFoundError(msg)
        return _check_sources(dc.replace(prototype, props={}, _parent_ref=None))


class LocalTemplateRegistry:
    """Registry reading templates from a directory tree."""

    def __init__(self, root: Path) -> None:
        self.root = root

    def page(self, template_id: str, name: str) -> Page:
        """Load the page for ``name`` from ``<root>/<template_id>``.

        Raises
        ------
        PageNotFoundError
            If the route directory or its HTML file does not exist, or the
            route escapes the template directory.
        PageLoadError
            If a source file cannot be read or decoded, or both JS and
            TypeScript sources exist.
        """
        route = normalize_route(name)
        template_dir = (self.root / template_id).resolve()
        page_dir = (template_dir / route.lstrip("/")).resolve()
        if not name.strip() or not page_dir.is_relative_to(template_dir):
            msg = f"component {name!r} not found in template {template_id!r}"
            raise PageNotFoundError(msg)

        leaf = page_dir.name
        html_path = page_dir / f"{leaf}.html"
        if not html_path.is_file():
            msg = f"component {name!r} not found in template {template_id!r}"
            raise PageNotFoundError(msg)

        page = Page(
            route=route,
            template_id=template_id,
            html=self._read(html_path),
            css=self._read(page_dir / f"{leaf}.css"),
            js=self._read(page_dir / f"{leaf}.js"),
            ts=self._read(page_dir / f"{leaf}.ts"),
            document=self._read(template_dir / DOCUMENT_FILENAME) or None,
        )
        return _check_sources(page)

    @staticmethod
    def _read(path: Path) -> str:
        """Return the file contents, or an empty string when it does not exist."""
        if not path.is_file():
            return ""
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            msg = f"unable to load {path.name}: {exc}"
            raise PageLoadError(msg) from exc


__all__ = [
    "DEFAULT_TEMPLATE",
    "DOCUMENT_FILENAME",
    "InMemoryRegistry",
    "LocalTemplateRegistry",
    "PageRegistry",
    "normalize_route",
]
