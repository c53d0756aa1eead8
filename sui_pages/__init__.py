"""Build sui pages: recursive component expansion into deliverable HTML.

This package expands pages built from reusable components into flattened
documents with deduplicated, component-scoped styles and scripts, and exposes
the CLI entry points used by ``uv run sui``.

Exports
-------
- ``PageBuilder``: Builds one page and everything it references.
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from sui_pages import PageBuilder
>>> from sui_pages.registry import InMemoryRegistry
>>> registry = InMemoryRegistry()
>>> page = registry.add("/index", html="<p>Hello</p>")
>>> str(PageBuilder(registry).build(page).document)
'<p>Hello</p>'
"""

from __future__ import annotations

from .builder import BuildOption, PageBuilder, assemble, build_page
from .cli import app, main

__all__ = ["BuildOption", "PageBuilder", "app", "assemble", "build_page", "main"]
