"""Shared fixtures for the sui page builder tests.

The ``registry`` fixture provides an in-memory template containing two form
components (``Select`` and ``Input``) and an ``/index`` page that uses
``Select`` twice and ``Input`` once. Tests add further pages to the same
registry when they need extra scenarios.
"""

from __future__ import annotations

import pytest

from sui_pages.builder import BuildOption, PageBuilder
from sui_pages.registry import InMemoryRegistry

SELECT_HTML = (
    '<div class="select">'
    "<label>[{ $props.label }]</label>"
    '<select name="[{ $props.name }]"></select>'
    "</div>"
)
SELECT_CSS = ".select { color: red; }\n.select label { font-weight: bold; }\n"
SELECT_JS = 'const label = L("Choose one");\nconsole.log(label);\n'

INPUT_HTML = '<input class="input" placeholder="::Type here">'
INPUT_CSS = ".input { background: url(@assets/input.png); }\n"
INPUT_JS = 'import "./libs/mask.js";\nmask("@assets/mask.json");\n'

INDEX_HTML = (
    "<main>"
    '<div is="Select" label="First" name="first"></div>'
    '<div is="Select" label="Second" name="second"></div>'
    '<div is="Input"></div>'
    "</main>"
)
DOCUMENT = (
    "<!DOCTYPE html><html><head><title>Test</title></head>"
    "<body>{{ __page }}</body></html>"
)


@pytest.fixture
def registry() -> InMemoryRegistry:
    """Return a registry holding the form components and the index page."""
    registry = InMemoryRegistry(document=DOCUMENT)
    registry.add("/Select", html=SELECT_HTML, css=SELECT_CSS, js=SELECT_JS)
    registry.add("/Input", html=INPUT_HTML, css=INPUT_CSS, js=INPUT_JS)
    registry.add(
        "/index",
        html=INDEX_HTML,
        css="main { display: grid; }",
        js='document.title = L("Welcome");',
    )
    return registry


@pytest.fixture
def builder(registry: InMemoryRegistry) -> PageBuilder:
    """Return a page builder over the shared registry."""
    return PageBuilder(registry)


@pytest.fixture
def option() -> BuildOption:
    """Return the default build option used across tests."""
    return BuildOption(asset_root="/static")
