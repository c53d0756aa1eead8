"""Typed dataclasses describing sui build configuration structures."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path

from sui_pages.builder.models import BuildOption


class BuildConfigError(ValueError):
    """Raised when the build configuration is invalid or incomplete."""


@dc.dataclass(slots=True)
class PageTarget:
    """One page to build and where its output goes."""

    route: str
    output: Path
    ignore_document: bool = False


@dc.dataclass(slots=True)
class BuildConfig:
    """Templates location, shared build defaults, and the pages to build."""

    templates_root: Path
    template: str
    output_dir: Path
    pages: dict[str, PageTarget]
    asset_root: str = "/assets"
    style_minify: bool = False
    script_minify: bool = False
    ignore_asset_root: bool = False

    def get_page(self, route: str) -> PageTarget:
        """Return the configured target for ``route``."""
        key = "/" + route.strip("/")
        try:
            return self.pages[key]
        except KeyError as exc:
            available = ", ".join(sorted(self.pages))
            msg = f"Unknown page '{route}'. Known pages: {available}"
            raise KeyError(msg) from exc

    def build_option(self, target: PageTarget) -> BuildOption:
        """Return the immutable build option snapshot for ``target``."""
        return BuildOption(
            asset_root=self.asset_root,
            ignore_asset_root=self.ignore_asset_root,
            ignore_document=target.ignore_document,
            style_minify=self.style_minify,
            script_minify=self.script_minify,
        )


__all__ = ["BuildConfig", "BuildConfigError", "PageTarget"]
