"""Helpers for rewriting ``@assets`` placeholders to the public asset root."""

from __future__ import annotations

import re
import typing as typ

from sui_pages._constants import ASSETS_TOKEN

if typ.TYPE_CHECKING:
    from .models import BuildOption

ASSETS_PATTERN = re.compile(re.escape(ASSETS_TOKEN) + r"(?![\w-])")


def rewrite_assets(source: str, asset_root: str) -> str:
    """Replace every ``@assets`` placeholder in ``source`` with ``asset_root``.

    >>> rewrite_assets('<img src="@assets/x.png">', "/static")
    '<img src="/static/x.png">'
    """
    root = asset_root.rstrip("/")
    return ASSETS_PATTERN.sub(lambda _match: root, source)


def apply_asset_root(source: str, option: BuildOption) -> str:
    """Rewrite ``source`` unless the build option disables asset rewriting."""
    if option.ignore_asset_root or not source:
        return source
    return rewrite_assets(source, option.asset_root)


__all__ = ["ASSETS_PATTERN", "apply_asset_root", "rewrite_assets"]
