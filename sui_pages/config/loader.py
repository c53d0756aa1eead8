"""Load build configuration YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from sui_pages.registry import DEFAULT_TEMPLATE, normalize_route

from .models import BuildConfig, BuildConfigError, PageTarget


def load_build_config(path: Path) -> BuildConfig:
    """Load the YAML configuration describing templates and pages to build.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML configuration file (for example,
        ``sui.yaml``).

    Returns
    -------
    BuildConfig
        Parsed configuration with defaults applied to every page.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    TypeError
        If the top-level YAML structure is not a mapping.
    BuildConfigError
        If no pages are defined or a page entry is malformed.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> from sui_pages.config import load_build_config
    >>> config = load_build_config(Path("sui.yaml"))  # doctest: +SKIP
    >>> sorted(config.pages)[:1]  # doctest: +SKIP
    ['/index']
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    raw: dict[str, typ.Any] = dict(loaded)
    defaults = raw.get("defaults", {}) or {}

    output_dir = Path(defaults.get("output_dir", "public"))
    pages = _build_pages(raw.get("pages"), output_dir)
    if not pages:
        msg = "No pages defined in build configuration."
        raise BuildConfigError(msg)

    return BuildConfig(
        templates_root=Path(defaults.get("templates_root", "templates")),
        template=str(defaults.get("template", DEFAULT_TEMPLATE)),
        output_dir=output_dir,
        pages=pages,
        asset_root=str(defaults.get("asset_root", "/assets")),
        style_minify=bool(defaults.get("style_minify", False)),
        script_minify=bool(defaults.get("script_minify", False)),
        ignore_asset_root=bool(defaults.get("ignore_asset_root", False)),
    )


def _build_pages(payload: object, output_dir: Path) -> dict[str, PageTarget]:
    """Normalise the ``pages`` entry (a list of routes or a mapping)."""
    match payload:
        case None:
            return {}
        case list():
            entries: dict[str, typ.Any] = {str(route): None for route in payload}
        case dict():
            entries = {str(route): value for route, value in payload.items()}
        case _:
            msg = "'pages' must be a list of routes or a mapping."
            raise BuildConfigError(msg)

    pages: dict[str, PageTarget] = {}
    for route, overrides in entries.items():
        match overrides:
            case None:
                options: typ.Mapping[str, typ.Any] = {}
            case dict():
                options = overrides
            case _:
                msg = f"Page '{route}' must map to a mapping of options."
                raise BuildConfigError(msg)
        key = normalize_route(route)
        default_output = output_dir / f"{key.strip('/') or 'index'}.html"
        pages[key] = PageTarget(
            route=key,
            output=Path(options.get("output", default_output)),
            ignore_document=bool(options.get("ignore_document", False)),
        )
    return pages


__all__ = ["load_build_config"]
