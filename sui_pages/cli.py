"""Cyclopts CLI entrypoint for building sui pages.

The ``sui`` console script defined here builds the pages listed in
``sui.yaml``: each page is resolved against the local template directory,
its components are expanded, and the assembled HTML is written alongside a
translation catalog. Typical usage involves running ``sui build`` locally or
in CI.

Examples
--------
Build all pages for the default configuration:

>>> from sui_pages.cli import main
>>> main()  # doctest: +SKIP

Build a single page into a custom directory:

>>> from sui_pages.cli import app
>>> app(["build", "--page", "/index", "--output-dir", "dist"])  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import typing as typ
from pathlib import Path

import cyclopts
import msgspec.json as msgspec_json
from cyclopts import App, Parameter

from .builder import PageBuilder, SuiBuildError, assemble
from .config import load_build_config
from .registry import LocalTemplateRegistry

if typ.TYPE_CHECKING:
    from .builder import BuildResult
    from .config import PageTarget

DEFAULT_CONFIG = Path("sui.yaml")

app = App(name="sui", config=cyclopts.config.Env("INPUT_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _write_outputs(result: BuildResult, output: Path) -> list[Path]:
    """Write the assembled page and its translation catalog next to each other."""
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(assemble(result), encoding="utf-8")
    catalog = output.with_suffix(".translations.json")
    catalog.write_bytes(msgspec_json.encode(result.translations))
    return [output, catalog]


@app.command(help="Build pages from local templates into assembled HTML.")
def build(
    *,
    page: typ.Annotated[
        str | None, Parameter(help="Page route", env_var="INPUT_PAGE")
    ] = None,
    config: typ.Annotated[
        Path, Parameter(help="Path to build config", env_var="INPUT_CONFIG")
    ] = DEFAULT_CONFIG,
    output_dir: typ.Annotated[
        Path | None,
        Parameter(help="Override the output folder", env_var="INPUT_OUTPUT_DIR"),
    ] = None,
    verbose: typ.Annotated[
        bool, Parameter(help="Log each component expansion")
    ] = False,
) -> None:
    """Build the configured pages.

    Parameters
    ----------
    page : str or None, optional
        Specific page route to build; when ``None`` (default) every page in
        the configuration is built.
    config : Path, optional
        Path to the ``sui.yaml`` configuration file (overridable via
        ``INPUT_CONFIG``).
    output_dir : Path or None, optional
        Write outputs into this folder instead of each page's configured
        output location.
    verbose : bool, optional
        Enable debug logging for the builder.

    Raises
    ------
    SuiBuildError
        If a page cannot be loaded or fails fatally; warnings recorded
        before the failure are printed first, followed by the error.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    build_config = load_build_config(config)
    registry = LocalTemplateRegistry(build_config.templates_root)
    builder = PageBuilder(registry)

    if page:
        targets: list[PageTarget] = [build_config.get_page(page)]
    else:
        targets = list(build_config.pages.values())

    for target in targets:
        try:
            source = registry.page(build_config.template, target.route)
            result = builder.build(source, build_config.build_option(target))
        except SuiBuildError as exc:
            for warning in exc.warnings:
                print(f"warning: {warning}")
            print(f"error: {target.route}: {exc}")
            raise
        output = target.output
        if output_dir is not None:
            output = output_dir / output.name
        for path in _write_outputs(result, output):
            print(f"wrote {_format_path(path)}")
        for warning in result.warnings:
            print(f"warning: {warning}")


def main() -> None:
    """Invoke the Cyclopts application that powers the `sui` console command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
