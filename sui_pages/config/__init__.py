"""Load and validate build configuration YAML for sui page builds.

This subpackage parses the project's ``sui.yaml`` file, applies shared
defaults to each listed page, and produces typed dataclasses
(:class:`BuildConfig`, :class:`PageTarget`) that the CLI turns into
:class:`~sui_pages.builder.BuildOption` snapshots.

Examples
--------
>>> from pathlib import Path
>>> from sui_pages.config import load_build_config
>>> config = load_build_config(Path("sui.yaml"))  # doctest: +SKIP
>>> config.get_page("/index").output  # doctest: +SKIP
PosixPath('public/index.html')
"""

from .loader import load_build_config
from .models import BuildConfig, BuildConfigError, PageTarget

__all__ = ["BuildConfig", "BuildConfigError", "PageTarget", "load_build_config"]
