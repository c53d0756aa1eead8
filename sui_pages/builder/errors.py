"""Exception hierarchy raised by the page builder.

Two tiers exist. Structural failures (:class:`DocumentParseError`,
:class:`CompileError`, :class:`CyclicComponentError`) abort the build.
Per-component failures (:class:`ComponentResolutionError` and
:class:`ExpressionError`) are caught by the resolver, recorded as warnings,
and never escape :meth:`PageBuilder.build`.
"""

from __future__ import annotations


class SuiBuildError(Exception):
    """Base class for every builder error.

    Attributes
    ----------
    warnings : list[str]
        Non-fatal diagnostics accumulated before the error was raised. Filled
        in by the orchestrator when a fatal error escapes a build.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.warnings: list[str] = []


class DocumentParseError(SuiBuildError):
    """Raised when the top-level markup cannot be turned into a document."""


class CompileError(SuiBuildError):
    """Raised when a CSS, JS, or TypeScript compiler rejects its input."""


class CyclicComponentError(SuiBuildError):
    """Raised when a component includes itself directly or transitively."""

    def __init__(self, chain: list[str]) -> None:
        self.chain = list(chain)
        super().__init__(f"cyclic component reference: {' -> '.join(self.chain)}")


class ComponentResolutionError(SuiBuildError):
    """Raised when a referenced component cannot be turned into a Page."""


class PageNotFoundError(ComponentResolutionError):
    """Raised when the registry has no page for a component name."""


class PageLoadError(ComponentResolutionError):
    """Raised when a page exists but its sources cannot be loaded."""


class ExpressionError(SuiBuildError):
    """Raised when a property or slot expression fails to evaluate."""


__all__ = [
    "CompileError",
    "ComponentResolutionError",
    "CyclicComponentError",
    "DocumentParseError",
    "ExpressionError",
    "PageLoadError",
    "PageNotFoundError",
    "SuiBuildError",
]
