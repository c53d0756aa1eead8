"""Default style and script compilers used by the page builder.

The builder only depends on the :class:`SourceCompiler` protocol, so callers
can plug in real toolchains. The defaults shipped here cover what a plain
build needs: CSS comment stripping and whitespace minification, and hoisting
of side-effect ``import "x"`` statements out of JavaScript. There is no
default TypeScript compiler; compiling TypeScript without one is a fatal
:class:`~sui_pages.builder.errors.CompileError`.
"""

from __future__ import annotations

import dataclasses as dc
import re
import typing as typ

from .errors import CompileError

CSS_COMMENT_PATTERN = re.compile(r"/\*.*?\*/", re.DOTALL)
CSS_SPACE_PATTERN = re.compile(r"\s+")
CSS_PUNCTUATION_PATTERN = re.compile(r"\s*([{};,>])\s*")
JS_SIDE_EFFECT_IMPORT_PATTERN = re.compile(
    r"""^[ \t]*import[ \t]+(["'])([^"'\n]+)\1[ \t]*;?[ \t]*$\n?""", re.MULTILINE
)
JS_BLOCK_COMMENT_PATTERN = re.compile(r"/\*.*?\*/", re.DOTALL)
JS_LINE_COMMENT_PATTERN = re.compile(r"^[ \t]*//.*$", re.MULTILINE)


@dc.dataclass(slots=True)
class CompileResult:
    """Compiled output plus any module paths the source imports."""

    output: str
    imports: list[str] = dc.field(default_factory=list)


class SourceCompiler(typ.Protocol):
    """Anything able to turn style or script source into deliverable text."""

    def compile(self, source: str, *, minify: bool = False) -> CompileResult:
        """Compile ``source``, raising ``CompileError`` on invalid input."""
        ...


class CssCompiler:
    """Validate brace balance and optionally minify stylesheets."""

    def compile(self, source: str, *, minify: bool = False) -> CompileResult:
        """Return ``source`` unchanged, or minified when ``minify`` is set."""
        stripped = CSS_COMMENT_PATTERN.sub("", source)
        self._check_braces(stripped)
        if not minify:
            return CompileResult(source)
        collapsed = CSS_SPACE_PATTERN.sub(" ", stripped)
        compact = CSS_PUNCTUATION_PATTERN.sub(r"\1", collapsed)
        return CompileResult(compact.replace(";}", "}").strip())

    @staticmethod
    def _check_braces(source: str) -> None:
        depth = 0
        for line_no, line in enumerate(source.splitlines(), start=1):
            for char in line:
                if char == "{":
                    depth += 1
                elif char == "}":
                    depth -= 1
                if depth < 0:
                    msg = f"CSS: unexpected '}}' on line {line_no}"
                    raise CompileError(msg)
        if depth:
            msg = "CSS: unclosed block at end of input"
            raise CompileError(msg)


class JsCompiler:
    """Hoist side-effect imports and optionally strip comments and indentation."""

    def compile(self, source: str, *, minify: bool = False) -> CompileResult:
        """Return the script body and the module paths it imported."""
        imports = [
            match.group(2)
            for match in JS_SIDE_EFFECT_IMPORT_PATTERN.finditer(source)
        ]
        body = JS_SIDE_EFFECT_IMPORT_PATTERN.sub("", source)
        if minify:
            body = JS_BLOCK_COMMENT_PATTERN.sub("", body)
            body = JS_LINE_COMMENT_PATTERN.sub("", body)
            lines = (line.strip() for line in body.splitlines())
            body = "\n".join(line for line in lines if line)
        return CompileResult(body.strip("\n"), imports)


class UnconfiguredCompiler:
    """Placeholder for a language without a configured toolchain."""

    def __init__(self, language: str) -> None:
        self.language = language

    def compile(self, source: str, *, minify: bool = False) -> CompileResult:
        """Fail for any non-empty source."""
        if not source.strip():
            return CompileResult("")
        msg = f"no {self.language} compiler is configured"
        raise CompileError(msg)


@dc.dataclass(slots=True)
class Compilers:
    """The compiler set a build uses for each source language."""

    css: SourceCompiler = dc.field(default_factory=CssCompiler)
    js: SourceCompiler = dc.field(default_factory=JsCompiler)
    ts: SourceCompiler = dc.field(
        default_factory=lambda: UnconfiguredCompiler("TypeScript")
    )


__all__ = [
    "CompileResult",
    "Compilers",
    "CssCompiler",
    "JsCompiler",
    "SourceCompiler",
    "UnconfiguredCompiler",
]
