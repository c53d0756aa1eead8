"""Tests for the ``sui build`` command."""

from __future__ import annotations

import typing as typ

import msgspec.json as msgspec_json
import pytest
from bs4 import BeautifulSoup

from sui_pages.builder import CyclicComponentError, PageNotFoundError
from sui_pages.cli import build

if typ.TYPE_CHECKING:
    from pathlib import Path


def _write(root: Path, relative: str, text: str) -> None:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


@pytest.fixture
def project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Create a minimal site with one page and chdir into it."""
    _write(
        tmp_path,
        "templates/default/__document.html",
        "<html><head></head><body>{{ __page }}</body></html>",
    )
    _write(
        tmp_path,
        "templates/default/index/index.html",
        '<main><div is="Ghost"></div><div is="Badge" text="New"></div></main>',
    )
    _write(
        tmp_path,
        "templates/default/Badge/Badge.html",
        '<span class="badge" title="::Badge">[{ $props.text }]</span>',
    )
    _write(tmp_path, "templates/default/Badge/Badge.css", ".badge { color: red; }")
    _write(
        tmp_path,
        "sui.yaml",
        "defaults:\n  asset_root: /static\npages:\n  - /index\n",
    )
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_build_writes_page_and_catalog(
    project: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """The assembled page and its translation catalog land in the output dir."""
    build(config=project / "sui.yaml")

    html = (project / "public/index.html").read_text(encoding="utf-8")
    soup = BeautifulSoup(html, "html.parser")
    badge = soup.find("span", attrs={"s:cn": "Badge"})
    assert badge is not None, "expected the Badge component to be inlined"
    assert badge.get_text() == "New"
    assert "[s\\:cn=Badge] .badge" in soup.head.style.get_text()

    catalog = msgspec_json.decode(
        (project / "public/index.translations.json").read_bytes()
    )
    assert [entry["message"] for entry in catalog] == ["Badge"]

    out = capsys.readouterr().out
    assert "wrote public/index.html" in out
    assert "warning: default/index" in out, f"expected a Ghost warning in {out!r}"


def test_build_honours_output_dir_override(project: Path) -> None:
    """``--output-dir`` redirects outputs while keeping file names."""
    build(page="/index", config=project / "sui.yaml", output_dir=project / "dist")
    assert (project / "dist/index.html").is_file()
    assert (project / "dist/index.translations.json").is_file()


def test_build_failure_prints_warnings_and_raises(
    project: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """Fatal errors propagate after the recorded warnings are shown."""
    _write(project, "templates/default/Badge/Badge.html", '<div is="Badge"></div>')
    with pytest.raises(CyclicComponentError):
        build(config=project / "sui.yaml")
    out = capsys.readouterr().out
    assert "warning: default/index" in out
    assert "error: /index: cyclic component reference" in out, out
    assert not (project / "public/index.html").exists()


def test_missing_top_level_page_is_reported(
    project: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """An unknown configured route is reported like any other build failure."""
    _write(project, "sui.yaml", "pages:\n  - /index\n  - /missing\n")
    with pytest.raises(PageNotFoundError):
        build(page="/missing", config=project / "sui.yaml")
    out = capsys.readouterr().out
    assert "error: /missing: component '/missing' not found" in out, out
