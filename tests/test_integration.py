"""Tests for the post-render ScalaFiddle integrator.

The integrator receives a finished page and must leave pages without fiddles
untouched, inject template data and the ``integration.js`` loader otherwise,
and fail loudly when a referenced template is broken.
"""

from __future__ import annotations

import typing as typ

import pytest

from scalafiddle_pages.config import FiddleConfig, FiddleTemplateError
from scalafiddle_pages.fiddle.integration import (
    RenderedPage,
    append_scalafiddle_code,
    build_api_code,
    insert_api_code,
)
from scalafiddle_pages.markers import find_template_names

if typ.TYPE_CHECKING:
    from pathlib import Path

FOO_DIV = '<div data-scalafiddle="" data-template="Foo">x</div>'


@pytest.fixture
def source_dir(tmp_path: Path) -> Path:
    """Return a site source dir with ``Foo`` and ``Bar`` templates."""
    templates = tmp_path / "_scalafiddle"
    templates.mkdir()
    (templates / "Foo.scala").write_text("a\n////\nb\n", encoding="utf-8")
    (templates / "Bar.scala").write_text("x\n////\ny\n", encoding="utf-8")
    return tmp_path


def _page(output: str, source_dir: Path, **config: str) -> RenderedPage:
    return RenderedPage(
        output=output, source_dir=source_dir, config=FiddleConfig(**config)
    )


def test_page_without_marker_is_unchanged(source_dir: Path) -> None:
    html = "<html><body><div data-scalafiddlex>no</div></body></html>"
    page = _page(html, source_dir)

    assert append_scalafiddle_code(page) is False
    assert page.output == html


def test_single_template_is_injected(source_dir: Path) -> None:
    page = _page(f"<html><body>{FOO_DIV}</body></html>", source_dir)

    assert append_scalafiddle_code(page) is True

    assert "window.scalaFiddleTemplates = {" in page.output
    assert "'Foo': {\n      pre: 'a\\n',\n      post: 'b\\n'\n    }" in page.output
    assert page.output.endswith(
        "<script defer src='https://embed.scalafiddle.io/integration.js'>"
        "</script>\n</body></html>"
    )


def test_code_goes_before_first_body_end(source_dir: Path) -> None:
    html = f"<body>{FOO_DIV}</body><!-- </body> -->"
    page = _page(html, source_dir)

    append_scalafiddle_code(page)

    head, _, tail = page.output.partition("</body>")
    assert head.startswith(f"<body>{FOO_DIV}\n<script>")
    assert tail == "<!-- </body> -->"


def test_code_is_prepended_without_body(source_dir: Path) -> None:
    page = _page(FOO_DIV, source_dir)

    append_scalafiddle_code(page)

    assert page.output.startswith("\n<script>\n  window.scalaFiddleTemplates")
    assert page.output.endswith(f"integration.js'></script>\n{FOO_DIV}")


def test_fiddle_without_template_only_loads_script(source_dir: Path) -> None:
    code = build_api_code(
        "<div data-scalafiddle>x</div>",
        source_dir / "_scalafiddle",
        FiddleConfig(scalafiddle_url="https://fiddle.example/"),
    )

    assert code == (
        "\n<script defer src='https://fiddle.example/integration.js'></script>\n"
    )


def test_templates_follow_first_appearance_and_are_deduplicated(
    source_dir: Path,
) -> None:
    html = (
        '<div data-scalafiddle="" data-template="Bar"></div>'
        f"{FOO_DIV}"
        "<div data-scalafiddle data-template='Bar'></div>"
    )

    assert find_template_names(html) == ["Bar", "Foo", "Bar"]

    code = build_api_code(html, source_dir / "_scalafiddle", FiddleConfig())

    assert code.count("'Bar': {") == 1
    assert code.index("'Bar': {") < code.index("'Foo': {")
    assert "    }\n,\n\n    'Foo'" in code


def test_configured_template_dir(tmp_path: Path) -> None:
    custom = tmp_path / "fiddles"
    custom.mkdir()
    (custom / "Foo.scala").write_text("p\n////\nq\n", encoding="utf-8")
    page = _page(FOO_DIV, tmp_path, template_dir="fiddles")

    append_scalafiddle_code(page)

    assert "pre: 'p\\n'" in page.output


def test_broken_template_aborts_without_mutation(source_dir: Path) -> None:
    (source_dir / "_scalafiddle" / "Foo.scala").write_text("no marker\n")
    html = f"<body>{FOO_DIV}</body>"
    page = _page(html, source_dir)

    with pytest.raises(FiddleTemplateError):
        append_scalafiddle_code(page)
    assert page.output == html


def test_missing_template_aborts(source_dir: Path) -> None:
    page = _page('<div data-scalafiddle="" data-template="Missing">', source_dir)

    with pytest.raises(FiddleTemplateError, match="Missing"):
        append_scalafiddle_code(page)


def test_insert_api_code_prepends_when_no_body() -> None:
    assert insert_api_code("<p>x</p>", "<s>") == "<s><p>x</p>"
    assert insert_api_code("<body></body>", "<s>") == "<body><s></body>"
