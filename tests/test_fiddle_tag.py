"""Tests for the ``scalafiddle`` block tag.

These tests exercise :class:`~scalafiddle_pages.fiddle.tag.FiddleTag` directly
to verify attribute layering (site defaults, tag overrides, flags) and the
emitted container markup, then render the tag through Jinja via
:class:`~scalafiddle_pages.fiddle.extension.ScalaFiddleExtension`.

A trivial converter wraps the block body in ``<p>`` so assertions can focus on
the container rather than on markdown output.
"""

from __future__ import annotations

import pytest
from jinja2 import Environment, TemplateSyntaxError

from scalafiddle_pages.config import FiddleConfig, FiddleEnvironmentError
from scalafiddle_pages.fiddle import FiddleRenderContext, FiddleTag, ScalaFiddleExtension
from scalafiddle_pages.markers import (
    find_template_names,
    format_attributes,
    has_fiddle,
)


def _paragraph(text: str) -> str:
    """Convert ``text`` into a single paragraph for predictable output."""
    return f"<p>{text.strip()}</p>"


def _context(**config: str) -> FiddleRenderContext:
    return FiddleRenderContext(converter=_paragraph, config=FiddleConfig(**config))


def test_render_minimal_container() -> None:
    html = FiddleTag.from_args("").render("code", _context())

    assert html == "<div data-scalafiddle><p>code</p></div>\n"


def test_template_follows_marker() -> None:
    html = FiddleTag.from_args('template="Foo"').render("code", _context())

    assert html.startswith("<div data-scalafiddle data-template='Foo'>")
    assert has_fiddle(html)
    assert find_template_names(html) == ["Foo"]


def test_config_defaults_are_applied() -> None:
    tag = FiddleTag.from_args("")
    config = FiddleConfig(dependency="d1", scalaversion="2.12", theme="light")

    assert tag.attributes(config) == {
        "data-scalafiddle": "",
        "data-dependency": "d1",
        "data-scalaversion": "2.12",
        "data-theme": "light",
    }


def test_tag_attribute_overrides_config() -> None:
    html = FiddleTag.from_args('dependency="d2"').render(
        "code", _context(dependency="d1")
    )

    assert "data-dependency='d2'" in html
    assert "d1" not in html


def test_override_keeps_original_position() -> None:
    tag = FiddleTag.from_args('theme="dark" prefix="p" template="T"')
    config = FiddleConfig(theme="light", selector=".sel")

    assert list(tag.attributes(config).items()) == [
        ("data-scalafiddle", ""),
        ("data-template", "T"),
        ("data-selector", ".sel"),
        ("data-theme", "dark"),
        ("data-prefix", "p"),
    ]


def test_full_attribute_order() -> None:
    tag = FiddleTag.from_args(
        'layout="v70" minheight="200px" prefix="import io.circe._" '
        'scalaversion="2.11" template="Json" autorun'
    )

    html = tag.render("body", _context(selector=".fiddle"))

    assert html.startswith(
        "<div data-scalafiddle data-template='Json' data-selector='.fiddle' "
        "data-scalaversion='2.11' data-prefix='import io.circe._' "
        "data-minheight='200px' data-layout='v70' data-autorun>"
    )


def test_filters_are_not_emitted() -> None:
    html = FiddleTag.from_args('color="red"').render("code", _context())

    assert "red" not in html


def test_values_are_not_escaped() -> None:
    html = FiddleTag.from_args("").render("code", _context(theme="it's"))

    assert "data-theme='it's'" in html


def test_empty_config_defaults_render_quoted() -> None:
    html = FiddleTag.from_args("").render("x", _context(theme="", dependency=""))

    assert html == (
        "<div data-scalafiddle data-dependency='' data-theme=''><p>x</p></div>\n"
    )


def test_only_marker_and_autorun_render_bare() -> None:
    attributes = {"data-scalafiddle": "", "data-layout": "", "data-autorun": ""}

    assert format_attributes(attributes) == (
        "data-scalafiddle data-layout='' data-autorun"
    )


class TestScalaFiddleExtension:
    """Render the tag through a Jinja environment."""

    @staticmethod
    def _environment(*, autoescape: bool = False) -> Environment:
        env = Environment(extensions=[ScalaFiddleExtension], autoescape=autoescape)
        env.scalafiddle_context = _context(dependency="d1")  # type: ignore[attr-defined]
        return env

    def test_block_renders_container(self) -> None:
        env = self._environment()
        template = env.from_string(
            'before\n{% scalafiddle template="Foo" autorun %}body'
            "{% endscalafiddle %}after"
        )

        assert template.render() == (
            "before\n<div data-scalafiddle data-template='Foo' "
            "data-dependency='d1' data-autorun><p>body</p></div>\nafter"
        )

    def test_single_quotes_and_hyphenated_keys(self) -> None:
        env = self._environment()
        template = env.from_string(
            "{% scalafiddle theme='dark' data-x=\"1\" %}x{% endscalafiddle %}"
        )

        html = template.render()

        assert "data-theme='dark'" in html
        assert "data-x" not in html

    def test_autoescape_keeps_markup(self) -> None:
        env = self._environment(autoescape=True)
        template = env.from_string("{% scalafiddle %}<b>x</b>{% endscalafiddle %}")

        assert template.render() == (
            "<div data-scalafiddle data-dependency='d1'><p><b>x</b></p></div>\n"
        )

    def test_context_variable_overrides_environment(self) -> None:
        env = self._environment()
        template = env.from_string("{% scalafiddle %}x{% endscalafiddle %}")

        html = template.render(scalafiddle_context=_context(dependency="d9"))

        assert "data-dependency='d9'" in html

    def test_block_body_is_rendered_first(self) -> None:
        env = self._environment()
        template = env.from_string(
            "{% scalafiddle %}{{ greeting }}{% endscalafiddle %}"
        )

        assert "<p>hello</p>" in template.render(greeting="hello")

    def test_missing_context_is_an_environment_error(self) -> None:
        env = Environment(extensions=[ScalaFiddleExtension])
        template = env.from_string("{% scalafiddle %}x{% endscalafiddle %}")

        with pytest.raises(FiddleEnvironmentError):
            template.render()

    def test_tag_name_set_is_immutable(self) -> None:
        assert ScalaFiddleExtension.tags == frozenset({"scalafiddle"})

    def test_backslashes_in_values_are_kept_verbatim(self) -> None:
        env = self._environment()
        template = env.from_string(
            r'{% scalafiddle selector="a\tb" prefix="C:\new" %}x{% endscalafiddle %}'
        )

        html = template.render()

        assert "data-selector='a\\tb'" in html
        assert "data-prefix='C:\\new'" in html
        assert "\t" not in html

    def test_trim_markers_and_multiline_arguments(self) -> None:
        env = self._environment()
        html = env.from_string(
            'a\n{%- scalafiddle\n  template="Foo"\n  theme="dark" -%}\n'
            "x{% endscalafiddle %}"
        ).render()

        assert html.startswith("a<div data-scalafiddle data-template='Foo'")
        assert "data-theme='dark'><p>x</p></div>" in html

    def test_multiline_arguments_keep_line_numbers(self) -> None:
        env = self._environment()
        source = (
            'a\n{% scalafiddle\n  template="Foo"\n  theme="dark" %}\n'
            "x{% endscalafiddle %}{% endfor %}"
        )

        with pytest.raises(TemplateSyntaxError) as excinfo:
            env.from_string(source)

        assert excinfo.value.lineno == 5

    def test_raw_blocks_and_comments_are_untouched(self) -> None:
        env = self._environment()
        source = (
            '{% raw %}{% scalafiddle theme="a\\tb" %}{% endraw %}'
            '{# {% scalafiddle theme="c" %} #}'
        )

        assert env.from_string(source).render() == '{% scalafiddle theme="a\\tb" %}'

    def test_compiled_tag_is_cached_per_argument_text(self) -> None:
        env = self._environment()
        extension = env.extensions[ScalaFiddleExtension.identifier]
        source = '{% scalafiddle theme="dark" %}x{% endscalafiddle %}'

        env.from_string(source)
        env.from_string(source)

        assert list(extension._tags) == ['theme="dark"']
