"""Jinja2 binding for the ``{% scalafiddle %}`` block tag.

Register :class:`ScalaFiddleExtension` on an environment and supply a
:class:`~scalafiddle_pages.fiddle.tag.FiddleRenderContext`, either through
``environment.scalafiddle_context`` or the ``scalafiddle_context`` template
variable::

    {% scalafiddle template="Intro" theme="dark" autorun %}
    ```scala
    println("hello")
    ```
    {% endscalafiddle %}

The tag's arguments are free-form ``key="value"`` text rather than Jinja
expressions. Before lexing, :meth:`ScalaFiddleExtension.preprocess` wraps the
argument text of each opening tag in one string literal that the lexer
unescapes back to the exact source text, so backslashes and quotes reach
:func:`~scalafiddle_pages.options.parse_options` untouched. The parsed tag is
cached per argument text.
"""

from __future__ import annotations

import re
import typing as typ

from jinja2 import nodes
from jinja2.ext import Extension
from markupsafe import Markup

from scalafiddle_pages.config.models import FiddleEnvironmentError

from .tag import FiddleRenderContext, FiddleTag

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from jinja2 import Environment
    from jinja2.parser import Parser
    from jinja2.runtime import Context

CONTEXT_VARIABLE = "scalafiddle_context"
_NEWLINE_PATTERN = re.compile(r"\r\n|\r|\n")


class ScalaFiddleExtension(Extension):
    """Add the ``scalafiddle`` block tag to a Jinja environment."""

    tags = frozenset({"scalafiddle"})

    def __init__(self, environment: Environment) -> None:
        super().__init__(environment)
        environment.extend(scalafiddle_context=None)
        self._tags: dict[str, FiddleTag] = {}
        self._tag_pattern = _opening_tag_pattern(environment)

    def preprocess(
        self, source: str, name: str | None, filename: str | None = None
    ) -> str:
        """Quote the raw argument text of every opening ``scalafiddle`` tag.

        Raw blocks and comments are left alone. Newlines inside the arguments
        are kept after the literal so line numbers do not shift.
        """
        return self._tag_pattern.sub(_quote_arguments, source)

    def parse(self, parser: Parser) -> nodes.Node:
        """Parse ``{% scalafiddle args %}...{% endscalafiddle %}``."""
        lineno = next(parser.stream).lineno
        raw_args = parser.stream.expect("string").value
        self._tag_for(raw_args)
        body = parser.parse_statements(("name:endscalafiddle",), drop_needle=True)
        call = self.call_method(
            "_render_fiddle", [nodes.Const(raw_args), nodes.ContextReference()]
        )
        return nodes.CallBlock(call, [], [], body).set_lineno(lineno)

    def _tag_for(self, raw_args: str) -> FiddleTag:
        """Return the cached tag for ``raw_args``, parsing it on first use.

        Templates loaded from a bytecode cache skip :meth:`parse`, so the
        first render fills the cache instead.
        """
        tag = self._tags.get(raw_args)
        if tag is None:
            tag = FiddleTag.from_args(raw_args)
            self._tags[raw_args] = tag
        return tag

    def _render_fiddle(
        self, raw_args: str, context: Context, caller: cabc.Callable[[], str]
    ) -> Markup:
        tag = self._tag_for(raw_args)
        render_context = self._resolve_context(context)
        return Markup(tag.render(str(caller()), render_context))

    def _resolve_context(self, context: Context) -> FiddleRenderContext:
        """Prefer a per-render context variable over the environment default."""
        candidate = context.get(CONTEXT_VARIABLE) or getattr(
            self.environment, CONTEXT_VARIABLE, None
        )
        if not isinstance(candidate, FiddleRenderContext):
            msg = (
                "scalafiddle tag rendered without a FiddleRenderContext; set "
                f"environment.{CONTEXT_VARIABLE} or pass '{CONTEXT_VARIABLE}'."
            )
            raise FiddleEnvironmentError(msg)
        return candidate


def _opening_tag_pattern(environment: Environment) -> re.Pattern[str]:
    """Match opening tags, skipping raw blocks and comments."""
    block_start = re.escape(environment.block_start_string)
    block_end = re.escape(environment.block_end_string)
    comment_start = re.escape(environment.comment_start_string)
    comment_end = re.escape(environment.comment_end_string)
    return re.compile(
        rf"{block_start}[-+]?\s*raw\s*[-+]?{block_end}.*?"
        rf"{block_start}[-+]?\s*endraw\s*[-+]?{block_end}"
        rf"|{comment_start}.*?{comment_end}"
        rf"|(?P<open>{block_start}[-+]?\s*scalafiddle\b)"
        r"(?P<args>(?:\"(?:[^\"\\]|\\.)*\"|'(?:[^'\\]|\\.)*'|.)*?)"
        rf"(?P<close>[-+]?{block_end})",
        re.DOTALL,
    )


def _quote_arguments(match: re.Match[str]) -> str:
    if match.group("open") is None:
        return match.group(0)
    raw_args = match.group("args").strip()
    literal = raw_args.encode("unicode_escape").decode("ascii").replace('"', '\\"')
    newlines = "".join(_NEWLINE_PATTERN.findall(match.group("args")))
    return f'{match.group("open")} "{literal}"{newlines} {match.group("close")}'


__all__ = ["CONTEXT_VARIABLE", "ScalaFiddleExtension"]
