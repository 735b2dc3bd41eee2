"""Markdown conversion used for page bodies and fiddle blocks."""

from __future__ import annotations

import re
import typing as typ
from html import escape

from markdown import Markdown
from pygments.formatters.html import HtmlFormatter

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from markdown.extensions import Extension
else:  # pragma: no cover - type-checking fallback
    Extension = typ.Any

CODE_BLOCK_PATTERN = re.compile(r"```([A-Za-z0-9_+#.-]+)?[^\n]*\n(.*?)```", re.DOTALL)
FENCED_INDENT_PATTERN = re.compile(r"^[ ]{1,3}([`~]{3,})", re.MULTILINE)
FENCE_LABEL_PATTERN = re.compile(
    r"^([`~]{3,})([A-Za-z0-9_+#.-]+)?([,: \t][^\r\n]*)$", re.MULTILINE
)
CODEHILITE_OPEN_TAG = re.compile(r'<div class="codehilite">')
DEFAULT_EXTENSIONS: tuple[str, ...] = (
    "fenced_code",
    "codehilite",
    "tables",
    "sane_lists",
)


class HtmlContentRenderer:
    """Render markdown with Pygments highlighting and language metadata.

    Instances are callable, so one can be handed straight to a
    :class:`~scalafiddle_pages.fiddle.tag.FiddleRenderContext` as its
    converter.
    """

    def __init__(
        self,
        pygments_style: str = "monokai",
        extensions: cabc.Sequence[Extension | str] = (),
    ) -> None:
        """Initialize a renderer with a Pygments style and extra extensions.

        Parameters
        ----------
        pygments_style : str, optional
            Name of the Pygments style used for syntax highlighting. Defaults to
            ``"monokai"``.
        extensions : Sequence[Extension | str], optional
            Markdown extensions appended to the defaults.
        """
        self.pygments_style = pygments_style
        self._md = Markdown(
            extensions=[*DEFAULT_EXTENSIONS, *extensions],
            extension_configs={
                "codehilite": {
                    "linenums": False,
                    "guess_lang": False,
                    "css_class": "codehilite",
                    "pygments_style": pygments_style,
                }
            },
        )

    def __call__(self, text: str) -> str:
        return self.markdown(text)

    @property
    def stylesheet(self) -> str:
        """Return the CSS used for highlighted code blocks."""
        formatter = HtmlFormatter(style=self.pygments_style, cssclass="codehilite")
        return formatter.get_style_defs(".codehilite")

    def markdown(self, text: str) -> str:
        """Render markdown into HTML, returning ``""`` for blank input."""
        normalized = self._normalize_fenced_blocks(text)
        if not normalized.strip():
            return ""
        html = self._md.reset().convert(normalized)
        return self._annotate_codehilite(html, normalized)

    def _annotate_codehilite(self, html: str, source_markdown: str) -> str:
        """Attach language metadata to each highlighted block in converted markdown."""
        languages = [
            match.group(1) or "text"
            for match in CODE_BLOCK_PATTERN.finditer(source_markdown)
        ]
        if not languages:
            return html
        lang_iter = iter(languages)

        def _repl(match: re.Match[str]) -> str:
            lang = next(lang_iter, "text")
            return (
                f'<div class="codehilite" data-language="{escape(lang, quote=True)}">'
            )

        return CODEHILITE_OPEN_TAG.sub(_repl, html, len(languages))

    @staticmethod
    def _normalize_fenced_blocks(text: str) -> str:
        """Drop fence indentation and trailing labels such as ``scala mdoc``."""
        without_indent = FENCED_INDENT_PATTERN.sub(r"\1", text)

        def _strip_labels(match: re.Match[str]) -> str:
            fence, language, _extras = match.groups()
            return f"{fence}{language or ''}"

        return FENCE_LABEL_PATTERN.sub(_strip_labels, without_indent)


__all__ = ["CODE_BLOCK_PATTERN", "HtmlContentRenderer"]
