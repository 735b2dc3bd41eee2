"""Load ScalaFiddle code templates and escape them for inline scripts.

A template is a ``.scala`` file split by its first ``////`` line into the code
placed before (``pre``) and after (``post``) the user's editable snippet.
"""

from __future__ import annotations

import dataclasses as dc
import logging
import typing as typ

from scalafiddle_pages._constants import TEMPLATE_FILENAME, TEMPLATE_MARKER
from scalafiddle_pages.config.models import FiddleTemplateError

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

logger = logging.getLogger(__name__)

JS_STRING_ESCAPES: tuple[tuple[str, str], ...] = (
    ("\\", "\\\\"),
    ("\n", "\\n"),
    ("\r", ""),
    ("\t", "\\t"),
    ("'", "\\'"),
)


@dc.dataclass(frozen=True, slots=True)
class TemplateRecord:
    """Code surrounding a fiddle's editable region.

    Attributes
    ----------
    name : str
        Template name as referenced by ``data-template``.
    pre : tuple[str, ...]
        Lines preceding the marker, line endings included.
    post : tuple[str, ...]
        Lines following the marker, line endings included.
    """

    name: str
    pre: tuple[str, ...]
    post: tuple[str, ...]

    @property
    def escaped_pre(self) -> str:
        """Return ``pre`` as a single-quoted script literal body."""
        return escape_js_string(self.pre)

    @property
    def escaped_post(self) -> str:
        """Return ``post`` as a single-quoted script literal body."""
        return escape_js_string(self.post)


def template_path(name: str, directory: Path) -> Path:
    """Return the file backing template ``name`` inside ``directory``."""
    return directory / TEMPLATE_FILENAME.format(name=name)


def split_template(name: str, lines: cabc.Sequence[str]) -> TemplateRecord:
    """Split ``lines`` at the first marker line into a TemplateRecord.

    Raises
    ------
    FiddleTemplateError
        If no line starts with ``////``.
    """
    marker_index = next(
        (idx for idx, line in enumerate(lines) if line.startswith(TEMPLATE_MARKER)),
        None,
    )
    if marker_index is None:
        msg = f"Template '{name}' is missing a {TEMPLATE_MARKER} marker."
        raise FiddleTemplateError(msg)
    return TemplateRecord(
        name=name,
        pre=tuple(lines[:marker_index]),
        post=tuple(lines[marker_index + 1 :]),
    )


def load_template(name: str, directory: Path) -> TemplateRecord:
    """Read template ``name`` from ``directory`` and split it at the marker.

    Parameters
    ----------
    name : str
        Template name without the ``.scala`` suffix.
    directory : Path
        Directory holding the site's templates.

    Returns
    -------
    TemplateRecord
        The parsed template. Line endings, including carriage returns, are
        kept as read; escaping strips carriage returns later.

    Raises
    ------
    FiddleTemplateError
        If the file does not exist or lacks a marker line.
    """
    path = template_path(name, directory)
    if not path.is_file():
        msg = f"Template '{name}' not found at '{path}'."
        raise FiddleTemplateError(msg)
    with path.open("r", encoding="utf-8", newline="") as handle:
        lines = _split_lines(handle.read())
    logger.debug("loaded template %s from %s (%d lines)", name, path, len(lines))
    return split_template(name, lines)


def escape_js_string(lines: cabc.Iterable[str]) -> str:
    """Join ``lines`` and escape them for a single-quoted script literal.

    Replacements run in a fixed order: backslashes, newlines, carriage
    returns (dropped), tabs, then single quotes.
    """
    text = "".join(lines)
    for needle, replacement in JS_STRING_ESCAPES:
        text = text.replace(needle, replacement)
    return text


def _split_lines(text: str) -> list[str]:
    """Split on ``\\n`` only, keeping terminators like ``readlines`` would."""
    parts = text.split("\n")
    lines = [f"{part}\n" for part in parts[:-1]]
    if parts[-1]:
        lines.append(parts[-1])
    return lines


__all__ = [
    "JS_STRING_ESCAPES",
    "TemplateRecord",
    "escape_js_string",
    "load_template",
    "split_template",
    "template_path",
]
