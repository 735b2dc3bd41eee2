"""HTML contract shared by the fiddle tag and the post-render integrator.

The tag emits ``<div data-scalafiddle data-template='Name' ...>`` and the
integrator later scans finished pages for the same shape. Both sides live in
this module so the attribute order and the scanning patterns cannot drift
apart. The patterns accept the bare marker emitted by the tag as well as the
``data-scalafiddle=""`` form produced when an HTML serialiser normalises the
markup, and either quote style around the template name.

Examples
--------
>>> from scalafiddle_pages.markers import format_attributes, find_template_names
>>> html = f"<div {format_attributes({'data-scalafiddle': '', 'data-template': 'Foo'})}>"
>>> html
"<div data-scalafiddle data-template='Foo'>"
>>> find_template_names(html)
['Foo']
>>> find_template_names('<div data-scalafiddle="" data-template="Bar">')
['Bar']
"""

from __future__ import annotations

import re
import typing as typ

MARKER_ATTRIBUTE = "data-scalafiddle"
TEMPLATE_ATTRIBUTE = "data-template"
AUTORUN_ATTRIBUTE = "data-autorun"
BARE_ATTRIBUTES = frozenset({MARKER_ATTRIBUTE, AUTORUN_ATTRIBUTE})

FIDDLE_MARKER_PATTERN = re.compile(
    rf"<div {re.escape(MARKER_ATTRIBUTE)}(?:=\"\"|=''|[\s>])"
)
FIDDLE_TEMPLATE_PATTERN = re.compile(
    rf"<div {re.escape(MARKER_ATTRIBUTE)}(?:=\"\"|='')?\s+"
    rf"{re.escape(TEMPLATE_ATTRIBUTE)}=[\"']([^\"']+)[\"']"
)
BODY_END_PATTERN = re.compile(r"</body>")


def format_attributes(attributes: typ.Mapping[str, str]) -> str:
    """Join data attributes in insertion order.

    ``data-scalafiddle`` and ``data-autorun`` render as bare attribute names.
    Every other value, empty ones included, is wrapped in single quotes
    verbatim, without escaping embedded quotes.
    """
    parts: list[str] = []
    for key, value in attributes.items():
        if key in BARE_ATTRIBUTES:
            parts.append(key)
        else:
            parts.append(f"{key}='{value}'")
    return " ".join(parts)


def has_fiddle(html: str) -> bool:
    """Return ``True`` when ``html`` contains at least one fiddle container."""
    return FIDDLE_MARKER_PATTERN.search(html) is not None


def find_template_names(html: str) -> list[str]:
    """Return template names referenced by fiddles, in document order.

    Duplicates are preserved; callers decide whether to deduplicate.
    """
    return [match.group(1) for match in FIDDLE_TEMPLATE_PATTERN.finditer(html)]


def find_body_end(html: str) -> int | None:
    """Return the offset of the first ``</body>`` tag, or ``None``."""
    match = BODY_END_PATTERN.search(html)
    return match.start() if match else None


__all__ = [
    "AUTORUN_ATTRIBUTE",
    "BARE_ATTRIBUTES",
    "BODY_END_PATTERN",
    "FIDDLE_MARKER_PATTERN",
    "FIDDLE_TEMPLATE_PATTERN",
    "MARKER_ATTRIBUTE",
    "TEMPLATE_ATTRIBUTE",
    "find_body_end",
    "find_template_names",
    "format_attributes",
    "has_fiddle",
]
