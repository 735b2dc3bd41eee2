r"""Parse the free-form argument text of a ``scalafiddle`` tag.

The parser splits ``key="value"`` pairs into recognised widget attributes and
inert filters, and detects boolean flags by simple containment. It never
rejects input: fragments that do not look like a quoted pair are ignored so
unknown options stay forward compatible.

Example
-------
>>> from scalafiddle_pages.options import parse_options
>>> options = parse_options('template="Intro" theme=\'dark\' autorun')
>>> options.attributes["template"], options.flags["autorun"]
('Intro', True)
"""

from __future__ import annotations

import dataclasses as dc
import re
import types

OPTIONS_PATTERN = re.compile(r"""([^\s]+)\s*=\s*['"]+([^'"]+)['"]+""")
ALLOWED_ATTRIBUTES: tuple[str, ...] = (
    "template",
    "prefix",
    "dependency",
    "scalaversion",
    "selector",
    "minheight",
    "layout",
    "theme",
)
ALLOWED_FLAGS: tuple[str, ...] = ("autorun",)


@dc.dataclass(frozen=True, slots=True)
class ParsedOptions:
    """Options extracted from a single tag invocation.

    Attributes
    ----------
    attributes : Mapping[str, str]
        Values for keys listed in ``ALLOWED_ATTRIBUTES``.
    flags : Mapping[str, bool]
        Flags from ``ALLOWED_FLAGS`` that appear in the raw text; only set
        flags are present.
    filters : Mapping[str, str]
        Every other ``key="value"`` pair, keyed by the raw key.
    """

    attributes: types.MappingProxyType[str, str]
    flags: types.MappingProxyType[str, bool]
    filters: types.MappingProxyType[str, str]

    def attribute(self, key: str) -> str | None:
        """Return the attribute ``key`` or ``None`` when it was not supplied."""
        return self.attributes.get(key)

    def flag(self, key: str) -> bool:
        """Return ``True`` when the flag ``key`` was present in the tag."""
        return self.flags.get(key, False)


def parse_options(raw_options: str) -> ParsedOptions:
    """Split ``raw_options`` into attributes, flags, and filters.

    Parameters
    ----------
    raw_options : str
        Text following the tag name, e.g. ``template="Foo" autorun``.

    Returns
    -------
    ParsedOptions
        Immutable view of the recognised values. Flags are detected with a
        substring check, so ``autorun`` inside an unrelated value still sets
        the flag.
    """
    attributes: dict[str, str] = {}
    filters: dict[str, str] = {}
    for match in OPTIONS_PATTERN.finditer(raw_options):
        key, value = match.groups()
        if key in ALLOWED_ATTRIBUTES:
            attributes[key] = value
        else:
            filters[key] = value
    flags = {name: True for name in ALLOWED_FLAGS if name in raw_options}
    return ParsedOptions(
        attributes=types.MappingProxyType(attributes),
        flags=types.MappingProxyType(flags),
        filters=types.MappingProxyType(filters),
    )


__all__ = [
    "ALLOWED_ATTRIBUTES",
    "ALLOWED_FLAGS",
    "OPTIONS_PATTERN",
    "ParsedOptions",
    "parse_options",
]
