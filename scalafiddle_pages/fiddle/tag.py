"""Render ``scalafiddle`` blocks into widget containers.

A :class:`FiddleTag` holds the options parsed from one tag invocation. Its
:meth:`FiddleTag.render` converts the enclosed markdown to HTML and wraps it in
a ``<div>`` whose data attributes merge site defaults with tag overrides.
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc

from scalafiddle_pages.config.models import FiddleConfig
from scalafiddle_pages.markers import (
    AUTORUN_ATTRIBUTE,
    MARKER_ATTRIBUTE,
    TEMPLATE_ATTRIBUTE,
    format_attributes,
)
from scalafiddle_pages.options import ParsedOptions, parse_options

CONFIG_DEFAULT_KEYS: tuple[str, ...] = (
    "dependency",
    "scalaversion",
    "selector",
    "theme",
)
TAG_OVERRIDE_KEYS: tuple[str, ...] = (
    "dependency",
    "scalaversion",
    "selector",
    "prefix",
    "minheight",
    "layout",
    "theme",
)


@dc.dataclass(frozen=True, slots=True)
class FiddleRenderContext:
    """Collaborators a fiddle needs at render time.

    Attributes
    ----------
    converter : Callable[[str], str]
        Converts the block's markdown into HTML.
    config : FiddleConfig
        Site-wide fiddle defaults.
    """

    converter: cabc.Callable[[str], str]
    config: FiddleConfig = dc.field(default_factory=FiddleConfig)


@dc.dataclass(frozen=True, slots=True)
class FiddleTag:
    """One ``scalafiddle`` tag occurrence and its parsed options."""

    options: ParsedOptions

    @classmethod
    def from_args(cls, raw_args: str) -> FiddleTag:
        """Parse ``raw_args`` once and return the resulting tag."""
        return cls(options=parse_options(raw_args))

    def attributes(self, config: FiddleConfig) -> dict[str, str]:
        """Return data attributes in emission order.

        Layers apply in sequence: the marker, the template, config defaults,
        tag overrides, then ``data-autorun``. A later layer replaces the value
        of an earlier key without moving it.
        """
        attributes = {MARKER_ATTRIBUTE: ""}
        template = self.options.attribute("template")
        if template:
            attributes[TEMPLATE_ATTRIBUTE] = template
        defaults = config.defaults()
        for key in CONFIG_DEFAULT_KEYS:
            if key in defaults:
                attributes[f"data-{key}"] = defaults[key]
        for key in TAG_OVERRIDE_KEYS:
            value = self.options.attribute(key)
            if value:
                attributes[f"data-{key}"] = value
        if self.options.flag("autorun"):
            attributes[AUTORUN_ATTRIBUTE] = ""
        return attributes

    def render(self, body: str, context: FiddleRenderContext) -> str:
        """Convert ``body`` and wrap it in the fiddle container.

        Parameters
        ----------
        body : str
            Rendered block content, typically markdown.
        context : FiddleRenderContext
            Converter and site config used for this render.

        Returns
        -------
        str
            ``<div ...>{html}</div>`` followed by a newline.
        """
        content = context.converter(body)
        attrs = format_attributes(self.attributes(context.config))
        return f"<div {attrs}>{content}</div>\n"


__all__ = [
    "CONFIG_DEFAULT_KEYS",
    "FiddleRenderContext",
    "FiddleTag",
    "TAG_OVERRIDE_KEYS",
]
