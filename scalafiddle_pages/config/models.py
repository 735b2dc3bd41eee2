"""Typed dataclasses describing scalafiddle site configuration structures."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path

from scalafiddle_pages._constants import (
    DEFAULT_LAYOUT,
    DEFAULT_SCALAFIDDLE_URL,
    DEFAULT_TEMPLATE_DIR,
)


class SiteConfigError(ValueError):
    """Raised when the site configuration is invalid or incomplete."""


class FiddleTemplateError(SiteConfigError):
    """Raised when a referenced code template is missing or malformed."""


class FiddleEnvironmentError(RuntimeError):
    """Raised when a fiddle tag is rendered without a converter or config."""


@dc.dataclass(frozen=True, slots=True)
class FiddleConfig:
    """Site-wide defaults read from the ``scalafiddle`` config section.

    Attributes
    ----------
    dependency : str, optional
        Default ``data-dependency`` for every fiddle. ``None`` when the key is
        absent; ``""`` when it is present without a value.
    scalaversion : str, optional
        Default ``data-scalaversion``.
    selector : str, optional
        Default ``data-selector``.
    theme : str, optional
        Default ``data-theme``.
    template_dir : str
        Directory, relative to the site source, holding ``.scala`` templates.
    scalafiddle_url : str
        Base URL that serves ``integration.js``.
    """

    dependency: str | None = None
    scalaversion: str | None = None
    selector: str | None = None
    theme: str | None = None
    template_dir: str = DEFAULT_TEMPLATE_DIR
    scalafiddle_url: str = DEFAULT_SCALAFIDDLE_URL

    def defaults(self) -> dict[str, str]:
        """Return the configured widget defaults, omitting absent keys."""
        candidates = {
            "dependency": self.dependency,
            "scalaversion": self.scalaversion,
            "selector": self.selector,
            "theme": self.theme,
        }
        return {key: value for key, value in candidates.items() if value is not None}


@dc.dataclass(slots=True)
class SiteConfig:
    """Top-level configuration consumed by the page host and CLI."""

    source_dir: Path
    output_dir: Path
    layout: str = DEFAULT_LAYOUT
    pygments_style: str = "monokai"
    site_name: str = "Documentation"
    scalafiddle: FiddleConfig = dc.field(default_factory=FiddleConfig)


__all__ = [
    "FiddleConfig",
    "FiddleEnvironmentError",
    "FiddleTemplateError",
    "SiteConfig",
    "SiteConfigError",
]
