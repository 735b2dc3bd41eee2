"""Load and validate site configuration YAML for scalafiddle page builds.

This subpackage parses the site's YAML file, resolves the source and output
directories, and turns the ``scalafiddle`` section into a typed
:class:`FiddleConfig` carrying widget defaults, the template directory, and the
embed URL. The primary entry point is :func:`load_site_config`.

Examples
--------
>>> from pathlib import Path
>>> from scalafiddle_pages.config import load_site_config
>>> site = load_site_config(Path("_config.yaml"))  # doctest: +SKIP
>>> site.scalafiddle.scalafiddle_url  # doctest: +SKIP
'https://embed.scalafiddle.io/'
"""

from .loader import load_site_config
from .models import (
    FiddleConfig,
    FiddleEnvironmentError,
    FiddleTemplateError,
    SiteConfig,
    SiteConfigError,
)

__all__ = [
    "FiddleConfig",
    "FiddleEnvironmentError",
    "FiddleTemplateError",
    "SiteConfig",
    "SiteConfigError",
    "load_site_config",
]
