"""Load site configuration YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from scalafiddle_pages._constants import CONFIG_SECTION, DEFAULT_LAYOUT

from .helpers import _build_fiddle_config, _optional_str, _resolve_dir
from .models import SiteConfig


def load_site_config(path: Path) -> SiteConfig:
    """Load the YAML configuration describing the site and fiddle defaults.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML configuration file (for example,
        ``_config.yaml``).

    Returns
    -------
    SiteConfig
        Parsed configuration. Relative ``source_dir`` and ``output_dir``
        values resolve against the directory containing ``path``.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    TypeError
        If the top-level YAML structure is not a mapping.
    SiteConfigError
        If the ``scalafiddle`` section is present but not a mapping.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> from scalafiddle_pages.config import load_site_config
    >>> config = load_site_config(Path("_config.yaml"))  # doctest: +SKIP
    >>> config.scalafiddle.template_dir  # doctest: +SKIP
    '_scalafiddle'
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):  # pragma: no cover - config error guard
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    raw: dict[str, typ.Any] = dict(loaded)

    base_dir = path.resolve().parent
    return SiteConfig(
        source_dir=_resolve_dir(base_dir, raw.get("source_dir"), "."),
        output_dir=_resolve_dir(base_dir, raw.get("output_dir"), "_site"),
        layout=_optional_str(raw.get("layout")) or DEFAULT_LAYOUT,
        pygments_style=_optional_str(raw.get("pygments_style")) or "monokai",
        site_name=_optional_str(raw.get("site_name")) or "Documentation",
        scalafiddle=_build_fiddle_config(raw.get(CONFIG_SECTION)),
    )


__all__ = ["load_site_config"]
