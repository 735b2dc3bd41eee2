"""Utility helpers shared by the scalafiddle configuration loader."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from scalafiddle_pages._constants import (
    DEFAULT_SCALAFIDDLE_URL,
    DEFAULT_TEMPLATE_DIR,
)

from .models import FiddleConfig, SiteConfigError


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _resolve_dir(base: Path, value: object | None, default: str) -> Path:
    """Resolve ``value`` against ``base`` unless it is already absolute."""
    path = Path(_optional_str(value) or default)
    if path.is_absolute():
        return path
    return (base / path).resolve()


def _default_value(section: typ.Mapping[str, typ.Any], key: str) -> str | None:
    """Return ``key`` as text when present, ``""`` for a null value, else None."""
    if key not in section:
        return None
    value = section[key]
    return "" if value is None else str(value)


def _build_fiddle_config(payload: object | None) -> FiddleConfig:
    """Build a FiddleConfig from the raw ``scalafiddle`` mapping.

    Scalar values are coerced to strings so YAML numbers such as
    ``scalaversion: 2.12`` still render as attribute text. Widget defaults
    that are present but empty stay as ``""`` so they are still emitted.
    """
    match payload:
        case None:
            return FiddleConfig()
        case dict():
            section = typ.cast("dict[str, typ.Any]", payload)
        case _:
            msg = "The 'scalafiddle' section must be a mapping."
            raise SiteConfigError(msg)

    return FiddleConfig(
        dependency=_default_value(section, "dependency"),
        scalaversion=_default_value(section, "scalaversion"),
        selector=_default_value(section, "selector"),
        theme=_default_value(section, "theme"),
        template_dir=_optional_str(section.get("templateDir")) or DEFAULT_TEMPLATE_DIR,
        scalafiddle_url=_optional_str(section.get("scalaFiddleUrl"))
        or DEFAULT_SCALAFIDDLE_URL,
    )


__all__ = ["_build_fiddle_config", "_default_value", "_optional_str", "_resolve_dir"]
