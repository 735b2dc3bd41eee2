"""Fiddle tag rendering, template loading, and post-render integration."""

from .extension import ScalaFiddleExtension
from .integration import RenderedPage, append_scalafiddle_code, build_api_code
from .tag import FiddleRenderContext, FiddleTag
from .templates import TemplateRecord, escape_js_string, load_template

__all__ = [
    "FiddleRenderContext",
    "FiddleTag",
    "RenderedPage",
    "ScalaFiddleExtension",
    "TemplateRecord",
    "append_scalafiddle_code",
    "build_api_code",
    "escape_js_string",
    "load_template",
]
