"""Render markdown pages that use the ``scalafiddle`` tag.

This module is the thin host around the fiddle components: it expands Jinja
tags in a page source (including ``{% scalafiddle %}`` blocks), converts the
result to HTML, wraps it in the layout, and fires ``post_render`` hooks so the
ScalaFiddle integrator can append its scripts. Pages are rendered one by one
from explicitly named files.

Example
-------
>>> from pathlib import Path
>>> from scalafiddle_pages.config import load_site_config
>>> from scalafiddle_pages.site import PageRenderer
>>> site = load_site_config(Path("_config.yaml"))  # doctest: +SKIP
>>> PageRenderer(site).run([Path("docs/intro.md")])  # doctest: +SKIP
[PosixPath('_site/intro.html')]
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup

from .fiddle.extension import ScalaFiddleExtension
from .fiddle.integration import RenderedPage
from .fiddle.tag import FiddleRenderContext
from .hooks import POST_RENDER, HookRegistry, default_registry
from .renderer import HtmlContentRenderer

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .config import SiteConfig

LAYOUTS_DIR = "_layouts"


class PageRenderer:
    """Turn page sources into finished HTML with fiddles activated."""

    def __init__(
        self,
        site: SiteConfig,
        *,
        templates_dir: Path | None = None,
        hooks: HookRegistry | None = None,
        output_dir: Path | None = None,
    ) -> None:
        """Initialize the renderer, Jinja environment, and hook registry.

        Parameters
        ----------
        site : SiteConfig
            Parsed site configuration, including the ``scalafiddle`` section.
        templates_dir : Path, optional
            Directory with fallback layouts; defaults to the package templates.
            Layouts in ``{source_dir}/_layouts`` take precedence.
        hooks : HookRegistry, optional
            Registry fired after each page renders; defaults to one with the
            ScalaFiddle integrator installed.
        output_dir : Path, optional
            Override for the HTML output directory.
        """
        self.site = site
        self.templates_dir = templates_dir or Path(__file__).parent / "templates"
        self.output_dir = output_dir or site.output_dir
        self.hooks = hooks or default_registry()
        self.renderer = HtmlContentRenderer(site.pygments_style)
        self.env = Environment(
            loader=FileSystemLoader(
                [str(site.source_dir / LAYOUTS_DIR), str(self.templates_dir)]
            ),
            autoescape=select_autoescape(["html", "xml", "jinja"]),
            trim_blocks=True,
            lstrip_blocks=True,
            extensions=[ScalaFiddleExtension],
        )
        self.env.scalafiddle_context = FiddleRenderContext(  # type: ignore[attr-defined]
            converter=self.renderer, config=site.scalafiddle
        )
        self.layout = self.env.get_template(site.layout)

    def run(self, sources: cabc.Iterable[Path]) -> list[Path]:
        """Render each source file and write ``{output_dir}/{stem}.html``.

        Returns
        -------
        list[Path]
            Paths to the written documents, in input order.

        Raises
        ------
        FiddleTemplateError
            When a page references a missing or malformed code template.
            Pages rendered before the failure stay on disk.
        """
        self.output_dir.mkdir(parents=True, exist_ok=True)
        written: list[Path] = []
        for source in sources:
            output_path = self.output_dir / f"{source.stem}.html"
            html = self.render_text(
                source.read_text(encoding="utf-8"),
                title=_title_from_stem(source.stem),
                path=output_path,
            )
            output_path.write_text(html, encoding="utf-8")
            written.append(output_path)
        return written

    def render_text(
        self, source: str, *, title: str, path: Path | None = None
    ) -> str:
        """Render one page source to its final HTML without touching disk."""
        expanded = self.env.from_string(source).render(page_title=title)
        content = self.renderer.markdown(expanded)
        html = self.layout.render(
            title=title,
            site_name=self.site.site_name,
            content=Markup(content),
            pygments_css=Markup(self.renderer.stylesheet),
        )
        if not html.endswith("\n"):
            html += "\n"
        page = RenderedPage(
            output=html,
            source_dir=self.site.source_dir,
            config=self.site.scalafiddle,
            path=path,
        )
        self.hooks.trigger("pages", POST_RENDER, page)
        return page.output


def _title_from_stem(stem: str) -> str:
    """Return a human title for a file stem such as ``getting-started``."""
    return stem.replace("-", " ").replace("_", " ").strip().title() or "Untitled"


__all__ = ["PageRenderer"]
