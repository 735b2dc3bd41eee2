"""Cyclopts CLI entrypoint for rendering pages with ScalaFiddle widgets.

The ``fiddle`` console script renders markdown pages that use the
``{% scalafiddle %}`` tag and can inject the activation scripts into HTML that
was produced by another generator. Typical usage is ``fiddle render docs/*.md``
during a docs build, or ``fiddle inject _site/**/*.html`` as a post-processing
step.

Examples
--------
Render two pages with the default configuration:

>>> from scalafiddle_pages.cli import app
>>> app(["render", "docs/intro.md", "docs/json.md"])  # doctest: +SKIP

Post-process HTML rendered elsewhere:

>>> app(["inject", "_site/index.html", "--config", "_config.yaml"])  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .config import load_site_config
from .fiddle.integration import RenderedPage, append_scalafiddle_code
from .site import PageRenderer

DEFAULT_CONFIG = Path("_config.yaml")

app = App(name="fiddle", config=cyclopts.config.Env("INPUT_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _configure_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")


@app.command(help="Render markdown pages and activate their ScalaFiddle widgets.")
def render(
    pages: list[Path],
    /,
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to site config", env_var="INPUT_CONFIG")
    ] = DEFAULT_CONFIG,
    output_dir: typ.Annotated[
        Path | None,
        Parameter(help="Override the output folder", env_var="INPUT_OUTPUT_DIR"),
    ] = None,
    verbose: typ.Annotated[bool, Parameter(help="Enable debug logging")] = False,
) -> None:
    """Render ``pages`` through the site layout and write HTML files.

    Parameters
    ----------
    pages : list[Path]
        Markdown sources to render, in order.
    config : Path, optional
        Site configuration file (overridable via ``INPUT_CONFIG``).
    output_dir : Path or None, optional
        Override for the configured output directory.
    verbose : bool, optional
        Log template loads and script injection at debug level.

    Raises
    ------
    FiddleTemplateError
        When a page references a missing or malformed code template.
    """
    _configure_logging(verbose)
    site_config = load_site_config(config)
    written = PageRenderer(site_config, output_dir=output_dir).run(pages)
    for path in written:
        print(f"wrote {_format_path(path)}")


@app.command(help="Inject ScalaFiddle scripts into already rendered HTML files.")
def inject(
    files: list[Path],
    /,
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to site config", env_var="INPUT_CONFIG")
    ] = DEFAULT_CONFIG,
    verbose: typ.Annotated[bool, Parameter(help="Enable debug logging")] = False,
) -> None:
    """Run the post-render integrator over ``files`` in place.

    Each file is rewritten only when it contains a fiddle; a failing template
    aborts before that file is written.
    """
    _configure_logging(verbose)
    site_config = load_site_config(config)
    for path in files:
        page = RenderedPage(
            output=path.read_text(encoding="utf-8"),
            source_dir=site_config.source_dir,
            config=site_config.scalafiddle,
            path=path,
        )
        if append_scalafiddle_code(page):
            path.write_text(page.output, encoding="utf-8")
            print(f"updated {_format_path(path)}")
        else:
            print(f"unchanged {_format_path(path)}")


def main() -> None:
    """Invoke the Cyclopts application that powers the ``fiddle`` command."""
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
