"""Post-render integration of ScalaFiddle activation scripts.

Once a page has been fully rendered, :func:`append_scalafiddle_code` scans its
HTML for fiddle containers, loads every referenced code template, and splices
a script block before ``</body>`` (or at the very start of the output when the
page has no body end tag). The block defines ``window.scalaFiddleTemplates``
and loads ``integration.js`` from the configured embed URL.

Example
-------
>>> from pathlib import Path
>>> from scalafiddle_pages.config import FiddleConfig
>>> from scalafiddle_pages.fiddle.integration import RenderedPage, append_scalafiddle_code
>>> page = RenderedPage(
...     output="<body><div data-scalafiddle></div></body>",
...     source_dir=Path("."),
...     config=FiddleConfig(),
... )
>>> append_scalafiddle_code(page)
True
>>> "integration.js" in page.output
True
"""

from __future__ import annotations

import dataclasses as dc
import logging
import typing as typ

from scalafiddle_pages._constants import INTEGRATION_SCRIPT
from scalafiddle_pages.config.models import FiddleConfig
from scalafiddle_pages.markers import find_body_end, find_template_names, has_fiddle

from .templates import TemplateRecord, load_template

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

logger = logging.getLogger(__name__)


@dc.dataclass(slots=True)
class RenderedPage:
    """A page's final output together with the settings needed to post-process it.

    Attributes
    ----------
    output : str
        Complete HTML produced by the site generator; rewritten in place.
    source_dir : Path
        Site source directory that anchors the template directory.
    config : FiddleConfig
        The site's ``scalafiddle`` settings.
    path : Path, optional
        Destination of the page, used only for diagnostics.
    """

    output: str
    source_dir: Path
    config: FiddleConfig = dc.field(default_factory=FiddleConfig)
    path: Path | None = None

    @property
    def template_dir(self) -> Path:
        """Return the directory holding this site's code templates."""
        return self.source_dir / self.config.template_dir


def collect_templates(html: str, directory: Path) -> list[TemplateRecord]:
    """Load each distinct template referenced in ``html``.

    Templates are returned in order of first appearance. Every call reads the
    files afresh.
    """
    names = list(dict.fromkeys(find_template_names(html)))
    return [load_template(name, directory) for name in names]


def render_templates_script(templates: cabc.Sequence[TemplateRecord]) -> str:
    """Return the inline script defining ``window.scalaFiddleTemplates``."""
    entries = ",\n".join(
        f"""
    '{template.name}': {{
      pre: '{template.escaped_pre}',
      post: '{template.escaped_post}'
    }}
"""
        for template in templates
    )
    return f"""
<script>
  window.scalaFiddleTemplates = {{
{entries}
  }}
</script>
"""


def render_loader_script(config: FiddleConfig) -> str:
    """Return the deferred script tag that loads ``integration.js``."""
    return f"""
<script defer src='{config.scalafiddle_url}{INTEGRATION_SCRIPT}'></script>
"""


def build_api_code(html: str, directory: Path, config: FiddleConfig) -> str:
    """Return the script markup required to activate fiddles in ``html``.

    Parameters
    ----------
    html : str
        Fully rendered page output.
    directory : Path
        Directory holding ``{name}.scala`` templates.
    config : FiddleConfig
        Supplies the embed base URL.

    Returns
    -------
    str
        Empty when ``html`` contains no fiddle; otherwise the optional
        template script followed by the ``integration.js`` loader.

    Raises
    ------
    FiddleTemplateError
        If a referenced template is missing or lacks its marker line.
    """
    if not has_fiddle(html):
        return ""
    code = ""
    templates = collect_templates(html, directory)
    if templates:
        code += render_templates_script(templates)
    code += render_loader_script(config)
    return code


def insert_api_code(html: str, code: str) -> str:
    """Splice ``code`` before the first ``</body>``, or prepend it."""
    location = find_body_end(html)
    if location is None:
        return code + html
    return html[:location] + code + html[location:]


def append_scalafiddle_code(page: RenderedPage) -> bool:
    """Inject fiddle activation scripts into ``page.output``.

    Returns
    -------
    bool
        ``True`` when the page was modified, ``False`` when it holds no
        fiddles and was left untouched.

    Raises
    ------
    FiddleTemplateError
        Propagated from template loading; ``page.output`` is unchanged when
        this happens.
    """
    code = build_api_code(page.output, page.template_dir, page.config)
    if not code:
        return False
    page.output = insert_api_code(page.output, code)
    logger.debug("injected scalafiddle scripts into %s", page.path or "<page>")
    return True


__all__ = [
    "RenderedPage",
    "append_scalafiddle_code",
    "build_api_code",
    "collect_templates",
    "insert_api_code",
    "render_loader_script",
    "render_templates_script",
]
