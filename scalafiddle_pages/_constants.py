"""Common literal values used across scalafiddle_pages.

These constants keep config keys, defaults, and file conventions centralized
so the tag renderer, the post-render integrator, and tests share one source of
truth.

Examples
--------
>>> from scalafiddle_pages import _constants
>>> _constants.TEMPLATE_FILENAME.format(name="Foo")
'Foo.scala'
>>> _constants.DEFAULT_SCALAFIDDLE_URL.endswith("/")
True
"""

CONFIG_SECTION = "scalafiddle"
DEFAULT_TEMPLATE_DIR = "_scalafiddle"
DEFAULT_SCALAFIDDLE_URL = "https://embed.scalafiddle.io/"
INTEGRATION_SCRIPT = "integration.js"
TEMPLATE_FILENAME = "{name}.scala"
TEMPLATE_MARKER = "////"
DEFAULT_LAYOUT = "page.jinja"
