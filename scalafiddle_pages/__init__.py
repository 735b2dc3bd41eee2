"""ScalaFiddle widgets for Jinja and Markdown documentation sites.

The package provides a ``{% scalafiddle %}`` Jinja block tag that wraps code
samples in ScalaFiddle containers, and a post-render hook that injects the
scripts (and code templates) required to activate them.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from scalafiddle_pages import main
>>> main()  # doctest: +SKIP
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
