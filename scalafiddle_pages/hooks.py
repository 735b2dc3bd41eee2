"""Page lifecycle hooks fired by the site host.

Hooks are keyed by owner (``"pages"`` or ``"documents"``) and event name. The
host triggers ``post_render`` once per page after layouts are applied, which is
where the ScalaFiddle integrator rewrites the output.

Example
-------
>>> registry = HookRegistry()
>>> @registry.register(["pages"], "post_render")
... def shout(page):
...     page.output = page.output.upper()
>>> registry.hooks_for("pages", "post_render") == [shout]
True
"""

from __future__ import annotations

import collections
import logging
import typing as typ

from .fiddle.integration import RenderedPage, append_scalafiddle_code

if typ.TYPE_CHECKING:
    import collections.abc as cabc

logger = logging.getLogger(__name__)

POST_RENDER = "post_render"
PAGE_OWNERS: tuple[str, ...] = ("pages", "documents")

Hook = typ.Callable[[RenderedPage], object]


class HookRegistry:
    """Ordered registry of callbacks per ``(owner, event)`` pair."""

    def __init__(self) -> None:
        self._hooks: dict[tuple[str, str], list[Hook]] = collections.defaultdict(list)

    def register(
        self, owners: cabc.Iterable[str], event: str
    ) -> cabc.Callable[[Hook], Hook]:
        """Return a decorator registering a hook for each owner."""
        owner_list = list(owners)

        def _decorator(hook: Hook) -> Hook:
            for owner in owner_list:
                self._hooks[(owner, event)].append(hook)
            return hook

        return _decorator

    def hooks_for(self, owner: str, event: str) -> list[Hook]:
        """Return hooks registered for ``owner`` and ``event`` in order."""
        return list(self._hooks.get((owner, event), []))

    def trigger(self, owner: str, event: str, page: RenderedPage) -> None:
        """Invoke every matching hook with ``page``; exceptions propagate."""
        for hook in self.hooks_for(owner, event):
            logger.debug("running %s hook %s for %s", event, hook.__name__, owner)
            hook(page)


def register_scalafiddle_hooks(registry: HookRegistry) -> HookRegistry:
    """Attach the ScalaFiddle integrator to page and document rendering."""
    registry.register(PAGE_OWNERS, POST_RENDER)(append_scalafiddle_code)
    return registry


def default_registry() -> HookRegistry:
    """Return a fresh registry with the ScalaFiddle hooks installed."""
    return register_scalafiddle_hooks(HookRegistry())


__all__ = [
    "PAGE_OWNERS",
    "POST_RENDER",
    "HookRegistry",
    "default_registry",
    "register_scalafiddle_hooks",
]
