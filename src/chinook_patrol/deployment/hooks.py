"""
Extensibility hooks.

Lets other components observe or veto plugin actions. Listeners subscribe
to a hook name; calling the hook returns the first non-None listener result.
"""

import logging
from collections import defaultdict
from typing import Any, Callable, Dict, List, Optional

logger = logging.getLogger(__name__)

# Fired before a patrol path is attached to a chinook. Returning False vetoes.
ON_BETTER_CHINOOK_PATROL = "OnBetterChinookPatrol"


class HookRegistry:
    """
    Registry of named hook listeners.

    Example:
        >>> hooks = HookRegistry()
        >>> hooks.subscribe(ON_BETTER_CHINOOK_PATROL, lambda agent: False)
        >>> hooks.call(ON_BETTER_CHINOOK_PATROL, agent)
        False
    """

    def __init__(self):
        self._listeners: Dict[str, List[Callable[..., Any]]] = defaultdict(list)

    def subscribe(self, hook_name: str, listener: Callable[..., Any]) -> None:
        self._listeners[hook_name].append(listener)

    def unsubscribe(self, hook_name: str, listener: Callable[..., Any]) -> None:
        if listener in self._listeners.get(hook_name, []):
            self._listeners[hook_name].remove(listener)

    def call(self, hook_name: str, *args: Any) -> Optional[Any]:
        """
        Invoke listeners in subscription order.

        Returns:
            First non-None result, or None if no listener answered
        """
        for listener in list(self._listeners.get(hook_name, [])):
            result = listener(*args)
            if result is not None:
                logger.debug(f"Hook {hook_name} answered {result!r}")
                return result
        return None

    def is_vetoed(self, hook_name: str, *args: Any) -> bool:
        """True if the hook answered exactly False."""
        result = self.call(hook_name, *args)
        return isinstance(result, bool) and result is False
