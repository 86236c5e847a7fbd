"""Registries of plugin builders and scheduling actions."""

from __future__ import annotations

import threading
from typing import Any, Callable, Optional

_lock = threading.Lock()
_plugin_builders: dict[str, Callable[[Any], Any]] = {}
_actions: dict[str, Any] = {}


def register_plugin_builder(name: str, builder: Callable[[Any], Any]) -> None:
    """Register ``builder`` to create the plugin called ``name``."""
    with _lock:
        _plugin_builders[name] = builder


def get_plugin_builder(name: str) -> Optional[Callable[[Any], Any]]:
    """Return the builder registered for ``name``, or None."""
    with _lock:
        return _plugin_builders.get(name)


def register_action(action: Any) -> None:
    """Register an action under the name its ``name()`` method returns."""
    with _lock:
        _actions[action.name()] = action


def get_action(name: str) -> Optional[Any]:
    """Return the action registered as ``name``, or None."""
    with _lock:
        return _actions.get(name)