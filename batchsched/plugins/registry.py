"""Registration of the built-in plugins."""

from __future__ import annotations

from batchsched.framework import register_plugin_builder
from batchsched.plugins.conformance import ConformancePlugin
from batchsched.plugins.gang import GangPlugin
from batchsched.plugins.priority import PriorityPlugin


def register_default_plugins() -> None:
    """Register the builders of the built-in plugins under their names."""
    register_plugin_builder("gang", GangPlugin)
    register_plugin_builder("priority", PriorityPlugin)
    register_plugin_builder("conformance", ConformancePlugin)