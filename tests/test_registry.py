import pytest

from batchsched.framework import get_plugin_builder
from batchsched.plugins.conformance import ConformancePlugin
from batchsched.plugins.gang import GangPlugin
from batchsched.plugins.priority import PriorityPlugin
from batchsched.plugins.registry import register_default_plugins


@pytest.mark.parametrize(
    "name, cls",
    [("gang", GangPlugin), ("priority", PriorityPlugin), ("conformance", ConformancePlugin)],
)
def test_builders_registered(name, cls):
    register_default_plugins()
    assert get_plugin_builder(name) is cls


@pytest.mark.parametrize("name", ["gang", "priority", "conformance"])
def test_built_plugin_reports_its_name(name):
    register_default_plugins()
    plugin = get_plugin_builder(name)({"key": "value"})
    assert plugin.name() == name
    assert plugin.arguments == {"key": "value"}


def test_registration_is_idempotent():
    register_default_plugins()
    register_default_plugins()
    assert get_plugin_builder("gang") is GangPlugin