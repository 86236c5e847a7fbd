"""Scheduler configuration: parsing, plugin defaults and action lookup."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Optional, Union

import yaml

from batchsched.framework import get_action

DEFAULT_SCHEDULER_CONF = """
actions: "allocate, backfill"
tiers:
- plugins:
  - name: priority
  - name: gang
- plugins:
  - name: drf
  - name: predicates
  - name: proportion
  - name: nodeorder
"""

_YAML_KEYS = {
    "enabled_job_order": "enableJobOrder",
    "enabled_job_ready": "enableJobReady",
    "enabled_job_pipelined": "enableJobPipelined",
    "enabled_task_order": "enableTaskOrder",
    "enabled_preemptable": "enablePreemptable",
    "enabled_reclaimable": "enableReclaimable",
    "enabled_queue_order": "enableQueueOrder",
    "enabled_predicate": "enablePredicate",
    "enabled_node_order": "enableNodeOrder",
}


class ConfigError(Exception):
    """Raised when a scheduler configuration cannot be loaded."""


@dataclass
class PluginOption:
    """Options of one plugin in a tier; ``None`` means not set."""

    name: str
    enabled_job_order: Optional[bool] = None
    enabled_job_ready: Optional[bool] = None
    enabled_job_pipelined: Optional[bool] = None
    enabled_task_order: Optional[bool] = None
    enabled_preemptable: Optional[bool] = None
    enabled_reclaimable: Optional[bool] = None
    enabled_queue_order: Optional[bool] = None
    enabled_predicate: Optional[bool] = None
    enabled_node_order: Optional[bool] = None
    arguments: dict[str, str] = field(default_factory=dict)


@dataclass
class Tier:
    """A group of plugins consulted together."""

    plugins: list[PluginOption] = field(default_factory=list)


@dataclass
class SchedulerConfiguration:
    """The parsed configuration document."""

    actions: str = ""
    tiers: list[Tier] = field(default_factory=list)


def apply_plugin_conf_defaults(option: PluginOption) -> None:
    """Set every unset ``enabled_*`` flag of ``option`` to True."""
    for f in fields(option):
        if f.name.startswith("enabled_") and getattr(option, f.name) is None:
            setattr(option, f.name, True)


def _as_str(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return "" if value is None else str(value)


def _parse_plugin(data: Any) -> PluginOption:
    if not isinstance(data, dict):
        raise ConfigError(f"plugin entry must be a mapping, got {data!r}")
    option = PluginOption(name=_as_str(data.get("name")))
    for attr, key in _YAML_KEYS.items():
        value = data.get(key)
        if value is None:
            continue
        if not isinstance(value, bool):
            raise ConfigError(f"plugin <{option.name}>: {key} must be a boolean")
        setattr(option, attr, value)
    arguments = data.get("arguments") or {}
    if not isinstance(arguments, dict):
        raise ConfigError(f"plugin <{option.name}>: arguments must be a mapping")
    option.arguments = {str(k): _as_str(v) for k, v in arguments.items()}
    return option


def _parse_configuration(conf_str: str) -> SchedulerConfiguration:
    try:
        data = yaml.safe_load(conf_str)
    except yaml.YAMLError as err:
        raise ConfigError(str(err)) from err
    if data is None:
        return SchedulerConfiguration()
    if not isinstance(data, dict):
        raise ConfigError("scheduler configuration must be a mapping")

    tiers_data = data.get("tiers") or []
    if not isinstance(tiers_data, list):
        raise ConfigError("tiers must be a list")
    tiers = []
    for tier_data in tiers_data:
        if tier_data is None:
            tiers.append(Tier())
            continue
        if not isinstance(tier_data, dict):
            raise ConfigError("tier entry must be a mapping")
        plugins_data = tier_data.get("plugins") or []
        if not isinstance(plugins_data, list):
            raise ConfigError("plugins must be a list")
        tiers.append(Tier(plugins=[_parse_plugin(p) for p in plugins_data]))

    return SchedulerConfiguration(actions=_as_str(data.get("actions")), tiers=tiers)


def load_scheduler_conf(conf_str: str) -> tuple[list[Any], list[Tier]]:
    """Parse ``conf_str`` and return the registered actions and the tiers.

    Raises ConfigError for malformed documents and unknown actions.
    """
    configuration = _parse_configuration(conf_str)

    for tier in configuration.tiers:
        for option in tier.plugins:
            apply_plugin_conf_defaults(option)

    actions = []
    for action_name in configuration.actions.split(","):
        action = get_action(action_name.strip())
        if action is None:
            raise ConfigError(f"failed to found Action {action_name}, ignore it")
        actions.append(action)

    return actions, configuration.tiers


def read_scheduler_conf(conf_path: Union[str, Path]) -> str:
    """Return the text of the configuration file at ``conf_path``."""
    return Path(conf_path).read_text()