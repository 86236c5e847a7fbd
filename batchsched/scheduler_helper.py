"""Helpers for filtering, scoring and choosing nodes for a task."""

from __future__ import annotations

import logging
import random
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional, Sequence

log = logging.getLogger(__name__)

_WORKERS = 16


@dataclass
class HostPriority:
    """Score of placing a task on a host; higher is better."""

    host: str
    score: float = 0


@dataclass
class PriorityConfig:
    """One scoring rule.

    ``map`` scores a single node: ``map(task, node) -> HostPriority``.
    ``function`` scores all nodes at once:
    ``function(task, node_map, nodes) -> list[HostPriority]``.
    ``reduce`` post-processes the scores in place:
    ``reduce(task, node_map, results)``.
    """

    name: str
    weight: float = 1
    map: Optional[Callable[[Any, Any], HostPriority]] = None
    reduce: Optional[Callable[[Any, Mapping[str, Any], list], None]] = None
    function: Optional[Callable[[Any, Mapping[str, Any], list], list]] = None


class PrioritizeError(Exception):
    """Raised when one or more scoring rules failed."""

    def __init__(self, errors: Sequence[BaseException]) -> None:
        self.errors = list(errors)
        if len(self.errors) == 1:
            message = str(self.errors[0])
        else:
            message = "[" + ", ".join(str(e) for e in self.errors) + "]"
        super().__init__(message)


def predicate_nodes(task: Any, nodes: Sequence[Any], fn: Callable[[Any, Any], None]) -> list:
    """Return the nodes for which ``fn(task, node)`` does not raise."""

    def check(node: Any) -> bool:
        try:
            fn(task, node)
        except Exception as err:  # a failing predicate rejects the node
            log.error(
                "Predicates failed for task <%s/%s> on node <%s>: %s",
                getattr(task, "namespace", ""),
                getattr(task, "name", ""),
                node.name,
                err,
            )
            return False
        return True

    if not nodes:
        return []
    with ThreadPoolExecutor(max_workers=_WORKERS) as pool:
        fits = list(pool.map(check, nodes))
    return [node for node, ok in zip(nodes, fits) if ok]


def prioritize_nodes(
    task: Any, nodes: Sequence[Any], priority_configs: Sequence[PriorityConfig]
) -> list[HostPriority]:
    """Score every node with every rule and sum the weighted scores."""
    node_map = {node.name: node for node in nodes}
    node_list = list(nodes)
    errors: list[BaseException] = []
    results: list[list[HostPriority]] = []

    for config in priority_configs:
        if config.function is not None:
            try:
                results.append(list(config.function(task, node_map, node_list)))
            except Exception as err:
                errors.append(err)
                results.append([])
        else:
            results.append([HostPriority(host="", score=0) for _ in node_list])

    for index, node in enumerate(node_list):
        for i, config in enumerate(priority_configs):
            if config.function is not None:
                continue
            try:
                results[i][index] = config.map(task, node)
            except Exception as err:
                errors.append(err)
                break

    for i, config in enumerate(priority_configs):
        if config.reduce is None:
            continue
        try:
            config.reduce(task, node_map, results[i])
        except Exception as err:
            errors.append(err)

    if errors:
        raise PrioritizeError(errors)

    return [
        HostPriority(
            host=node.name,
            score=float(
                sum(
                    results[j][i].score * config.weight
                    for j, config in enumerate(priority_configs)
                )
            ),
        )
        for i, node in enumerate(node_list)
    ]


def sort_nodes(priority_list: list[HostPriority], nodes_info: Mapping[str, Any]) -> list:
    """Sort ``priority_list`` best first and return the matching nodes."""
    priority_list.sort(key=lambda hp: (hp.score, hp.host), reverse=True)
    return [nodes_info.get(hp.host) for hp in priority_list]


def find_max_scores(priority_list: Sequence[HostPriority]) -> list[int]:
    """Return the indexes of the entries with the highest score."""
    if not priority_list:
        raise ValueError("priority list is empty")
    max_score = max(hp.score for hp in priority_list)
    return [i for i, hp in enumerate(priority_list) if hp.score == max_score]


def select_best_node(priority_list: Sequence[HostPriority]) -> str:
    """Return a host with the highest score, chosen at random among ties."""
    return priority_list[random.choice(find_max_scores(priority_list))].host


def get_node_list(nodes: Mapping[str, Any]) -> list:
    """Return the nodes held in a name-to-node mapping."""
    return list(nodes.values())