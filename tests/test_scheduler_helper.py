from dataclasses import dataclass

import pytest

from batchsched.scheduler_helper import (
    HostPriority,
    PrioritizeError,
    PriorityConfig,
    find_max_scores,
    get_node_list,
    predicate_nodes,
    prioritize_nodes,
    select_best_node,
    sort_nodes,
)


@dataclass
class _Node:
    name: str


@dataclass
class _Task:
    namespace: str = "ns"
    name: str = "task"


CASES = [
    (
        [
            HostPriority("node1", 1.0),
            HostPriority("node2", 1.0),
            HostPriority("node3", 2.0),
            HostPriority("node4", 2.0),
        ],
        ["node3", "node4"],
    ),
    (
        [
            HostPriority("node1", 1.0),
            HostPriority("node2", 1.0),
            HostPriority("node3", 3.0),
            HostPriority("node4", 2.0),
            HostPriority("node5", 2.0),
        ],
        ["node3"],
    ),
]


@pytest.mark.parametrize("priority_list, expected", CASES)
def test_select_best_node(priority_list, expected):
    for _ in range(20):
        assert select_best_node(priority_list) in expected


def test_find_max_scores_indexes():
    assert find_max_scores(CASES[0][0]) == [2, 3]
    assert find_max_scores(CASES[1][0]) == [2]


def test_find_max_scores_empty_raises():
    with pytest.raises(ValueError):
        find_max_scores([])


def test_sort_nodes_best_first_ties_by_host_descending():
    nodes = {n: _Node(n) for n in ["a", "b", "c"]}
    plist = [HostPriority("a", 1.0), HostPriority("b", 1.0), HostPriority("c", 3.0)]
    ordered = sort_nodes(plist, nodes)
    assert [n.name for n in ordered] == ["c", "b", "a"]
    assert [hp.host for hp in plist] == ["c", "b", "a"]


def test_predicate_nodes_filters_failures():
    nodes = [_Node("n1"), _Node("n2"), _Node("n3")]

    def fn(task, node):
        if node.name == "n2":
            raise RuntimeError("does not fit")

    result = predicate_nodes(_Task(), nodes, fn)
    assert [n.name for n in result] == ["n1", "n3"]


def test_predicate_nodes_empty():
    assert predicate_nodes(_Task(), [], lambda t, n: None) == []


def test_prioritize_nodes_uses_map_scores_with_unit_weight():
    scores = {"n1": 4, "n2": 7}
    nodes = [_Node("n1"), _Node("n2")]
    config = PriorityConfig(
        name="m", weight=1, map=lambda task, node: HostPriority(node.name, scores[node.name])
    )
    result = prioritize_nodes(_Task(), nodes, [config])
    assert [(hp.host, hp.score) for hp in result] == [("n1", 4), ("n2", 7)]


def test_prioritize_nodes_zero_weight_contributes_nothing():
    nodes = [_Node("n1"), _Node("n2")]
    config = PriorityConfig(name="m", weight=0, map=lambda task, node: HostPriority(node.name, 9))
    result = prioritize_nodes(_Task(), nodes, [config])
    assert all(hp.score == 0 for hp in result)


def test_prioritize_nodes_function_and_reduce():
    nodes = [_Node("n1"), _Node("n2")]

    def function(task, node_map, node_list):
        assert set(node_map) == {"n1", "n2"}
        return [HostPriority(n.name, 0) for n in node_list]

    def reduce(task, node_map, results):
        results[1].score = 5

    config = PriorityConfig(name="f", weight=1, function=function, reduce=reduce)
    result = prioritize_nodes(_Task(), nodes, [config])
    assert [hp.score for hp in result] == [0, 5]


def test_prioritize_nodes_error_is_aggregated():
    nodes = [_Node("n1")]

    def bad_map(task, node):
        raise RuntimeError("boom")

    with pytest.raises(PrioritizeError) as excinfo:
        prioritize_nodes(_Task(), nodes, [PriorityConfig(name="bad", map=bad_map)])
    assert len(excinfo.value.errors) == 1
    assert "boom" in str(excinfo.value)


def test_get_node_list_returns_values():
    n1, n2 = _Node("n1"), _Node("n2")
    result = get_node_list({"n1": n1, "n2": n2})
    assert sorted(n.name for n in result) == ["n1", "n2"]