# batchsched

`batchsched` is a batch scheduling framework. Each scheduling cycle opens a
session, runs a configured list of actions in it, and lets plugins shape the
decisions those actions make: which job or task goes first, which tasks may
be preempted or reclaimed, and whether a job is valid, ready or pipelined.
Helpers filter, score and rank nodes for a task.

## Modules

| Module | Purpose |
| --- | --- |
| `batchsched.version` | `info(api_version)` returns version report lines; `print_version_and_exit(api_version)` prints them and raises `SystemExit(0)`. |
| `batchsched.priority_queue` | `PriorityQueue(less_fn)`, a heap that pops the item `less_fn` ranks first; without `less_fn` items come out in push order. `pop()` on an empty queue returns `None`. |
| `batchsched.scheduler_helper` | `predicate_nodes`, `prioritize_nodes`, `sort_nodes`, `select_best_node`, `find_max_scores`, `get_node_list`, with `HostPriority`, `PriorityConfig` and `PrioritizeError`. |
| `batchsched.framework` | Process-wide registries: `register_plugin_builder`, `get_plugin_builder`, `register_action`, `get_action`. |
| `batchsched.conf` | The YAML policy: `load_scheduler_conf`, `read_scheduler_conf`, `apply_plugin_conf_defaults`, `SchedulerConfiguration`, `Tier`, `PluginOption`, `ConfigError`, and `DEFAULT_SCHEDULER_CONF`. |
| `batchsched.scheduler` | `Scheduler`, which loads the policy and runs one session per period. |
| `batchsched.plugins.priority` | `PriorityPlugin`: higher priority first; only tasks of lower-priority jobs are preemption victims. |
| `batchsched.plugins.gang` | `GangPlugin`: a job is valid only with at least `min_available` valid tasks; records an unschedulable condition for jobs that are not ready when a session closes. |
| `batchsched.plugins.conformance` | `ConformancePlugin`: never offers `system-cluster-critical`, `system-node-critical` or `kube-system` tasks as victims. |
| `batchsched.plugins.registry` | `register_default_plugins()` registers `priority`, `gang` and `conformance` by name. |

## The policy

A policy names the actions to run, comma separated and in order, and the
plugin tiers:

```yaml
actions: "allocate, backfill"
tiers:
- plugins:
  - name: priority
  - name: gang
  - name: conformance
- plugins:
  - name: nodeorder
    arguments:
      leastrequested.weight: 2
```

Per-plugin flags are `enableJobOrder`, `enableJobReady`,
`enableJobPipelined`, `enableTaskOrder`, `enablePreemptable`,
`enableReclaimable`, `enableQueueOrder`, `enablePredicate` and
`enableNodeOrder`; each must be a boolean, and any left unset becomes `True`.
`arguments` is kept as a mapping of strings.

`load_scheduler_conf(text)` returns `(actions, tiers)`. Each action name is
looked up with `get_action`; a name that has not been registered, or a
malformed document, raises `ConfigError`. Plugin names are not checked
when loading.

## Usage

```python
from batchsched.framework import register_action
from batchsched.conf import load_scheduler_conf, read_scheduler_conf
from batchsched.plugins.registry import register_default_plugins


class Allocate:
    def name(self):
        return "allocate"

    def execute(self, ssn):
        ...


register_default_plugins()
register_action(Allocate())

actions, tiers = load_scheduler_conf('actions: "allocate"\ntiers: []\n')
```

Picking a node; ties for the top score are broken at random:

```python
from batchsched.scheduler_helper import HostPriority, select_best_node

scores = [
    HostPriority(host="node1", score=1.0),
    HostPriority(host="node2", score=3.0),
    HostPriority(host="node3", score=2.0),
]
assert select_best_node(scores) == "node2"
```

`prioritize_nodes(task, nodes, configs)` scores each node (nodes need a
`name`) with every `PriorityConfig` (`map`, `function`, `reduce`, `weight`)
and returns the weighted sums; any failing rule raises `PrioritizeError`.
`sort_nodes` orders the list best first, breaking ties by host name.

### Running the scheduler

`Scheduler(cache, scheduler_conf, period, session_factory)` takes:

- `cache` with `run(stop_event)` and `wait_for_cache_sync(stop_event)`;
- `scheduler_conf`, a policy file path, or an empty string for
  `DEFAULT_SCHEDULER_CONF`; an unreadable file also falls back to the default;
- `period` in seconds;
- `session_factory(cache, tiers)`, returning a context manager that yields
  a session.

`run(stop_event)` starts the cache, loads the policy and returns the thread
that calls `run_once()` every period until `stop_event` is set.
`run_once()` records `action_durations` and `last_e2e_duration`.

## What the package does not do

- It has no cluster cache, session or action implementations; the caller
  supplies them. The default policy names `allocate` and `backfill`, so it
  loads only after actions with those names are registered.
- Of the plugins named in the default policy, only `priority` and `gang`
  are included; `drf`, `predicates`, `proportion` and `nodeorder` are not.
- It provides no command-line program and does not talk to a cluster API.

## Running tests

Install the `test` extra and run `pytest` from the project root.