"""Keeps critical and system pods out of the victims of preemption and reclaim."""

from __future__ import annotations

from typing import Any, Mapping, Optional

SYSTEM_CLUSTER_CRITICAL = "system-cluster-critical"
SYSTEM_NODE_CRITICAL = "system-node-critical"
NAMESPACE_SYSTEM = "kube-system"


def _priority_class_name(task: Any) -> str:
    return task.pod.spec.priority_class_name or ""


class ConformancePlugin:
    """Plugin that never offers critical pods as victims.

    Tasks carry ``namespace`` and ``pod.spec.priority_class_name``. The
    session must provide ``add_preemptable_fn`` and ``add_reclaimable_fn``.
    """

    def __init__(self, arguments: Optional[Mapping[str, Any]] = None) -> None:
        self.arguments = dict(arguments or {})
        self.session: Any = None

    def name(self) -> str:
        return "conformance"

    def on_session_open(self, ssn: Any) -> None:
        self.session = ssn

        def evictable_fn(evictor: Any, evictees: list) -> list:
            return [
                evictee
                for evictee in evictees
                if _priority_class_name(evictee)
                not in (SYSTEM_CLUSTER_CRITICAL, SYSTEM_NODE_CRITICAL)
                and evictee.namespace != NAMESPACE_SYSTEM
            ]

        ssn.add_preemptable_fn(self.name(), evictable_fn)
        ssn.add_reclaimable_fn(self.name(), evictable_fn)

    def on_session_close(self, ssn: Any) -> None:
        """Forget the session that was opened."""
        if self.session is ssn:
            self.session = None