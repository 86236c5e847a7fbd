"""Orders tasks and jobs by priority and protects higher-priority jobs from preemption."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

log = logging.getLogger(__name__)


class PriorityPlugin:
    """Plugin that prefers higher priorities.

    The session must provide ``jobs`` (a mapping from job id to job) and the
    ``add_task_order_fn``, ``add_job_order_fn`` and ``add_preemptable_fn``
    registration methods. Tasks carry ``priority`` and ``job``; jobs carry
    ``priority``.
    """

    def __init__(self, arguments: Optional[Mapping[str, Any]] = None) -> None:
        self.arguments = dict(arguments or {})
        self.session: Any = None

    def name(self) -> str:
        return "priority"

    def on_session_open(self, ssn: Any) -> None:
        self.session = ssn

        def task_order_fn(left: Any, right: Any) -> int:
            log.debug(
                "Priority TaskOrder: <%s/%s> priority is %s, <%s/%s> priority is %s",
                left.namespace, left.name, left.priority,
                right.namespace, right.name, right.priority,
            )
            if left.priority == right.priority:
                return 0
            if left.priority > right.priority:
                return -1
            return 1

        ssn.add_task_order_fn(self.name(), task_order_fn)

        def job_order_fn(left: Any, right: Any) -> int:
            log.debug(
                "Priority JobOrderFn: <%s/%s> priority: %s, <%s/%s> priority: %s",
                left.namespace, left.name, left.priority,
                right.namespace, right.name, right.priority,
            )
            if left.priority > right.priority:
                return -1
            if left.priority < right.priority:
                return 1
            return 0

        ssn.add_job_order_fn(self.name(), job_order_fn)

        def preemptable_fn(preemptor: Any, preemptees: list) -> list:
            preemptor_job = ssn.jobs[preemptor.job]
            victims = []
            for preemptee in preemptees:
                preemptee_job = ssn.jobs[preemptee.job]
                if preemptee_job.priority >= preemptor_job.priority:
                    log.debug(
                        "Can not preempt task <%s/%s> because preemptee has greater "
                        "or equal job priority (%s) than preemptor (%s)",
                        preemptee.namespace, preemptee.name,
                        preemptee_job.priority, preemptor_job.priority,
                    )
                else:
                    victims.append(preemptee)
            log.debug("Victims from Priority plugins are %s", victims)
            return victims

        ssn.add_preemptable_fn(self.name(), preemptable_fn)

    def on_session_close(self, ssn: Any) -> None:
        """Forget the session that was opened."""
        if self.session is ssn:
            self.session = None