"""Gang scheduling: a job runs only when enough of its tasks can run together."""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Mapping, Optional

log = logging.getLogger(__name__)

NOT_ENOUGH_PODS_REASON = "NotEnoughTasks"
NOT_ENOUGH_RESOURCES_REASON = "NotEnoughResources"
POD_GROUP_UNSCHEDULABLE_TYPE = "Unschedulable"
CONDITION_TRUE = "True"


@dataclass
class ValidateResult:
    """Outcome of validating a job."""

    passed: bool
    reason: str = ""
    message: str = ""


@dataclass
class PodGroupCondition:
    """A condition recorded on a job's pod group."""

    type: str
    status: str
    last_transition_time: datetime
    transition_id: str
    reason: str
    message: str


def _is_job(obj: Any) -> bool:
    return all(
        callable(getattr(obj, attr, None))
        for attr in ("valid_task_num", "ready_task_num", "ready", "pipelined")
    )


class GangPlugin:
    """Plugin enforcing each job's ``min_available`` task count.

    The session must provide ``jobs``, ``uid``, ``update_job_condition`` and the
    ``add_job_valid_fn``, ``add_reclaimable_fn``, ``add_preemptable_fn``,
    ``add_job_order_fn``, ``add_job_ready_fn`` and ``add_job_pipelined_fn``
    registration methods.

    Statistics gathered when a session closes are kept on the plugin:
    ``unschedule_task_counts`` (job name to missing task count),
    ``job_retries`` (job name to number of unschedulable sessions) and
    ``unschedule_job_count`` (jobs unschedulable in the last session).
    """

    def __init__(self, arguments: Optional[Mapping[str, Any]] = None) -> None:
        self.arguments = dict(arguments or {})
        self.unschedule_task_counts: dict[str, int] = {}
        self.job_retries: Counter = Counter()
        self.unschedule_job_count = 0

    def name(self) -> str:
        return "gang"

    def on_session_open(self, ssn: Any) -> None:
        def valid_job_fn(obj: Any) -> Optional[ValidateResult]:
            if not _is_job(obj):
                return ValidateResult(
                    passed=False,
                    message=f"Failed to convert <{obj}> to JobInfo",
                )
            valid = obj.valid_task_num()
            if valid < obj.min_available:
                return ValidateResult(
                    passed=False,
                    reason=NOT_ENOUGH_PODS_REASON,
                    message=(
                        "Not enough valid tasks for gang-scheduling, "
                        f"valid: {valid}, min: {obj.min_available}"
                    ),
                )
            return None

        ssn.add_job_valid_fn(self.name(), valid_job_fn)

        def preemptable_fn(preemptor: Any, preemptees: list) -> list:
            victims = []
            for preemptee in preemptees:
                job = ssn.jobs[preemptee.job]
                occupied = job.ready_task_num()
                if job.min_available <= occupied - 1 or job.min_available == 1:
                    victims.append(preemptee)
                else:
                    log.debug(
                        "Can not preempt task <%s/%s> because of gang-scheduling",
                        preemptee.namespace, preemptee.name,
                    )
            log.debug("Victims from Gang plugins are %s", victims)
            return victims

        ssn.add_reclaimable_fn(self.name(), preemptable_fn)
        ssn.add_preemptable_fn(self.name(), preemptable_fn)

        def job_order_fn(left: Any, right: Any) -> int:
            left_ready = left.ready()
            right_ready = right.ready()
            log.debug(
                "Gang JobOrderFn: <%s/%s> is ready: %s, <%s/%s> is ready: %s",
                left.namespace, left.name, left_ready,
                right.namespace, right.name, right_ready,
            )
            if left_ready and right_ready:
                return 0
            if left_ready:
                return 1
            if right_ready:
                return -1
            return 0

        ssn.add_job_order_fn(self.name(), job_order_fn)
        ssn.add_job_ready_fn(self.name(), lambda job: job.ready())
        ssn.add_job_pipelined_fn(self.name(), lambda job: job.pipelined())

    def on_session_close(self, ssn: Any) -> None:
        unscheduled = 0
        for job in ssn.jobs.values():
            if job.ready():
                continue
            missing = job.min_available - job.ready_task_num()
            message = (
                f"{missing}/{len(job.tasks)} tasks in gang unschedulable: "
                f"{job.fit_error()}"
            )
            unscheduled += 1
            self.unschedule_task_counts[job.name] = missing
            self.job_retries[job.name] += 1

            condition = PodGroupCondition(
                type=POD_GROUP_UNSCHEDULABLE_TYPE,
                status=CONDITION_TRUE,
                last_transition_time=datetime.now(timezone.utc),
                transition_id=str(ssn.uid),
                reason=NOT_ENOUGH_RESOURCES_REASON,
                message=message,
            )
            try:
                ssn.update_job_condition(job, condition)
            except Exception as err:
                log.error(
                    "Failed to update job <%s/%s> condition: %s",
                    job.namespace, job.name, err,
                )
        self.unschedule_job_count = unscheduled