"""The scheduling loop: load configuration, then run actions periodically."""

from __future__ import annotations

import logging
import threading
import time
from typing import Any, Callable, ContextManager, Optional

from batchsched.conf import (
    DEFAULT_SCHEDULER_CONF,
    Tier,
    load_scheduler_conf,
    read_scheduler_conf,
)

log = logging.getLogger(__name__)

SessionFactory = Callable[[Any, list[Tier]], ContextManager[Any]]


class Scheduler:
    """Runs the configured actions against sessions opened on a cache.

    ``cache`` provides ``run(stop_event)`` and ``wait_for_cache_sync(stop_event)``.
    ``session_factory(cache, tiers)`` returns a context manager that opens a
    session on entry and closes it on exit. ``period`` is in seconds.
    """

    def __init__(
        self,
        cache: Any,
        scheduler_conf: str,
        period: float,
        session_factory: SessionFactory,
    ) -> None:
        self.cache = cache
        self.scheduler_conf = scheduler_conf
        self.period = period
        self.session_factory = session_factory
        self.actions: list[Any] = []
        self.tiers: list[Tier] = []
        self.action_durations: dict[str, float] = {}
        self.last_e2e_duration: Optional[float] = None

    def _load_configuration(self) -> None:
        conf_text = DEFAULT_SCHEDULER_CONF
        if self.scheduler_conf:
            try:
                conf_text = read_scheduler_conf(self.scheduler_conf)
            except OSError as err:
                log.error(
                    "Failed to read scheduler configuration '%s', "
                    "using default configuration: %s",
                    self.scheduler_conf,
                    err,
                )
                conf_text = DEFAULT_SCHEDULER_CONF
        self.actions, self.tiers = load_scheduler_conf(conf_text)

    def run(self, stop_event: threading.Event) -> threading.Thread:
        """Start the cache and the scheduling loop; return the loop's thread.

        Raises ConfigError when the configuration cannot be loaded.
        """
        threading.Thread(target=self.cache.run, args=(stop_event,), daemon=True).start()
        self.cache.wait_for_cache_sync(stop_event)

        self._load_configuration()

        loop = threading.Thread(target=self._loop, args=(stop_event,), daemon=True)
        loop.start()
        return loop

    def _loop(self, stop_event: threading.Event) -> None:
        while not stop_event.is_set():
            self.run_once()
            if stop_event.wait(self.period):
                break

    def run_once(self) -> None:
        """Open a session and execute every action in it once."""
        log.debug("Start scheduling ...")
        start = time.monotonic()
        try:
            with self.session_factory(self.cache, self.tiers) as ssn:
                for action in self.actions:
                    action_start = time.monotonic()
                    action.execute(ssn)
                    self.action_durations[action.name()] = time.monotonic() - action_start
        finally:
            self.last_e2e_duration = time.monotonic() - start
            log.debug("End scheduling ...")