"""Background task queue for gateway calls.

Gateway requests run as independent asyncio tasks. When a task settles its
outcome is appended to a completion queue, and the queue is processed on the
event loop thread, one completion at a time. Completion handlers therefore
never interleave with each other or with synchronous store mutations.
"""

import asyncio
import logging
from collections import deque
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional

logger = logging.getLogger(__name__)

SuccessHandler = Callable[[Any], None]
FailureHandler = Callable[[Exception], None]


@dataclass
class TaskOutcome:
    """Settled result of one background task."""

    label: str
    value: Any = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class _Completion:
    outcome: TaskOutcome
    on_success: Optional[SuccessHandler]
    on_failure: Optional[FailureHandler]


class TaskQueue:
    """
    Fan-out / settle coordinator for asynchronous gateway work.

    submit() never blocks; settle() and drain() wait until every awaited task
    has either resolved or failed, never short-circuiting on the first error.
    """

    def __init__(self) -> None:
        self._in_flight: set[asyncio.Task] = set()
        self._completions: deque[_Completion] = deque()

    @property
    def in_flight(self) -> int:
        return len(self._in_flight)

    def submit(
        self,
        label: str,
        work: Awaitable[Any],
        on_success: Optional[SuccessHandler] = None,
        on_failure: Optional[FailureHandler] = None,
    ) -> asyncio.Task:
        """Schedule work on the running loop; handlers run when it settles."""
        loop = asyncio.get_running_loop()
        task = loop.create_task(self._run(label, work, on_success, on_failure))
        self._in_flight.add(task)
        task.add_done_callback(self._in_flight.discard)
        return task

    async def settle(self, tasks: list[asyncio.Task]) -> list[TaskOutcome]:
        """Wait for the given tasks to settle and apply their completions."""
        if not tasks:
            return []
        results = await asyncio.gather(*tasks, return_exceptions=True)
        self.process_ready()
        return [r for r in results if isinstance(r, TaskOutcome)]

    async def drain(self) -> list[TaskOutcome]:
        """Wait until nothing is in flight, including work submitted meanwhile."""
        outcomes: list[TaskOutcome] = []
        while self._in_flight:
            outcomes.extend(await self.settle(list(self._in_flight)))
        self.process_ready()
        return outcomes

    def process_ready(self) -> int:
        """Apply every queued completion in arrival order."""
        applied = 0
        while self._completions:
            self._apply(self._completions.popleft())
            applied += 1
        return applied

    async def shutdown(self) -> None:
        """Cancel whatever is still running; queued completions are dropped."""
        for task in list(self._in_flight):
            task.cancel()
        if self._in_flight:
            await asyncio.gather(*self._in_flight, return_exceptions=True)
        self._completions.clear()

    async def _run(
        self,
        label: str,
        work: Awaitable[Any],
        on_success: Optional[SuccessHandler],
        on_failure: Optional[FailureHandler],
    ) -> TaskOutcome:
        try:
            outcome = TaskOutcome(label=label, value=await work)
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            outcome = TaskOutcome(label=label, error=exc)

        self._completions.append(_Completion(outcome, on_success, on_failure))
        asyncio.get_running_loop().call_soon(self.process_ready)
        return outcome

    @staticmethod
    def _apply(completion: _Completion) -> None:
        outcome = completion.outcome
        try:
            if outcome.ok:
                if completion.on_success:
                    completion.on_success(outcome.value)
            else:
                logger.warning("Task %s failed: %s", outcome.label, outcome.error)
                if completion.on_failure:
                    completion.on_failure(outcome.error)
        except Exception:
            # A broken handler must not stop the remaining completions
            logger.exception("Completion handler for %s raised", outcome.label)
