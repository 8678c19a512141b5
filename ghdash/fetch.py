"""Concurrent retrieval of the activity calendar and repository list."""

from __future__ import annotations

import logging
import time
from concurrent.futures import Future, ThreadPoolExecutor
from concurrent.futures import wait as wait_for
from typing import Any, Callable, Iterable, Sequence

from ghdash.calendar_grid import bucket
from ghdash.errors import RetrievalError
from ghdash.models import ActivityRecord, CalendarMatrix, FetchResult, RepositoryEntry

logger = logging.getLogger(__name__)

ACTIVITY = "activity"
REPOSITORIES = "repositories"

ActivitySource = Callable[[str], Sequence[ActivityRecord]]
RepositorySource = Callable[[str], Sequence[RepositoryEntry]]


def fold_outcomes(outcomes: Iterable[tuple[str, Any]]) -> FetchResult:
    """Fold worker outcomes, in the order they were observed, into one result.

    An outcome is either the worker's value or the exception it raised. The
    first exception seen becomes ``first_error``; successful values land in
    their slot regardless of arrival order.
    """
    result = FetchResult()
    for kind, outcome in outcomes:
        if isinstance(outcome, BaseException):
            if result.first_error is None:
                result.first_error = outcome
        elif kind == ACTIVITY:
            outcome = tuple(tuple(row) for row in outcome)
        elif kind == REPOSITORIES:
            outcome = tuple(outcome)

        if kind == ACTIVITY:
            result.activity = outcome
        elif kind == REPOSITORIES:
            result.repositories = outcome
        else:
            raise ValueError(f"unknown fetch outcome: {kind}")
    return result


def unwrap(result: FetchResult) -> tuple[CalendarMatrix, tuple[RepositoryEntry, ...]]:
    error = result.first_error
    if error is not None:
        if isinstance(error, RetrievalError):
            raise error
        raise RetrievalError(f"{type(error).__name__}: {error}") from error
    if not result.ok:
        raise RetrievalError("fetch finished without both datasets")
    return result.activity, result.repositories


def _outcome(future: Future) -> Any:
    error = future.exception()
    if error is not None:
        return error
    return future.result()


class FetchCycle:
    """One in-flight fetch: two worker futures joined on the caller's loop."""

    def __init__(self, futures: dict[Future, str]):
        self._pending = dict(futures)
        self._outcomes: list[tuple[str, Any]] = []
        self._folded = False
        self._started = time.monotonic()

    @property
    def done(self) -> bool:
        return self._folded

    def poll(self) -> FetchResult | None:
        """Collect finished workers; return the joined result exactly once.

        Returns ``None`` while a worker is still running and on every call
        after the result has been handed out.
        """
        if self._folded:
            return None
        for future, kind in list(self._pending.items()):
            if future.done():
                del self._pending[future]
                outcome = _outcome(future)
                if isinstance(outcome, BaseException):
                    logger.warning("%s fetch failed: %s", kind, outcome)
                else:
                    logger.info("%s fetch finished", kind)
                self._outcomes.append((kind, outcome))
        if self._pending:
            return None

        self._folded = True
        logger.info("fetch cycle joined in %.2fs", time.monotonic() - self._started)
        return fold_outcomes(self._outcomes)

    def wait(self) -> FetchResult:
        if self._folded:
            raise RuntimeError("fetch cycle already joined")
        wait_for(list(self._pending))
        result = self.poll()
        if result is None:
            raise RuntimeError("fetch cycle finished without a result")
        return result


class FetchCoordinator:
    def __init__(
        self,
        activity_source: ActivitySource,
        repository_source: RepositorySource,
        executor: ThreadPoolExecutor | None = None,
    ):
        self._activity_source = activity_source
        self._repository_source = repository_source
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(max_workers=2, thread_name_prefix="ghdash-fetch")

    def _load_activity(self, username: str) -> CalendarMatrix:
        return bucket(self._activity_source(username))

    def _load_repositories(self, username: str) -> tuple[RepositoryEntry, ...]:
        return tuple(self._repository_source(username))

    def start(self, username: str) -> FetchCycle:
        logger.info("starting fetch cycle for %s", username)
        futures = {
            self._executor.submit(self._load_activity, username): ACTIVITY,
            self._executor.submit(self._load_repositories, username): REPOSITORIES,
        }
        return FetchCycle(futures)

    def fetch(self, username: str) -> FetchResult:
        return self.start(username).wait()

    def close(self) -> None:
        if self._owns_executor:
            self._executor.shutdown(wait=False)
