"""Issue detail view state: Idle -> Loading -> Ready | Failed.

Every fetch is tagged with the (owner, repo, number) triple it was issued
for. A completion whose triple is no longer the current one is dropped, so a
slow response can never overwrite the view the user has navigated to since.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import CancelledError, Executor, Future, ThreadPoolExecutor
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from .errors import FirstFixError
from .models import IssueTarget
from .starter_kit import StarterKitPayload

logger = logging.getLogger(__name__)

DEFAULT_FAILURE = "Failed to load starter kit"


class DetailState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


@dataclass(frozen=True)
class DetailSnapshot:
    state: DetailState
    target: IssueTarget | None = None
    kit: StarterKitPayload | None = None
    error: str | None = None


class IssueDetailView:
    """One mounted starter-kit view with at most one fetch of interest."""

    def __init__(
        self,
        fetch: Callable[[IssueTarget], StarterKitPayload],
        executor: Executor | None = None,
    ):
        self._fetch = fetch
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(max_workers=1, thread_name_prefix="starter-kit")
        self._lock = threading.RLock()
        self._snapshot = DetailSnapshot(DetailState.IDLE)
        self._future: Future | None = None

    def snapshot(self) -> DetailSnapshot:
        with self._lock:
            return self._snapshot

    def navigate(self, target: IssueTarget) -> Future | None:
        """Point the view at ``target``; returns the new fetch, or None if unchanged."""
        with self._lock:
            current = self._snapshot
            if current.state is not DetailState.IDLE and current.target == target:
                return None
            if self._future is not None:
                # Only cancels if not started; a running fetch is ignored on completion.
                self._future.cancel()
            self._snapshot = DetailSnapshot(DetailState.LOADING, target=target)
            future = self._executor.submit(self._run, target)
            self._future = future
        logger.debug("Loading starter kit for %s", target.key)
        return future

    def wait(self, timeout: float | None = None) -> DetailSnapshot:
        """Block until the current fetch settles and return the snapshot."""
        while True:
            with self._lock:
                future = self._future
            if future is None:
                break
            try:
                future.result(timeout=timeout)
            except CancelledError:
                # Superseded by a newer navigation; wait on that one instead.
                continue
            break
        return self.snapshot()

    def close(self) -> None:
        if self._owns_executor:
            self._executor.shutdown(wait=False)

    def __enter__(self) -> "IssueDetailView":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def _run(self, target: IssueTarget) -> bool:
        try:
            kit = self._fetch(target)
        except FirstFixError as e:
            return self.complete(target, error=str(e) or DEFAULT_FAILURE)
        except Exception as e:
            logger.exception("Unexpected failure loading %s", target.key)
            return self.complete(target, error=str(e) or DEFAULT_FAILURE)
        return self.complete(target, kit=kit)

    def complete(
        self,
        target: IssueTarget,
        kit: StarterKitPayload | None = None,
        error: str | None = None,
    ) -> bool:
        """Apply a fetch result for ``target``. Returns False if it was stale."""
        with self._lock:
            current = self._snapshot
            if current.target != target or current.state is not DetailState.LOADING:
                logger.debug("Discarding stale starter kit response for %s", target.key)
                return False
            if error is not None:
                self._snapshot = DetailSnapshot(DetailState.FAILED, target=target, error=error)
            else:
                self._snapshot = DetailSnapshot(DetailState.READY, target=target, kit=kit)
        return True
