"""
Background computation guarded by generation tokens.

Every runner holds a current generation token (an int from a process-wide
counter). A job remembers the token that was current when it was submitted;
when it finishes, its result is handed to `on_result` only if that token is
still current. Retiring a token (`mint`, `shutdown`) does not interrupt
running jobs: their results are simply dropped.

Jobs must only receive immutable snapshots (tuples, frozen dataclasses).
"""

from __future__ import annotations

import itertools
import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, Optional

logger = logging.getLogger(__name__)

_GENERATIONS = itertools.count(1)


class BackgroundRunner:
    def __init__(self, workers: int = 1):
        self._executor = ThreadPoolExecutor(max_workers=max(1, workers),
                                            thread_name_prefix="wordduel")
        self._lock = threading.Lock()
        self._generation = next(_GENERATIONS)
        self._closed = False

    @property
    def generation(self) -> int:
        with self._lock:
            return self._generation

    def mint(self) -> int:
        """Retire the current token and return a fresh one."""
        with self._lock:
            self._generation = next(_GENERATIONS)
            return self._generation

    def is_current(self, token: int) -> bool:
        with self._lock:
            return not self._closed and token == self._generation

    def submit(self, fn: Callable, *args,
               on_result: Optional[Callable[[int, object], None]] = None) -> Future:
        """
        Run fn(*args) on the pool. If `on_result` is given it is called as
        on_result(token, result) on the worker once the job succeeds, unless
        the token has been retired by then; the returned Future resolves only
        after that. Failures stay on the Future.
        """
        with self._lock:
            if self._closed:
                raise RuntimeError("background runner is shut down")
            token = self._generation
            return self._executor.submit(self._run, token, fn, args, on_result)

    def _run(self, token: int, fn: Callable, args: tuple, on_result) -> object:
        result = fn(*args)
        if on_result is not None:
            if self.is_current(token):
                on_result(token, result)
            else:
                logger.debug("discarding result of stale generation %d", token)
        return result

    def shutdown(self) -> None:
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self._generation = next(_GENERATIONS)
        self._executor.shutdown(wait=False, cancel_futures=True)
