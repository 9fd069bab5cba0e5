"""
Concurrent page-load fetches.

Pages load several independent resources at once (products and categories,
or overview, daily and monthly reports). Each fetch runs on its own worker
thread and stores only its own result; one failing fetch never blocks or
rolls back the others.

RequestGeneration guards state holders against late responses: a response
stamped with an old generation is dropped instead of applied.
"""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from pos_client import settings

logger = logging.getLogger(__name__)


@dataclass
class LoadResult:
    """Outcome of a concurrent load, keyed by resource name."""

    results: Dict[str, Any] = field(default_factory=dict)
    errors: Dict[str, Exception] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.errors

    def get(self, name: str, default: Any = None) -> Any:
        return self.results.get(name, default)


def fetch_concurrently(
    tasks: Dict[str, Callable[[], Any]],
    max_workers: Optional[int] = None,
) -> LoadResult:
    """
    Run independent fetches in parallel and collect their outcomes.

    Args:
        tasks: Mapping of resource name to a zero-argument callable
        max_workers: Thread count (default: settings.PAGE_LOAD_WORKERS)

    Returns:
        LoadResult with one entry per task in either results or errors
    """
    outcome = LoadResult()
    if not tasks:
        return outcome

    workers = max(1, min(max_workers or settings.PAGE_LOAD_WORKERS, len(tasks)))

    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = {name: executor.submit(task) for name, task in tasks.items()}

        for name, future in futures.items():
            try:
                outcome.results[name] = future.result()
            except Exception as e:
                logger.error(f"Failed to fetch {name}: {e}")
                outcome.errors[name] = e

    return outcome


class RequestGeneration:
    """
    Monotonic token used to discard stale responses.

    A state holder calls next() when it starts a load and is_current(token)
    before applying the response. invalidate() makes every outstanding token
    stale, e.g. when the page is closed.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._value = 0

    def next(self) -> int:
        with self._lock:
            self._value += 1
            return self._value

    def invalidate(self):
        with self._lock:
            self._value += 1

    def is_current(self, token: int) -> bool:
        with self._lock:
            return token == self._value
