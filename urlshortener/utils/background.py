"""Fire-and-forget execution of best-effort work

Lambda handlers use this module to start work whose outcome must never
delay or alter the HTTP response (e.g. incrementing click counters).

Tasks run on a process-wide thread pool created lazily on first use. A task
may be abandoned mid-flight if the Lambda environment freezes right after the
handler returns, so submitted work must be safe to lose (at-most-once effort).
A failing task is logged and otherwise ignored.

Functions:
    fire_and_forget(func, *args, description=None, **kwargs) -> Future
        Submit `func(*args, **kwargs)` without waiting for it.

    drain(timeout=None) -> bool
        Wait for all outstanding tasks. Intended for tests and local runs.

    shutdown() -> None
        Wait for outstanding tasks and dispose of the thread pool.

Example:
    >>> from urlshortener.utils.background import fire_and_forget
    >>> fire_and_forget(dao.increment_clicks, 'aB3x9', description='increment_clicks')
    <Future at 0x... state=running>
"""

import atexit
import logging
import threading
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor, wait
from typing import Any


logger = logging.getLogger(__name__)

MAX_WORKERS = 4

_lock = threading.Lock()
_executor: ThreadPoolExecutor | None = None
_pending: set[Future] = set()


def _get_executor() -> ThreadPoolExecutor:
    global _executor
    with _lock:
        if _executor is None:
            _executor = ThreadPoolExecutor(max_workers=MAX_WORKERS, thread_name_prefix='background')
        return _executor


def _make_done_callback(description: str) -> Callable[[Future], None]:
    def _done(future: Future) -> None:
        with _lock:
            _pending.discard(future)

        if future.cancelled():
            logger.warning('Background task was cancelled.', extra={'task': description})
            return

        error = future.exception()
        if error is not None:
            # Failures stop here: the caller already responded
            logger.error(
                'Background task failed.',
                extra={'task': description, 'error': str(error), 'errorType': error.__class__.__name__},
            )

    return _done


def fire_and_forget(func: Callable[..., Any], *args: Any, description: str | None = None, **kwargs: Any) -> Future:
    """Submit `func(*args, **kwargs)` to the background pool and return immediately

    The returned Future is only for introspection; callers in the request path
    must not wait on it. Exceptions raised by `func` are logged by a done
    callback and never propagated.

    Args:
        func (Callable):
            Work to run in the background.
        *args, **kwargs:
            Arguments forwarded to `func`.
        description (str | None):
            Label used in log lines. Defaults to the function's name.

    Returns:
        Future: handle of the submitted task.
    """
    description = description or getattr(func, '__name__', repr(func))
    future = _get_executor().submit(func, *args, **kwargs)
    with _lock:
        _pending.add(future)
    future.add_done_callback(_make_done_callback(description))
    return future


def drain(timeout: float | None = None) -> bool:
    """Wait until all submitted tasks are finished

    Args:
        timeout (float | None):
            Maximum number of seconds to wait. None waits indefinitely.

    Returns:
        bool: True if every task finished within the timeout.
    """
    with _lock:
        pending = set(_pending)
    if not pending:
        return True
    _, not_done = wait(pending, timeout=timeout)
    return not not_done


def shutdown() -> None:
    """Wait for outstanding tasks and dispose of the thread pool"""
    global _executor
    with _lock:
        executor, _executor = _executor, None
    if executor is not None:
        executor.shutdown(wait=True)


# Let in-flight tasks finish when a local process exits
atexit.register(shutdown)
