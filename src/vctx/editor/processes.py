"""Live process inspection for terminal tabs."""

from __future__ import annotations

import time
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor

import psutil
import structlog

log = structlog.get_logger()

CwdResolver = Callable[[int], "str | None"]
"""Maps a process id to its current working directory, or None."""

DEFAULT_LOOKUP_TIMEOUT_SEC = 1.0


def _read_cwd(pid: int) -> str | None:
    try:
        return psutil.Process(pid).cwd() or None
    except psutil.Error as e:
        # NoSuchProcess, AccessDenied, ZombieProcess
        log.debug("process_cwd_unavailable", pid=pid, error=type(e).__name__)
        return None


def resolve_process_cwd(pid: int, timeout: float = DEFAULT_LOOKUP_TIMEOUT_SEC) -> str | None:
    """Return the live working directory of ``pid``, bounded by ``timeout``."""
    if pid <= 0:
        return None
    executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="vctx-cwd")
    try:
        return executor.submit(_read_cwd, pid).result(timeout=timeout)
    except TimeoutError:
        log.debug("process_cwd_timeout", pid=pid, timeout=timeout)
        return None
    finally:
        executor.shutdown(wait=False, cancel_futures=True)


def make_cwd_resolver(timeout: float = DEFAULT_LOOKUP_TIMEOUT_SEC) -> CwdResolver:
    """Resolver whose lookups together take at most ``timeout`` seconds.

    The deadline starts at the first lookup. Once it has passed, further
    pids resolve to None without touching the process table.
    """
    deadline: float | None = None

    def resolve(pid: int) -> str | None:
        nonlocal deadline
        now = time.monotonic()
        if deadline is None:
            deadline = now + timeout
        remaining = deadline - now
        if remaining <= 0:
            log.debug("process_cwd_budget_spent", pid=pid)
            return None
        return resolve_process_cwd(pid, timeout=remaining)

    return resolve
