"""Helpers for running work on a pool of threads."""

from __future__ import annotations

import functools
import logging
import os
import re
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass

_log = logging.getLogger(__name__)

_ENV_VAR = "EC_GPU_NUM_THREADS"
_UNSIGNED = re.compile(r"\+?[0-9]+")


def read_num_threads():
    """Thread count from EC_GPU_NUM_THREADS, else the number of CPUs."""
    raw = os.environ.get(_ENV_VAR)
    if raw is not None and _UNSIGNED.fullmatch(raw):
        return int(raw)
    return os.cpu_count() or 1


@functools.lru_cache(maxsize=None)
def num_threads():
    """The thread count, read once and kept for the life of the process."""
    return read_num_threads()


@functools.lru_cache(maxsize=None)
def _thread_pool():
    return ThreadPoolExecutor(
        max_workers=num_threads(), thread_name_prefix="curvefft"
    )


def log2_floor(num):
    """The floored binary logarithm of a positive integer."""
    if num <= 0:
        raise ValueError("log2_floor needs a positive number")
    return num.bit_length() - 1


class _Scope:
    """Runs jobs on threads; all of them finish before the scope ends."""

    def __init__(self, executor):
        self._executor = executor
        self._futures = []

    def execute(self, fn, *args):
        self._futures.append(self._executor.submit(fn, *args))

    def _join(self):
        for future in self._futures:
            future.result()


class Waiter:
    """A result that is being computed elsewhere."""

    def __init__(self, future):
        self._future = future

    def wait(self):
        """Block until the result is there and return it."""
        return self._future.result()

    @classmethod
    def done(cls, value):
        """A waiter whose result is already known."""
        future = Future()
        future.set_result(value)
        return cls(future)


@dataclass(frozen=True)
class Worker:
    """Runs computations on the shared pool of threads."""

    def log_num_threads(self):
        """The floored binary logarithm of the thread count."""
        return log2_floor(num_threads())

    def compute(self, fn):
        """Start fn on the pool and return a Waiter for its result."""
        _log.debug("submitting job to the thread pool")
        return Waiter(_thread_pool().submit(fn))

    def scope(self, elements, fn):
        """Call fn(scope, chunk_size) and wait for every job it starts.

        chunk_size is the number of elements per thread.
        """
        threads = num_threads()
        chunk_size = 1 if elements < threads else elements // threads
        return self.scoped(lambda scope: fn(scope, chunk_size))

    def scoped(self, fn):
        """Call fn(scope), wait for every job it starts and return its result."""
        with ThreadPoolExecutor(max_workers=max(1, num_threads())) as executor:
            scope = _Scope(executor)
            result = fn(scope)
            scope._join()
        return result