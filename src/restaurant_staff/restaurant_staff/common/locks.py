from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Iterator


class EmployeeLockRegistry:
    """One mutex per employee id.

    Attendance and leave mutations are read-decide-write sequences over several
    fields, so they are serialized per employee. Different employees never contend.
    """

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: dict[int, threading.Lock] = {}

    def _lock_for(self, employee_id: int) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(employee_id)
            if lock is None:
                lock = threading.Lock()
                self._locks[employee_id] = lock
            return lock

    @contextmanager
    def hold(self, employee_id: int) -> Iterator[None]:
        lock = self._lock_for(int(employee_id))
        with lock:
            yield
