"""
Transaction boundary for engine objects.

Every mutating entry point runs as one atomic unit: the object's
re-entrant lock is held for the whole call, the outermost call snapshots
the object's ledger and restores it if anything raises, and the event
buffer only ever holds the logs of the last completed call.

Objects using these decorators provide `_lock`, `_depth`, `_logs`,
`_pendingLogs`, `_snapshot()` and `_restore(snapshot)` (see Erc20).
"""

import functools


def transaction(fn):
    @functools.wraps(fn)
    def wrapper(self, *args, **kwargs):
        with self._lock:
            if self._depth > 0:
                return fn(self, *args, **kwargs)

            snapshot = self._snapshot()
            self._pendingLogs = []
            self._depth += 1
            try:
                result = fn(self, *args, **kwargs)
            except BaseException:
                self._restore(snapshot)
                self._pendingLogs = []
                raise
            finally:
                self._depth -= 1

            self._logs = self._pendingLogs
            self._pendingLogs = []
            return result

    return wrapper


def view(fn):
    @functools.wraps(fn)
    def wrapper(self, *args, **kwargs):
        with self._lock:
            return fn(self, *args, **kwargs)

    return wrapper
