# server/core/state.py

import weakref
from threading import Lock


_locks_guard = Lock()
_title_locks = weakref.WeakValueDictionary()


def with_title_lock(title: str) -> Lock:
    """
    Lock serializing the look-up-then-write of an upsert by title.
    Two requests for the same new title in this process cannot both insert.
    Entries vanish once no request holds or waits on the lock.
    """
    with _locks_guard:
        lock = _title_locks.get(title)
        if lock is None:
            lock = Lock()
            _title_locks[title] = lock
        return lock
