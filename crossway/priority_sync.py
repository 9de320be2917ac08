"""Semaphores, locks and condition variables that wake waiters by priority.

Waiters with a higher priority are woken first; waiters of equal priority
are woken in the order they started waiting.
"""

import threading
import time


def _insert_ordered(waiters, waiter):
    """Insert WAITER before the first entry with a lower priority."""
    idx = next(
        (k for k, other in enumerate(waiters) if waiter.priority > other.priority),
        len(waiters),
    )
    waiters.insert(idx, waiter)


def _pop_highest(waiters):
    """Remove and return the highest-priority waiter, first-come among equals."""
    waiters.sort(key=lambda w: -w.priority)
    return waiters.pop(0)


class _SemaWaiter:
    __slots__ = ("priority", "woken")

    def __init__(self, priority):
        self.priority = priority
        self.woken = False


class PrioritySemaphore:
    """A counting semaphore whose blocked threads are woken by priority."""

    def __init__(self, value=0):
        if value < 0:
            raise ValueError(f"semaphore value must be non-negative, got {value}")
        self._value = value
        self._waiters = []
        self._cond = threading.Condition(threading.Lock())

    @property
    def value(self):
        """The current count."""
        with self._cond:
            return self._value

    @property
    def waiting(self):
        """The number of threads blocked in down()."""
        with self._cond:
            return len(self._waiters)

    def down(self, priority=0):
        """Wait until the count is positive, then decrement it."""
        with self._cond:
            while self._value == 0:
                waiter = _SemaWaiter(priority)
                _insert_ordered(self._waiters, waiter)
                self._cond.wait_for(lambda: waiter.woken)
            self._value -= 1

    def try_down(self):
        """Decrement the count if it is positive; return whether it was."""
        with self._cond:
            if self._value > 0:
                self._value -= 1
                return True
            return False

    def up(self):
        """Increment the count and wake the highest-priority waiter, if any."""
        with self._cond:
            if self._waiters:
                _pop_highest(self._waiters).woken = True
                self._cond.notify_all()
            self._value += 1
        time.sleep(0)


class PriorityLock:
    """A non-recursive lock owned by the thread that acquired it."""

    def __init__(self):
        self._holder = None
        self._semaphore = PrioritySemaphore(1)

    @property
    def holder(self):
        """Identifier of the owning thread, or None."""
        return self._holder

    def acquire(self, priority=0):
        """Block until the lock is free, then take it."""
        if self.held_by_current_thread():
            raise RuntimeError("lock already held by the current thread")
        self._semaphore.down(priority)
        self._holder = threading.get_ident()

    def try_acquire(self):
        """Take the lock if it is free; return whether it was taken."""
        if self.held_by_current_thread():
            raise RuntimeError("lock already held by the current thread")
        if self._semaphore.try_down():
            self._holder = threading.get_ident()
            return True
        return False

    def release(self):
        """Release the lock, which the current thread must hold."""
        if not self.held_by_current_thread():
            raise RuntimeError("lock not held by the current thread")
        self._holder = None
        self._semaphore.up()

    def held_by_current_thread(self):
        """True if the current thread holds the lock."""
        return self._holder == threading.get_ident()

    def __enter__(self):
        self.acquire()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.release()


class _CondWaiter:
    __slots__ = ("priority", "semaphore")

    def __init__(self, priority):
        self.priority = priority
        self.semaphore = PrioritySemaphore(0)


class PriorityCondition:
    """A condition variable whose waiters are signalled by priority."""

    def __init__(self):
        self._waiters = []

    @property
    def waiting(self):
        """The number of threads waiting on this condition."""
        return len(self._waiters)

    def wait(self, lock, priority=0):
        """Release LOCK, wait to be signalled, then reacquire LOCK."""
        if not lock.held_by_current_thread():
            raise RuntimeError("lock not held by the current thread")
        waiter = _CondWaiter(priority)
        _insert_ordered(self._waiters, waiter)
        lock.release()
        waiter.semaphore.down(priority)
        lock.acquire(priority)

    def signal(self, lock):
        """Wake the highest-priority waiter, if any; LOCK must be held."""
        if not lock.held_by_current_thread():
            raise RuntimeError("lock not held by the current thread")
        if self._waiters:
            _pop_highest(self._waiters).semaphore.up()

    def broadcast(self, lock):
        """Wake every waiter; LOCK must be held."""
        if not lock.held_by_current_thread():
            raise RuntimeError("lock not held by the current thread")
        while self._waiters:
            self.signal(lock)