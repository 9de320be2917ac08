"""Signal lights that watch the four corner cells of the intersection.

A light is green while its cell is free and red while a vehicle holds the
cell's lock.  The map locks are objects with the threading.Lock interface.
"""

import threading
import time

NUM_BLINKER = 4

# Watched cells as (row, col), in blinker index order.
BLINKER_CELLS = ((2, 2), (2, 4), (4, 4), (4, 2))


class Blinkers:
    """The set of intersection lights over a grid of map locks."""

    def __init__(self, map_locks):
        self.map_locks = map_locks
        self.cells = BLINKER_CELLS
        # Reentrant so a reader can hold it across several green() calls.
        self.green_lock = threading.RLock()
        self._is_green = [True] * NUM_BLINKER
        self._stop = threading.Event()
        self._threads = []

    def refresh(self, index):
        """Probe the cell of light INDEX and update its colour; return it."""
        row, col = self.cells[index]
        cell_lock = self.map_locks[row][col]
        with self.green_lock:
            if cell_lock.acquire(blocking=False):
                self._is_green[index] = True
                cell_lock.release()
            else:
                self._is_green[index] = False
            return self._is_green[index]

    def refresh_all(self):
        """Refresh every light and return their colours in index order."""
        return [self.refresh(index) for index in range(NUM_BLINKER)]

    def green(self, index):
        """True if light INDEX currently shows green."""
        with self.green_lock:
            return self._is_green[index]

    def _run(self, index):
        while not self._stop.is_set():
            self.refresh(index)
            time.sleep(0)

    def start(self):
        """Start one background thread per light."""
        if self._threads:
            raise RuntimeError("blinkers already started")
        self._stop.clear()
        self._threads = [
            threading.Thread(
                target=self._run, args=(index,), name=f"blinker_{index}", daemon=True
            )
            for index in range(NUM_BLINKER)
        ]
        for thread in self._threads:
            thread.start()

    def stop(self):
        """Stop the background threads and wait for them to finish."""
        self._stop.set()
        for thread in self._threads:
            thread.join()
        self._threads = []

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.stop()