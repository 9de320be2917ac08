"""Vehicles crossing a four-way intersection, one unit step at a time.

The map is a 7x7 grid.  Vehicles enter from one of the four sides A, B, C
or D and leave through another (or the same) side along a fixed path.  Every
map cell is guarded by a lock.  A vehicle holds the lock of the cell it is
on and, while crossing the 3x3 intersection, the locks of every
intersection cell on its path.  All running vehicles advance together: a
step ends only when every running vehicle has tried to move once.
"""

import enum
import threading
import time
from dataclasses import dataclass
from typing import NamedTuple

from .blinker import Blinkers
from .priority_sync import PriorityLock
from .sorting import atoi

PRI_MIN = 0
PRI_DEFAULT = 31
PRI_MAX = 63

# Results of Simulation.try_move().
MOVE_DONE = 0
MOVE_OK = 1
MOVE_BLOCKED = -1


class Position(NamedTuple):
    """A map cell; (-1, -1) means off the map."""

    row: int
    col: int


OUTSIDE = Position(-1, -1)


class VehicleState(enum.IntEnum):
    READY = 0
    RUNNING = 1
    FINISHED = 2


class VehicleType(enum.IntEnum):
    NORMAL = 0
    AMBULANCE = 1


class VehicleParseError(ValueError):
    """A vehicle specification string is malformed."""


_ENDPOINTS = "ABCD"

_PATHS = {
    ("A", "A"): ((4, 0), (4, 1), (4, 2), (4, 3), (4, 4), (3, 4), (2, 4),
                 (2, 3), (2, 2), (2, 1), (2, 0)),
    ("A", "B"): ((4, 0), (4, 1), (4, 2), (5, 2), (6, 2)),
    ("A", "C"): ((4, 0), (4, 1), (4, 2), (4, 3), (4, 4), (4, 5), (4, 6)),
    ("A", "D"): ((4, 0), (4, 1), (4, 2), (4, 3), (4, 4), (3, 4), (2, 4),
                 (1, 4), (0, 4)),
    ("B", "A"): ((6, 4), (5, 4), (4, 4), (3, 4), (2, 4), (2, 3), (2, 2),
                 (2, 1), (2, 0)),
    ("B", "B"): ((6, 4), (5, 4), (4, 4), (3, 4), (2, 4), (2, 3), (2, 2),
                 (3, 2), (4, 2), (5, 2), (6, 2)),
    ("B", "C"): ((6, 4), (5, 4), (4, 4), (4, 5), (4, 6)),
    ("B", "D"): ((6, 4), (5, 4), (4, 4), (3, 4), (2, 4), (1, 4), (0, 4)),
    ("C", "A"): ((2, 6), (2, 5), (2, 4), (2, 3), (2, 2), (2, 1), (2, 0)),
    ("C", "B"): ((2, 6), (2, 5), (2, 4), (2, 3), (2, 2), (3, 2), (4, 2),
                 (5, 2), (6, 2)),
    ("C", "C"): ((2, 6), (2, 5), (2, 4), (2, 3), (2, 2), (3, 2), (4, 2),
                 (4, 3), (4, 4), (4, 5), (4, 6)),
    ("C", "D"): ((2, 6), (2, 5), (2, 4), (1, 4), (0, 4)),
    ("D", "A"): ((0, 2), (1, 2), (2, 2), (2, 1), (2, 0)),
    ("D", "B"): ((0, 2), (1, 2), (2, 2), (3, 2), (4, 2), (5, 2), (6, 2)),
    ("D", "C"): ((0, 2), (1, 2), (2, 2), (3, 2), (4, 2), (4, 3), (4, 4),
                 (4, 5), (4, 6)),
    ("D", "D"): ((0, 2), (1, 2), (2, 2), (3, 2), (4, 2), (4, 3), (4, 4),
                 (3, 4), (2, 4), (1, 4), (0, 4)),
}


def vehicle_path(start, dest):
    """The cells visited going from side START to side DEST, in order."""
    try:
        cells = _PATHS[(start, dest)]
    except KeyError:
        raise ValueError(f"no path from {start!r} to {dest!r}") from None
    return tuple(Position(row, col) for row, col in cells)


def is_in_intersection(row, col):
    """True if (ROW, COL) lies in the 3x3 intersection."""
    return 2 <= row <= 4 and 2 <= col <= 4


def _crossing_points(path):
    """The first intersection cell on PATH and the first cell after it."""
    entry = exit_ = None
    for pos in path:
        if entry is None:
            if is_in_intersection(*pos):
                entry = pos
        elif not is_in_intersection(*pos):
            exit_ = pos
            break
    return entry, exit_


def _path_at(path, step):
    return path[step] if step < len(path) else OUTSIDE


@dataclass
class Vehicle:
    """One vehicle and its progress through the map."""

    id: str
    start: str
    dest: str
    type: VehicleType = VehicleType.NORMAL
    arrival: int = 0
    golden_time: int = 0
    state: VehicleState = VehicleState.READY
    position: Position = OUTSIDE
    entry_point: Position | None = None
    exit_point: Position | None = None

    def __post_init__(self):
        path = vehicle_path(self.start, self.dest)
        if self.entry_point is None and self.exit_point is None:
            self.entry_point, self.exit_point = _crossing_points(path)


def _parse_token(token):
    if len(token) < 3:
        raise VehicleParseError(f"malformed vehicle data: {token!r}")
    vid, start, dest = token[0], token[1], token[2]
    if start not in _ENDPOINTS or dest not in _ENDPOINTS:
        raise VehicleParseError(f"unknown start or destination in {token!r}")
    if len(token) == 3:
        return Vehicle(vid, start, dest)
    numbers = token[3:]
    if "." not in numbers:
        raise VehicleParseError("ambulance must have golden time.")
    arrival_str, golden_str = numbers.split(".", 1)
    return Vehicle(
        vid,
        start,
        dest,
        type=VehicleType.AMBULANCE,
        arrival=atoi(arrival_str),
        golden_time=atoi(golden_str),
    )


def parse_vehicles(text):
    """Parse colon-separated vehicle specs such as "aAB:fCD5.12".

    Each spec is an id character, a start side and a destination side,
    optionally followed by "arrival.golden_time" for an ambulance.
    """
    count = text.count(":") + 1
    tokens = [token for token in text.split(":") if token]
    if len(tokens) < count:
        raise VehicleParseError("Not enough vehicle data provided.")
    return [_parse_token(token) for token in tokens]


def priority_for(vehicle):
    """Scheduling priority of VEHICLE: ambulances go nearly first."""
    if vehicle.type == VehicleType.AMBULANCE:
        return PRI_MAX - 1
    return PRI_MIN


def _yield():
    time.sleep(0)


class Simulation:
    """Shared state of vehicles moving in lockstep over MAP_LOCKS.

    ON_STEP, if given, is called with the new step number every time the
    global unit step advances.
    """

    def __init__(self, vehicles, map_locks, blinkers=None, on_step=None):
        self.vehicles = list(vehicles)
        self.map_locks = map_locks
        self.blinkers = blinkers if blinkers is not None else Blinkers(map_locks)
        self.on_step = on_step
        self.step = 0
        self._step_cond = threading.Condition(threading.Lock())
        self._blinker_lock = PriorityLock()
        self._waiting = 0
        self._total = 0
        self._local = threading.local()

    def _priority(self, vehicle):
        return getattr(self._local, "priority", priority_for(vehicle))

    def _try_lock(self, pos):
        return self.map_locks[pos.row][pos.col].acquire(blocking=False)

    def _unlock(self, pos):
        self.map_locks[pos.row][pos.col].release()

    def _bump_step(self):
        self.step += 1
        if self.on_step is not None:
            self.on_step(self.step)

    def _advance_step(self):
        self.step += 1
        self._waiting = 0
        self._step_cond.notify_all()
        if self.on_step is not None:
            self.on_step(self.step)

    def _can_enter(self, path):
        cells = self.blinkers.cells
        with self.blinkers.green_lock:
            return all(
                self.blinkers.green(index)
                for pos in path
                for index, cell in enumerate(cells)
                if pos == cell
            )

    def _enter(self, vehicle, path, pos_cur, pos_next):
        priority = self._priority(vehicle)
        if priority in (PRI_MIN, PRI_MAX - 1):
            _yield()
        if priority == PRI_MIN:
            _yield()
        self._blinker_lock.acquire(priority)
        try:
            can_enter = self._can_enter(path)
            acquired = []
            if can_enter:
                for pos in path:
                    if is_in_intersection(*pos):
                        if not self._try_lock(pos):
                            can_enter = False
                            break
                        acquired.append(pos)
            if can_enter:
                self._unlock(pos_cur)
                vehicle.position = pos_next
            else:
                for pos in acquired:
                    self._unlock(pos)
        finally:
            self._blinker_lock.release()
        return MOVE_OK if can_enter else MOVE_BLOCKED

    def try_move(self, vehicle, step):
        """Try to move VEHICLE to cell number STEP of its path.

        Returns MOVE_OK on success, MOVE_BLOCKED if the cell (or the
        intersection) is not free, and MOVE_DONE when the vehicle has left
        the map.
        """
        path = vehicle_path(vehicle.start, vehicle.dest)
        pos_next = _path_at(path, step)
        pos_cur = vehicle.position

        if vehicle.state == VehicleState.RUNNING and pos_next == OUTSIDE:
            vehicle.position = pos_next
            self._unlock(pos_cur)
            return MOVE_DONE

        if pos_next == vehicle.entry_point:
            return self._enter(vehicle, path, pos_cur, pos_next)

        if is_in_intersection(*pos_next):
            # The whole crossing was locked on entry.
            vehicle.position = pos_next
            return MOVE_OK

        if vehicle.state == VehicleState.READY:
            with self._step_cond:
                if not self._try_lock(pos_next):
                    return MOVE_BLOCKED
                vehicle.state = VehicleState.RUNNING
                self._total += 1
                vehicle.position = pos_next
            return MOVE_OK

        if not self._try_lock(pos_next):
            return MOVE_BLOCKED
        if pos_next == vehicle.exit_point:
            for pos in path:
                if is_in_intersection(*pos):
                    self._unlock(pos)
        else:
            self._unlock(pos_cur)
        vehicle.position = pos_next
        return MOVE_OK

    def vehicle_loop(self, vehicle):
        """Drive VEHICLE from its start to its destination, step by step."""
        path = vehicle_path(vehicle.start, vehicle.dest)
        vehicle.position = OUTSIDE
        vehicle.state = VehicleState.READY
        step = 0
        self._local.priority = priority_for(vehicle)

        if vehicle.type == VehicleType.AMBULANCE:
            _yield()

        while True:
            if self._local.priority == PRI_MIN and vehicle.position != vehicle.exit_point:
                _yield()

            with self._step_cond:
                while self.step < vehicle.arrival:
                    if self._total > 0:
                        self._step_cond.wait()
                    else:
                        self._bump_step()

            result = self.try_move(vehicle, step)
            if result == MOVE_OK:
                step += 1
                if _path_at(path, step) == vehicle.exit_point:
                    self._local.priority = PRI_MAX
            elif result == MOVE_DONE:
                with self._step_cond:
                    self._total -= 1
                    if self._waiting == self._total:
                        self._advance_step()
                break

            with self._step_cond:
                self._waiting += 1
                if self._waiting == self._total:
                    self._advance_step()
                else:
                    my_step = self.step
                    self._step_cond.wait_for(lambda: self.step != my_step)

        vehicle.state = VehicleState.FINISHED