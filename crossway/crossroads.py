"""Running the crossroads simulation and drawing it on a terminal."""

import argparse
import sys
import threading
import time

from .blinker import Blinkers
from .mapdraw import MAP_SIZE, clear_screen, map_frame, vehicle_marker
from .vehicle import Simulation, VehicleParseError, VehicleState, parse_vehicles

CROSSROADS_UNIT_TIME = 1.0


def make_map_locks(size=MAP_SIZE):
    """A SIZE x SIZE grid of fresh locks, one per map cell."""
    return [[threading.Lock() for _ in range(size)] for _ in range(size)]


def describe_vehicles(vehicles):
    """One line per vehicle listing its parsed fields."""
    return "".join(
        f"id = {v.id}, start = {v.start}, dest = {v.dest}, type = {int(v.type)}, "
        f"arrival = {v.arrival}, golden_time = {v.golden_time}, "
        f"state = {int(v.state)}\n"
        for v in vehicles
    )


def unitstep_changed(unit_time=CROSSROADS_UNIT_TIME):
    """Pause for one unit step after the global step has advanced."""
    time.sleep(unit_time)


def run_crossroads(spec, unit_time=CROSSROADS_UNIT_TIME, out=None):
    """Simulate the vehicles described by SPEC, drawing to OUT.

    Returns the vehicles once all of them have finished.
    """
    out = sys.stdout if out is None else out

    out.write(f"initializing {spec.count(':') + 1} vehicles...\n")
    vehicles = parse_vehicles(spec)
    out.write(describe_vehicles(vehicles))

    map_locks = make_map_locks()
    blinkers = Blinkers(map_locks)
    sim = Simulation(
        vehicles, map_locks, blinkers, on_step=lambda _step: unitstep_changed(unit_time)
    )

    out.write("initializing vehicle threads...\n")
    threads = [
        threading.Thread(
            target=sim.vehicle_loop, args=(v,), name=f"thread {v.id}", daemon=True
        )
        for v in vehicles
    ]
    for thread in threads:
        thread.start()
    blinkers.start()
    try:
        out.write("running crossroads ...\n")
        while True:
            out.write(map_frame(sim.step))
            for v in vehicles:
                out.write(vehicle_marker(v.id, v.position.row, v.position.col))
            out.flush()
            time.sleep(unit_time)
            if all(v.state == VehicleState.FINISHED for v in vehicles):
                break
    finally:
        blinkers.stop()

    for thread in threads:
        thread.join()
    out.write(clear_screen())
    out.write("finished. releasing resources ...\n")
    out.write("good bye.\n")
    out.flush()
    return vehicles


def main(argv=None):
    """Command-line entry point; returns the exit status."""
    parser = argparse.ArgumentParser(description="Simulate vehicles at a crossroads.")
    parser.add_argument("spec", help='vehicle specs such as "aAB:bBC:fCD5.12"')
    parser.add_argument(
        "--unit-time",
        type=float,
        default=CROSSROADS_UNIT_TIME,
        help="seconds per unit step",
    )
    args = parser.parse_args(argv)
    try:
        run_crossroads(args.spec, args.unit_time)
    except VehicleParseError as exc:
        print(f"Error: {exc}")
        return 1
    return 0