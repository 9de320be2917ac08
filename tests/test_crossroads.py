import io
import time

from crossway.crossroads import (
    describe_vehicles,
    main,
    make_map_locks,
    run_crossroads,
    unitstep_changed,
)
from crossway.vehicle import VehicleState, parse_vehicles


def test_make_map_locks_shape_and_free():
    locks = make_map_locks(7)
    assert len(locks) == 7
    assert all(len(row) == 7 for row in locks)
    assert len({id(lock) for row in locks for lock in row}) == 49
    assert all(lock.acquire(blocking=False) for row in locks for lock in row)


def test_describe_vehicles():
    vehicles = parse_vehicles("aAB:fCD5.12")
    lines = describe_vehicles(vehicles).splitlines()
    assert lines[0] == (
        "id = a, start = A, dest = B, type = 0, arrival = 0, "
        "golden_time = 0, state = 0"
    )
    assert lines[1] == (
        "id = f, start = C, dest = D, type = 1, arrival = 5, "
        "golden_time = 12, state = 0"
    )


def test_unitstep_changed_sleeps():
    begin = time.monotonic()
    assert unitstep_changed(0.02) is None
    assert time.monotonic() - begin >= 0.015


def test_main_success(capsys):
    assert main(["aAB", "--unit-time", "0.001"]) == 0
    assert "good bye." in capsys.readouterr().out


def test_main_reports_parse_error(capsys):
    assert main(["fAB5"]) == 1
    assert "Error: ambulance must have golden time." in capsys.readouterr().out