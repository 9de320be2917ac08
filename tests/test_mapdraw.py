from crossway.mapdraw import (
    MAP_DEFAULT,
    MAP_SIZE,
    clear_screen,
    map_frame,
    vehicle_marker,
)


def test_clear_screen_sequence():
    assert clear_screen() == "\033[H\033[J"


def test_map_frame_starts_with_clear_and_ends_home():
    frame = map_frame(0)
    assert frame.startswith(clear_screen())
    assert frame.endswith("\033[0;0H")


def test_map_frame_rows_match_map():
    frame = map_frame(3)
    body = frame[len(clear_screen()):]
    lines = body.split("\n")
    for line, row in zip(lines[:MAP_SIZE], MAP_DEFAULT):
        assert len(line) == 2 * MAP_SIZE
        assert line[::2] == "".join(row)
        assert set(line[1::2]) == {" "}


def test_map_frame_shows_step():
    frame = map_frame(17)
    assert "unit step: 17\n" in frame


def test_vehicle_marker_position():
    assert vehicle_marker("A", 4, 0) == "\033[5;1HA \033[0;0H"


def test_vehicle_marker_column_scaling():
    marker = vehicle_marker("b", 2, 3)
    assert marker.startswith("\033[3;7H")
    assert "b " in marker


def test_vehicle_marker_outside_map_is_empty():
    assert vehicle_marker("C", -1, -1) == ""
    assert vehicle_marker("C", 2, -1) == ""
    assert vehicle_marker("C", -1, 2) == ""