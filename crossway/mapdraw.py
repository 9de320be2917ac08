"""Rendering of the crossroads map as ANSI terminal text."""

MAP_SIZE = 7

MAP_DEFAULT = (
    ("X", "X", " ", "X", " ", "X", "X"),
    ("X", "X", " ", "X", " ", "X", "X"),
    (" ", " ", " ", "-", " ", " ", " "),
    ("-", "-", "-", "-", "-", "-", "-"),
    (" ", " ", " ", "-", " ", " ", " "),
    ("X", "X", " ", "-", " ", "X", "X"),
    ("X", "X", " ", "-", " ", "X", "X"),
)

_CLEAR = "\033[H\033[J"


def _gotoxy(y, x):
    return f"\033[{y};{x}H"


def clear_screen():
    """Escape sequence that clears the terminal and homes the cursor."""
    return _CLEAR


def map_frame(step):
    """Text that clears the screen and draws the empty map and STEP."""
    rows = "".join(
        "".join(f"{cell} " for cell in row) + "\n" for row in MAP_DEFAULT
    )
    return f"{_CLEAR}{rows}unit step: {step}\n{_gotoxy(0, 0)}"


def vehicle_marker(vehicle_id, row, col):
    """Text that draws VEHICLE_ID at map cell (ROW, COL).

    Returns an empty string for a vehicle outside the map (negative cell).
    """
    if row < 0 or col < 0:
        return ""
    return f"{_gotoxy(row + 1, col * 2 + 1)}{vehicle_id} {_gotoxy(0, 0)}"