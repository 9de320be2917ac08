# crossway

crossway simulates vehicles crossing a four-way intersection on a 7×7 grid.

- Each vehicle runs in its own thread and moves along a fixed path, one cell per unit step.
- All running vehicles meet at a barrier after every step. The global step advances only when each of them has tried to move once.
- Every map cell is guarded by a lock.
- Four blinkers watch the corner cells of the intersection: (2,2), (2,4), (4,4) and (4,2).
- A vehicle enters the intersection only when the blinkers on its path show green and every intersection cell on its path is free. It then claims all of those cells at once and releases them when it leaves.
- Ambulances get a higher scheduling priority. They may join at a later step.

The package also holds the helpers the simulation is built on:

- `crossway.vehicle`: `Vehicle`, `Position`, `VehicleState`, `VehicleType`, `parse_vehicles`, `vehicle_path`, `is_in_intersection`, `priority_for` and the `Simulation` that moves vehicles in lockstep.
- `crossway.blinker`: `Blinkers`, the four intersection lights. `start()` and `stop()` run them in background threads. `refresh()`, `refresh_all()` and `green()` probe them by hand.
- `crossway.mapdraw`: `map_frame`, `vehicle_marker` and `clear_screen`. Each returns ANSI terminal text for the map.
- `crossway.priority_sync`: `PrioritySemaphore`, `PriorityLock` and `PriorityCondition`. They wake waiters in priority order, first come first served among equals.
- `crossway.bitmap`: `Bitmap`, a fixed-size bit array with range queries, run scanning and binary read/write.
- `crossway.linkedlist`: `DList` and `Node`, a doubly linked list with splicing, a natural merge sort, `insert_ordered`, `unique`, `max` and `min`.
- `crossway.hashtable`: `HashTable`, a chained hash table that keeps about two items per bucket. It also has the FNV-1 helpers `hash_bytes`, `hash_string` and `hash_int`.
- `crossway.printf`: `format` and `snprintf` with printf flags, width, precision and length modifiers on a 32-bit model. It also has `hex_dump` and `human_readable_size`.
- `crossway.ustar`: `make_header` and `parse_header` for POSIX ustar archive headers, with `UstarType`, `UstarEntry` and `UstarError`.
- Smaller helpers:
  - `crossway.rc4random`: `Rc4Random`, RC4-based pseudo-random bytes.
  - `crossway.sorting`: `atoi`, `heap_sort` and `binary_search` with strcmp-style comparators.
  - `crossway.ctype`: ASCII character classes.
  - `crossway.rounding`: `round_up`, `div_round_up` and `round_down`.

## Installing

```
pip install .
```

With the test dependencies:

```
pip install .[test]
```

## Running the simulation

```
crossway aAB:bBC:cCD:dDA
```

Vehicles are separated by `:`. Each vehicle is at least three characters:

1. its identifier,
2. its entry side (`A`, `B`, `C` or `D`),
3. its exit side (`A`, `B`, `C` or `D`).

Anything after those three characters makes the vehicle an ambulance. That extra text must have the form `arrival.golden_time`. For example, `fAB5.12` is ambulance `f`. It goes from A to B and does not move before global step 5:

```
crossway aAB:bBC:fAB5.12
```

`--unit-time SECONDS` sets the length of a unit step. The default is 1.0.

After every step the simulation pauses for one unit time. The map is redrawn once per unit time until every vehicle has left the grid.

If a specification is malformed, the command prints `Error: ...` and exits with status 1. Examples are an unknown side, a missing field, or an ambulance without a `.`.

## Using it from Python

```python
from crossway.crossroads import run_crossroads

vehicles = run_crossroads("aAB:bBC:cCD", unit_time=0.0)
```

`run_crossroads` writes its output to `sys.stdout`, or to the `out` stream you pass. It returns the finished `Vehicle` objects.

```python
from crossway.printf import format, human_readable_size

format("%08x|%-5d|%'d", 0xBEEF, 42, 1234567)   # '0000beef|42   |1,234,567'
human_readable_size(262144)                    # '256 kB'
```

```python
from crossway.ustar import make_header, parse_header, UstarType

header = make_header("docs/notes.txt", UstarType.REGULAR, 120)
entry = parse_header(header)   # UstarEntry(file_name='docs/notes.txt', type=REGULAR, size=120)
```

## What it does not do

- An ambulance's golden time is parsed and stored on the `Vehicle`, but the simulation does not act on it. Nothing checks whether an ambulance arrives within its golden time.
- The map is drawn with plain ANSI escape sequences. There is no interactive screen and no input handling.
- `crossway.ustar` handles single headers only. It does not read or write whole archives.