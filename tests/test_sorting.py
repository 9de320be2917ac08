import random

import pytest

from crossway.sorting import atoi, binary_search, heap_sort


def _cmp(a, b):
    return (a > b) - (a < b)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("42", 42),
        ("  -42", -42),
        ("+7abc", 7),
        ("\t\n 12", 12),
        ("abc", 0),
        ("", 0),
        ("-", 0),
        ("-2147483648", -2147483648),
        ("2147483647", 2147483647),
    ],
)
def test_atoi(text, expected):
    assert atoi(text) == expected


@pytest.mark.parametrize("size", [0, 1, 2, 3, 10, 101])
def test_heap_sort_matches_sorted(size):
    rng = random.Random(size)
    items = [rng.randint(-50, 50) for _ in range(size)]
    expected = sorted(items)
    heap_sort(items, _cmp)
    assert items == expected


def test_heap_sort_descending_comparator():
    items = [3, 1, 4, 1, 5, 9, 2, 6]
    heap_sort(items, lambda a, b: _cmp(b, a))
    assert items == sorted(items, reverse=True)


def test_heap_sort_strings():
    items = ["pear", "apple", "fig", "banana"]
    heap_sort(items, _cmp)
    assert items == sorted(["pear", "apple", "fig", "banana"])


def test_binary_search_finds_every_element():
    items = list(range(0, 100, 3))
    for value in items:
        idx = binary_search(value, items, _cmp)
        assert items[idx] == value


def test_binary_search_missing():
    items = list(range(0, 100, 3))
    assert binary_search(1, items, _cmp) is None
    assert binary_search(1000, items, _cmp) is None
    assert binary_search(-5, items, _cmp) is None


def test_binary_search_empty():
    assert binary_search(3, [], _cmp) is None


def test_binary_search_with_duplicates():
    items = [1, 2, 2, 2, 3]
    idx = binary_search(2, items, _cmp)
    assert items[idx] == 2