"""Integer parsing, heap sort and binary search with strcmp-style comparators."""

from .ctype import isdigit, isspace


def atoi(s):
    """Parse a leading signed decimal integer from S, returning 0 if none."""
    pos = 0
    while pos < len(s) and isspace(s[pos]):
        pos += 1

    negative = False
    if pos < len(s) and s[pos] in "+-":
        negative = s[pos] == "-"
        pos += 1

    value = 0
    while pos < len(s) and isdigit(s[pos]):
        value = value * 10 + (ord(s[pos]) - ord("0"))
        pos += 1
    return -value if negative else value


def _sift_down(items, i, cnt, compare):
    """Float the element at 1-based index I down a heap of CNT elements."""
    while True:
        left = 2 * i
        right = left + 1
        largest = i
        if left <= cnt and compare(items[left - 1], items[largest - 1]) > 0:
            largest = left
        if right <= cnt and compare(items[right - 1], items[largest - 1]) > 0:
            largest = right
        if largest == i:
            return
        items[i - 1], items[largest - 1] = items[largest - 1], items[i - 1]
        i = largest


def heap_sort(items, compare):
    """Sort the mutable sequence ITEMS in place with a heap sort.

    COMPARE(a, b) returns a negative, zero or positive number when a is
    less than, equal to or greater than b.
    """
    cnt = len(items)
    for i in range(cnt // 2, 0, -1):
        _sift_down(items, i, cnt, compare)
    for i in range(cnt, 1, -1):
        items[0], items[i - 1] = items[i - 1], items[0]
        _sift_down(items, 1, i - 1, compare)


def binary_search(key, items, compare):
    """Return the index of an element of sorted ITEMS equal to KEY, or None.

    COMPARE(key, element) returns a strcmp-style result.  If several
    elements match, any one of their indexes may be returned.
    """
    first, last = 0, len(items)
    while first < last:
        middle = first + (last - first) // 2
        cmp = compare(key, items[middle])
        if cmp < 0:
            last = middle
        elif cmp > 0:
            first = middle + 1
        else:
            return middle
    return None