"""A chained hash table that keeps about two elements per bucket.

Elements are compared with a LESS callable: two elements are equal when
neither is less than the other.  The bucket count is always a power of two
and never below four.  The sample hash functions use 32-bit FNV-1 hashing.
"""

import operator

_FNV_32_PRIME = 16777619
_FNV_32_BASIS = 2166136261
_MASK_32 = 0xFFFFFFFF

_INT_MIN = -(1 << 31)
_INT_MAX = (1 << 31) - 1

_MIN_BUCKETS = 4
_BEST_ELEMS_PER_BUCKET = 2


def hash_bytes(data):
    """Return the 32-bit FNV-1 hash of the bytes in DATA."""
    value = _FNV_32_BASIS
    for byte in bytes(data):
        value = ((value * _FNV_32_PRIME) & _MASK_32) ^ byte
    return value


def hash_string(s):
    """Return the hash of string S up to its first NUL character."""
    return hash_bytes(s.split("\0", 1)[0].encode("utf-8"))


def hash_int(i):
    """Return the hash of the 32-bit signed integer I."""
    if not _INT_MIN <= i <= _INT_MAX:
        raise ValueError(f"integer must fit in 32 signed bits, got {i}")
    return hash_bytes(i.to_bytes(4, "little", signed=True))


def _ideal_bucket_count(elem_cnt):
    count = max(elem_cnt // _BEST_ELEMS_PER_BUCKET, _MIN_BUCKETS)
    # Round down to a power of two.
    return 1 << (count.bit_length() - 1)


class HashTable:
    """A set of items located by HASH_FUNC and compared with LESS."""

    def __init__(self, hash_func, less=operator.lt):
        self._hash = hash_func
        self._less = less
        self._buckets = [[] for _ in range(_MIN_BUCKETS)]
        self._elem_cnt = 0

    def __repr__(self):
        return f"HashTable({list(self)!r})"

    def _equal(self, a, b):
        return not self._less(a, b) and not self._less(b, a)

    def _bucket(self, item):
        return self._buckets[self._hash(item) & (len(self._buckets) - 1)]

    def _find_index(self, bucket, item):
        return next(
            (k for k, other in enumerate(bucket) if self._equal(other, item)), None
        )

    def _rehash(self):
        new_cnt = _ideal_bucket_count(self._elem_cnt)
        if new_cnt == len(self._buckets):
            return
        old_buckets = self._buckets
        self._buckets = [[] for _ in range(new_cnt)]
        for bucket in old_buckets:
            for item in bucket:
                self._bucket(item).insert(0, item)

    def insert(self, item):
        """Add ITEM unless an equal item is present; return that item or None."""
        bucket = self._bucket(item)
        idx = self._find_index(bucket, item)
        old = None
        if idx is None:
            bucket.insert(0, item)
            self._elem_cnt += 1
        else:
            old = bucket[idx]
        self._rehash()
        return old

    def replace(self, item):
        """Add ITEM, replacing any equal item, which is returned (or None)."""
        bucket = self._bucket(item)
        idx = self._find_index(bucket, item)
        old = None
        if idx is not None:
            old = bucket.pop(idx)
            self._elem_cnt -= 1
        bucket.insert(0, item)
        self._elem_cnt += 1
        self._rehash()
        return old

    def find(self, item):
        """Return the stored item equal to ITEM, or None."""
        bucket = self._bucket(item)
        idx = self._find_index(bucket, item)
        return None if idx is None else bucket[idx]

    def delete(self, item):
        """Remove and return the stored item equal to ITEM, or None."""
        bucket = self._bucket(item)
        idx = self._find_index(bucket, item)
        if idx is None:
            return None
        found = bucket.pop(idx)
        self._elem_cnt -= 1
        self._rehash()
        return found

    def clear(self, destructor=None):
        """Remove every item, calling DESTRUCTOR on each one if given."""
        for bucket in self._buckets:
            if destructor is not None:
                while bucket:
                    destructor(bucket.pop(0))
            bucket.clear()
        self._elem_cnt = 0

    def apply(self, action):
        """Call ACTION on every item, in arbitrary order."""
        if action is None:
            raise ValueError("action must be callable")
        for item in list(self):
            action(item)

    def __iter__(self):
        for bucket in self._buckets:
            yield from bucket

    def __len__(self):
        return self._elem_cnt

    def __contains__(self, item):
        return self.find(item) is not None

    def bucket_count(self):
        """The current number of buckets."""
        return len(self._buckets)