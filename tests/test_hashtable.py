import pytest

from crossway.hashtable import HashTable, hash_bytes, hash_int, hash_string


def _key_table():
    return HashTable(lambda item: hash_int(item[0]), lambda a, b: a[0] < b[0])


def test_hash_bytes_empty_is_fnv_basis():
    assert hash_bytes(b"") == 2166136261


def test_hash_string_matches_bytes():
    assert hash_string("crossroads") == hash_bytes(b"crossroads")


def test_hash_string_stops_at_nul():
    assert hash_string("ab\0cd") == hash_bytes(b"ab")


def test_hash_int_uses_little_endian_bytes():
    assert hash_int(0) == hash_bytes(b"\0\0\0\0")
    assert hash_int(-1) == hash_bytes(b"\xff\xff\xff\xff")
    assert hash_int(258) == hash_bytes(b"\x02\x01\x00\x00")


def test_hash_int_out_of_range():
    with pytest.raises(ValueError):
        hash_int(1 << 31)


def test_hash_values_fit_in_32_bits():
    for data in (b"a", b"hello world", bytes(range(256))):
        assert 0 <= hash_bytes(data) < (1 << 32)


def test_insert_and_find():
    table = _key_table()
    assert table.insert((1, "one")) is None
    assert table.insert((2, "two")) is None
    assert len(table) == 2
    assert table.find((1, None)) == (1, "one")
    assert table.find((3, None)) is None


def test_insert_returns_existing_without_replacing():
    table = _key_table()
    table.insert((5, "first"))
    assert table.insert((5, "second")) == (5, "first")
    assert table.find((5, None)) == (5, "first")
    assert len(table) == 1


def test_replace_returns_old_and_stores_new():
    table = _key_table()
    assert table.replace((7, "a")) is None
    assert table.replace((7, "b")) == (7, "a")
    assert table.find((7, None)) == (7, "b")
    assert len(table) == 1


def test_delete():
    table = _key_table()
    table.insert((1, "x"))
    assert table.delete((1, None)) == (1, "x")
    assert table.delete((1, None)) is None
    assert len(table) == 0


def test_iteration_yields_all_items():
    table = HashTable(hash_int)
    values = list(range(-20, 30))
    for v in values:
        table.insert(v)
    assert sorted(table) == values
    assert len(table) == len(values)


def test_bucket_count_grows_and_shrinks():
    table = HashTable(hash_int)
    assert table.bucket_count() == 4
    for v in range(200):
        table.insert(v)
        count = table.bucket_count()
        assert count >= 4 and count & (count - 1) == 0
    assert table.bucket_count() > 4
    for v in range(200):
        assert table.delete(v) == v
    assert table.bucket_count() == 4
    assert len(table) == 0


def test_items_found_after_rehash():
    table = HashTable(hash_string)
    words = [f"word{n}" for n in range(60)]
    for w in words:
        table.insert(w)
    assert all(table.find(w) == w for w in words)
    assert "missing" not in table


def test_clear_calls_destructor_for_each_item():
    table = HashTable(hash_int)
    for v in range(10):
        table.insert(v)
    destroyed = []
    table.clear(destroyed.append)
    assert sorted(destroyed) == list(range(10))
    assert len(table) == 0
    assert list(table) == []


def test_clear_without_destructor():
    table = HashTable(hash_int)
    table.insert(3)
    table.clear()
    assert table.find(3) is None


def test_apply_visits_every_item():
    table = HashTable(hash_int)
    for v in (4, 8, 15, 16, 23, 42):
        table.insert(v)
    seen = []
    table.apply(seen.append)
    assert sorted(seen) == [4, 8, 15, 16, 23, 42]


def test_colliding_hash_still_distinguishes_items():
    table = HashTable(lambda item: 0)
    for v in range(12):
        assert table.insert(v) is None
    assert sorted(table) == list(range(12))
    assert table.delete(6) == 6
    assert table.find(6) is None