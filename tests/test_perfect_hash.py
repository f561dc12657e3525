import pytest

from siaod.keyvalue import KeyValue
from siaod.perfect_hash import PerfectHash, hash_index

KEYS = ["0", "4", "10", "15", "20"]
VALUES = [1, "2", 3.0, 2, True]


@pytest.fixture
def table():
    return PerfectHash(KEYS, VALUES)


@pytest.mark.parametrize(
    "key, size, expected",
    [
        ("0", 16, 15),
        ("1", 16, 12),
        ("2", 16, 5),
        ("3", 16, 2),
        ("4", 16, 3),
        ("5", 16, 0),
        ("6", 16, 9),
        ("7", 16, 6),
        ("8", 16, 7),
        ("9", 16, 4),
        ("10", 16, 4),
        ("0", 4, 3),
        ("1", 4, 0),
        ("2", 4, 1),
        ("3", 4, 2),
        ("4", 4, 3),
    ],
)
def test_hash_index(key, size, expected):
    assert hash_index(key, size) == expected


@pytest.mark.parametrize(
    "key, expected",
    [
        ("0", True),
        ("4", True),
        ("10", True),
        ("20", True),
        ("15", True),
        ("16", False),
        ("17", False),
        ("2153", False),
    ],
)
def test_lookup(table, key, expected):
    assert table.lookup(key) is expected


@pytest.mark.parametrize(
    "key, expected",
    [("0", 1), ("4", "2"), ("10", 3.0), ("20", True), ("15", 2)],
)
def test_get_value(table, key, expected):
    assert table.get_value(key) == expected


def test_get_value_missing(table):
    with pytest.raises(KeyError):
        table.get_value("515")


def test_get_all_keys(table):
    assert sorted(table.keys()) == sorted(KEYS)


def test_get_all_values_match_keys(table):
    assert dict(zip(table.keys(), table.values())) == dict(zip(KEYS, VALUES))


def test_get_all_items(table):
    items = table.items()
    assert len(items) == 5
    assert all(isinstance(kv, KeyValue) for kv in items)
    assert {kv.key: kv.value for kv in items} == dict(zip(KEYS, VALUES))


def test_indexes_are_slots_of_keys(table):
    indexes = table.indexes()
    assert len(indexes) == 5
    assert indexes == sorted(indexes)
    assert sorted(hash_index(key, table.size) for key in KEYS) == indexes


def test_size_is_doubling_of_twice_the_count(table):
    size = table.size
    assert size >= 10
    assert size % 10 == 0
    assert ((size // 10) & (size // 10 - 1)) == 0


def test_with_item(table):
    new_table = table.with_item("abracadbra", "blablabla")
    assert len(new_table) == 6
    assert new_table.get_value("abracadbra") == "blablabla"
    for key, value in zip(KEYS, VALUES):
        assert new_table.get_value(key) == value
    assert not table.lookup("abracadbra")


def test_many_keys_all_retrievable():
    keys = [f"key{i}" for i in range(200)]
    table = PerfectHash(keys, range(200))
    assert len(table.indexes()) == 200
    for i, key in enumerate(keys):
        assert table.get_value(key) == i
    assert not table.lookup("non_existing_key")


def test_empty_table():
    table = PerfectHash([], [])
    assert table.keys() == []
    assert table.lookup("anything") is False
    with pytest.raises(KeyError):
        table.get_value("anything")


def test_length_mismatch():
    with pytest.raises(ValueError):
        PerfectHash(["a", "b"], [1])


def test_duplicate_keys_rejected():
    with pytest.raises(ValueError):
        PerfectHash(["a", "a"], [1, 2])


def test_with_existing_key_rejected(table):
    with pytest.raises(ValueError):
        table.with_item("0", 99)