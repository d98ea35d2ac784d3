import pathlib
import sys

sys.path.insert(0, str(pathlib.Path(__file__).resolve().parents[1] / "src"))

import itertools

import numpy as np
import pytest

from nodeunion.config import StoreConfig
from nodeunion.errors import (
    DuplicateNameError,
    MalformedConnectionError,
    PositionOutOfRangeError,
    UnknownNameError,
)
from nodeunion.union_find import PLACEHOLDER, BulkConnection, UnionFindClient

LETTERS = list("ABCDEFGHIJ")
PAIRS = [(4, 3), (3, 8), (6, 5), (9, 4), (2, 1), (8, 9), (5, 0), (7, 2), (6, 1), (1, 0), (6, 7)]


@pytest.fixture(params=[False, True], ids=["plain", "compressed"])
def client(request):
    return UnionFindClient(StoreConfig(path_compression=request.param))


def test_new_store_holds_only_placeholder():
    client = UnionFindClient()
    assert client.count() == 0
    assert client.disjoint_set_count() == 0
    assert client.parent[PLACEHOLDER] == PLACEHOLDER
    assert client.position_of("root") is None


def test_insert_assigns_increasing_positions(client):
    for name in "ABC":
        assert client.insert(name)
    assert [client.position_of(n) for n in "ABC"] == [1, 2, 3]
    assert client.count() == client.disjoint_set_count() == 3
    assert client.name_at(2) == "B"


def test_duplicate_insert_is_ignored(client):
    client.insert("A")
    assert not client.insert("A")
    assert client.count() == 1
    assert client.disjoint_set_count() == 1


def test_exists_and_unknown_lookup(client):
    client.insert("A")
    assert client.exists("A") and "A" in client
    assert not client.exists("foo")
    assert client.position_of("foo") is None
    assert client.find_root("foo") is None


def test_connect_scenario(client):
    client.insert_batch("ABC")
    assert client.disjoint_set_count() == 3
    assert client.connect("A", "B")
    assert client.disjoint_set_count() == 2
    assert client.connect("B", "C")
    assert client.disjoint_set_count() == 1
    assert not client.connect("B", "C")
    assert not client.connect("A", "A")
    assert client.disjoint_set_count() == 1
    assert client.component_size("C") == 3


def test_connected_and_not_connected(client):
    client.insert_batch("ABC")
    client.connect("A", "B")
    assert client.are_connected("A", "B")
    assert not client.are_connected("A", "C")
    assert not client.are_connected("A", "missing")
    assert not client.are_connected("missing", "missing")


def test_connect_unknown_name_raises(client):
    client.insert("A")
    with pytest.raises(UnknownNameError):
        client.connect("A", "nope")
    with pytest.raises(KeyError):
        client.component_size("nope")
    assert client.disjoint_set_count() == 1


def test_union_by_size_attaches_smaller_set(client):
    client.insert_batch("ABCD")
    client.connect("B", "C")
    client.connect("A", "B")
    root = client.find_root("B")
    assert root == client.position_of("B")
    assert client.find_root("A") == root


def test_tie_goes_under_first_argument(client):
    client.insert_batch("AB")
    client.connect("B", "A")
    assert client.find_root("A") == client.position_of("B")


def test_find_is_idempotent(client):
    client.insert_batch(LETTERS)
    client.connect_bulk(PAIRS)
    for name in LETTERS:
        assert client.find_root(name) == client.find_root(name)


def test_bulk_scenario(client):
    client.insert_batch(LETTERS)
    merges = client.connect_bulk([BulkConnection(a, b) for a, b in PAIRS])
    assert client.count() == 10
    assert client.disjoint_set_count() == 2
    assert merges == 8
    assert client.are_connected("D", "J")
    assert client.are_connected("A", "H")
    assert not client.are_connected("A", "D")


def test_bulk_accepts_numpy_array(client):
    client.insert_batch(LETTERS)
    client.connect_bulk(np.array(PAIRS, dtype=np.int64))
    assert client.disjoint_set_count() == 2


def test_bulk_empty_batch(client):
    client.insert_batch("AB")
    assert client.connect_bulk([]) == 0
    assert client.connect_bulk(np.zeros((0, 2), dtype=np.int64)) == 0
    assert client.disjoint_set_count() == 2


def test_bulk_out_of_range_keeps_prefix(client):
    client.insert_batch("ABC")
    with pytest.raises(PositionOutOfRangeError) as excinfo:
        client.connect_bulk([(0, 1), (2, 3), (0, 2)])
    assert excinfo.value.position == 4
    assert isinstance(excinfo.value, IndexError)
    assert client.are_connected("A", "B")
    assert not client.are_connected("A", "C")
    assert client.disjoint_set_count() == 2


def test_bulk_negative_index_rejected(client):
    client.insert_batch("AB")
    with pytest.raises(PositionOutOfRangeError):
        client.connect_bulk([(-1, 0)])


@pytest.mark.parametrize(
    "connections",
    [
        [(0, 2**70)],
        [(-(2**70), 1)],
        np.array([[0, 2**63]], dtype=np.uint64),
    ],
)
def test_bulk_huge_index_is_out_of_range(client, connections):
    client.insert_batch("AB")
    with pytest.raises(PositionOutOfRangeError):
        client.connect_bulk(connections)
    assert client.disjoint_set_count() == 2


def test_bulk_accepts_unsigned_array(client):
    client.insert_batch("ABC")
    assert client.connect_bulk(np.array([[0, 2]], dtype=np.uint32)) == 1
    assert client.are_connected("A", "C")


@pytest.mark.parametrize(
    "connections",
    [
        [(0, 1, 2)],
        [(0, 1), (1,)],
        [("a", "b")],
        np.array([[0.5, 1.0]]),
    ],
)
def test_bulk_malformed_input(connections):
    client = UnionFindClient()
    client.insert_batch("AB")
    with pytest.raises(MalformedConnectionError):
        client.connect_bulk(connections)


def test_find_root_at_bounds(client):
    client.insert_batch("AB")
    assert client.find_root_at(1) == 1
    with pytest.raises(PositionOutOfRangeError):
        client.find_root_at(PLACEHOLDER)
    with pytest.raises(PositionOutOfRangeError):
        client.find_root_at(3)


def test_connect_at_positions(client):
    client.insert_batch("ABC")
    assert client.connect_at(1, 3)
    assert client.are_connected("A", "C")
    assert not client.connect_at(3, 1)


def test_batch_duplicates_allowed_by_default():
    client = UnionFindClient()
    client.insert_batch(["A", "B", "A"])
    assert client.count() == 3
    assert client.disjoint_set_count() == 3
    assert client.position_of("A") == 3
    assert client.name_at(1) == "A"


def test_batch_duplicates_rejected_without_mutation():
    client = UnionFindClient(StoreConfig(batch_duplicates="reject"))
    client.insert("A")
    with pytest.raises(DuplicateNameError) as excinfo:
        client.insert_batch(["B", "A", "C", "C"])
    assert excinfo.value.names == ["A", "C"]
    assert client.count() == 1
    assert not client.exists("B")


def test_storage_grows_past_initial_capacity():
    client = UnionFindClient(StoreConfig(initial_capacity=1))
    names = [f"n{i}" for i in range(100)]
    client.insert_batch(names[:50])
    for name in names[50:]:
        client.insert(name)
    client.connect_bulk([(i, i + 1) for i in range(99)])
    assert client.count() == 100
    assert client.disjoint_set_count() == 1
    assert client.component_size("n0") == 100
    assert client.parent.shape[0] >= 101


def test_connectivity_is_symmetric_and_transitive():
    rng = np.random.default_rng(0)
    names = [str(i) for i in range(30)]
    client = UnionFindClient()
    client.insert_batch(names)
    pairs = rng.integers(0, 30, size=(20, 2))
    client.connect_bulk(pairs)
    for a, b, c in itertools.product(names[:12], repeat=3):
        assert client.are_connected(a, b) == client.are_connected(b, a)
        if client.are_connected(a, b) and client.are_connected(b, c):
            assert client.are_connected(a, c)
    roots = {client.find_root(n) for n in names}
    assert len(roots) == client.disjoint_set_count()
    assert sum(client.component_size(client.name_at(r)) for r in roots) == 30


def test_path_compression_gives_same_answers():
    rng = np.random.default_rng(1)
    pairs = rng.integers(0, 50, size=(40, 2))
    names = [f"x{i}" for i in range(50)]
    plain = UnionFindClient()
    compressed = UnionFindClient(StoreConfig(path_compression=True))
    for client in (plain, compressed):
        client.insert_batch(names)
        client.connect_bulk(pairs)
    assert plain.disjoint_set_count() == compressed.disjoint_set_count()
    for name in names:
        assert plain.find_root(name) == compressed.find_root(name)


def test_independent_instances():
    first = UnionFindClient()
    second = UnionFindClient()
    first.insert_batch("AB")
    first.connect("A", "B")
    assert second.count() == 0
    assert repr(first) == "UnionFindClient(nodes=2, sets=1)"


def test_iteration_yields_every_record():
    client = UnionFindClient()
    client.insert_batch(["A", "B", "A"])
    assert list(client) == ["A", "B", "A"]
    assert len(list(client)) == len(client)
