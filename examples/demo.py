"""Small demonstration of the bulk and name-based nodeunion surfaces."""

from __future__ import annotations

import pathlib

from nodeunion import UnionFindClient
from nodeunion.io import read_connections, read_names


def bulk_load(data_dir: pathlib.Path) -> UnionFindClient:
    client = UnionFindClient()
    client.insert_batch(read_names(data_dir / "nodes.txt"))
    client.connect_bulk(read_connections(data_dir / "connections.txt"))
    return client


def main() -> None:
    data_dir = pathlib.Path(__file__).resolve().parent / "data"
    client = bulk_load(data_dir)
    print(f"Bulk load: {client.count()} nodes in {client.disjoint_set_count()} sets")

    for a, b in [("A", "B"), ("A", "D"), ("D", "E")]:
        print(f"  {a} ~ {b}: {client.are_connected(a, b)}")

    client = UnionFindClient()
    for name in ("alice", "bob", "carol"):
        client.insert(name)
    client.connect("alice", "bob")
    client.connect("bob", "carol")
    print(f"Interactive: {client.disjoint_set_count()} set(s), alice's group has "
          f"{client.component_size('alice')} members")


if __name__ == "__main__":
    main()
