from hwtopo.topology import Topology
from hwtopo.utils.traversal import leaf_ids, walk


def test_walk_is_preorder(machine_topology: Topology) -> None:
    """Children are visited in stored order, parents before children."""
    visited = list(walk(machine_topology.nodes, 0))
    assert [node_id for node_id, _ in visited] == list(range(15))
    assert [depth for _, depth in visited] == [0, 1, 2, 3, 4, 5, 6, 7, 7, 3, 4, 5, 6, 7, 7]


def test_walk_depth_is_relative_to_start(machine_topology: Topology) -> None:
    assert list(walk(machine_topology.nodes, 9)) == [
        (9, 0),
        (10, 1),
        (11, 2),
        (12, 3),
        (13, 4),
        (14, 4),
    ]


def test_leaf_ids(machine_topology: Topology) -> None:
    assert leaf_ids(machine_topology.nodes, 3) == [7, 8]
    assert leaf_ids(machine_topology.nodes, 0) == [7, 8, 13, 14]
    assert leaf_ids(machine_topology.nodes, 14) == [14]
