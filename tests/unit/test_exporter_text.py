import pytest

from hwtopo.exceptions import EmptyOrNilTreeError, InvalidNodeIDError
from hwtopo.exporters.text import render_tree, stream_tree
from hwtopo.topology import Topology
from hwtopo.tree import Tree


def test_render_tree(example_topology: Topology) -> None:
    assert render_tree(example_topology) == (
        "[0] Machine\n"
        "  [1] NUMANode(0)\n"
        "    [3] Core(0)\n"
        "  [2] NUMANode(1)\n"
    )


def test_render_subtree(machine_topology: Topology) -> None:
    assert render_tree(machine_topology, 10) == (
        "[10] Cache{ L2(L#1), attrs: 1048576B/64B/8-way }\n"
        "  [11] Cache{ L1(L#1), attrs: 32768B/64B/8-way }\n"
        "    [12] Core(1)\n"
        "      [13] Thread(2)\n"
        "      [14] Thread(3)\n"
    )


def test_stream_tree_yields_one_line_per_node(machine_topology: Topology) -> None:
    lines = list(stream_tree(machine_topology))
    assert len(lines) == len(machine_topology)
    assert all(line.endswith("\n") for line in lines)


def test_render_tree_errors(example_topology: Topology) -> None:
    with pytest.raises(InvalidNodeIDError):
        render_tree(example_topology, 4)
    with pytest.raises(EmptyOrNilTreeError):
        render_tree(Tree())
