from collections.abc import Iterator

from domain_models.constants import TREE_INDENT
from domain_models.types import NodeID
from hwtopo.tree import Tree
from hwtopo.utils.traversal import walk


def _format_node(tree: Tree, node_id: NodeID, depth: int) -> str:
    """Format one node as an indented outline line."""
    return f"{TREE_INDENT * depth}[{node_id}] {tree.nodes[node_id].element}\n"


def stream_tree(tree: Tree, node_id: NodeID = 0) -> Iterator[str]:
    """
    Generator that yields the outline of the subtree rooted at `node_id`, line by line.

    Children follow their parent one indentation level deeper, in stored order.

    Raises:
        EmptyOrNilTreeError: If the tree is empty.
        InvalidNodeIDError: If `node_id` is out of range.
    """
    # Validate before the first line is produced
    tree.get(node_id)
    for current_id, depth in walk(tree.nodes, node_id):
        yield _format_node(tree, current_id, depth)


def render_tree(tree: Tree, node_id: NodeID = 0) -> str:
    """Render the outline of the subtree rooted at `node_id` as a single string."""
    return "".join(stream_tree(tree, node_id))
