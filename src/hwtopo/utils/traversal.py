from collections.abc import Iterator, Sequence

from domain_models.manifest import TreeNode
from domain_models.types import NodeID


def walk(nodes: Sequence[TreeNode], start: NodeID) -> Iterator[tuple[NodeID, int]]:
    """
    Traverse the subtree rooted at `start` depth-first, yielding (node_id, depth) pairs.

    Uses an explicit stack, so deep trees do not hit the recursion limit.
    Children are visited in stored order. Depth is relative to `start`.
    The caller guarantees that `start` is in range and that the nodes form a tree.
    """
    stack: list[tuple[NodeID, int]] = [(start, 0)]
    while stack:
        node_id, depth = stack.pop()
        yield node_id, depth
        # Push in reverse so the first child is popped first
        for child_id in reversed(nodes[node_id].children):
            stack.append((child_id, depth + 1))


def leaf_ids(nodes: Sequence[TreeNode], start: NodeID) -> list[NodeID]:
    """Collect the NodeIDs of every leaf in the subtree rooted at `start`."""
    return [node_id for node_id, _ in walk(nodes, start) if nodes[node_id].is_leaf]
