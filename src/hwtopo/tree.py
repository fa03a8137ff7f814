import logging
from collections.abc import Iterable, Sequence

from domain_models.element import Element, Root
from domain_models.manifest import TreeNode
from domain_models.types import NodeID
from hwtopo.exceptions import (
    EmptyOrNilTreeError,
    InvalidNodeIDError,
    InvalidTreeError,
    NoParentError,
)
from hwtopo.utils.traversal import leaf_ids, walk

logger = logging.getLogger(__name__)


def _index_parents(nodes: Sequence[TreeNode]) -> tuple[NodeID | None, ...]:
    """
    Build the parent of every node, checking that the nodes form a single tree.

    Node 0 must be the root element and nobody's child; every other node must have
    exactly one parent and be reachable from node 0.

    Raises:
        InvalidTreeError: If any of the above does not hold.
    """
    if not nodes:
        return ()

    if not isinstance(nodes[0].element, Root):
        msg = f"Node 0 must be the machine root, found {nodes[0].element}."
        logger.error(msg)
        raise InvalidTreeError(msg)

    parents: list[NodeID | None] = [None] * len(nodes)
    for parent_id, node in enumerate(nodes):
        if parent_id and isinstance(node.element, Root):
            msg = f"Node {parent_id}: the machine root is only valid at node 0."
            logger.error(msg)
            raise InvalidTreeError(msg)
        for child_id in node.children:
            if child_id >= len(nodes):
                msg = f"Node {parent_id} lists child {child_id}, but the tree has {len(nodes)} nodes."
                logger.error(msg)
                raise InvalidTreeError(msg)
            if child_id == 0:
                msg = f"Node {parent_id} lists the root (node 0) as a child."
                logger.error(msg)
                raise InvalidTreeError(msg)
            previous = parents[child_id]
            if previous is not None:
                msg = f"Node {child_id} is listed as a child by both node {previous} and node {parent_id}."
                logger.error(msg)
                raise InvalidTreeError(msg)
            parents[child_id] = parent_id

    # Every node now has at most one parent, so a walk from the root visits each
    # reachable node once. Anything left over sits on a cycle detached from the root.
    reachable = sum(1 for _ in walk(nodes, 0))
    if reachable != len(nodes):
        msg = f"Only {reachable} of {len(nodes)} nodes are reachable from the root."
        logger.error(msg)
        raise InvalidTreeError(msg)

    return tuple(parents)


class Tree:
    """
    The hierarchy of a machine's hardware topology.

    Nodes are addressed by their NodeID, i.e. their position in `nodes`; node 0 is
    always the root. The tree is immutable after construction: the parent index is
    built once, and no method modifies the nodes. Concurrent readers are safe once
    construction has completed; replacing a tree is done by building a new one.
    """

    __slots__ = ("_nodes", "_parents")

    def __init__(self, nodes: Iterable[TreeNode] = ()) -> None:
        """
        Args:
            nodes: The tree nodes, indexed by NodeID. May be empty.

        Raises:
            InvalidTreeError: If the nodes do not form a single tree rooted at node 0.
        """
        self._nodes: tuple[TreeNode, ...] = tuple(nodes)
        self._parents = _index_parents(self._nodes)

    @property
    def nodes(self) -> tuple[TreeNode, ...]:
        """All nodes of the tree, indexed by NodeID."""
        return self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Tree):
            return NotImplemented
        return self._nodes == other._nodes

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{type(self).__name__}(nodes={len(self._nodes)})"

    def size(self) -> int:
        """Number of elements stored in the tree. Never raises."""
        return len(self._nodes)

    def is_empty(self) -> bool:
        """True if the tree holds no elements. Never raises."""
        return not self._nodes

    def _node(self, node_id: NodeID) -> TreeNode:
        """Return the node stored under `node_id`, or raise if there is none."""
        if not self._nodes:
            msg = "Tree is empty"
            raise EmptyOrNilTreeError(msg)
        if node_id < 0 or node_id >= len(self._nodes):
            raise InvalidNodeIDError(node_id, len(self._nodes))
        return self._nodes[node_id]

    def root(self) -> Element:
        """The element at the root of the tree (the machine)."""
        return self._node(0).element

    def get(self, node_id: NodeID) -> Element:
        """The element stored under `node_id`."""
        return self._node(node_id).element

    def immediate_descendant_ids(self, node_id: NodeID) -> list[NodeID]:
        """NodeIDs of the children of `node_id`, in stored order."""
        return list(self._node(node_id).children)

    def immediate_descendants(self, node_id: NodeID) -> list[Element]:
        """Elements of the children of `node_id`, in stored order."""
        return [self._nodes[child_id].element for child_id in self._node(node_id).children]

    def leaf_descendant_ids(self, node_id: NodeID) -> list[NodeID]:
        """
        NodeIDs of the leaves in the subtree rooted at `node_id`.

        Collected depth-first; every leaf appears exactly once. A leaf is its own
        only leaf descendant.
        """
        self._node(node_id)
        return leaf_ids(self._nodes, node_id)

    def leaf_descendants(self, node_id: NodeID) -> list[Element]:
        """Elements of the leaves in the subtree rooted at `node_id`."""
        return [self._nodes[leaf_id].element for leaf_id in self.leaf_descendant_ids(node_id)]

    def parent_id(self, node_id: NodeID) -> NodeID:
        """
        NodeID of the parent of `node_id`.

        Raises:
            NoParentError: If `node_id` is the root.
        """
        self._node(node_id)
        parent = self._parents[node_id]
        if parent is None:
            msg = "Root element does not have a parent"
            raise NoParentError(msg)
        return parent

    def parent(self, node_id: NodeID) -> Element:
        """Element of the parent of `node_id`."""
        return self._nodes[self.parent_id(node_id)].element

    def ancestor_ids(self, node_id: NodeID) -> list[NodeID]:
        """
        NodeIDs of the ancestors of `node_id`, immediate parent first and root last.

        `node_id` itself is not included; the root has no ancestors.
        """
        self._node(node_id)
        ancestors: list[NodeID] = []
        parent = self._parents[node_id]
        while parent is not None:
            ancestors.append(parent)
            parent = self._parents[parent]
        return ancestors

    def ancestors(self, node_id: NodeID) -> list[Element]:
        """Elements of the ancestors of `node_id`, immediate parent first and root last."""
        return [self._nodes[ancestor_id].element for ancestor_id in self.ancestor_ids(node_id)]
