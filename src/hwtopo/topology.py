from collections import Counter
from typing import Self

from domain_models.element import Cache, Processing
from domain_models.manifest import NodeReport, TopologySummary
from domain_models.types import CacheLevel, NodeID, ProcessingKind
from hwtopo.exceptions import NoParentError
from hwtopo.tree import Tree


class Topology(Tree):
    """
    The hierarchical hardware topology of a physical machine.

    A Tree with convenience filters by processing kind and cache level. Filters
    return NodeIDs in ascending order and an empty list when nothing matches.
    """

    __slots__ = ()

    @classmethod
    def from_tree(cls, tree: Tree) -> Self:
        """Wrap the nodes of an existing tree."""
        if isinstance(tree, cls):
            return tree
        return cls(tree.nodes)

    def processing_ids(self, kind: ProcessingKind) -> list[NodeID]:
        """NodeIDs of all processing units of the given kind."""
        return [
            node_id
            for node_id, node in enumerate(self.nodes)
            if isinstance(node.element, Processing) and node.element.kind == kind
        ]

    def cache_ids(self, level: CacheLevel) -> list[NodeID]:
        """NodeIDs of all caches of the given level."""
        return [
            node_id
            for node_id, node in enumerate(self.nodes)
            if isinstance(node.element, Cache) and node.element.level == level
        ]

    def packages(self) -> list[NodeID]:
        return self.processing_ids(ProcessingKind.PACKAGE)

    def numa_nodes(self) -> list[NodeID]:
        return self.processing_ids(ProcessingKind.NUMA_NODE)

    def cores(self) -> list[NodeID]:
        return self.processing_ids(ProcessingKind.CORE)

    def threads(self) -> list[NodeID]:
        return self.processing_ids(ProcessingKind.THREAD)

    def l1_caches(self) -> list[NodeID]:
        return self.cache_ids(CacheLevel.L1)

    def l2_caches(self) -> list[NodeID]:
        return self.cache_ids(CacheLevel.L2)

    def l3_caches(self) -> list[NodeID]:
        return self.cache_ids(CacheLevel.L3)

    def l4_caches(self) -> list[NodeID]:
        return self.cache_ids(CacheLevel.L4)

    def l5_caches(self) -> list[NodeID]:
        return self.cache_ids(CacheLevel.L5)

    def summary(self) -> TopologySummary:
        """Count the processing units per kind and the caches per level."""
        processing: Counter[ProcessingKind] = Counter()
        caches: Counter[CacheLevel] = Counter()
        for node in self.nodes:
            if isinstance(node.element, Processing):
                processing[node.element.kind] += 1
            elif isinstance(node.element, Cache):
                caches[node.element.level] += 1
        return TopologySummary(
            node_count=len(self.nodes),
            processing={kind: processing[kind] for kind in ProcessingKind if processing[kind]},
            caches={level: caches[level] for level in CacheLevel if caches[level]},
        )

    def describe(self, node_id: NodeID) -> NodeReport:
        """Resolve the relatives of `node_id` into a single report."""
        element = self.get(node_id)
        try:
            parent_id: NodeID | None = self.parent_id(node_id)
        except NoParentError:
            parent_id = None
        return NodeReport(
            node_id=node_id,
            element=str(element),
            parent_id=parent_id,
            children=self.immediate_descendant_ids(node_id),
            leaves=self.leaf_descendant_ids(node_id),
            ancestors=self.ancestor_ids(node_id),
        )
