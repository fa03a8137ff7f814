"""
Core domain models and configuration schemas for hwtopo.
This package contains the Pydantic definitions of topology elements and tree nodes.
"""

from .config import TopologyConfig
from .element import Cache, CacheAttributes, Element, Processing, Root
from .manifest import NodeReport, TopologySummary, TreeNode
from .types import CacheLevel, NodeID, ProcessingKind

__all__ = [
    "Cache",
    "CacheAttributes",
    "CacheLevel",
    "Element",
    "NodeID",
    "NodeReport",
    "Processing",
    "ProcessingKind",
    "Root",
    "TopologyConfig",
    "TopologySummary",
    "TreeNode",
]
