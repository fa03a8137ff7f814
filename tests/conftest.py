import json
from typing import Any

import pytest

from domain_models.element import Cache, CacheAttributes, Processing, Root
from domain_models.manifest import TreeNode
from domain_models.types import CacheLevel, NodeID, ProcessingKind
from hwtopo.codec import decode
from hwtopo.topology import Topology
from tests.constants import EXAMPLE_DOCUMENT, MACHINE_DOCUMENT

# Shared factories for hand-built trees.


def root_node(*children: NodeID) -> TreeNode:
    return TreeNode(element=Root(), children=children)


def processing_node(kind: ProcessingKind, ident: int, *children: NodeID) -> TreeNode:
    return TreeNode(element=Processing(kind=kind, id=ident), children=children)


def cache_node(
    level: CacheLevel,
    logical_index: int,
    *children: NodeID,
    size: int = 32768,
    linesize: int = 64,
    associativity: int = 8,
) -> TreeNode:
    """Factory for cache nodes with typical L1 attributes by default."""
    return TreeNode(
        element=Cache(
            level=level,
            logical_index=logical_index,
            attributes=CacheAttributes(
                size=size, linesize=linesize, associativity=associativity
            ),
        ),
        children=children,
    )


def to_bytes(document: dict[str, Any]) -> bytes:
    return json.dumps(document).encode("utf-8")


@pytest.fixture
def example_topology() -> Topology:
    return decode(to_bytes(EXAMPLE_DOCUMENT))


@pytest.fixture
def machine_topology() -> Topology:
    return decode(to_bytes(MACHINE_DOCUMENT))
