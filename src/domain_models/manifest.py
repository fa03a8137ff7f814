from pydantic import BaseModel, ConfigDict, Field

from domain_models.element import Element, UInt32
from domain_models.types import CacheLevel, NodeID, ProcessingKind


class TreeNode(BaseModel):
    """An Element of the topology along with the NodeIDs of its children."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    element: Element = Field(..., description="The hardware topology element stored in this node.")
    children: tuple[UInt32, ...] = Field(
        default=(), description="NodeIDs of the immediate descendants, in stored order."
    )

    @property
    def is_leaf(self) -> bool:
        return not self.children


class NodeReport(BaseModel):
    """Everything the tree knows about one node, resolved for display."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    node_id: NodeID = Field(..., ge=0, description="The node being described.")
    element: str = Field(..., description="String rendering of the node's element.")
    parent_id: NodeID | None = Field(default=None, description="Parent NodeID; None for the root.")
    children: list[NodeID] = Field(default_factory=list, description="Immediate descendants.")
    leaves: list[NodeID] = Field(default_factory=list, description="Leaf descendants.")
    ancestors: list[NodeID] = Field(
        default_factory=list, description="Ancestors, immediate parent first and root last."
    )


class TopologySummary(BaseModel):
    """Element counts of a topology."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    node_count: int = Field(..., ge=0, description="Total number of nodes.")
    processing: dict[ProcessingKind, int] = Field(
        default_factory=dict, description="Number of processing units per kind."
    )
    caches: dict[CacheLevel, int] = Field(
        default_factory=dict, description="Number of caches per level."
    )
