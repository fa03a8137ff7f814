"""
hwtopo: hierarchical hardware topology of a physical machine.

A topology is decoded once from a JSON document and is read-only afterwards.
The package provides no synchronization; callers sharing a topology across
threads while replacing it must synchronize externally.
"""

from domain_models.config import TopologyConfig
from domain_models.element import Cache, CacheAttributes, Element, Processing, Root
from domain_models.manifest import TreeNode
from domain_models.types import CacheLevel, NodeID, ProcessingKind
from hwtopo.codec import (
    decode,
    decode_element,
    encode,
    encode_element,
    format_cache_level,
    format_processing_kind,
    parse_cache_level,
    parse_processing_kind,
)
from hwtopo.exceptions import (
    DecodeError,
    EmptyOrNilTreeError,
    EncodeError,
    InvalidElementError,
    InvalidFieldError,
    InvalidNodeIDError,
    InvalidTreeError,
    MalformedDocumentError,
    MissingFieldError,
    NoParentError,
    TopologyError,
    UnknownElementError,
    UnknownKindError,
    UnknownLevelError,
)
from hwtopo.topology import Topology
from hwtopo.tree import Tree

__all__ = [
    "Cache",
    "CacheAttributes",
    "CacheLevel",
    "DecodeError",
    "Element",
    "EmptyOrNilTreeError",
    "EncodeError",
    "InvalidElementError",
    "InvalidFieldError",
    "InvalidNodeIDError",
    "InvalidTreeError",
    "MalformedDocumentError",
    "MissingFieldError",
    "NoParentError",
    "NodeID",
    "Processing",
    "ProcessingKind",
    "Root",
    "Topology",
    "TopologyConfig",
    "TopologyError",
    "Tree",
    "TreeNode",
    "UnknownElementError",
    "UnknownKindError",
    "UnknownLevelError",
    "decode",
    "decode_element",
    "encode",
    "encode_element",
    "format_cache_level",
    "format_processing_kind",
    "parse_cache_level",
    "parse_processing_kind",
]
