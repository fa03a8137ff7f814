"""
Custom exceptions for hwtopo.
"""


class TopologyError(Exception):
    """
    Base exception for hwtopo.
    All custom exceptions in the package inherit from this.
    """


class EmptyOrNilTreeError(TopologyError):
    """Raised when querying a tree that holds no nodes."""


class InvalidNodeIDError(TopologyError, IndexError):
    """Raised when a NodeID does not address a node of the tree."""

    def __init__(self, node_id: int, size: int) -> None:
        self.node_id = node_id
        self.size = size
        super().__init__(f"Invalid NodeID {node_id} (tree has {size} nodes)")


class NoParentError(TopologyError):
    """Raised when asking for the parent of the root element."""


class DecodeError(TopologyError, ValueError):
    """
    Raised when a topology document cannot be decoded.

    The subclasses tell apart malformed JSON, unrecognized elements,
    bad fields, unknown enumeration values and broken tree structure.
    """


class MalformedDocumentError(DecodeError):
    """Raised when the document is not valid JSON or has the wrong shape."""


class UnknownElementError(DecodeError):
    """Raised when an element is neither the root, a processing unit nor a cache."""


class InvalidFieldError(DecodeError):
    """Raised when a field of an element or node has the wrong type or range."""


class MissingFieldError(InvalidFieldError):
    """Raised when a required field is absent."""


class UnknownKindError(DecodeError):
    """Raised when a processing kind string is not recognized."""


class UnknownLevelError(DecodeError):
    """Raised when a cache level string is not recognized."""


class InvalidTreeError(DecodeError):
    """
    Raised when the nodes do not form a single tree rooted at node 0.

    This covers dangling or duplicated child references, a misplaced root
    and cycles detached from the root.
    """


class EncodeError(TopologyError):
    """Raised when a topology cannot be encoded."""


class InvalidElementError(EncodeError):
    """Raised when asked to encode something that is not a topology element."""
