from enum import StrEnum
from typing import TypeAlias

# NodeID is the position of a node in the tree's node list.
# It doubles as a stable identifier and is never renumbered.
NodeID: TypeAlias = int


class ProcessingKind(StrEnum):
    """
    Kinds of computation units in the hardware topology.
    Values are the canonical wire spellings.
    """

    PACKAGE = "package"  # What goes into a physical socket
    NUMA_NODE = "numanode"  # Processors around directly attached memory
    CORE = "core"  # Physical core
    THREAD = "thread"  # Hardware thread (logical core)

    @property
    def display_name(self) -> str:
        """Human-readable name, e.g. 'NUMANode'."""
        return _KIND_DISPLAY_NAMES[self]


_KIND_DISPLAY_NAMES: dict[ProcessingKind, str] = {
    ProcessingKind.PACKAGE: "Package",
    ProcessingKind.NUMA_NODE: "NUMANode",
    ProcessingKind.CORE: "Core",
    ProcessingKind.THREAD: "Thread",
}


class CacheLevel(StrEnum):
    """Levels of data caches. Values are the exact wire tokens."""

    L1 = "L1"
    L2 = "L2"
    L3 = "L3"
    L4 = "L4"
    L5 = "L5"

    @property
    def display_name(self) -> str:
        return self.value
