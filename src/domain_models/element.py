from typing import Annotated, TypeAlias

from pydantic import BaseModel, ConfigDict, Field

from domain_models.constants import (
    INT32_MAX,
    INT32_MIN,
    ROOT_DISPLAY_NAME,
    UINT32_MAX,
    UINT64_MAX,
)
from domain_models.types import CacheLevel, ProcessingKind

UInt32 = Annotated[int, Field(ge=0, le=UINT32_MAX)]
UInt64 = Annotated[int, Field(ge=0, le=UINT64_MAX)]
Int32 = Annotated[int, Field(ge=INT32_MIN, le=INT32_MAX)]


class Root(BaseModel):
    """The machine itself. Only valid as node 0 of a topology tree."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    def __str__(self) -> str:
        return ROOT_DISPLAY_NAME


class Processing(BaseModel):
    """A computation unit (package, NUMA node, core or hardware thread)."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: ProcessingKind = Field(..., description="Type of computation unit.")
    id: UInt32 = Field(..., description="Index assigned by the operating system (not a NodeID).")

    def __str__(self) -> str:
        return f"{self.kind.display_name}({self.id})"


class CacheAttributes(BaseModel):
    """Detected characteristics of a cache."""

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    size: UInt64 = Field(..., description="Total size of the cache, in bytes.")
    linesize: UInt32 = Field(..., alias="line", description="Size of a cache line, in bytes.")
    # Signed so that probing tools can report unknown associativity as a negative value.
    associativity: Int32 = Field(..., alias="ways", description="Associativity, in ways.")

    def __str__(self) -> str:
        return f"{self.size}B/{self.linesize}B/{self.associativity}-way"


class Cache(BaseModel):
    """A data caching element (e.g. an L3 cache)."""

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    level: CacheLevel = Field(..., alias="lvl", description="Level of the cache.")
    logical_index: UInt32 = Field(
        ..., alias="li", description="Logical index assigned by the probing tool."
    )
    attributes: CacheAttributes = Field(..., alias="attrs", description="Cache characteristics.")

    def __str__(self) -> str:
        return f"Cache{{ {self.level}(L#{self.logical_index}), attrs: {self.attributes} }}"


# What a tree node is. Exactly one variant is ever active.
Element: TypeAlias = Root | Processing | Cache
