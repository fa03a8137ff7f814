"""
JSON encoding of hardware topologies.

A document is an object with a single `nodes` list. Each node holds an element
under `data` and the NodeIDs of its children under `desc` (omitted for leaves):

    {"nodes": [
        {"data": "machine", "desc": [1]},
        {"data": {"processing": {"kind": "package", "id": 0}}, "desc": [2]},
        {"data": {"cache": {"lvl": "L3", "li": 0,
                            "attrs": {"size": 33554432, "line": 64, "ways": 16}}}}
    ]}

Numbers are truncated to the width of their field on decode, never on encode.
"""

import json
import logging
import math
from typing import Any, Final

from domain_models.config import TopologyConfig
from domain_models.constants import ROOT_TOKEN, UINT32_MAX
from domain_models.element import Cache, CacheAttributes, Element, Processing, Root
from domain_models.manifest import TreeNode
from domain_models.types import CacheLevel, NodeID, ProcessingKind
from hwtopo.exceptions import (
    DecodeError,
    InvalidElementError,
    InvalidFieldError,
    MalformedDocumentError,
    MissingFieldError,
    UnknownElementError,
    UnknownKindError,
    UnknownLevelError,
)
from hwtopo.topology import Topology
from hwtopo.tree import Tree

logger = logging.getLogger(__name__)

_PROCESSING_KIND_SPELLINGS: Final[dict[str, ProcessingKind]] = {
    "package": ProcessingKind.PACKAGE,
    "numa_node": ProcessingKind.NUMA_NODE,
    "numanode": ProcessingKind.NUMA_NODE,
    "core": ProcessingKind.CORE,
    "thread": ProcessingKind.THREAD,
}


def parse_processing_kind(text: str) -> ProcessingKind:
    """
    Parse a processing kind, ignoring case.

    Both "numa_node" and "numanode" name a NUMA node.

    Raises:
        UnknownKindError: If the string names no processing kind.
    """
    kind = _PROCESSING_KIND_SPELLINGS.get(text.lower())
    if kind is None:
        msg = f"unknown processing kind: '{text}'"
        raise UnknownKindError(msg)
    return kind


def format_processing_kind(kind: ProcessingKind) -> str:
    """Canonical wire spelling of a processing kind, e.g. 'numanode'."""
    return kind.display_name.lower()


def parse_cache_level(text: str) -> CacheLevel:
    """
    Parse a cache level. Case-sensitive: only "L1" through "L5" are accepted.

    Raises:
        UnknownLevelError: If the string is not an exact level token.
    """
    try:
        return CacheLevel(text)
    except ValueError:
        msg = f"unknown cache level: '{text}'"
        raise UnknownLevelError(msg) from None


def format_cache_level(level: CacheLevel) -> str:
    """Canonical wire token of a cache level, e.g. 'L3'."""
    return level.value


def _field(content: dict[str, Any], owner: str, name: str) -> Any:
    if name not in content:
        msg = f"failed to decode {owner}: missing field '{name}'"
        raise MissingFieldError(msg)
    return content[name]


def _string_field(content: dict[str, Any], owner: str, name: str) -> str:
    value = _field(content, owner, name)
    if not isinstance(value, str):
        msg = f"failed to decode {owner}: field '{name}' must be a string, got {type(value).__name__}"
        raise InvalidFieldError(msg)
    return value


def _object_field(content: dict[str, Any], owner: str, name: str) -> dict[str, Any]:
    value = _field(content, owner, name)
    if not isinstance(value, dict):
        msg = f"failed to decode {owner}: field '{name}' must be an object, got {type(value).__name__}"
        raise InvalidFieldError(msg)
    return value


def _integer_field(
    content: dict[str, Any], owner: str, name: str, *, bits: int, signed: bool = False
) -> int:
    """
    Read a JSON number and truncate it into an integer of the given width.

    The fractional part is dropped toward zero, then the value wraps modulo 2**bits
    (two's complement when signed).
    """
    value = _field(content, owner, name)
    # bool is an int subclass, but JSON true/false are not numbers
    if isinstance(value, bool) or not isinstance(value, int | float):
        msg = f"failed to decode {owner}: field '{name}' must be a number, got {type(value).__name__}"
        raise InvalidFieldError(msg)
    if isinstance(value, float) and not math.isfinite(value):
        msg = f"failed to decode {owner}: field '{name}' must be finite, got {value}"
        raise InvalidFieldError(msg)

    wrapped = int(value) & ((1 << bits) - 1)
    if signed and wrapped >= 1 << (bits - 1):
        wrapped -= 1 << bits
    return wrapped


def _decode_processing(content: Any) -> Processing:
    if not isinstance(content, dict):
        msg = "failed to decode Processing: expected an object"
        raise InvalidFieldError(msg)
    kind_str = _string_field(content, "Processing", "kind")
    ident = _integer_field(content, "Processing", "id", bits=32)
    try:
        kind = parse_processing_kind(kind_str)
    except UnknownKindError as e:
        msg = f"failed to decode Processing: {e}"
        raise UnknownKindError(msg) from e
    return Processing(kind=kind, id=ident)


def _decode_cache(content: Any) -> Cache:
    if not isinstance(content, dict):
        msg = "failed to decode Cache: expected an object"
        raise InvalidFieldError(msg)
    level_str = _string_field(content, "Cache", "lvl")
    logical_index = _integer_field(content, "Cache", "li", bits=32)
    attrs = _object_field(content, "Cache", "attrs")
    attributes = CacheAttributes(
        size=_integer_field(attrs, "CacheAttributes", "size", bits=64),
        linesize=_integer_field(attrs, "CacheAttributes", "line", bits=32),
        associativity=_integer_field(attrs, "CacheAttributes", "ways", bits=32, signed=True),
    )
    try:
        level = parse_cache_level(level_str)
    except UnknownLevelError as e:
        msg = f"failed to decode Cache: {e}"
        raise UnknownLevelError(msg) from e
    return Cache(level=level, logical_index=logical_index, attributes=attributes)


def decode_element(value: Any) -> Element:
    """
    Decode one element from its parsed JSON value.

    Any string starting with "machine" (in any case) is the root. Otherwise the value
    must be an object with exactly one of the keys "processing" or "cache".

    Raises:
        DecodeError: A subclass naming what could not be decoded.
    """
    if isinstance(value, str):
        if value.lower().startswith(ROOT_TOKEN):
            return Root()
        msg = f"failed to decode Element: unrecognized token '{value}'"
        raise UnknownElementError(msg)

    if not isinstance(value, dict):
        msg = f"failed to decode Element: expected an object or '{ROOT_TOKEN}', got {type(value).__name__}"
        raise UnknownElementError(msg)

    has_processing = "processing" in value
    has_cache = "cache" in value
    if has_processing and has_cache:
        msg = "failed to decode Element: both 'processing' and 'cache' are present"
        raise UnknownElementError(msg)
    if has_processing:
        return _decode_processing(value["processing"])
    if has_cache:
        return _decode_cache(value["cache"])

    msg = "failed to decode Element: neither 'processing' nor 'cache' is present"
    raise UnknownElementError(msg)


def encode_element(element: Element) -> str | dict[str, Any]:
    """
    Encode one element into its JSON value.

    Raises:
        InvalidElementError: If `element` is not a Root, Processing or Cache.
    """
    if isinstance(element, Root):
        return ROOT_TOKEN
    if isinstance(element, Processing):
        return {
            "processing": {"kind": format_processing_kind(element.kind), "id": element.id}
        }
    if isinstance(element, Cache):
        return {"cache": element.model_dump(mode="json", by_alias=True)}

    msg = f"Invalid Element: {element!r}"
    logger.error(msg)
    raise InvalidElementError(msg)


def _decode_children(entry: dict[str, Any], index: int) -> tuple[NodeID, ...]:
    raw = entry.get("desc")
    if raw is None:
        return ()
    if not isinstance(raw, list):
        msg = f"failed to decode node {index}: field 'desc' must be a list, got {type(raw).__name__}"
        raise InvalidFieldError(msg)
    for child_id in raw:
        if isinstance(child_id, bool) or not isinstance(child_id, int):
            msg = f"failed to decode node {index}: child NodeID {child_id!r} is not an integer"
            raise InvalidFieldError(msg)
        if not 0 <= child_id <= UINT32_MAX:
            msg = f"failed to decode node {index}: child NodeID {child_id} is out of range"
            raise InvalidFieldError(msg)
    return tuple(raw)


def _decode_node(entry: Any, index: int) -> TreeNode:
    if not isinstance(entry, dict):
        msg = f"failed to decode node {index}: expected an object, got {type(entry).__name__}"
        raise InvalidFieldError(msg)
    if "data" not in entry:
        msg = f"failed to decode node {index}: missing field 'data'"
        raise MissingFieldError(msg)
    try:
        element = decode_element(entry["data"])
    except DecodeError as e:
        # Same error kind, located in the document
        raise type(e)(f"node {index}: {e}") from e
    return TreeNode(element=element, children=_decode_children(entry, index))


def decode_tree(document: Any) -> Topology:
    """
    Build a topology from an already parsed JSON document.

    A missing or null `nodes` list yields an empty topology.

    Raises:
        DecodeError: If the document, an element or the tree structure is invalid.
    """
    if not isinstance(document, dict):
        msg = f"Topology document must be a JSON object, got {type(document).__name__}"
        logger.error(msg)
        raise MalformedDocumentError(msg)

    raw_nodes = document.get("nodes")
    if raw_nodes is None:
        logger.warning("Topology document has no 'nodes'; decoding an empty topology.")
        raw_nodes = []
    if not isinstance(raw_nodes, list):
        msg = f"Field 'nodes' must be a list, got {type(raw_nodes).__name__}"
        logger.error(msg)
        raise MalformedDocumentError(msg)

    try:
        nodes = [_decode_node(entry, index) for index, entry in enumerate(raw_nodes)]
    except DecodeError as e:
        logger.error("Failed to decode topology: %s", e)
        raise
    return Topology(nodes)


def decode(data: bytes | str, config: TopologyConfig | None = None) -> Topology:
    """
    Decode a topology document.

    Args:
        data: The JSON document, as bytes (UTF-8/16/32) or text. The size limit
            applies to the UTF-8 encoding of text.
        config: Limits for the decoder. Defaults to TopologyConfig.default().

    Returns:
        The decoded Topology.

    Raises:
        MalformedDocumentError: If the document is too large, not valid JSON, nested
            too deeply or holds an integer too long to convert.
        DecodeError: If an element or the tree structure is invalid.
    """
    config = config or TopologyConfig.default()
    raw = data.encode("utf-8", errors="surrogatepass") if isinstance(data, str) else data
    size = len(raw)
    if size > config.max_document_bytes:
        msg = f"Topology document too large: {size} bytes (limit {config.max_document_bytes})."
        logger.error(msg)
        raise MalformedDocumentError(msg)

    try:
        document = json.loads(data)
    # JSONDecodeError, UnicodeDecodeError and the integer digit limit are all ValueErrors
    except (ValueError, RecursionError) as e:
        msg = f"Failed to parse topology document as JSON: {e}"
        logger.error(msg)
        raise MalformedDocumentError(msg) from e

    topology = decode_tree(document)
    logger.debug("Decoded topology with %d nodes", len(topology))
    return topology


def encode_tree(tree: Tree) -> dict[str, Any]:
    """Encode a tree into a JSON-compatible document."""
    nodes: list[dict[str, Any]] = []
    for node in tree.nodes:
        entry: dict[str, Any] = {"data": encode_element(node.element)}
        if node.children:
            entry["desc"] = list(node.children)
        nodes.append(entry)
    return {"nodes": nodes}


def encode(tree: Tree, config: TopologyConfig | None = None) -> bytes:
    """
    Encode a topology (or any Tree) into a UTF-8 JSON document.

    Raises:
        EncodeError: If a node holds something other than a topology element.
    """
    config = config or TopologyConfig.default()
    document = encode_tree(tree)
    encoded = json.dumps(document, indent=config.json_indent).encode("utf-8")
    logger.debug("Encoded topology with %d nodes into %d bytes", len(tree), len(encoded))
    return encoded
