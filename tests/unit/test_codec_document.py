import json
import logging
from typing import Any

import pytest

import hwtopo
from domain_models.config import TopologyConfig
from domain_models.element import Processing, Root
from domain_models.types import ProcessingKind
from hwtopo.codec import decode, decode_tree, encode
from hwtopo.exceptions import (
    InvalidFieldError,
    InvalidTreeError,
    MalformedDocumentError,
    MissingFieldError,
    UnknownElementError,
    UnknownKindError,
)
from hwtopo.topology import Topology
from hwtopo.tree import Tree
from tests.conftest import to_bytes
from tests.constants import EXAMPLE_DOCUMENT


def _document(*nodes: Any) -> dict[str, Any]:
    return {"nodes": list(nodes)}


def test_decode_bytes_and_text() -> None:
    from_bytes = decode(to_bytes(EXAMPLE_DOCUMENT))
    from_text = decode(json.dumps(EXAMPLE_DOCUMENT))
    assert isinstance(from_bytes, Topology)
    assert from_bytes == from_text
    assert from_bytes.size() == 4
    assert from_bytes.root() == Root()
    assert from_bytes.get(2) == Processing(kind=ProcessingKind.NUMA_NODE, id=1)


def test_decode_malformed_json() -> None:
    with pytest.raises(MalformedDocumentError, match="as JSON"):
        decode(b'{"nodes": [')


def test_decode_invalid_utf8() -> None:
    with pytest.raises(MalformedDocumentError):
        decode(b'{"nodes": "\xff"}')


@pytest.mark.parametrize("document", [[], "machine", None, 3])
def test_decode_requires_an_object(document: Any) -> None:
    with pytest.raises(MalformedDocumentError, match="must be a JSON object"):
        decode(json.dumps(document))


def test_decode_nodes_must_be_a_list() -> None:
    with pytest.raises(MalformedDocumentError, match="'nodes' must be a list"):
        decode(json.dumps({"nodes": {"0": "machine"}}))


@pytest.mark.parametrize("document", [{}, {"nodes": None}, {"nodes": []}])
def test_decode_without_nodes_is_empty(document: dict[str, Any]) -> None:
    topology = decode(json.dumps(document))
    assert topology.is_empty()


def test_decode_too_large() -> None:
    config = TopologyConfig(max_document_bytes=10)
    with pytest.raises(MalformedDocumentError, match="too large"):
        decode(to_bytes(EXAMPLE_DOCUMENT), config)


def test_decode_too_large_counts_text_in_bytes() -> None:
    text = json.dumps({"nodes": [{"data": "machine"}]}, ensure_ascii=False)
    padded = text[:-1] + ', "note": "' + "é" * 40 + '"}'
    # 40 characters, 80 bytes in UTF-8
    config = TopologyConfig(max_document_bytes=len(padded) + 10)
    with pytest.raises(MalformedDocumentError, match="too large"):
        decode(padded, config)


def test_decode_deeply_nested_document() -> None:
    depth = 200_000
    data = b'{"nodes": [{"data": ' + b"[" * depth + b"]" * depth + b"}]}"
    with pytest.raises(MalformedDocumentError, match="as JSON"):
        decode(data)


def test_decode_integer_too_long_to_convert() -> None:
    digits = b"9" * 5000
    data = b'{"nodes": [{"data": {"processing": {"kind": "core", "id": ' + digits + b"}}}]}"
    with pytest.raises(MalformedDocumentError, match="as JSON"):
        decode(data)


def test_decode_node_must_be_object() -> None:
    with pytest.raises(InvalidFieldError, match="node 1"):
        decode_tree(_document({"data": "machine", "desc": [1]}, "core"))


def test_decode_node_requires_data() -> None:
    with pytest.raises(MissingFieldError, match="'data'"):
        decode_tree(_document({"data": "machine", "desc": [1]}, {"desc": []}))


def test_decode_errors_name_the_node() -> None:
    document = _document(
        {"data": "machine", "desc": [1]},
        {"data": {"processing": {"kind": "bogus", "id": 0}}},
    )
    with pytest.raises(UnknownKindError, match="node 1: failed to decode Processing"):
        decode_tree(document)


def test_decode_element_without_known_key() -> None:
    with pytest.raises(UnknownElementError, match="node 0"):
        decode_tree(_document({"data": {"memory": {}}}))


@pytest.mark.parametrize("desc", [{"0": 1}, "1", 1])
def test_decode_desc_must_be_a_list(desc: Any) -> None:
    with pytest.raises(InvalidFieldError, match="'desc' must be a list"):
        decode_tree(_document({"data": "machine", "desc": desc}))


@pytest.mark.parametrize("child", [1.0, True, "1", None, -1, 2**32])
def test_decode_desc_entries_must_be_node_ids(child: Any) -> None:
    with pytest.raises(InvalidFieldError, match="child NodeID"):
        decode_tree(_document({"data": "machine", "desc": [child]}, {"data": "machine"}))


def test_decode_null_desc_is_a_leaf() -> None:
    topology = decode_tree(
        _document(
            {"data": "machine", "desc": [1]},
            {"data": {"processing": {"kind": "core", "id": 0}}, "desc": None},
        )
    )
    assert topology.immediate_descendant_ids(1) == []


def test_decode_root_must_be_first() -> None:
    document = _document({"data": {"processing": {"kind": "package", "id": 0}}})
    with pytest.raises(InvalidTreeError, match="Node 0 must be the machine root"):
        decode_tree(document)


def test_decode_root_only_once() -> None:
    document = _document({"data": "machine", "desc": [1]}, {"data": "machine"})
    with pytest.raises(InvalidTreeError, match="only valid at node 0"):
        decode_tree(document)


def test_decode_dangling_child() -> None:
    with pytest.raises(InvalidTreeError, match="lists child 3"):
        decode_tree(_document({"data": "machine", "desc": [3]}))


def test_decode_logs_rejected_documents(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.ERROR, logger="hwtopo.codec"):
        with pytest.raises(MalformedDocumentError):
            decode(b"not json")
    assert "Failed to parse topology document" in caplog.text


def test_encode_compact(example_topology: Topology) -> None:
    encoded = encode(example_topology)
    assert b"\n" not in encoded
    assert json.loads(encoded) == EXAMPLE_DOCUMENT


def test_encode_omits_empty_children(example_topology: Topology) -> None:
    nodes = json.loads(encode(example_topology))["nodes"]
    assert nodes[0]["desc"] == [1, 2]
    assert "desc" not in nodes[2]
    assert "desc" not in nodes[3]


def test_encode_indented(example_topology: Topology) -> None:
    encoded = encode(example_topology, TopologyConfig(json_indent=2))
    assert encoded.startswith(b'{\n  "nodes": [')
    assert json.loads(encoded) == EXAMPLE_DOCUMENT


def test_encode_empty_tree() -> None:
    assert json.loads(encode(Tree())) == {"nodes": []}


def test_encode_does_not_modify_the_tree(example_topology: Topology) -> None:
    before = example_topology.nodes
    encode(example_topology)
    assert example_topology.nodes is before


def test_decode_errors_are_exported_from_the_package() -> None:
    for name in (
        "MalformedDocumentError",
        "UnknownElementError",
        "InvalidFieldError",
        "MissingFieldError",
        "UnknownKindError",
        "UnknownLevelError",
        "InvalidTreeError",
    ):
        assert name in hwtopo.__all__
        assert issubclass(getattr(hwtopo, name), hwtopo.DecodeError)
