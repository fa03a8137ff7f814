import logging
from pathlib import Path

from domain_models.config import TopologyConfig
from hwtopo.codec import decode
from hwtopo.topology import Topology

logger = logging.getLogger(__name__)


def read_document(filepath: str | Path, max_bytes: int | None = None) -> bytes:
    """
    Read a topology document from a file.

    Args:
        filepath: Path to the file.
        max_bytes: Reject files larger than this many bytes.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the path is not a regular file or the file is too large.
    """
    path = Path(filepath)

    if not path.exists():
        msg = f"File not found: {filepath}"
        raise FileNotFoundError(msg)

    if not path.is_file():
        msg = f"Not a file: {filepath}"
        raise ValueError(msg)

    # Check the size before reading anything into memory
    size = path.stat().st_size
    if max_bytes is not None and size > max_bytes:
        msg = f"File too large: {size} bytes. Limit is {max_bytes} bytes."
        raise ValueError(msg)

    logger.debug("Reading topology document %s (%d bytes)", path, size)
    return path.read_bytes()


def load_topology(filepath: str | Path, config: TopologyConfig | None = None) -> Topology:
    """Read and decode a topology document from a file."""
    config = config or TopologyConfig.default()
    return decode(read_document(filepath, config.max_document_bytes), config)
