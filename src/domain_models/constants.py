# Integer widths of the numeric fields carried by topology elements.
UINT32_MAX = 2**32 - 1
UINT64_MAX = 2**64 - 1
INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1

# Wire token of the root element and its display name.
ROOT_TOKEN = "machine"
ROOT_DISPLAY_NAME = "Machine"

# Configuration defaults
DEFAULT_MAX_DOCUMENT_BYTES = 16 * 1024 * 1024
DEFAULT_LOG_LEVEL = "INFO"
ALLOWED_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}

# Environment variables
ENV_JSON_INDENT = "HWTOPO_JSON_INDENT"
ENV_MAX_DOCUMENT_BYTES = "HWTOPO_MAX_DOCUMENT_BYTES"
ENV_LOG_LEVEL = "HWTOPO_LOG_LEVEL"
ENV_LOG_FORMAT = "HWTOPO_LOG_FORMAT"

DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Text export
TREE_INDENT = "  "
