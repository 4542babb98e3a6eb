"""Default configuration values for go-design-metrics."""

# Directories never descended into during package discovery. Any directory
# whose name starts with "." is skipped as well.
DEFAULT_IGNORE_DIRS = frozenset(
    {
        ".git",
        ".idea",
        "node_modules",
        "vendor",
        "testdata",
    }
)

GO_FILE_SUFFIX = ".go"
GO_TEST_FILE_SUFFIX = "_test.go"
GO_MOD_FILE = "go.mod"

# Package patterns understood by discovery
PATTERN_ALL = "./..."
PATTERN_SELF = "."

VENDOR_PREFIX = "vendor/"

# Batch loading
DEFAULT_BATCH_SIZE = 100

# Worker pool
MAX_WORKERS_CAP = 8

# Discovery reports one progress step for every N matched packages
DISCOVERY_PACKAGES_PER_STEP = 3

# Loaders
DEFAULT_LOADER = "source"
LOADER_NAMES = ("source", "go-list")
GO_BINARY = "go"

# Environment overrides
ENV_MAX_WORKERS = "GO_DESIGN_METRICS_MAX_WORKERS"
ENV_BATCH_SIZE = "GO_DESIGN_METRICS_BATCH_SIZE"
ENV_LOADER = "GO_DESIGN_METRICS_LOADER"
