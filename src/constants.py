from datetime import timedelta

# Required configuration keys, checked in this order
CONTAINER_ID_KEY = "container-id"
CONTAINER_NAME_KEY = "container-name"
LOG_DRIVER_TYPE_KEY = "log-driver"
REQUIRED_KEYS = (CONTAINER_ID_KEY, CONTAINER_NAME_KEY, LOG_DRIVER_TYPE_KEY)

# Optional configuration keys
MODE_KEY = "mode"
MAX_BUFFER_SIZE_KEY = "max-buffer-size"
CLEANUP_TIME_KEY = "cleanup-time"

# Docker config passed through to drivers that tag log records
CONTAINER_IMAGE_ID_KEY = "container-image-id"
CONTAINER_IMAGE_NAME_KEY = "container-image-name"
CONTAINER_ENV_KEY = "container-env"
CONTAINER_LABELS_KEY = "container-labels"
DOCKER_CONFIG_KEYS = (
    CONTAINER_IMAGE_ID_KEY,
    CONTAINER_IMAGE_NAME_KEY,
    CONTAINER_ENV_KEY,
    CONTAINER_LABELS_KEY,
)

ALL_KEYS = (
    REQUIRED_KEYS
    + (MODE_KEY, MAX_BUFFER_SIZE_KEY, CLEANUP_TIME_KEY)
    + DOCKER_CONFIG_KEYS
)

BLOCKING_MODE = "blocking"
NON_BLOCKING_MODE = "non-blocking"

# 1 MiB - buffer used by non-blocking mode when max-buffer-size is not set
DEFAULT_MAX_BUFFER_SIZE = 1 << 20

DEFAULT_CLEANUP_TIME = "5s"
# Upper bound accepted for cleanup-time
MAX_CLEANUP_TIME = timedelta(seconds=12)

# Values registered as the lowest-priority layer by the CLI
DEFAULTS = {
    MODE_KEY: BLOCKING_MODE,
    MAX_BUFFER_SIZE_KEY: "1m",
    CLEANUP_TIME_KEY: DEFAULT_CLEANUP_TIME,
}

# e.g. SHIM_LOGGER_CONTAINER_ID overrides container-id
ENV_PREFIX = "SHIM_LOGGER_"
