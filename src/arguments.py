"""Resolve the logger's arguments from configuration.

Every function here only reads the given ``ConfigStore``; the same
configuration always resolves to the same result.
"""

import json
import logging
from datetime import timedelta

from src import constants
from src.config_store import ConfigStore
from src.errors import (
    InvalidBufferSizeError,
    InvalidDockerConfigError,
    InvalidDurationError,
    InvalidModeError,
    MissingRequiredFieldError,
)
from src.settings import DockerConfigArguments, Mode, ResolvedArguments
from src.units import parse_buffer_size, parse_duration

logger = logging.getLogger(__name__)


def get_required_value(store: ConfigStore, key: str) -> str:
    """Get the value of a required key.

    Raises:
        MissingRequiredFieldError: If the key is unset or empty
    """
    value = store.get(key)
    if not value:
        raise MissingRequiredFieldError(key)
    return value


def resolve_global_arguments(store: ConfigStore) -> ResolvedArguments:
    """Resolve the arguments shared by every log driver.

    Required keys are checked one by one in the order container-id,
    container-name, log-driver; the first missing one is reported.

    Args:
        store: Configuration to read from

    Returns:
        ResolvedArguments: Validated arguments

    Raises:
        ArgumentError: If any value is missing or invalid
    """
    container_id = get_required_value(store, constants.CONTAINER_ID_KEY)
    container_name = get_required_value(store, constants.CONTAINER_NAME_KEY)
    log_driver = get_required_value(store, constants.LOG_DRIVER_TYPE_KEY)

    mode, max_buffer_size = resolve_mode_and_buffer_size(store)
    cleanup_time = resolve_cleanup_time(store)

    args = ResolvedArguments(
        container_id=container_id,
        container_name=container_name,
        log_driver=log_driver,
        mode=mode,
        max_buffer_size=max_buffer_size,
        cleanup_time=cleanup_time,
    )
    logger.debug("Resolved global arguments: %s", args)
    return args


def resolve_mode_and_buffer_size(store: ConfigStore) -> tuple[Mode, int]:
    """Resolve the operating mode and its maximum buffer size.

    Args:
        store: Configuration to read from

    Returns:
        Tuple of (mode, max_buffer_size). The buffer size is 0 in blocking mode.

    Raises:
        InvalidModeError: If the mode is not blocking or non-blocking
        InvalidBufferSizeError: If the buffer size of non-blocking mode is invalid
    """
    mode = store.get(constants.MODE_KEY)

    if not mode or mode == constants.BLOCKING_MODE:
        return constants.BLOCKING_MODE, 0

    if mode == constants.NON_BLOCKING_MODE:
        return constants.NON_BLOCKING_MODE, resolve_max_buffer_size(store)

    raise InvalidModeError(
        constants.MODE_KEY,
        f"unknown {constants.MODE_KEY} '{mode}', expected "
        f"'{constants.BLOCKING_MODE}' or '{constants.NON_BLOCKING_MODE}'",
    )


def resolve_max_buffer_size(store: ConfigStore) -> int:
    """Resolve the maximum buffer size used in non-blocking mode.

    Args:
        store: Configuration to read from

    Returns:
        Buffer size in bytes, 1 MiB when not configured

    Raises:
        InvalidBufferSizeError: If the value is malformed or zero
    """
    value = store.get(constants.MAX_BUFFER_SIZE_KEY)
    if not value:
        return constants.DEFAULT_MAX_BUFFER_SIZE

    try:
        size = parse_buffer_size(value)
    except ValueError as e:
        raise InvalidBufferSizeError(
            constants.MAX_BUFFER_SIZE_KEY,
            f"failed to parse {constants.MAX_BUFFER_SIZE_KEY}: {e}",
        ) from e

    if size == 0:
        raise InvalidBufferSizeError(
            constants.MAX_BUFFER_SIZE_KEY,
            f"{constants.MAX_BUFFER_SIZE_KEY} must be positive, got '{value}'",
        )
    return size


def resolve_cleanup_time(
    store: ConfigStore, max_cleanup_time: timedelta = constants.MAX_CLEANUP_TIME
) -> timedelta:
    """Resolve how long the logger may spend cleaning up before exit.

    Args:
        store: Configuration to read from
        max_cleanup_time: Longest accepted duration

    Returns:
        Cleanup duration, 5 seconds when not configured

    Raises:
        InvalidDurationError: If the value has no unit, is malformed, negative
            or longer than max_cleanup_time
    """
    value = store.get(constants.CLEANUP_TIME_KEY)
    if not value:
        value = constants.DEFAULT_CLEANUP_TIME

    try:
        cleanup_time = parse_duration(value)
    except ValueError as e:
        raise InvalidDurationError(
            constants.CLEANUP_TIME_KEY,
            f"failed to parse {constants.CLEANUP_TIME_KEY}: {e}",
        ) from e

    if cleanup_time < timedelta(0):
        raise InvalidDurationError(
            constants.CLEANUP_TIME_KEY,
            f"invalid {constants.CLEANUP_TIME_KEY} '{value}', must not be negative",
        )
    if cleanup_time > max_cleanup_time:
        raise InvalidDurationError(
            constants.CLEANUP_TIME_KEY,
            f"invalid {constants.CLEANUP_TIME_KEY} '{value}', maximum is "
            f"{max_cleanup_time.total_seconds():g} seconds",
        )
    return cleanup_time


def _load_json(store: ConfigStore, key: str, expected_type: type) -> object | None:
    value = store.get(key)
    if not value:
        return None

    try:
        loaded = json.loads(value)
    except json.JSONDecodeError as e:
        raise InvalidDockerConfigError(key, f"failed to parse {key}: {e}") from e

    if not isinstance(loaded, expected_type):
        raise InvalidDockerConfigError(
            key, f"{key} must be a JSON {expected_type.__name__}"
        )
    return loaded


def resolve_docker_config(store: ConfigStore) -> DockerConfigArguments:
    """Resolve optional container metadata.

    ``container-env`` is a JSON array of ``KEY=VALUE`` strings and
    ``container-labels`` a JSON object of string values.

    Raises:
        InvalidDockerConfigError: If env or labels are not valid JSON of the
            expected shape
    """
    env = _load_json(store, constants.CONTAINER_ENV_KEY, list) or []
    if not all(isinstance(item, str) for item in env):
        raise InvalidDockerConfigError(
            constants.CONTAINER_ENV_KEY,
            f"{constants.CONTAINER_ENV_KEY} must only contain strings",
        )

    labels = _load_json(store, constants.CONTAINER_LABELS_KEY, dict) or {}
    if not all(isinstance(value, str) for value in labels.values()):
        raise InvalidDockerConfigError(
            constants.CONTAINER_LABELS_KEY,
            f"{constants.CONTAINER_LABELS_KEY} values must be strings",
        )

    return DockerConfigArguments(
        container_image_id=store.get(constants.CONTAINER_IMAGE_ID_KEY) or None,
        container_image_name=store.get(constants.CONTAINER_IMAGE_NAME_KEY) or None,
        container_env=env,
        container_labels=labels,
    )
