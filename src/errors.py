"""Errors raised while resolving logger arguments."""

from enum import Enum


class ErrorKind(Enum):
    """Category of an argument resolution failure."""

    MISSING_REQUIRED_FIELD = "missing-required-field"
    INVALID_MODE = "invalid-mode"
    INVALID_BUFFER_SIZE = "invalid-buffer-size"
    INVALID_DURATION = "invalid-duration"
    INVALID_DOCKER_CONFIG = "invalid-docker-config"
    INVALID_ARGUMENT = "invalid-argument"


class ArgumentError(Exception):
    """Base exception for invalid or missing logger arguments.

    Attributes:
        key: Configuration key the error refers to
        kind: Category of the failure
    """

    kind = ErrorKind.INVALID_ARGUMENT

    def __init__(self, key: str, message: str):
        super().__init__(message)
        self.key = key


class MissingRequiredFieldError(ArgumentError):
    """Exception raised when a required key is unset or empty."""

    kind = ErrorKind.MISSING_REQUIRED_FIELD

    def __init__(self, key: str):
        super().__init__(key, f"{key} is required")


class InvalidModeError(ArgumentError):
    """Exception raised when the mode is neither blocking nor non-blocking."""

    kind = ErrorKind.INVALID_MODE


class InvalidBufferSizeError(ArgumentError):
    """Exception raised when max-buffer-size cannot be parsed."""

    kind = ErrorKind.INVALID_BUFFER_SIZE


class InvalidDurationError(ArgumentError):
    """Exception raised when cleanup-time is malformed or out of range."""

    kind = ErrorKind.INVALID_DURATION


class InvalidDockerConfigError(ArgumentError):
    """Exception raised when container env or labels are not valid JSON."""

    kind = ErrorKind.INVALID_DOCKER_CONFIG
