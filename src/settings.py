from datetime import timedelta
from typing import Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    NonNegativeInt,
    model_validator,
)

Mode = Literal["blocking", "non-blocking"]


class ResolvedArguments(BaseModel):
    """Validated logger arguments resolved from configuration.

    Arguments are immutable per runtime and resolved once at startup.
    """

    model_config = ConfigDict(frozen=True)

    # Required settings
    container_id: str = Field(min_length=1)
    container_name: str = Field(min_length=1)
    log_driver: str = Field(min_length=1)

    # Optional settings with defaults
    mode: Mode = "blocking"
    max_buffer_size: NonNegativeInt = 0
    cleanup_time: timedelta | None = None

    @model_validator(mode="after")
    def check_buffer_size_matches_mode(self) -> "ResolvedArguments":
        if self.mode == "blocking" and self.max_buffer_size != 0:
            raise ValueError("max_buffer_size must be 0 in blocking mode")
        if self.mode == "non-blocking" and self.max_buffer_size == 0:
            raise ValueError("max_buffer_size must be positive in non-blocking mode")
        return self


class DockerConfigArguments(BaseModel):
    """Container metadata forwarded to drivers that tag log records."""

    model_config = ConfigDict(frozen=True)

    container_image_id: str | None = None
    container_image_name: str | None = None
    container_env: list[str] = []
    container_labels: dict[str, str] = {}
