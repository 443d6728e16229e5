"""Configuration for manifest retrieval."""

from __future__ import annotations

import os

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from peer_manifest import __version__

ENV_HTTP_TIMEOUT = "PEER_MANIFEST_HTTP_TIMEOUT"
ENV_USER_AGENT = "PEER_MANIFEST_USER_AGENT"

DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_USER_AGENT = f"peer-manifest/{__version__}"


class LoaderSettings(BaseModel):
    """Settings handed to the HTTP client when fetching a manifest."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    timeout_seconds: float = Field(
        default=DEFAULT_TIMEOUT_SECONDS,
        gt=0,
        description="HTTP timeout in seconds",
    )
    user_agent: str = Field(
        default=DEFAULT_USER_AGENT,
        min_length=1,
        description="User-Agent header sent with manifest requests",
    )

    @classmethod
    def from_env(cls) -> LoaderSettings:
        """Build settings from PEER_MANIFEST_* environment variables.

        Unset or empty variables fall back to defaults.

        Raises:
            ValueError: If a variable is set to an invalid value.
        """
        values: dict[str, object] = {}
        timeout = os.environ.get(ENV_HTTP_TIMEOUT, "").strip()
        if timeout:
            values["timeout_seconds"] = timeout
        user_agent = os.environ.get(ENV_USER_AGENT, "").strip()
        if user_agent:
            values["user_agent"] = user_agent
        try:
            return cls.model_validate(values)
        except ValidationError as e:
            raise ValueError(f"Invalid peer manifest settings in environment: {e}") from e
