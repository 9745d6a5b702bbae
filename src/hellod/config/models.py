"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, hellod.toml only contains overrides.
An empty (or missing) hellod.toml serves the default greeting on port 3000.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

DEFAULT_PORT = 3000
DEFAULT_MESSAGE = "Hello from Multi-Stage Node.js Build!"


class ServerConfig(BaseModel):
    """[server] section."""

    model_config = {"frozen": True}

    host: str = "0.0.0.0"
    message: str = DEFAULT_MESSAGE
    poll_interval: float = Field(default=0.5, gt=0)


class ProbeConfig(BaseModel):
    """[probe] section."""

    model_config = {"frozen": True}

    timeout: float = Field(default=2.0, gt=0)
    expect_body: bool = True
