"""Process-wide configuration.

Install once with :func:`configure` before the first combinator call;
entry points read it at call time and never mutate it.
"""

from __future__ import annotations

import logging
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)


class MixConfig(BaseModel):
    """Runtime options for promix.

    Attributes:
        environment: "dev" enables developer warnings, "prod" silences them.
        max_unwrap_depth: Maximum nesting accepted for wrapped operations.
    """

    model_config = ConfigDict(frozen=True)

    environment: Literal["dev", "prod"] = "dev"
    max_unwrap_depth: int = Field(default=64, ge=1)

    @property
    def is_dev(self) -> bool:
        return self.environment == "dev"


_config = MixConfig()


def configure(**fields: Any) -> MixConfig:
    """Validate and install a new process-wide configuration.

    Unspecified fields keep their default values.
    """
    global _config
    _config = MixConfig(**fields)
    logger.debug("promix configured: %s", _config.model_dump())
    return _config


def get_config() -> MixConfig:
    return _config


def resolve_config(config: MixConfig | None) -> MixConfig:
    """Return ``config`` or, when omitted, the installed configuration."""
    return config if config is not None else _config
