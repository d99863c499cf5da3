"""History buffer configuration."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from omegaconf import DictConfig, OmegaConf

from retreat.errors import ConfigurationError

logger = logging.getLogger(__name__)

# "propagate": re-raise hook errors once the buffer state is consistent.
# "log": log hook errors with traceback and carry on.
CLEANUP_ERROR_POLICIES = ("propagate", "log")


@dataclass
class HistoryConfig:
    """Capacity and cleanup-hook error policy for a HistoryBuffer."""

    capacity: int = 10
    on_cleanup_error: str = "propagate"

    @classmethod
    def from_omegaconf(cls, cfg: Any) -> HistoryConfig:
        """Build from OmegaConf dict or plain dict."""
        if cfg is None:
            return cls()

        if isinstance(cfg, DictConfig):
            cfg = OmegaConf.to_container(cfg, resolve=True)

        if not isinstance(cfg, dict):
            cfg = dict(cfg)

        cleanup = cfg.get("cleanup", {}) or {}

        raw = cfg.get("capacity", 10)
        try:
            capacity = int(raw)
        except (TypeError, ValueError):
            raise ConfigurationError(f"capacity must be an int, got {raw!r}") from None

        return cls(
            capacity=capacity,
            on_cleanup_error=str(cleanup.get("on_error", "propagate")),
        )
