"""Pydantic schema for retreat configuration validation.

Mirrors the YAML structure in config/default.yaml. Used when
``validate=True`` is passed to ``RetreatConfig.load()``.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class SystemConfig(BaseModel):
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    validate_config: bool = False
    log_file: str | None = None
    log_json: bool = False


class CleanupConfig(BaseModel):
    on_error: Literal["propagate", "log"] = "propagate"


class HistorySchema(BaseModel):
    capacity: int = Field(default=10, ge=1)
    cleanup: CleanupConfig = Field(default_factory=CleanupConfig)


class RetreatRootConfig(BaseModel):
    system: SystemConfig = Field(default_factory=SystemConfig)
    history: HistorySchema = Field(default_factory=HistorySchema)

    model_config = {"extra": "allow"}


class RetreatConfigSchema(BaseModel):
    """Top-level wrapper matching YAML root key ``retreat:``."""

    retreat: RetreatRootConfig

    model_config = {"extra": "allow"}


def validate_config(cfg_dict: dict) -> RetreatConfigSchema:
    """Validate a raw config dict (e.g. from OmegaConf) against the schema.

    Raises ``pydantic.ValidationError`` on invalid config.
    """
    return RetreatConfigSchema.model_validate(cfg_dict)
