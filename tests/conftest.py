"""Shared pytest fixtures for retreat tests."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest
from omegaconf import OmegaConf


class RecordingHook:
    """Cleanup hook that remembers every value it was handed."""

    def __init__(self) -> None:
        self.calls: list = []

    def __call__(self, value) -> None:
        self.calls.append(value)


@pytest.fixture
def project_root() -> Path:
    return Path(__file__).parent.parent


@pytest.fixture
def config_path(project_root: Path) -> Path:
    return project_root / "config" / "default.yaml"


@pytest.fixture
def default_config(config_path: Path):
    return OmegaConf.load(config_path)


@pytest.fixture
def hook() -> RecordingHook:
    return RecordingHook()


@pytest.fixture(autouse=True)
def _reset_retreat_logger():
    """Drop handlers installed by setup_logging so captured streams don't leak."""
    yield
    root = logging.getLogger("retreat")
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    root.setLevel(logging.NOTSET)
    root.propagate = True
