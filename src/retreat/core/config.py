"""YAML settings for retreat: a base file plus ``conf.d`` drop-ins."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from omegaconf import DictConfig, OmegaConf

from retreat.history.config import HistoryConfig


class RetreatConfig:
    """Loads a YAML configuration file and any ``conf.d`` overrides.

    Files in a ``conf.d`` directory next to the base file are merged on top
    in sorted order.  Dot-path overrides can be applied after loading.
    """

    def __init__(self, config_path: str | Path = "config/default.yaml"):
        self._config_path = Path(config_path)
        self._config: DictConfig | None = None

    def load(self, validate: bool = False) -> DictConfig:
        """Read the base file, then merge ``conf.d/*.yaml`` over it.

        Schema validation runs when *validate* is set or the file itself sets
        ``retreat.system.validate_config``; failures raise
        ``pydantic.ValidationError``.
        """
        if not self._config_path.exists():
            raise FileNotFoundError(f"Config not found: {self._config_path}")

        base = OmegaConf.load(self._config_path)
        assert isinstance(base, DictConfig)

        override_dir = self._config_path.parent / "conf.d"
        if override_dir.is_dir():
            for yaml_file in sorted(override_dir.glob("*.yaml")):
                base = OmegaConf.merge(base, OmegaConf.load(yaml_file))

        if validate or OmegaConf.select(base, "retreat.system.validate_config", default=False):
            from retreat.core.config_schema import validate_config

            validate_config(OmegaConf.to_container(base, resolve=True))

        self._config = base
        return self._config

    def override(self, dotpath: str, value: Any) -> None:
        """Set *dotpath* on the loaded config, e.g. ``retreat.history.capacity``."""
        if self._config is None:
            raise RuntimeError("Config not loaded yet. Call load() first.")
        OmegaConf.update(self._config, dotpath, value)

    @property
    def cfg(self) -> DictConfig:
        if self._config is None:
            raise RuntimeError("Config not loaded yet. Call load() first.")
        return self._config

    def history(self) -> HistoryConfig:
        """Return the ``retreat.history`` section as a HistoryConfig."""
        return HistoryConfig.from_omegaconf(OmegaConf.select(self.cfg, "retreat.history"))
