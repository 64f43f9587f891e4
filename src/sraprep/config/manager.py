"""
Configuration Manager for sraprep
=================================

Loads a user YAML/JSON file over DEFAULT_CONFIG and resolves ${VAR_NAME}
placeholders from the environment. Placeholders whose variable is unset
become None, which is how optional SLURM and NCBI settings are switched off.

The effective configuration of a build is saved next to its manifest, with
secrets masked, so a manifest can be traced back to the settings that
produced it.
"""

import os
import yaml
import json
import logging
from pathlib import Path
from typing import Dict, Any, Iterable, Optional
from copy import deepcopy

from .defaults import DEFAULT_CONFIG

logger = logging.getLogger(__name__)

# Keys never written out by save()
SECRET_KEYS = ("entrez.api_key",)

REQUIRED_KEYS = (
    "paths.raw_data_dir",
    "paths.artifact_dir",
    "paths.accession_file",
    "entrez.run_pattern",
    "download.max_size",
    "manifest.extension",
)


class ConfigManager:
    """
    Layered configuration: defaults, then a user file, then CLI overrides.

    Example:
        config = ConfigManager.from_file("configs/hpc.yaml")
        config.set("download.max_size", "50G")   # e.g. from --max-size
        cap = config.get("download.max_size")
    """

    def __init__(self, config_dict: Optional[Dict[str, Any]] = None):
        merged = _deep_merge(DEFAULT_CONFIG, config_dict or {})
        self.config = _substitute_env_vars(merged)
        self.source: Optional[Path] = None

    @classmethod
    def from_file(cls, path: Optional[Path]) -> 'ConfigManager':
        """
        Load a .yaml/.yml/.json file, or return the defaults if path is None.

        Raises:
            FileNotFoundError: If path does not exist
            ValueError: If the file does not hold a mapping
        """
        if path is None:
            return cls()

        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        with open(path, 'r') as f:
            user_config = json.load(f) if path.suffix == '.json' else yaml.safe_load(f)

        if user_config is None:
            user_config = {}
        if not isinstance(user_config, dict):
            raise ValueError(f"Configuration file must hold a mapping: {path}")

        manager = cls(user_config)
        manager.source = path
        return manager

    def get(self, key: str, default: Any = None) -> Any:
        """Get a value by dot notation, e.g. "download.max_size"."""
        value = self.config
        for k in key.split('.'):
            if not isinstance(value, dict) or k not in value:
                return default
            value = value[k]
        return value

    def set(self, key: str, value: Any):
        """Set a value by dot notation, creating sections as needed."""
        *sections, last = key.split('.')
        node = self.config
        for k in sections:
            node = node.setdefault(k, {})
        node[last] = value

    def validate(self, required_keys: Iterable[str] = REQUIRED_KEYS):
        """
        Raises:
            ValueError: If any required key is missing or None
        """
        missing_keys = [key for key in required_keys if self.get(key) is None]
        if missing_keys:
            raise ValueError(f"Missing required configuration keys: {missing_keys}")

    def save(self, save_path: Path, redact: Iterable[str] = SECRET_KEYS) -> Path:
        """
        Write the effective configuration as YAML (or JSON for a .json path).

        Values under the redact keys are replaced by "***" when set.
        """
        snapshot = ConfigManager.__new__(ConfigManager)
        snapshot.config = deepcopy(self.config)
        for key in redact:
            if snapshot.get(key) is not None:
                snapshot.set(key, "***")

        save_path = Path(save_path)
        save_path.parent.mkdir(parents=True, exist_ok=True)
        with open(save_path, 'w') as f:
            if save_path.suffix == '.json':
                json.dump(snapshot.config, f, indent=2)
            else:
                yaml.dump(snapshot.config, f, default_flow_style=False, sort_keys=False)

        logger.info(f"Configuration saved to {save_path}")
        return save_path


def _deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge override into a copy of base."""
    result = deepcopy(base)
    for key, value in override.items():
        if isinstance(result.get(key), dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = deepcopy(value)
    return result


def _substitute_env_vars(config: Any) -> Any:
    """Replace "${VAR}" strings by the variable's value, or None when unset."""
    if isinstance(config, dict):
        return {k: _substitute_env_vars(v) for k, v in config.items()}
    if isinstance(config, list):
        return [_substitute_env_vars(item) for item in config]
    if isinstance(config, str) and config.startswith('${') and config.endswith('}'):
        return os.environ.get(config[2:-1]) or None
    return config
