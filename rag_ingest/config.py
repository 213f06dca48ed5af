"""
Configuration management for the ingestion core.

Loads config.yaml with validation, environment overrides, and type checking.
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional
import yaml
from dotenv import load_dotenv


class ConfigError(Exception):
    """Raised when configuration is invalid."""
    pass


CONFIG_PATH_ENV = "RAG_INGEST_CONFIG_PATH"
DEFAULT_CONFIG_PATH = "./configs/config.yaml"

CHUNKING_STRATEGIES = ('flat', 'small_to_big')


class IngestConfig:
    """
    Configuration manager with strict validation.

    Enforces:
    - Required keys present
    - Chunking strategy is known
    - Window sizes are positive integers, overlaps non-negative integers
    """

    # Required top-level keys
    REQUIRED_KEYS = ['chunking']

    # Window sizes must be >= 1, overlaps >= 0
    CHUNKING_SIZE_KEYS = ('parent_size', 'child_size', 'chunk_size')
    CHUNKING_OVERLAP_KEYS = ('parent_overlap', 'child_overlap', 'overlap')

    DEFAULT_CHUNKING = {
        'strategy': 'small_to_big',
        'parent_size': 800,
        'child_size': 200,
        'parent_overlap': 100,
        'child_overlap': 50,
        'chunk_size': 1000,
        'overlap': 200,
    }

    def __init__(self, config_path: Optional[str] = None):
        """
        Load and validate configuration.

        Args:
            config_path: Path to config.yaml. Defaults to $RAG_INGEST_CONFIG_PATH,
                then ./configs/config.yaml

        Raises:
            ConfigError: If config invalid or file missing
        """
        if config_path is None:
            load_dotenv()
            config_path = os.getenv(CONFIG_PATH_ENV, DEFAULT_CONFIG_PATH)

        self.config_path = Path(config_path)

        if not self.config_path.exists():
            raise ConfigError(f"Config file not found: {self.config_path}")

        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                self.data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML: {e}")

        if not isinstance(self.data, dict):
            raise ConfigError(f"Config root must be a mapping: {self.config_path}")

        self._validate()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "IngestConfig":
        """Build a validated config from an in-memory mapping."""
        config = cls.__new__(cls)
        config.config_path = None
        config.data = data
        config._validate()
        return config

    def _validate(self):
        """Validate configuration structure and values."""
        for key in self.REQUIRED_KEYS:
            if key not in self.data:
                raise ConfigError(f"Missing required config key: {key}")

        chunking_cfg = self.data['chunking']
        if not isinstance(chunking_cfg, dict):
            raise ConfigError("chunking must be a mapping")

        strategy = chunking_cfg.get('strategy', self.DEFAULT_CHUNKING['strategy'])
        if strategy not in CHUNKING_STRATEGIES:
            raise ConfigError(f"Invalid chunking strategy: {strategy}")

        for key in self.CHUNKING_SIZE_KEYS:
            value = chunking_cfg.get(key, self.DEFAULT_CHUNKING[key])
            if not _is_int(value) or value < 1:
                raise ConfigError(f"chunking.{key} must be a positive integer, got {value!r}")

        for key in self.CHUNKING_OVERLAP_KEYS:
            value = chunking_cfg.get(key, self.DEFAULT_CHUNKING[key])
            if not _is_int(value) or value < 0:
                raise ConfigError(f"chunking.{key} must be a non-negative integer, got {value!r}")

        max_text = self.get('metadata.max_text_length')
        if max_text is not None and (not _is_int(max_text) or max_text < 1):
            raise ConfigError(f"metadata.max_text_length must be a positive integer, got {max_text!r}")

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get config value by dot-notation path.

        Args:
            key: Key path (e.g., 'chunking.parent_size', 'audit_log.file')
            default: Default value if not found

        Returns:
            Configuration value
        """
        keys = key.split('.')
        value = self.data

        for k in keys:
            if isinstance(value, dict):
                value = value.get(k)
                if value is None:
                    return default
            else:
                return default

        return value

    def get_chunking_config(self) -> Dict[str, Any]:
        """Get chunking configuration with defaults filled in."""
        return {**self.DEFAULT_CHUNKING, **self.data.get('chunking', {})}

    def get_metadata_config(self) -> Dict[str, Any]:
        """Get metadata configuration section."""
        return self.data.get('metadata', {})

    def get_audit_config(self) -> Dict[str, Any]:
        """Get audit logging configuration section."""
        return self.data.get('audit_log', {'enabled': True, 'file': './audit.log'})

    def get_document_dirs(self) -> list:
        """Get list of document directories to ingest."""
        return self.data.get('document_dirs', ['./data/sample/'])


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


# Global config instance (lazy-loaded)
_config_instance: Optional[IngestConfig] = None


def load_config(config_path: Optional[str] = None) -> IngestConfig:
    """
    Load or retrieve cached configuration.

    Args:
        config_path: Optional override path

    Returns:
        IngestConfig instance
    """
    global _config_instance
    if _config_instance is None or config_path is not None:
        _config_instance = IngestConfig(config_path)
    return _config_instance


def get_config() -> IngestConfig:
    """Get currently loaded config (must be initialized)."""
    global _config_instance
    if _config_instance is None:
        raise RuntimeError("Config not loaded. Call load_config() first.")
    return _config_instance
