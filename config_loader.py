"""YAML configuration for the exporter.

Keys live in three sections: ``export`` (the ExportOptions switches),
``logging`` (``level``, ``file``) and ``report`` (``path``). String values may
reference environment variables as ``${NAME}``; unknown names are left as is.
"""

import copy
import os
import re
from pathlib import Path
from typing import Any, Dict, Union

import yaml

from logger import LOG_LEVELS

EXPORT_FLAGS = (
    'force',
    'keep_hash',
    'copy_system_css',
    'build_index',
    'build_api_docs',
    'build_tutorials'
)

# CLI switch -> export flag it sets; --no-* switches only ever turn a feature off
CLI_SWITCHES = (
    ('force', 'force', True),
    ('keep_hash', 'keep_hash', True),
    ('no_index', 'build_index', False),
    ('no_api_docs', 'build_api_docs', False),
    ('no_tutorials', 'build_tutorials', False),
    ('no_system_css', 'copy_system_css', False),
)

ENV_VAR_PATTERN = re.compile(r'\$\{([A-Za-z_][A-Za-z0-9_]*)\}')


def expand_env_vars(data: Any) -> Any:
    """Replace ``${NAME}`` in every string of a parsed YAML document."""
    if isinstance(data, dict):
        return {key: expand_env_vars(value) for key, value in data.items()}
    if isinstance(data, list):
        return [expand_env_vars(item) for item in data]
    if isinstance(data, str):
        return ENV_VAR_PATTERN.sub(lambda match: os.environ.get(match.group(1), match.group(0)), data)
    return data


class ConfigLoader:
    """Loads, validates and merges export configuration."""

    @classmethod
    def load(cls, config_path: Union[str, Path]) -> Dict[str, Any]:
        """
        Load a YAML configuration file.

        Args:
            config_path: Path to YAML configuration file

        Returns:
            Parsed configuration with environment variables expanded; an
            empty file yields an empty dict

        Raises:
            FileNotFoundError: If config file doesn't exist
            yaml.YAMLError: If YAML parsing fails
            ValueError: If the document is not a mapping
        """
        path = Path(config_path)
        if not path.is_file():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        with path.open('r', encoding='utf-8') as f:
            config_data = yaml.safe_load(f)

        if config_data is None:
            return {}

        if not isinstance(config_data, dict):
            raise ValueError("Configuration file must contain a mapping")

        return expand_env_vars(config_data)

    @classmethod
    def validate(cls, config: Dict[str, Any]) -> None:
        """
        Validate configuration values.

        Args:
            config: Configuration dictionary to validate

        Raises:
            ValueError: If validation fails
        """
        export_config = config.get('export', {})
        if export_config is not None and not isinstance(export_config, dict):
            raise ValueError("export must be a mapping")

        for flag in EXPORT_FLAGS:
            value = get_nested(config, f'export.{flag}')
            if value is not None and not isinstance(value, bool):
                raise ValueError(f"export.{flag} must be a boolean")

        level = get_nested(config, 'logging.level')
        if level is not None:
            if not isinstance(level, str) or level.upper() not in LOG_LEVELS:
                raise ValueError(f"logging.level must be one of: {list(LOG_LEVELS)}")

        for field in ('logging.file', 'report.path'):
            value = get_nested(config, field)
            if value is not None and not isinstance(value, str):
                raise ValueError(f"{field} must be a string path")

    @classmethod
    def merge_with_args(cls, config: Dict[str, Any], args) -> Dict[str, Any]:
        """
        Merge configuration file with CLI arguments.
        CLI arguments take precedence over config file values.

        Args:
            config: Base configuration dictionary
            args: CLI arguments namespace

        Returns:
            Merged configuration dictionary
        """
        merged = copy.deepcopy(config)

        for section in ('export', 'logging', 'report'):
            if not isinstance(merged.get(section), dict):
                merged[section] = {}

        for arg_name, flag, value in CLI_SWITCHES:
            if getattr(args, arg_name, False):
                merged['export'][flag] = value

        if getattr(args, 'verbose', False):
            merged['logging']['level'] = 'DEBUG'
        elif getattr(args, 'silent', False):
            merged['logging']['level'] = 'ERROR'

        if getattr(args, 'log_file', None):
            merged['logging']['file'] = args.log_file

        if getattr(args, 'report', None):
            merged['report']['path'] = args.report

        return merged


def get_nested(config: dict, path: str, default: Any = None) -> Any:
    """Safely retrieve nested configuration values using dot notation.

    Args:
        config: Configuration dictionary
        path: Dot-separated path (e.g., "export.keep_hash")
        default: Default value if path doesn't exist

    Returns:
        Value at the nested path or default
    """
    value = config

    for key in path.split('.'):
        if isinstance(value, dict) and key in value:
            value = value[key]
        else:
            return default

    return value


__all__ = ['ConfigLoader', 'expand_env_vars', 'get_nested', 'EXPORT_FLAGS']
