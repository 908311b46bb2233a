"""Utilities for reading the nitrocli configuration from YAML."""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from nitrocli.errors import NitrocliConfigError
from nitrocli.logging import get_logger

logger = get_logger(__name__)

CONFIG_ENV_VAR = 'NITROCLI_CONFIG'
DEFAULT_CONFIG_FILENAME = 'config.yaml'


class NitrocliConfig(BaseModel):
    """Settings read from the nitrocli configuration file."""

    model_config = ConfigDict(extra='forbid')

    backend: str | None = None
    gpg_connect_agent: str = 'gpg-connect-agent'
    open_retries: int = Field(default=3, ge=1)


def default_config_path() -> Path:
    """Return the per-user configuration file location."""
    config_home = os.environ.get('XDG_CONFIG_HOME')
    base = Path(config_home) if config_home else Path.home() / '.config'
    return base / 'nitrocli' / DEFAULT_CONFIG_FILENAME


def _load_yaml_config(config_path: Path) -> dict[str, Any]:
    logger.debug('loading_config', config=str(config_path))
    try:
        with config_path.open() as fh:
            data = yaml.safe_load(fh) or {}
    except yaml.YAMLError as exc:
        msg = f'failed to parse YAML: {exc}'
        raise NitrocliConfigError(msg) from exc
    except (OSError, UnicodeDecodeError) as exc:
        msg = f'failed to read configuration file {config_path}: {exc}'
        raise NitrocliConfigError(msg) from exc

    if not isinstance(data, dict):
        msg = f'configuration root must be a mapping in {config_path}'
        raise NitrocliConfigError(msg)

    return data


def resolve_config_path(explicit: Path | None = None) -> tuple[Path, bool]:
    """Determine which configuration file to read.

    Returns:
        The path and whether the file is required to exist.
    """
    if explicit is not None:
        return explicit, True
    from_env = os.environ.get(CONFIG_ENV_VAR)
    if from_env:
        return Path(from_env), True
    return default_config_path(), False


def load_config(config_path: Path | None = None) -> NitrocliConfig:
    """Load the nitrocli configuration.

    An explicitly given path (argument or ``NITROCLI_CONFIG``) must exist;
    the per-user default file is optional.
    """
    path, required = resolve_config_path(config_path)
    if not path.exists():
        if required:
            msg = f'configuration file not found: {path}'
            raise NitrocliConfigError(msg)
        logger.debug('using_default_config', config=str(path))
        return NitrocliConfig()

    data = _load_yaml_config(path)
    try:
        config = NitrocliConfig.model_validate(data)
    except ValidationError as exc:
        msg = f'invalid configuration in {path}: {exc}'
        raise NitrocliConfigError(msg) from exc

    logger.debug('loaded_config', config=str(path), _verbose_settings=config.model_dump())
    return config
