#!/usr/bin/env python3
"""
Environment variable access for the resolver.

Loads a ``.env`` file from the project root (or the file named by
``RTSP_RESOLVER_ENV_FILE``) on import. Variables already present in the
process environment always win.
"""

import os
from pathlib import Path
import logging
from typing import Dict, Iterable, Optional

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

ENV_FILE_VARIABLE = 'RTSP_RESOLVER_ENV_FILE'
TRUE_VALUES = {'1', 'true', 'yes', 'on'}
FALSE_VALUES = {'0', 'false', 'no', 'off'}


def parse_env_lines(lines: Iterable[str]) -> Dict[str, str]:
    """
    Parse ``KEY=VALUE`` lines.

    Blank lines and ``#`` comments are skipped, an ``export`` prefix is
    accepted and matching surrounding quotes are removed.
    """
    values: Dict[str, str] = {}
    for line_num, raw_line in enumerate(lines, 1):
        line = raw_line.strip()
        if not line or line.startswith('#'):
            continue
        if line.startswith('export '):
            line = line[len('export '):].lstrip()

        key, sep, value = line.partition('=')
        key = key.strip()
        if not sep or not key:
            logger.warning(f"Ignoring malformed .env line {line_num}: {raw_line.rstrip()}")
            continue

        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in ('"', "'"):
            value = value[1:-1]
        values[key] = value
    return values


def load_env_file(env_file_path: Optional[str] = None) -> int:
    """
    Load variables from a .env file into ``os.environ``.

    Args:
        env_file_path: Path to the file; relative paths are taken from the
            project root. Defaults to ``$RTSP_RESOLVER_ENV_FILE`` or ``.env``.

    Returns:
        Number of variables set
    """
    env_file_path = env_file_path or os.environ.get(ENV_FILE_VARIABLE, '.env')
    project_root = Path(__file__).resolve().parent.parent.parent
    env_path = Path(env_file_path).expanduser()
    if not env_path.is_absolute():
        env_path = project_root / env_path

    if not env_path.is_file():
        logger.debug(f"No .env file found at {env_path}")
        return 0

    try:
        with open(env_path, 'r', encoding='utf-8') as f:
            values = parse_env_lines(f)
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Error loading .env file {env_path}: {e}")
        return 0

    loaded = 0
    for key, value in values.items():
        if key in os.environ:
            logger.debug(f"Skipped {key} (already in environment)")
            continue
        os.environ[key] = value
        loaded += 1

    logger.info(f"Loaded {loaded} variables from {env_path}")
    return loaded


def get_env_var(key: str, default: Optional[str] = None, required: bool = False) -> Optional[str]:
    """
    Get an environment variable.

    Raises:
        ConfigurationError: If ``required`` and the variable is unset or empty
    """
    value = os.environ.get(key, default)
    if required and not value:
        raise ConfigurationError(key, "required environment variable is not set")
    return value


def get_env_float(key: str, default: float) -> float:
    value = os.environ.get(key)
    if value is None or value.strip() == '':
        return default
    try:
        return float(value)
    except ValueError:
        raise ConfigurationError(key, f"expected a number, got {value!r}")


def get_env_int(key: str, default: int) -> int:
    value = os.environ.get(key)
    if value is None or value.strip() == '':
        return default
    try:
        return int(value)
    except ValueError:
        raise ConfigurationError(key, f"expected an integer, got {value!r}")


def get_env_bool(key: str, default: bool) -> bool:
    """Read a boolean flag (1/0, true/false, yes/no, on/off)."""
    value = os.environ.get(key)
    if value is None or value.strip() == '':
        return default
    normalized = value.strip().lower()
    if normalized in TRUE_VALUES:
        return True
    if normalized in FALSE_VALUES:
        return False
    raise ConfigurationError(key, f"expected a boolean, got {value!r}")


# Auto-load .env file when module is imported
load_env_file()
