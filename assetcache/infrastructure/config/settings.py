"""Provides functions for loading and accessing configuration settings.

Supports loading from .env files, environment variables, and a dedicated
configuration file (~/.assetcache/config.yaml).
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv
import yaml

logger = logging.getLogger(__name__)

# --- Configuration Constants ---
DEFAULT_CONFIG_DIR = Path.home() / ".assetcache"
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.yaml"
ENV_FILE_NAME = ".env"
ENV_PREFIX = "ASSETCACHE_"

DEFAULTS: Dict[str, Any] = {
    'cache.directory': str(DEFAULT_CONFIG_DIR / "cache"),
    'cache.file_name': None,  # defaults to cache_storage.<serializer>
    'cache.serializer': "json",
    'logging.level': "WARNING",
    'logging.format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    'logging.file': None,
}

# Keys read verbatim from the environment (no bool/int coercion)
STRING_KEYS = frozenset({
    'cache.directory',
    'cache.file_name',
    'cache.serializer',
    'logging.level',
    'logging.format',
    'logging.file',
})

# --- Global Configuration Store (Simple Approach) ---
_config: Dict[str, Any] = {}
_test_config: Dict[str, Any] = {}
_loaded = False


def _flatten(data: Dict[str, Any], prefix: str = "") -> Dict[str, Any]:
    """Turns nested YAML sections into dotted keys ({'cache': {'directory': x}} -> 'cache.directory')."""
    flat: Dict[str, Any] = {}
    for key, value in data.items():
        dotted = f"{prefix}{key}"
        if isinstance(value, dict):
            flat.update(_flatten(value, prefix=f"{dotted}."))
        else:
            flat[dotted] = value
    return flat


def load_configuration(config_file: Optional[Path] = None, env_file: Optional[Path] = None, force: bool = False) -> None:
    """Loads configuration from environment, .env file, and YAML file.

    Priority order (highest to lowest):
    1. Test overrides
    2. Environment Variables (including those loaded from .env)
    3. YAML configuration file
    4. Defaults

    Args:
        config_file: Path to the YAML configuration file (DEFAULT_CONFIG_FILE if None).
        env_file: Path to the .env file (searches upwards from cwd if None).
        force: Reload even if configuration was already loaded.
    """
    global _config, _loaded
    if _loaded and not force:
        logger.debug("Configuration already loaded.")
        return

    _config = {}

    # 1. Load from YAML file (Lowest priority)
    config_file = Path(config_file) if config_file else DEFAULT_CONFIG_FILE
    if config_file.is_file():
        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                yaml_config = yaml.safe_load(f)
            if isinstance(yaml_config, dict):
                _config.update(_flatten(yaml_config))
                logger.info(f"Loaded configuration from YAML: {config_file}")
            elif yaml_config is not None:
                logger.warning(f"YAML config file {config_file} did not contain a dictionary.")
        except (OSError, yaml.YAMLError) as e:
            logger.error(f"Failed to load or parse YAML config {config_file}: {e}")
    else:
        logger.debug(f"YAML config file not found: {config_file}")

    # 2. Load from .env file; override=False keeps real environment variables on top
    dotenv_path = env_file or find_dotenv_path()
    if dotenv_path:
        if load_dotenv(dotenv_path=dotenv_path, override=False):
            logger.info(f"Loaded environment variables from: {dotenv_path}")
    else:
        logger.debug("Skipping .env file loading (no file found).")

    # 3. Environment Variables (Highest priority) are handled by get_config
    _loaded = True


def _coerce(value: str) -> Any:
    """Converts common string forms from the environment into Python values."""
    if value.lower() == 'true':
        return True
    if value.lower() == 'false':
        return False
    try:
        return int(value)
    except ValueError:
        return value


def get_config(key: str, default: Any = None) -> Any:
    """Get a configuration value by dotted key.

    Environment lookups try ASSETCACHE_CACHE_DIRECTORY and then
    CACHE_DIRECTORY for the key 'cache.directory'.

    Args:
        key: The configuration key
        default: Value returned if the key is not found anywhere
            (falls back to the module DEFAULTS first)

    Returns:
        The configuration value
    """
    if key in _test_config:
        return _test_config[key]

    env_key = key.upper().replace('.', '_')
    for name in (f"{ENV_PREFIX}{env_key}", env_key):
        if name in os.environ:
            value = os.environ[name]
            return value if key in STRING_KEYS else _coerce(value)

    if key in _config:
        return _config[key]

    if default is None:
        default = DEFAULTS.get(key)
    logger.debug(f"Config key '{key}' not found in environment or loaded config. Returning default: {default}")
    return default


def find_dotenv_path() -> Optional[Path]:
    """Searches for the .env file upwards from the current directory."""
    cwd = Path.cwd()
    for path in [cwd] + list(cwd.parents):
        env_path = path / ENV_FILE_NAME
        if env_path.is_file():
            return env_path
    return None


# --- Convenience Functions ---

def get_cache_directory() -> str:
    return str(Path(str(get_config('cache.directory'))).expanduser())


def get_cache_file_name(serializer_name: Optional[str] = None) -> str:
    """Configured storage file name, or cache_storage.<serializer> when unset."""
    file_name = get_config('cache.file_name')
    if not file_name:
        return f"cache_storage.{serializer_name or get_serializer_name()}"
    return str(file_name)


def get_serializer_name() -> str:
    return str(get_config('cache.serializer')).lower()


def set_config_for_testing(config_dict: Dict[str, Any]) -> None:
    """Set configuration values that override every other source (tests only)."""
    _test_config.update(config_dict)
    logger.debug(f"Set testing configuration: {config_dict}")


def clear_test_config() -> None:
    """Clear all testing configuration values."""
    _test_config.clear()
    logger.debug("Cleared testing configuration")
