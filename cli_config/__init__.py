"""Config file helpers for command-line applications.

Typical first-run flow::

    from cli_config import JSONFile, resolve

    class Settings(JSONFile):
        first_run: bool = True

    path = resolve('my_cli_tool', 'config.json')
    settings = Settings.load_or_default(path)
    if settings.first_run:
        settings.first_run = False
        settings.write(path)
"""

from cli_config.errors import (
    ConfigCreateError,
    ConfigDecodeError,
    ConfigEncodeError,
    ConfigError,
    ConfigIOError,
    ConfigRootNotFoundError,
    ResolutionError,
)
from cli_config.formats import ConfigFile, ConfigFormat, JSONFile, JSONFormat, SupportsConfigFile
from cli_config.locator import ensure_config_path, init_config, resolve
from cli_config.log import LoggingConfig, configure_logging, get_logger
from cli_config.paths import candidate_paths, get_app_dir, get_config_root, locate_config

__version__ = '0.1.0'

__all__ = [
    'ConfigCreateError',
    'ConfigDecodeError',
    'ConfigEncodeError',
    'ConfigError',
    'ConfigFile',
    'ConfigFormat',
    'ConfigIOError',
    'ConfigRootNotFoundError',
    'JSONFile',
    'JSONFormat',
    'LoggingConfig',
    'ResolutionError',
    'SupportsConfigFile',
    'candidate_paths',
    'configure_logging',
    'ensure_config_path',
    'get_app_dir',
    'get_config_root',
    'get_logger',
    'init_config',
    'locate_config',
    'resolve',
]
