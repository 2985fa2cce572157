"""Resolution of per-application config files."""

from pathlib import Path
from typing import Optional

from cli_config.errors import ConfigCreateError, ResolutionError
from cli_config.formats.interfaces import SupportsConfigFile
from cli_config.log import get_logger
from cli_config.paths import get_app_dir, locate_config, validate_name

logger = get_logger(__name__)


def ensure_config_path(app_name: str, file_name: str) -> Path:
    """Return ``<config root>/<app_name>/<file_name>``, creating the directory and an empty file if missing.

    Calling it again with the same arguments returns an equal path and touches nothing.

    Raises:
        ConfigRootNotFoundError: If the platform has no known config root
        ConfigCreateError: If the directory or file cannot be created
        ValueError: If either name is empty or escapes the application directory
    """
    validate_name(file_name, 'File name')
    config_path = get_app_dir(app_name) / file_name
    config_dir = config_path.parent

    # file_name may carry subdirectories of the app dir
    if not config_dir.is_dir():
        try:
            config_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise ConfigCreateError(f'Cannot create config directory {config_dir}: {exc}', config_dir, exc) from exc
        logger.info('Created config directory %s', config_dir)

    if config_path.exists():
        if not config_path.is_file():
            raise ConfigCreateError(f'Config path {config_path} exists but is not a file', config_path)
        return config_path

    try:
        config_path.touch(exist_ok=True)
    except OSError as exc:
        raise ConfigCreateError(f'Cannot create config file {config_path}: {exc}', config_path, exc) from exc
    logger.info('Created empty config file %s', config_path)
    return config_path


def resolve(app_name: str, file_name: str) -> Optional[Path]:
    """Locate or create the config file, returning ``None`` if that is not possible.

    See :func:`ensure_config_path` for the variant that reports why.
    """
    try:
        return ensure_config_path(app_name, file_name)
    except ResolutionError as exc:
        logger.warning('Could not resolve config file %s for %s: %s', file_name, app_name, exc.message)
        return None


def init_config(config: SupportsConfigFile, app_name: str, file_name: str) -> Path:
    """Return the path of an existing config file, or write ``config`` as its initial content.

    An existing non-empty file found by :func:`~cli_config.paths.locate_config`
    is returned untouched. Otherwise the primary location is created and
    ``config`` is written there.
    """
    existing = locate_config(app_name, file_name)
    if existing is not None and existing.stat().st_size > 0:
        logger.debug('Using existing config file %s', existing)
        return existing

    config_path = ensure_config_path(app_name, file_name)
    config.write(config_path)
    logger.info('Wrote default config to %s', config_path)
    return config_path


__all__ = ['ensure_config_path', 'init_config', 'resolve']
