"""Shared filesystem helpers for configuration storage."""

import os
import sys
from pathlib import Path, PurePath
from typing import List, Optional

from platformdirs import site_config_dir, user_config_path

from cli_config.errors import ConfigRootNotFoundError


def _is_windows() -> bool:
    return sys.platform == 'win32'


def validate_name(value: str, kind: str) -> str:
    """Reject names that would escape the application directory."""

    pure = PurePath(value)
    if not value or not pure.parts:
        raise ValueError(f"{kind} cannot be empty or '.', got '{value}'")
    if pure.is_absolute() or pure.anchor:
        raise ValueError(f"{kind} must be relative, got '{value}'")
    if '..' in pure.parts:
        raise ValueError(f"{kind} cannot contain '..', got '{value}'")
    return value


def get_config_root() -> Path:
    """Return the platform's per-user configuration root.

    Raises:
        ConfigRootNotFoundError: If the root does not resolve to an absolute path
    """

    root = user_config_path()
    if not root.is_absolute():
        raise ConfigRootNotFoundError(f'Cannot determine the user configuration directory (got {root})', root)
    return root


def get_app_dir(app_name: str) -> Path:
    """Return the configuration directory for ``app_name`` under the user config root."""

    return get_config_root() / validate_name(app_name, 'Application name')


def _site_config_dirs() -> List[Path]:
    if _is_windows():
        return []
    return [Path(entry) for entry in site_config_dir(multipath=True).split(os.pathsep) if entry]


def _home_dir() -> Optional[Path]:
    try:
        return Path.home()
    except RuntimeError:
        return None


def candidate_paths(app_name: str, file_name: str) -> List[Path]:
    """Return the locations searched for an existing config file, in priority order.

    1. <config root>/<app_name>/<file_name>
    2. <site config dir>/<app_name>/<file_name> for each system config dir
    3. <config root>/<app_name><suffix>
    4. ~/.config/<app_name>/<file_name>
    5. ~/.<app_name><suffix>

    Entries 2, 4 and 5 are skipped on Windows.
    """
    validate_name(app_name, 'Application name')
    validate_name(file_name, 'File name')

    root = get_config_root()
    suffix = PurePath(file_name).suffix
    candidates = [root / app_name / file_name]
    candidates.extend(site_dir / app_name / file_name for site_dir in _site_config_dirs())
    candidates.append(root / f'{app_name}{suffix}')

    home = _home_dir()
    if home is not None and not _is_windows():
        candidates.append(home / '.config' / app_name / file_name)
        candidates.append(home / f'.{app_name}{suffix}')

    unique = []
    for candidate in candidates:
        if candidate not in unique:
            unique.append(candidate)
    return unique


def locate_config(app_name: str, file_name: str) -> Optional[Path]:
    """Return the first existing config file among the candidate paths, without creating anything."""

    try:
        candidates = candidate_paths(app_name, file_name)
    except ConfigRootNotFoundError:
        return None

    for candidate in candidates:
        if candidate.is_file():
            return candidate
    return None


__all__ = ['candidate_paths', 'get_app_dir', 'get_config_root', 'locate_config', 'validate_name']
