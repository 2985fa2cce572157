from pathlib import Path

import pytest

import cli_config.paths


@pytest.fixture(autouse=True)
def config_root(tmp_path, monkeypatch) -> Path:
    """Point the user config root, system config dirs and $HOME at a temporary tree."""
    root = tmp_path / 'config'
    home = tmp_path / 'home'
    site = tmp_path / 'site'
    home.mkdir()

    monkeypatch.setattr(cli_config.paths, 'user_config_path', lambda: root)
    monkeypatch.setattr(cli_config.paths, 'site_config_dir', lambda multipath=False: str(site))
    monkeypatch.setenv('HOME', str(home))
    monkeypatch.setattr(cli_config.paths, '_is_windows', lambda: False)
    return root


@pytest.fixture
def home_dir(config_root) -> Path:
    return config_root.parent / 'home'


@pytest.fixture
def site_dir(config_root) -> Path:
    return config_root.parent / 'site'
