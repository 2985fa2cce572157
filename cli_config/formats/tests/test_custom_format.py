import configparser
import io
import struct
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

import pytest

from cli_config.errors import ConfigDecodeError
from cli_config.formats.interfaces import ConfigFile, ConfigFormat, SupportsConfigFile
from cli_config.formats.json import JSONFile
from cli_config.locator import init_config, resolve


class INIFormat(ConfigFormat):
    """Flat settings stored under a single [settings] section."""

    name = 'INI'
    suffix = '.ini'
    decode_errors = (configparser.Error, UnicodeDecodeError)

    def decode(self, raw: bytes) -> Any:
        parser = configparser.ConfigParser()
        parser.read_string(raw.decode('utf-8'))
        return dict(parser['settings'])

    def encode(self, data: Dict[str, Any]) -> bytes:
        parser = configparser.ConfigParser()
        parser['settings'] = {key: str(value).lower() if isinstance(value, bool) else str(value) for key, value in data.items()}
        buffer = io.StringIO()
        parser.write(buffer)
        return buffer.getvalue().encode('utf-8')


class INISettings(ConfigFile):
    __config_format__ = INIFormat()

    first_run: bool = True
    volume: int = 5


class ByteFormat(ConfigFormat):
    """A single unsigned byte holding the volume."""

    name = 'byte'
    decode_errors = (struct.error,)

    def decode(self, raw: bytes) -> Any:
        (volume,) = struct.unpack('<B', raw)
        return {'volume': volume}

    def encode(self, data: Dict[str, Any]) -> bytes:
        return struct.pack('<B', data['volume'])


class Volume(ConfigFile):
    __config_format__ = ByteFormat()

    volume: int = 5


@dataclass
class PackedCounter:
    """Binary config implementing load/write directly."""

    launches: int = 0

    @classmethod
    def load(cls, path: Path) -> 'PackedCounter':
        (launches,) = struct.unpack('<I', Path(path).read_bytes())
        return cls(launches=launches)

    def write(self, path: Path) -> None:
        Path(path).write_bytes(struct.pack('<I', self.launches))


def test_custom_format_round_trip(tmp_path):
    path = tmp_path / 'config.ini'

    INISettings(first_run=False, volume=11).write(path)

    assert '[settings]' in path.read_text(encoding='utf-8')
    assert INISettings.load(path) == INISettings(first_run=False, volume=11)


def test_custom_format_decode_errors_are_wrapped(tmp_path):
    path = tmp_path / 'config.ini'
    path.write_text('first_run = true\n', encoding='utf-8')

    with pytest.raises(ConfigDecodeError) as exc_info:
        INISettings.load(path)

    assert exc_info.value.format_name == 'INI'
    assert isinstance(exc_info.value.cause, configparser.Error)


def test_custom_format_works_with_resolve():
    path = resolve('my_cli_tool', 'config.ini')

    loaded = INISettings.load_or_default(path, persist=True)

    assert loaded == INISettings()
    assert INISettings.load(path) == INISettings()


def test_direct_implementation_satisfies_protocol(config_root):
    assert isinstance(PackedCounter(), SupportsConfigFile)
    assert isinstance(INISettings(), SupportsConfigFile)

    path = init_config(PackedCounter(launches=1), 'my_cli_tool', 'counter.bin')

    assert path == config_root / 'my_cli_tool' / 'counter.bin'
    assert PackedCounter.load(path) == PackedCounter(launches=1)


def test_struct_without_format_is_rejected(tmp_path):
    class Bare(ConfigFile):
        first_run: bool = True

    with pytest.raises(TypeError, match='does not declare a config format'):
        Bare().write(tmp_path / 'bare.json')


def test_builtin_mixins_do_not_share_format_with_custom_subclass():
    class Overridden(JSONFile):
        __config_format__ = INIFormat()

    assert Overridden.config_format().name == 'INI'
    assert JSONFile.config_format().name == 'JSON'


@pytest.mark.parametrize('volume', [9, 10, 11, 32])
def test_binary_payload_of_whitespace_bytes_round_trips(volume, tmp_path):
    path = tmp_path / 'volume.bin'

    Volume(volume=volume).write(path)

    assert path.read_bytes() == bytes([volume])
    assert Volume.load(path) == Volume(volume=volume)


def test_binary_format_still_rejects_zero_length_file(tmp_path):
    path = tmp_path / 'volume.bin'
    path.write_bytes(b'')

    with pytest.raises(ConfigDecodeError, match='empty'):
        Volume.load(path)
