"""TOML config files.

Reading uses the standard library's ``tomllib``; writing needs ``tomli-w``
(``pip install cli-config[toml]``).
"""

import tomllib
from typing import Any, ClassVar, Dict

import tomli_w
from pydantic import BaseModel

from cli_config.formats.interfaces import ConfigFile, ConfigFormat


class TOMLFormat(ConfigFormat):
    """TOML tables. ``None`` values are left out since TOML has no null."""

    name = 'TOML'
    suffix = '.toml'
    text_format = True
    decode_errors = (tomllib.TOMLDecodeError, UnicodeDecodeError)
    encode_errors = (TypeError, ValueError)

    def decode(self, raw: bytes) -> Any:
        return tomllib.loads(raw.decode('utf-8'))

    def encode(self, data: Dict[str, Any]) -> bytes:
        return tomli_w.dumps(data).encode('utf-8')

    def dump(self, model: BaseModel) -> Dict[str, Any]:
        return model.model_dump(mode='json', exclude_none=True)


class TOMLFile(ConfigFile):
    """Settings persisted as TOML."""

    __config_format__: ClassVar[ConfigFormat] = TOMLFormat()


__all__ = ['TOMLFile', 'TOMLFormat']
