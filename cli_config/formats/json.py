"""JSON config files, backed by orjson."""

from typing import Any, ClassVar, Dict

import orjson

from cli_config.formats.interfaces import ConfigFile, ConfigFormat


class JSONFormat(ConfigFormat):
    """Pretty-printed JSON with two-space indentation and a trailing newline."""

    name = 'JSON'
    suffix = '.json'
    text_format = True
    decode_errors = (orjson.JSONDecodeError,)
    encode_errors = (orjson.JSONEncodeError,)

    def decode(self, raw: bytes) -> Any:
        return orjson.loads(raw)

    def encode(self, data: Dict[str, Any]) -> bytes:
        return orjson.dumps(data, option=orjson.OPT_INDENT_2 | orjson.OPT_APPEND_NEWLINE)


class JSONFile(ConfigFile):
    """Settings persisted as JSON."""

    __config_format__: ClassVar[ConfigFormat] = JSONFormat()


__all__ = ['JSONFile', 'JSONFormat']
