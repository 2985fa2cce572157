"""YAML config files with !env support (``pip install cli-config[yaml]``)."""

from __future__ import annotations

import os
from typing import Any, ClassVar, Dict, NoReturn

import yaml

from cli_config.formats.interfaces import ConfigFile, ConfigFormat


class EnvSafeLoader(yaml.SafeLoader):
    """SafeLoader that resolves ``!env`` tags from the process environment.

    ``!env NAME`` requires the variable; ``!env [NAME, default]`` falls back to
    ``default``, which keeps its YAML type.
    """

    def construct_env(self, node: yaml.Node) -> Any:
        if isinstance(node, yaml.ScalarNode):
            name, args = self.construct_scalar(node), ()
        elif isinstance(node, yaml.SequenceNode):
            values = self.construct_sequence(node)
            if len(values) != 2:
                self._reject(node, f'[name, default] must have exactly 2 elements, got {len(values)}')
            name, args = values[0], values[1:]
        else:
            self._reject(node, f'expects scalar or sequence, got {type(node).__name__}')

        if not isinstance(name, str):
            self._reject(node, f'variable name must be a string, got {type(name).__name__}')
        if name in os.environ:
            return os.environ[name]
        if not args:
            raise ValueError(f"Required environment variable '{name}' is not set")
        return args[0]

    @staticmethod
    def _reject(node: yaml.Node, problem: str) -> NoReturn:
        raise yaml.constructor.ConstructorError(None, None, f'!env {problem}', node.start_mark)


EnvSafeLoader.add_constructor('!env', EnvSafeLoader.construct_env)


def safe_load_with_env(stream) -> Any:
    """Drop-in replacement for yaml.safe_load() supporting !env tags."""

    return yaml.load(stream, Loader=EnvSafeLoader)


class YAMLFormat(ConfigFormat):
    """Block-style YAML that keeps field order."""

    name = 'YAML'
    suffix = '.yaml'
    text_format = True
    # ValueError covers a missing required !env variable
    decode_errors = (yaml.YAMLError, ValueError)
    encode_errors = (yaml.YAMLError, TypeError)

    def decode(self, raw: bytes) -> Any:
        return safe_load_with_env(raw)

    def encode(self, data: Dict[str, Any]) -> bytes:
        return yaml.safe_dump(data, default_flow_style=False, sort_keys=False, indent=2, allow_unicode=True).encode('utf-8')


class YAMLFile(ConfigFile):
    """Settings persisted as YAML."""

    __config_format__: ClassVar[ConfigFormat] = YAMLFormat()


__all__ = ['EnvSafeLoader', 'YAMLFile', 'YAMLFormat', 'safe_load_with_env']
