"""Config file formats.

JSON is always available. TOML and YAML live in ``cli_config.formats.toml``
and ``cli_config.formats.yaml`` and need the matching install extra.
"""

from cli_config.formats.interfaces import ConfigFile, ConfigFormat, SupportsConfigFile
from cli_config.formats.json import JSONFile, JSONFormat

__all__ = ['ConfigFile', 'ConfigFormat', 'JSONFile', 'JSONFormat', 'SupportsConfigFile']
