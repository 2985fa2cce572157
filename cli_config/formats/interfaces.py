"""Core interfaces for configuration file formats.

A settings structure opts into exactly one on-disk format by pointing its
``__config_format__`` class variable at a :class:`ConfigFormat` adapter. The
mixins in the sibling modules (``JSONFile``, ``TOMLFile``, ``YAMLFile``) do
that for the built-in formats; a custom format only needs ``decode`` and
``encode``.
"""

from __future__ import annotations

import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, ClassVar, Dict, Protocol, Tuple, Type, TypeVar, runtime_checkable

from pydantic import BaseModel, ValidationError

from cli_config.errors import ConfigDecodeError, ConfigEncodeError, ConfigIOError
from cli_config.log import get_logger

logger = get_logger(__name__)

ModelT = TypeVar('ModelT', bound=BaseModel)
ConfigFileT = TypeVar('ConfigFileT', bound='ConfigFile')


@runtime_checkable
class SupportsConfigFile(Protocol):
    """Anything that can be loaded from and written to a config path."""

    @classmethod
    def load(cls, path: Path) -> Any: ...

    def write(self, path: Path) -> None: ...


class ConfigFormat(ABC):
    """Maps bytes on disk to and from a pydantic model."""

    name: ClassVar[str] = 'custom'
    suffix: ClassVar[str] = ''
    # text formats treat whitespace-only content as empty
    text_format: ClassVar[bool] = False
    decode_errors: ClassVar[Tuple[Type[Exception], ...]] = (ValueError,)
    encode_errors: ClassVar[Tuple[Type[Exception], ...]] = (TypeError, ValueError)

    @abstractmethod
    def decode(self, raw: bytes) -> Any:
        """Parse raw file content into plain data."""
        pass

    @abstractmethod
    def encode(self, data: Dict[str, Any]) -> bytes:
        """Serialize plain data into file content."""
        pass

    def dump(self, model: BaseModel) -> Dict[str, Any]:
        return model.model_dump(mode='json')

    def load(self, model_cls: Type[ModelT], path: Path) -> ModelT:
        """Read the whole file at ``path`` and validate it into ``model_cls``.

        Raises:
            ConfigIOError: If the file is missing or unreadable
            ConfigDecodeError: If the content is empty, malformed or has the wrong shape
        """
        path = Path(path)
        try:
            raw = path.read_bytes()
        except OSError as exc:
            raise ConfigIOError(f'Error reading config file {path}: {exc}', path, exc) from exc

        if not raw or (self.text_format and not raw.strip()):
            raise ConfigDecodeError(f'Config file {path} is empty', path, self.name)

        try:
            data = self.decode(raw)
        except self.decode_errors as exc:
            raise ConfigDecodeError(f'Invalid {self.name} in config file {path}: {exc}', path, self.name, exc) from exc

        if not isinstance(data, dict):
            raise ConfigDecodeError(f'Config file {path} must contain a {self.name} mapping, got {type(data).__name__}', path, self.name)

        try:
            model = model_cls.model_validate(data)
        except ValidationError as exc:
            raise ConfigDecodeError(f'Config file {path} does not match {model_cls.__name__}: {exc}', path, self.name, exc) from exc

        logger.debug('Loaded %s config from %s', self.name, path)
        return model

    def write(self, model: BaseModel, path: Path, atomic: bool = False) -> None:
        """Serialize ``model`` and overwrite the file at ``path``.

        The value is encoded before the file is opened, so an unencodable value
        leaves the previous content in place. With ``atomic`` the bytes go to a
        temporary sibling file that then replaces the target.

        Raises:
            ConfigEncodeError: If the value cannot be represented in this format
            ConfigIOError: If the file cannot be written
        """
        path = Path(path)
        try:
            payload = self.encode(self.dump(model))
        except self.encode_errors as exc:
            raise ConfigEncodeError(f'Cannot serialize {type(model).__name__} as {self.name}: {exc}', path, self.name, exc) from exc

        try:
            if atomic:
                _replace_atomically(path, payload)
            else:
                with open(path, 'wb') as f:
                    f.write(payload)
        except OSError as exc:
            raise ConfigIOError(f'Error writing config file {path}: {exc}', path, exc) from exc

        logger.debug('Wrote %s config to %s (%s bytes)', self.name, path, len(payload))


def _replace_atomically(path: Path, payload: bytes) -> None:
    fd, tmp_name = tempfile.mkstemp(prefix=f'.{path.name}.', suffix='.tmp', dir=path.parent)
    try:
        with os.fdopen(fd, 'wb') as f:
            f.write(payload)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, path)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise


class ConfigFile(BaseModel):
    """Base for settings structures persisted through a :class:`ConfigFormat`.

    Every field should have a default so ``cls()`` is the first-run value.
    """

    __config_format__: ClassVar[ConfigFormat]

    @classmethod
    def config_format(cls) -> ConfigFormat:
        config_format = getattr(cls, '__config_format__', None)
        if config_format is None:
            raise TypeError(f'{cls.__name__} does not declare a config format; inherit a format mixin or set __config_format__')
        return config_format

    @classmethod
    def load(cls: Type[ConfigFileT], path: Path) -> ConfigFileT:
        """Load an instance from ``path`` using the class's format."""
        return cls.config_format().load(cls, path)

    def write(self, path: Path, atomic: bool = False) -> None:
        """Write this instance to ``path`` using the class's format."""
        self.config_format().write(self, path, atomic=atomic)

    @classmethod
    def load_or_default(cls: Type[ConfigFileT], path: Path, persist: bool = False) -> ConfigFileT:
        """Load from ``path``, falling back to ``cls()`` when the file is missing or undecodable.

        Other I/O errors (permissions, disk errors) still propagate. With
        ``persist`` the default is written back to ``path``.
        """
        try:
            return cls.load(path)
        except ConfigIOError as exc:
            if not exc.missing:
                raise
            logger.info('No config file at %s, using defaults', path)
        except ConfigDecodeError as exc:
            logger.warning('Ignoring unreadable config file %s: %s', path, exc.message)

        config = cls()
        if persist:
            config.write(path)
        return config


__all__ = ['ConfigFile', 'ConfigFormat', 'SupportsConfigFile']
