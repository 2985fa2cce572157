import logging
import logging.handlers
import re
from pathlib import Path
from typing import List, Literal, Optional

import orjson
import structlog
from pydantic import BaseModel, Field, field_validator
from structlog.types import FilteringBoundLogger

from cli_config.paths import get_app_dir

_DEFAULT_MAX_BYTES = 10 * 1024 * 1024
_SIZE_MULTIPLIERS = {'B': 1, 'KB': 1024, 'MB': 1024**2, 'GB': 1024**3, 'TB': 1024**4}

# Library loggers stay silent until the host application configures logging
logging.getLogger('cli_config').addHandler(logging.NullHandler())


class LoggingConfig(BaseModel):
    """Logging configuration model."""

    level: Literal['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'] = Field(default='INFO', description='Log level')
    console_enabled: bool = Field(default=True, description='Enable console logging')
    file_enabled: bool = Field(default=False, description='Enable file logging')
    log_file_dir: Optional[str] = Field(default=None, description='Log directory (defaults to <config root>/<app_name>/logs)')
    max_file_size: str = Field(default='10MB', description='Maximum log file size before rotation')
    backup_count: int = Field(default=4, ge=0, description='Number of backup files to keep')

    @field_validator('level', mode='before')
    @classmethod
    def normalize_level(cls, v):
        """Accept level names in any case."""
        return v.upper() if isinstance(v, str) else v


def parse_file_size(value: str) -> int:
    """Parse sizes like "10MB", "512 KB" or "2048" into bytes, falling back to 10MB."""

    size_match = re.fullmatch(r'\s*(\d+)\s*([KMGT]?)B?\s*', value.upper())
    if not size_match:
        return _DEFAULT_MAX_BYTES
    unit = f'{size_match.group(2)}B'
    return int(size_match.group(1)) * _SIZE_MULTIPLIERS[unit]


def _json_serializer(*args, **kwargs) -> str:
    return orjson.dumps(*args, **kwargs).decode('utf-8')


def _create_log_handlers(log_config: LoggingConfig, log_dir: Optional[Path]) -> List[logging.Handler]:
    """Create logging handlers based on configuration."""
    handlers: List[logging.Handler] = []

    if log_config.console_enabled:
        formatter = structlog.stdlib.ProcessorFormatter(
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, structlog.processors.format_exc_info, structlog.dev.ConsoleRenderer()]
        )
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        handlers.append(console_handler)

    if log_config.file_enabled and log_dir is not None:
        formatter = structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                structlog.processors.JSONRenderer(serializer=_json_serializer),
            ]
        )
        file_handler = logging.handlers.RotatingFileHandler(
            log_dir / 'app.log', maxBytes=parse_file_size(log_config.max_file_size), backupCount=log_config.backup_count, encoding='utf-8'
        )
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    return handlers


def _prepare_log_dir(log_config: LoggingConfig, app_name: str) -> Path:
    log_dir = Path(log_config.log_file_dir) if log_config.log_file_dir else get_app_dir(app_name) / 'logs'
    if log_dir.exists() and not log_dir.is_dir():
        raise NotADirectoryError(f'Log directory {log_dir} is not a directory')
    log_dir.mkdir(exist_ok=True, parents=True)
    return log_dir


def get_logger(name: str) -> FilteringBoundLogger:
    """Get a structlog logger that emits through the standard library logger of the same name."""
    return structlog.wrap_logger(logging.getLogger(name))


def configure_logging(log_config: Optional[LoggingConfig] = None, app_name: str = 'cli-config') -> None:
    """Configure structlog with console and optional rotating file output on top of standard logging.

    Meant to be called once by the host application; the library never configures logging on import.
    """
    log_config = log_config or LoggingConfig()
    level = getattr(logging, log_config.level)

    log_dir = _prepare_log_dir(log_config, app_name) if log_config.file_enabled else None

    logging.basicConfig(
        level=level,
        handlers=_create_log_handlers(log_config, log_dir),
        format='%(message)s',  # structlog will handle formatting
        force=True,
    )

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.processors.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.format_exc_info,
        structlog.processors.TimeStamper(fmt='ISO', utc=True),
        structlog.processors.UnicodeDecoder(),
        structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


__all__ = ['LoggingConfig', 'configure_logging', 'get_logger', 'parse_file_size']
