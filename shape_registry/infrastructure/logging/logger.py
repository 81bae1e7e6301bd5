"""
JSON logging for registry components.

Each record is one JSON line. Keyword arguments given to a log call become
the record's ``context``; registry records among them (rectangles, people,
customers) are written as ``{"type": ..., "text": ...}`` using the
structural form, so log output reads the same way ``describe`` does.
"""

import json
import logging
from dataclasses import is_dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

from shape_registry.domain.models.configuration import RegistryConfiguration
from shape_registry.domain.models.entities import NULL_DISPLAY, describe

LOGGER_PREFIX = "shape_registry"


class RecordJsonFormatter(logging.Formatter):
    """Formats log records as JSON, rendering registry records in context."""

    def __init__(self, null_display: str = NULL_DISPLAY):
        super().__init__()
        self.null_display = null_display

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            'timestamp': datetime.fromtimestamp(record.created).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'component': getattr(record, 'component', None) or 'unknown',
            'message': record.getMessage(),
        }

        context = getattr(record, 'context', None)
        if context:
            payload['context'] = {key: self._encode(value) for key, value in context.items()}

        if record.exc_info:
            payload['exception'] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False, default=str)

    def _encode(self, value: Any) -> Any:
        if is_dataclass(value) and not isinstance(value, type):
            return {'type': type(value).__name__, 'text': describe(value, self.null_display)}
        return value


class RegistryLogger:
    """Component logger implementing ``ILogger`` on top of stdlib logging.

    The component name is bound once and can be overridden per call with a
    ``component=`` keyword. ``apply_config`` follows configuration reloads
    for ``log_level`` and ``null_display``.
    """

    def __init__(self, component: str, level: str = "INFO",
                 log_file: Optional[str] = None, null_display: str = NULL_DISPLAY):
        self.component = component
        self.logger = logging.getLogger(f"{LOGGER_PREFIX}.{component}")
        self.logger.propagate = False
        self.logger.handlers.clear()
        self.formatter = RecordJsonFormatter(null_display)

        self._add_handler(logging.StreamHandler())
        if log_file:
            Path(log_file).parent.mkdir(parents=True, exist_ok=True)
            self._add_handler(logging.FileHandler(log_file, encoding='utf-8'))

        self.set_level(level)

    def _add_handler(self, handler: logging.Handler) -> None:
        handler.setFormatter(self.formatter)
        self.logger.addHandler(handler)

    def set_level(self, level: str) -> None:
        self.logger.setLevel(getattr(logging, level.upper()))

    def apply_config(self, config: RegistryConfiguration) -> None:
        """Adopt the level and null placeholder of a reloaded configuration."""
        self.set_level(config.log_level)
        self.formatter.null_display = config.null_display

    def close(self) -> None:
        for handler in list(self.logger.handlers):
            handler.close()
            self.logger.removeHandler(handler)

    def debug(self, message: str, **context: Any) -> None:
        self._log(logging.DEBUG, message, context)

    def info(self, message: str, **context: Any) -> None:
        self._log(logging.INFO, message, context)

    def warning(self, message: str, **context: Any) -> None:
        self._log(logging.WARNING, message, context)

    def error(self, message: str, **context: Any) -> None:
        self._log(logging.ERROR, message, context)

    def critical(self, message: str, **context: Any) -> None:
        self._log(logging.CRITICAL, message, context)

    def _log(self, level: int, message: str, context: Dict[str, Any]) -> None:
        component = context.pop('component', self.component)
        self.logger.log(level, message, extra={'component': component, 'context': context})


def create_component_logger(component: str, config: RegistryConfiguration) -> RegistryLogger:
    """Logger for one component; writes ``<log_dir>/<component>.log`` when a log_dir is set."""
    log_file = str(Path(config.log_dir) / f"{component}.log") if config.log_dir else None
    return RegistryLogger(component, config.log_level, log_file, config.null_display)
