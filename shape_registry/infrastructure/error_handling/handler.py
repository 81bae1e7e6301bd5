"""
Error handler implementation with structured logging and fallback hooks.
"""

import traceback
from typing import Dict, Any, Callable

from shape_registry.domain.interfaces.base import ILogger
from shape_registry.domain.exceptions import (
    ShapeRegistryError, ConfigurationError, FileSystemError
)

Fallback = Callable[[Exception, Dict[str, Any]], None]


class ErrorHandler:
    """Logs failures from registry components and phrases them for users.

    After logging, the first fallback registered for a matching exception
    type runs. A failing fallback is logged and never propagates.
    """

    def __init__(self, logger: ILogger):
        self.logger = logger
        self._fallback_handlers: Dict[type, Fallback] = {
            FileSystemError: self._note_unreadable_path,
        }

    def handle_error(self, error: Exception, context: Dict[str, Any]) -> str:
        """Log the error and return a message suitable for display."""
        self.log_error(error, context)
        self._execute_fallback(error, context)
        return self.create_user_message(error)

    def log_error(self, error: Exception, context: Dict[str, Any]) -> None:
        error_context = {
            'error_type': type(error).__name__,
            'error_message': str(error),
            'traceback': ''.join(traceback.format_exception(type(error), error, error.__traceback__)),
            **context
        }

        if isinstance(error, ShapeRegistryError):
            error_context.update(error.context)
        if isinstance(error, FileSystemError):
            error_context['file_path'] = error.file_path

        if isinstance(error, ConfigurationError):
            # Configuration changes are all-or-nothing; the values in effect are untouched
            self.logger.warning("Configuration rejected", **error_context)
        elif isinstance(error, ShapeRegistryError):
            self.logger.error("Registry operation failed", **error_context)
        else:
            self.logger.error("Unexpected error occurred", **error_context)

    def create_user_message(self, error: Exception) -> str:
        if isinstance(error, ConfigurationError):
            return f"Configuration error: {error.message}\nThe previous configuration is still in use."

        elif isinstance(error, FileSystemError):
            return f"File system error: {error.message}\nPlease check the file path and permissions."

        elif isinstance(error, ShapeRegistryError):
            return f"Registry error: {error.message}"

        else:
            return f"Unexpected error: {str(error)}"

    def _execute_fallback(self, error: Exception, context: Dict[str, Any]) -> None:
        handler = next(
            (h for exc_type, h in self._fallback_handlers.items() if isinstance(error, exc_type)),
            None
        )
        if handler is None:
            return

        try:
            handler(error, context)
        except Exception as fallback_error:
            self.logger.error(
                "Fallback handler failed",
                error_type=type(fallback_error).__name__,
                error_message=str(fallback_error),
                original_error=str(error)
            )

    def _note_unreadable_path(self, error: FileSystemError, context: Dict[str, Any]) -> None:
        self.logger.info("Skipping unreadable path", component=context.get('component', 'file_reader'),
                         file_path=error.file_path)

    def add_fallback_handler(self, error_type: type, handler: Fallback) -> None:
        """Add custom fallback handler for specific error type."""
        self._fallback_handlers[error_type] = handler

    def remove_fallback_handler(self, error_type: type) -> None:
        """Remove fallback handler for specific error type."""
        self._fallback_handlers.pop(error_type, None)
