"""
Errors raised by the shape registry.

Every error carries a ``context`` mapping of the values involved. Registry
records among them print in their structural form.
"""

from typing import Optional, Dict, Any

from shape_registry.domain.models.entities import describe


class ShapeRegistryError(Exception):
    """Base exception for shape registry errors."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if not self.context:
            return self.message
        details = ", ".join(f"{key}={describe(value)}" for key, value in self.context.items())
        return f"{self.message} (Context: {details})"


class ConfigurationError(ShapeRegistryError):
    """A configuration file or value was rejected. The configuration in effect is unchanged."""

    def __init__(self, message: str, path: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None):
        if path is not None:
            context = {'path': path, **(context or {})}
        super().__init__(message, context)
        self.path = path


class FileSystemError(ShapeRegistryError):
    """A text file could not be read."""

    def __init__(self, message: str, file_path: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None):
        super().__init__(message, context)
        self.file_path = file_path
