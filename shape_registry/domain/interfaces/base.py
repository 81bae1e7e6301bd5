"""
Base interfaces and abstract classes for the domain layer.
"""

from abc import ABC
from typing import TYPE_CHECKING, Any, Dict, Protocol, runtime_checkable

if TYPE_CHECKING:
    from shape_registry.domain.models.configuration import RegistryConfiguration


class ILogger(Protocol):
    """Logger interface for dependency injection.

    Keyword arguments form the structured context of the record; records
    passed as values are rendered in their structural form.
    """

    def debug(self, message: str, **context: Any) -> None: ...
    def info(self, message: str, **context: Any) -> None: ...
    def warning(self, message: str, **context: Any) -> None: ...
    def error(self, message: str, **context: Any) -> None: ...
    def critical(self, message: str, **context: Any) -> None: ...


class IErrorHandler(Protocol):
    """Turns exceptions into log records and user-facing messages."""

    def handle_error(self, error: Exception, context: Dict[str, Any]) -> str: ...
    def create_user_message(self, error: Exception) -> str: ...


@runtime_checkable
class Describable(Protocol):
    """Anything that renders a structural, human-readable form of itself."""

    def describe(self) -> str: ...


class ValueObject(ABC):
    """Marker for immutable records whose identity is their field contents.

    Subclasses are frozen dataclasses; equality and hashing come from the
    generated field-wise methods.
    """


class DomainService(ABC):
    """Service holding a logger and the configuration currently in effect."""

    component = 'service'

    def __init__(self, logger: ILogger, config: 'RegistryConfiguration'):
        self.logger = logger
        self.config = config

    def apply_config(self, config: 'RegistryConfiguration') -> None:
        """Switch to a new configuration; later operations use it."""
        self.config = config
        self.logger.debug("Configuration applied", component=self.component)
