"""
Composition root - wires configuration, logging, error handling and the registry.
"""

from dataclasses import dataclass
from typing import Optional

from shape_registry.domain.interfaces.base import ILogger, IErrorHandler
from shape_registry.domain.models.configuration import RegistryConfiguration
from shape_registry.infrastructure.configuration.manager import ConfigurationManager
from shape_registry.infrastructure.logging.logger import RegistryLogger, create_component_logger
from shape_registry.infrastructure.error_handling.handler import ErrorHandler
from shape_registry.infrastructure.file_system.reader import TextFileReader
from shape_registry.application.services.shape_registry import ShapeRegistry


@dataclass
class Application:
    """Wired components of a running registry."""

    config: RegistryConfiguration
    logger: ILogger
    error_handler: IErrorHandler
    file_reader: TextFileReader
    registry: ShapeRegistry
    config_manager: Optional[ConfigurationManager] = None

    def apply_config(self, config: RegistryConfiguration) -> None:
        """Hand a newly loaded configuration to every component."""
        self.config = config
        if isinstance(self.logger, RegistryLogger):
            self.logger.apply_config(config)
        self.registry.apply_config(config)
        self.file_reader.apply_config(config)

    def close(self) -> None:
        if self.config_manager is not None:
            self.config_manager.stop_watching()


def create_registry(config_file: Optional[str] = None,
                    logger: Optional[ILogger] = None,
                    watch: bool = False) -> Application:
    """Build every component.

    With ``config_file``, configuration comes from that file and every later
    reload is applied to the running components; ``watch`` additionally
    reloads on file changes until ``Application.close``.
    """
    config_manager = None
    if config_file:
        config_manager = ConfigurationManager(config_file, logger or RegistryLogger('config'))
        config = config_manager.get_registry_config()
    else:
        config = RegistryConfiguration.from_dict({})

    if logger is None:
        logger = create_component_logger('registry', config)

    app = Application(
        config=config,
        logger=logger,
        error_handler=ErrorHandler(logger),
        file_reader=TextFileReader(logger, config),
        registry=ShapeRegistry(logger, config),
        config_manager=config_manager,
    )

    if config_manager is not None:
        config_manager.subscribe(app.apply_config)
        if watch:
            config_manager.start_watching()

    logger.info("All components initialized", component='bootstrap')
    return app
