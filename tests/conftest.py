"""
Pytest configuration and shared fixtures.
"""

import pytest
import tempfile
import shutil
from pathlib import Path
from unittest.mock import Mock

from shape_registry.domain.models.configuration import RegistryConfiguration
from shape_registry.domain.interfaces.base import ILogger
from shape_registry.application.services.shape_registry import ShapeRegistry


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path)
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def mock_logger():
    """Create a mock logger for testing."""
    logger = Mock(spec=ILogger)
    logger.debug = Mock()
    logger.info = Mock()
    logger.warning = Mock()
    logger.error = Mock()
    logger.critical = Mock()
    return logger


@pytest.fixture
def sample_registry_config():
    """Create a sample registry configuration for testing."""
    return RegistryConfiguration(
        log_level="DEBUG",
        max_display_lines=5,
        null_display="none",
        default_customer_age=40
    )


@pytest.fixture
def sample_config_dict():
    """Create a sample configuration dictionary for testing."""
    return {
        'log_level': "WARNING",
        'file_encoding': "utf-8",
        'max_display_lines': 20,
        'default_customer_age': 21
    }


@pytest.fixture
def registry(mock_logger):
    """Create an empty registry with default configuration."""
    return ShapeRegistry(mock_logger)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove environment overrides that would leak into configuration tests."""
    for name in ('SHAPE_REGISTRY_LOG_LEVEL', 'SHAPE_REGISTRY_LOG_DIR', 'SHAPE_REGISTRY_MAX_DISPLAY_LINES'):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch
