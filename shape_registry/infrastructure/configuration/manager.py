"""
JSON configuration file for the registry, with validation and live reload.

The file holds one JSON object whose keys are ``RegistryConfiguration``
fields. A missing file is created with defaults. A bad edit never replaces
the configuration in effect: the last valid one is kept and the failure is
logged. Subscribers receive every newly applied ``RegistryConfiguration``.
"""

import json
import threading
import time
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from shape_registry.domain.exceptions import ConfigurationError
from shape_registry.domain.interfaces.base import ILogger
from shape_registry.domain.models.configuration import RegistryConfiguration

ConfigListener = Callable[[RegistryConfiguration], None]


class ConfigFileWatcher(FileSystemEventHandler):
    """Calls ``on_change`` when one specific file is written or replaced.

    Events for other files in the watched directory are ignored and do not
    count towards the debounce window.
    """

    def __init__(self, target: Path, on_change: Callable[[], Any], debounce_seconds: float = 1.0):
        self.target = target.resolve()
        self.on_change = on_change
        self.debounce_seconds = debounce_seconds
        self._last_fired = 0.0

    def on_modified(self, event: FileSystemEvent) -> None:
        self._handle(event.is_directory, event.src_path)

    def on_created(self, event: FileSystemEvent) -> None:
        self._handle(event.is_directory, event.src_path)

    def on_moved(self, event: FileSystemEvent) -> None:
        # Editors that save atomically rename a temp file over the target
        self._handle(event.is_directory, getattr(event, 'dest_path', ''))

    def _handle(self, is_directory: bool, path: str) -> None:
        if is_directory or not path or Path(path).resolve() != self.target:
            return

        now = time.monotonic()
        if now - self._last_fired < self.debounce_seconds:
            return
        self._last_fired = now
        self.on_change()


class ConfigurationManager:
    """Owns the registry configuration file and the configuration in effect."""

    def __init__(self, config_file_path: str, logger: ILogger):
        self.config_file_path = Path(config_file_path)
        self.logger = logger
        self._lock = threading.RLock()
        self._data: Dict[str, Any] = {}
        self._config = RegistryConfiguration()
        self._listeners: List[ConfigListener] = []
        self._observer: Optional[Observer] = None

        if self.config_file_path.exists():
            data = self._read_file()
            self._data, self._config = data, self._build(data)
        else:
            self.logger.info("Configuration file not found, writing defaults",
                             component='config', path=str(self.config_file_path))
            self._data = self._config.to_dict()
            self.save()

    # ================================================================
    # Access
    # ================================================================

    def get_registry_config(self) -> RegistryConfiguration:
        with self._lock:
            return self._config

    def get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            return self._data.get(key, default)

    def get_all(self) -> Dict[str, Any]:
        with self._lock:
            return dict(self._data)

    def validate(self, data: Optional[Mapping[str, Any]] = None) -> bool:
        """Whether ``data`` (default: the current values) forms a valid configuration."""
        try:
            self._build(self.get_all() if data is None else data)
        except ConfigurationError as e:
            self.logger.warning("Configuration rejected", component='config', reason=str(e))
            return False
        return True

    # ================================================================
    # Changes
    # ================================================================

    def set(self, key: str, value: Any) -> RegistryConfiguration:
        """Change one value in memory and apply it; invalid values raise ConfigurationError."""
        with self._lock:
            data = {**self._data, key: value}
            self._apply(data, self._build(data))
            return self._config

    def reload(self) -> bool:
        """Re-read the file. Returns False, keeping the current configuration, if it is invalid."""
        try:
            data = self._read_file()
            config = self._build(data)
        except ConfigurationError as e:
            self.logger.error("Configuration reload failed, keeping current values",
                              component='config', reason=str(e))
            return False

        with self._lock:
            self._apply(data, config)
        self.logger.info("Configuration reloaded", component='config', path=str(self.config_file_path))
        return True

    def save(self) -> None:
        """Write the current values to the configuration file."""
        try:
            self.config_file_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_file_path, 'w', encoding='utf-8') as f:
                json.dump(self.get_all(), f, indent=4)
        except OSError as e:
            raise ConfigurationError(f"Cannot write configuration: {e}",
                                     path=str(self.config_file_path))

    def subscribe(self, listener: ConfigListener) -> None:
        """Call ``listener`` with each configuration applied from now on."""
        self._listeners.append(listener)

    # ================================================================
    # Watching
    # ================================================================

    def start_watching(self, debounce_seconds: float = 1.0) -> None:
        """Reload automatically whenever the configuration file changes."""
        if self._observer is not None:
            return

        watcher = ConfigFileWatcher(self.config_file_path, self.reload, debounce_seconds)
        observer = Observer()
        observer.schedule(watcher, str(self.config_file_path.resolve().parent), recursive=False)
        observer.start()
        self._observer = observer
        self.logger.info("Watching configuration file", component='config', path=str(self.config_file_path))

    def stop_watching(self) -> None:
        if self._observer is None:
            return
        self._observer.stop()
        self._observer.join()
        self._observer = None

    @property
    def is_watching(self) -> bool:
        return self._observer is not None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.stop_watching()

    # ================================================================
    # Internals
    # ================================================================

    def _read_file(self) -> Dict[str, Any]:
        try:
            with open(self.config_file_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise ConfigurationError(f"Cannot read configuration file: {e}",
                                     path=str(self.config_file_path))

        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Configuration file must hold a JSON object, not {type(data).__name__}",
                path=str(self.config_file_path)
            )
        return data

    @staticmethod
    def _build(data: Mapping[str, Any]) -> RegistryConfiguration:
        try:
            return RegistryConfiguration.from_dict(data)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid configuration: {e}")

    def _apply(self, data: Dict[str, Any], config: RegistryConfiguration) -> None:
        self._data, self._config = data, config
        for listener in list(self._listeners):
            try:
                listener(config)
            except Exception as e:
                self.logger.error("Configuration listener failed", component='config',
                                  listener=getattr(listener, '__qualname__', repr(listener)),
                                  reason=str(e))
