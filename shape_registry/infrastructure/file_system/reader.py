"""
Text file reader used to show file contents line by line.
"""

from itertools import islice
from pathlib import Path
from typing import List, Optional

from shape_registry.domain.interfaces.base import DomainService, ILogger
from shape_registry.domain.interfaces.file_reader import IFileReader
from shape_registry.domain.models.configuration import RegistryConfiguration
from shape_registry.domain.exceptions import FileSystemError


class TextFileReader(DomainService, IFileReader):
    """Reads text files with the configured encoding and line cap."""

    component = 'file_reader'

    def __init__(self, logger: ILogger, config: RegistryConfiguration):
        super().__init__(logger, config)

    def read_lines(self, path: str, max_lines: Optional[int] = None) -> List[str]:
        """Read up to max_lines lines of a text file, without line endings."""
        limit = max_lines if max_lines is not None else self.config.max_display_lines
        file_path = Path(path)

        if not file_path.is_file():
            raise FileSystemError(f"Not a readable file: {path}", file_path=str(path))

        try:
            with open(file_path, 'r', encoding=self.config.file_encoding) as f:
                lines = [line.rstrip('\r\n') for line in islice(f, limit)]
        except (OSError, UnicodeDecodeError) as e:
            self.logger.error(f"Failed to read file: {e}", component=self.component, file_path=str(path))
            raise FileSystemError(f"Failed to read file: {e}", file_path=str(path))

        self.logger.debug(f"Read {len(lines)} lines", component=self.component, file_path=str(path))
        return lines
