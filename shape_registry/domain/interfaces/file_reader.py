"""
File reader interface definitions.
"""

from abc import ABC, abstractmethod
from typing import List, Optional


class IFileReader(ABC):
    """Interface for reading text files for display."""
    
    @abstractmethod
    def read_lines(self, path: str, max_lines: Optional[int] = None) -> List[str]:
        """Read up to max_lines lines of a text file, without line endings."""
        pass
