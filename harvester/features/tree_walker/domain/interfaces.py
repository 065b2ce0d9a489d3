from abc import ABC, abstractmethod
from pathlib import Path
from .models import DirectoryListing

class IDirectoryLister(ABC):
    """
    Contract for reading one level of a filesystem tree.
    """
    @abstractmethod
    def list(self, path: Path, file_pattern: str) -> DirectoryListing:
        """
        Returns the immediate subdirectories of `path` and the files
        in it whose names match `file_pattern`.
        Raises OSError if the directory cannot be read.
        """
        pass
