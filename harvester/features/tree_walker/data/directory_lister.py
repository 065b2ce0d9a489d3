import fnmatch
import os
from pathlib import Path
from ..domain.interfaces import IDirectoryLister
from ..domain.models import DirectoryListing

class LocalDirectoryLister(IDirectoryLister):
    """
    Concrete implementation using os.scandir, one level at a time.
    Recursion is left to the walker so every level can be scheduled separately.
    """

    def list(self, path: Path, file_pattern: str) -> DirectoryListing:
        subdirectories = []
        files = []

        with os.scandir(path) as entries:
            for entry in entries:
                # Symlinked folders are not followed to avoid cycles
                if entry.is_dir(follow_symlinks=False):
                    subdirectories.append(Path(entry.path))
                elif entry.is_file() and fnmatch.fnmatch(entry.name, file_pattern):
                    files.append(Path(entry.path))

        # scandir order is arbitrary; sort so logs are reproducible
        subdirectories.sort()
        files.sort()
        return DirectoryListing(subdirectories=subdirectories, files=files)
