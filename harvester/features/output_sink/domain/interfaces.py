from abc import ABC, abstractmethod
from typing import Sequence

class IOutputSink(ABC):
    """
    Contract for the single shared output artifact.
    """

    @abstractmethod
    def initialize(self) -> None:
        """
        Truncates/creates the artifact and writes the header.
        Must complete before the first append.
        """
        pass

    @abstractmethod
    def append(self, lines: Sequence[str]) -> None:
        """
        Appends one batch of pre-formatted lines as a contiguous unit.
        Raises OSError if the write fails.
        """
        pass
