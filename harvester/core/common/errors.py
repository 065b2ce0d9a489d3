import csv

from .enums import ErrorKind


class OutputInitializationError(RuntimeError):
    """
    Raised when the output file header cannot be written.
    The only condition that aborts a whole run.
    """


def classify_error(exc: BaseException) -> ErrorKind:
    """
    Maps a caught exception onto the harvester's error taxonomy.
    """
    if isinstance(exc, PermissionError):
        return ErrorKind.ACCESS_DENIED
    if isinstance(exc, (FileNotFoundError, NotADirectoryError)):
        return ErrorKind.PATH_NOT_FOUND
    if isinstance(exc, (csv.Error, UnicodeDecodeError)):
        return ErrorKind.PARSE_FAILURE
    return ErrorKind.IO_FAILURE
