# File: harvester/core/common/enums.py

from enum import Enum, unique

@unique
class ErrorKind(str, Enum):
    ACCESS_DENIED = "access_denied"
    PATH_NOT_FOUND = "path_not_found"
    IO_FAILURE = "io_failure"
    PARSE_FAILURE = "parse_failure"

@unique
class SkipReason(str, Enum):
    TOO_FEW_FIELDS = "too_few_fields"
    BLANK_FIELD = "blank_field"

@unique
class RunState(str, Enum):
    IDLE = "idle"
    WALKING = "walking"
    SUMMARIZING = "summarizing"
    DONE = "done"
