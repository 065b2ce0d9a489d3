from pathlib import Path
from typing import Optional, Sequence

from harvester.core.common.enums import SkipReason
from .models import MIN_FIELDS, UNKNOWN_DATE, SkippedRow, ValidRow, ValidationOutcome


def classify_row(fields: Sequence[str], date: str) -> ValidationOutcome:
    """
    Valid rows have at least MIN_FIELDS fields and none of them blank.
    The normalized line is the fields joined by commas plus the date tag.
    """
    if len(fields) < MIN_FIELDS:
        return SkippedRow(reason=SkipReason.TOO_FEW_FIELDS, field_count=len(fields))

    if any(not f or f.isspace() for f in fields):
        return SkippedRow(reason=SkipReason.BLANK_FIELD, field_count=len(fields))

    return ValidRow(line=",".join(fields) + "," + date)


def derive_date(directory: Path, root: Optional[Path] = None) -> str:
    """
    Builds the "<year>/<month>/<day>" tag from the last three path segments.

    When a scan root is given, only the segments below it count, so a file
    fewer than three levels under the root gets UNKNOWN_DATE.
    """
    directory = Path(directory)
    segments = None

    if root is not None:
        try:
            segments = directory.relative_to(root).parts
        except ValueError:
            segments = None

    if segments is None:
        # Drop the anchor ("/" or "C:\\"), it is not a segment
        segments = directory.parts[1:] if directory.anchor else directory.parts

    if len(segments) < 3:
        return UNKNOWN_DATE

    return "/".join(segments[-3:])
