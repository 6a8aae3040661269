# tsdata/core/metadata.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Sequence

from .exceptions import (
    CommentCountMismatch,
    EmptyComment,
    EmptyHeader,
    EmptyUnit,
    FirstColumnNotTime,
    HeaderCountMismatch,
    HeaderShapeError,
    MissingFileType,
    MissingHeaders,
    MissingProject,
    MissingTypes,
    MissingUnits,
    NoDataColumns,
    UnitCountMismatch,
    UnknownType,
)
from .types import NA, Checker, checker_for

logger = logging.getLogger(__name__)

DELIMITER = "\t"
HEADER_SIZE = 7
TIME_HEADER = "time"

_TRAILING = "\r \t"


@dataclass(frozen=True, slots=True)
class Metadata:
    """
    Parsed TSDATA header.

    - file_type / project: non-empty free text
    - file_description: optional free text
    - comments: per-column notes, empty or one per column
    - types / units / headers: one entry per column
    - checkers: derived from `types`, one predicate per column (None for an
      unrecognized tag until validation rejects it)

    Construction does not validate; call `validate()` (or build through
    `parse_header`, which does).
    """
    file_type: str
    project: str
    file_description: str = ""
    comments: Sequence[str] = ()
    types: Sequence[str] = ()
    units: Sequence[str] = ()
    headers: Sequence[str] = ()
    checkers: tuple[Checker | None, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        for name in ("comments", "types", "units", "headers"):
            object.__setattr__(self, name, tuple(getattr(self, name)))
        object.__setattr__(self, "checkers", tuple(checker_for(t) for t in self.types))

    @property
    def column_count(self) -> int:
        return len(self.types)

    def validate(self) -> None:
        validate_metadata(self)

    def header(self) -> str:
        return render_header(self)

    def with_types(self, types: Sequence[str]) -> "Metadata":
        """Return a copy with new column types; checkers are derived again."""
        return replace(self, types=tuple(types))


def _first_field(line: str) -> str:
    return line.split(DELIMITER, 1)[0]


def _split_fields(line: str) -> tuple[str, ...]:
    if line == "":
        return ()
    return tuple(f.strip() for f in line.split(DELIMITER))


def parse_header(header: str) -> Metadata:
    """
    Parse and validate a TSDATA header block.

    `header` holds the 7 header lines joined by newlines; one trailing newline
    is ignored. Raises a MetadataError subclass if the block has the wrong
    shape or fails validation.
    """
    if header.endswith("\n"):
        header = header[:-1]
    lines = [line.rstrip(_TRAILING) for line in header.split("\n")]
    if len(lines) != HEADER_SIZE:
        raise HeaderShapeError(len(lines), HEADER_SIZE)

    meta = Metadata(
        file_type=_first_field(lines[0]),
        project=_first_field(lines[1]),
        file_description=_first_field(lines[2]),
        comments=_split_fields(lines[3]),
        types=_split_fields(lines[4]),
        units=_split_fields(lines[5]),
        headers=_split_fields(lines[6]),
    )
    validate_metadata(meta)
    logger.debug("parsed header for %s/%s with %d columns", meta.file_type, meta.project, meta.column_count)
    return meta


def validate_metadata(meta: Metadata) -> None:
    """Check metadata for errors and inconsistencies; raise on the first one found."""
    if meta.file_type == "":
        raise MissingFileType()
    if meta.project == "":
        raise MissingProject()

    # Column comments may be a blank line, so zero comments is allowed
    for i, comment in enumerate(meta.comments, start=1):
        if comment == "":
            raise EmptyComment(i)

    if not meta.types:
        raise MissingTypes()
    if meta.comments and len(meta.types) != len(meta.comments):
        raise CommentCountMismatch(len(meta.comments), len(meta.types))
    for i, (tag, check) in enumerate(zip(meta.types, meta.checkers), start=1):
        if check is None:
            raise UnknownType(tag, i)
    col_count = len(meta.types)

    if not meta.units:
        raise MissingUnits()
    if len(meta.units) != col_count:
        raise UnitCountMismatch(col_count, len(meta.units))
    for i, unit in enumerate(meta.units, start=1):
        if unit == "":
            raise EmptyUnit(i)

    if not meta.headers:
        raise MissingHeaders()
    if len(meta.headers) != col_count:
        raise HeaderCountMismatch(col_count, len(meta.headers))
    if meta.headers[0] != TIME_HEADER:
        raise FirstColumnNotTime(meta.headers[0])
    for i, name in enumerate(meta.headers, start=1):
        if name == "":
            raise EmptyHeader(i)

    if col_count < 2:
        raise NoDataColumns(col_count)


def render_header(meta: Metadata) -> str:
    """
    Build the 7-line header block for `meta`, without a trailing newline.

    No validation is done. Empty comments are written as one NA per column.
    """
    cols = len(meta.headers)
    if meta.comments:
        comments = DELIMITER.join(meta.comments)
    else:
        comments = DELIMITER.join([NA] * cols)
    return "\n".join(
        [
            meta.file_type,
            meta.project,
            meta.file_description,
            comments,
            DELIMITER.join(meta.types),
            DELIMITER.join(meta.units),
            DELIMITER.join(meta.headers),
        ]
    )
