"""Error kinds raised by the tour engine.

Every failure the repository, navigation state or editor can report maps to
one ``ErrorKind``. Exceptions carry structured context (tour id, index,
offending value) rather than user-facing text; turning a kind into a message
is the job of whatever UI layer catches it.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

__all__ = [
    "ErrorKind",
    "TourError",
    "DuplicateTitleError",
    "DuplicateFileError",
    "InvalidFileNameError",
    "InvalidTitleError",
    "InvalidStepError",
    "TourNotFoundError",
    "IndexOutOfRangeError",
    "CannotMoveError",
    "ReadOnlyTourError",
    "ReentrantMutationError",
]


class ErrorKind(str, Enum):
    DUPLICATE_TITLE = "duplicate_title"
    DUPLICATE_FILE = "duplicate_file"
    INVALID_FILE_NAME = "invalid_file_name"
    INVALID_TITLE = "invalid_title"
    INVALID_STEP = "invalid_step"
    NOT_FOUND = "not_found"
    INDEX_OUT_OF_RANGE = "index_out_of_range"
    CANNOT_MOVE = "cannot_move"
    READ_ONLY_TOUR = "read_only_tour"
    REENTRANT_MUTATION = "reentrant_mutation"


class TourError(Exception):
    """Base class for recoverable engine failures.

    Attributes
    ----------
    kind: ErrorKind
        Machine-readable failure category.
    context: dict
        Keyword details supplied at raise time (e.g. ``title``, ``index``).
    """

    kind: ErrorKind

    def __init__(self, **context: Any) -> None:
        self.context = context
        details = ", ".join(f"{k}={v!r}" for k, v in context.items())
        super().__init__(f"{self.kind.value}({details})")


class DuplicateTitleError(TourError):
    kind = ErrorKind.DUPLICATE_TITLE


class DuplicateFileError(TourError):
    kind = ErrorKind.DUPLICATE_FILE


class InvalidFileNameError(TourError):
    kind = ErrorKind.INVALID_FILE_NAME


class InvalidTitleError(TourError):
    kind = ErrorKind.INVALID_TITLE


class InvalidStepError(TourError):
    kind = ErrorKind.INVALID_STEP


class TourNotFoundError(TourError):
    kind = ErrorKind.NOT_FOUND


class IndexOutOfRangeError(TourError):
    kind = ErrorKind.INDEX_OUT_OF_RANGE


class CannotMoveError(TourError):
    kind = ErrorKind.CANNOT_MOVE


class ReadOnlyTourError(TourError):
    kind = ErrorKind.READ_ONLY_TOUR


class ReentrantMutationError(TourError):
    """Raised when a mutation is attempted while events are being delivered."""

    kind = ErrorKind.REENTRANT_MUTATION
