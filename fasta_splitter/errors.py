"""Error codes and exceptions raised while splitting FASTA files."""

from enum import IntEnum


class SplitterErrorCode(IntEnum):
    NO_ERROR = 0
    INVALID_INPUT_PATH = 1
    INVALID_OUTPUT_DIRECTORY = 2
    PARAMETER_FILE_NOT_FOUND = 3
    INVALID_PARAMETER_FILE = 4
    ERROR_READING_INPUT = 5
    ERROR_WRITING_OUTPUT = 6
    UNSPECIFIED_ERROR = -1


class FastaSplitterError(Exception):
    """Base class for failures that abort a split run.

    ``stage`` names the step that failed (``open input``, ``create output``,
    ``write record``, ...) so that messages shown to the user say where
    things went wrong.
    """

    code = SplitterErrorCode.UNSPECIFIED_ERROR

    def __init__(self, message: str, stage: str | None = None):
        if stage:
            message = f"Error during {stage}: {message}"
        super().__init__(message)
        self.stage = stage
        self.message = message


class InvalidInputPathError(FastaSplitterError):
    code = SplitterErrorCode.INVALID_INPUT_PATH


class InvalidOutputDirectoryError(FastaSplitterError):
    code = SplitterErrorCode.INVALID_OUTPUT_DIRECTORY


class ParameterFileNotFoundError(FastaSplitterError):
    code = SplitterErrorCode.PARAMETER_FILE_NOT_FOUND


class InvalidParameterFileError(FastaSplitterError):
    code = SplitterErrorCode.INVALID_PARAMETER_FILE


class InputReadError(FastaSplitterError):
    code = SplitterErrorCode.ERROR_READING_INPUT


class OutputWriteError(FastaSplitterError):
    code = SplitterErrorCode.ERROR_WRITING_OUTPUT
