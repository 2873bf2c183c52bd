from __future__ import annotations
from dataclasses import dataclass
from enum import IntEnum
from typing import ClassVar, Optional


class ErrorKind(IntEnum):
    SUCCESS = 0
    GENERIC = 1
    TRANSPORT = 2
    HTTP_STATUS = 3
    JSON_PARSE = 4
    FILE_IO = 5


_LABELS = {
    ErrorKind.SUCCESS: "Success",
    ErrorKind.GENERIC: "Generic error",
    ErrorKind.TRANSPORT: "Network/transport error",
    ErrorKind.HTTP_STATUS: "HTTP error",
    ErrorKind.JSON_PARSE: "JSON parsing error",
    ErrorKind.FILE_IO: "File I/O error",
}


def error_string(kind: ErrorKind) -> str:
    return _LABELS.get(kind, "Unknown error")


@dataclass(frozen=True)
class SDKError(Exception):
    message: str
    code: Optional[int] = None

    kind: ClassVar[ErrorKind] = ErrorKind.GENERIC

    def __str__(self) -> str:
        if self.code is not None:
            return f"{error_string(self.kind)} ({self.code}): {self.message}"
        return f"{error_string(self.kind)}: {self.message}"

@dataclass(frozen=True)
class TransportError(SDKError):
    kind: ClassVar[ErrorKind] = ErrorKind.TRANSPORT

@dataclass(frozen=True)
class HttpStatusError(SDKError):
    kind: ClassVar[ErrorKind] = ErrorKind.HTTP_STATUS

@dataclass(frozen=True)
class JsonParseError(SDKError):
    kind: ClassVar[ErrorKind] = ErrorKind.JSON_PARSE

@dataclass(frozen=True)
class FileIOError(SDKError):
    kind: ClassVar[ErrorKind] = ErrorKind.FILE_IO

@dataclass(frozen=True)
class ConfigurationError(SDKError):
    pass

@dataclass(frozen=True)
class OutOfMemoryError(SDKError):
    pass


@dataclass(frozen=True)
class StepFailure:
    """Where an ingest run stopped: the step name, the file being handled (if any) and the cause."""

    step: str
    error: SDKError
    file_path: Optional[str] = None

    @property
    def kind(self) -> ErrorKind:
        return self.error.kind

    def describe(self) -> str:
        where = f"{self.step} step"
        if self.file_path is not None:
            where += f" for {self.file_path}"
        return f"{where} failed: {error_string(self.kind)} ({int(self.kind)}) - {self.error.message}"
