"""LumiDB SDK (asset upload and table import)

Public surface:
- LumiDBClient
- Result, Ok, Err
- error taxonomy: ErrorKind, error_string, SDKError and its subclasses, StepFailure
- ResponseBuffer
- asset operations: extract_filename, upload_asset
- manifest: AssetRef, build_import_manifest
- import jobs: start_import, poll_import_status, wait_for_import, ImportJob, ImportStatus, JobState
- ingest_files: upload, import and wait in one call
"""

from .result import Result, Ok, Err
from .errors import (
    ErrorKind,
    error_string,
    SDKError,
    TransportError,
    HttpStatusError,
    JsonParseError,
    FileIOError,
    ConfigurationError,
    OutOfMemoryError,
    StepFailure,
)
from .buffer import ResponseBuffer
from .client import LumiDBClient, HttpResponse
from .assets import extract_filename, upload_asset
from .manifest import AssetRef, build_import_manifest
from .jobs import ImportJob, ImportStatus, JobState, start_import, poll_import_status, wait_for_import
from .workflow import IngestReport, ingest_files

__all__ = [
    "Result",
    "Ok",
    "Err",
    "ErrorKind",
    "error_string",
    "SDKError",
    "TransportError",
    "HttpStatusError",
    "JsonParseError",
    "FileIOError",
    "ConfigurationError",
    "OutOfMemoryError",
    "StepFailure",
    "ResponseBuffer",
    "LumiDBClient",
    "HttpResponse",
    "extract_filename",
    "upload_asset",
    "AssetRef",
    "build_import_manifest",
    "ImportJob",
    "ImportStatus",
    "JobState",
    "start_import",
    "poll_import_status",
    "wait_for_import",
    "IngestReport",
    "ingest_files",
]
