from __future__ import annotations
import os

from loguru import logger

from .client import LumiDBClient, string_field
from .errors import SDKError, FileIOError
from .result import Result, Ok, Err

UPLOAD_PATH = "api/assets/upload"


def extract_filename(path: str) -> str:
    """Last path component, splitting on either ``/`` or ``\\``."""
    cut = max(path.rfind("/"), path.rfind("\\"))
    return path[cut + 1:]


def upload_asset(client: LumiDBClient, file_path: str) -> Result[str, SDKError]:
    """Upload one local file and return the asset id the service assigned to it.

    Two requests are made: a JSON POST announcing the file name, which yields
    a one-off ``upload_url`` and the ``asset_id``, then a PUT of the raw bytes
    to that URL. The id is only handed back when both succeed.
    """
    filename = extract_filename(file_path)

    meta = client.post_json(client.endpoint(UPLOAD_PATH), {"name": filename})
    if isinstance(meta, Err):
        return meta
    ok = meta.value.expect_ok()
    if isinstance(ok, Err):
        logger.error("Asset registration rejected", path=file_path, status=meta.value.status_code)
        return ok
    doc = meta.value.json_object()
    if isinstance(doc, Err):
        return doc
    upload_url = string_field(doc.value, "upload_url")
    if isinstance(upload_url, Err):
        return upload_url
    asset_id = string_field(doc.value, "asset_id")
    if isinstance(asset_id, Err):
        return asset_id

    try:
        handle = open(file_path, "rb")
    except OSError as ex:
        logger.error("Cannot open file", path=file_path, error=str(ex))
        return Err(FileIOError(f"cannot open {file_path}: {ex.strerror or ex}"))

    with handle:
        try:
            handle.seek(0, os.SEEK_END)
            size = handle.tell()
            handle.seek(0, os.SEEK_SET)
        except OSError as ex:
            return Err(FileIOError(f"cannot determine size of {file_path}: {ex.strerror or ex}"))

        logger.info("Uploading asset", path=file_path, size_mb=size // (1 << 20), asset_id=asset_id.value)
        put = client.put_file(upload_url.value, handle, size)

    if isinstance(put, Err):
        return put
    ok = put.value.expect_ok()
    if isinstance(ok, Err):
        logger.error("Asset upload rejected", path=file_path, status=put.value.status_code)
        return ok
    return asset_id
