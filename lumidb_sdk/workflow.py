from __future__ import annotations
import time
from dataclasses import dataclass, field
from typing import Callable, List, Sequence

from loguru import logger

from .assets import upload_asset
from .client import LumiDBClient
from .errors import SDKError, StepFailure
from .jobs import DEFAULT_POLL_INTERVAL, start_import, wait_for_import
from .manifest import AssetRef, build_import_manifest
from .result import Result, Ok, Err


@dataclass
class IngestReport:
    table_version: str
    assets: List[AssetRef] = field(default_factory=list)
    polls: int = 0


def ingest_files(
    client: LumiDBClient,
    table_name: str,
    table_proj: str,
    files: Sequence[str],
    *,
    poll_interval: float = DEFAULT_POLL_INTERVAL,
    sleep: Callable[[float], None] = time.sleep,
) -> Result[IngestReport, StepFailure]:
    """Upload ``files`` in order, import them into ``table_name`` and wait for the table.

    Stops at the first failing step. Assets uploaded before a failure stay on
    the service; there is no call to remove them.
    """
    assets: List[AssetRef] = []
    for i, path in enumerate(files):
        uploaded = upload_asset(client, path)
        if isinstance(uploaded, Err):
            logger.error("Failed to upload asset", index=i, path=path, error=str(uploaded.error))
            return Err(StepFailure("upload", uploaded.error, file_path=path))
        logger.info("Asset uploaded", index=i + 1, total=len(files), asset_id=uploaded.value)
        assets.append(AssetRef(asset_id=uploaded.value, proj=table_proj))

    manifest = build_import_manifest(table_name, table_proj, assets)
    if manifest is None:
        return Err(StepFailure("manifest", SDKError("failed to build import manifest")))
    logger.debug("Import manifest", manifest=manifest)

    job = start_import(client, manifest)
    if isinstance(job, Err):
        return Err(StepFailure("submit", job.error))

    finished = wait_for_import(client, job.value, interval=poll_interval, sleep=sleep)
    if isinstance(finished, Err):
        return Err(StepFailure("poll", finished.error))

    return Ok(IngestReport(table_version=finished.value.table_version, assets=assets, polls=finished.value.polls))
