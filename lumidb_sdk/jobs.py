from __future__ import annotations
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from loguru import logger

from .client import HttpResponse, LumiDBClient, string_field
from .errors import SDKError
from .result import Result, Ok, Err, and_then, map as map_ok

IMPORT_PATH = "api/tables/import"
IMPORT_STATUS_PATH = "api/tables/import_status/"
READY_STATUS = "ready"
DEFAULT_POLL_INTERVAL = 5.0


class JobState(str, Enum):
    SUBMITTED = "submitted"
    IN_PROGRESS = "in_progress"
    READY = "ready"
    FAILED = "failed"


@dataclass(frozen=True)
class ImportStatus:
    table_version: str
    status: str

    @property
    def ready(self) -> bool:
        return self.status == READY_STATUS


@dataclass
class ImportJob:
    """Client-side view of a server import job.

    Only the id and the last observed status are kept; the service is the
    authority on the job. ``FAILED`` means polling itself failed, the service
    vocabulary has no failed status.
    """

    table_version: str
    state: JobState = JobState.SUBMITTED
    last_status: Optional[str] = None
    polls: int = 0

    @property
    def done(self) -> bool:
        return self.state in (JobState.READY, JobState.FAILED)

    def observe(self, outcome: Result[ImportStatus, SDKError]) -> JobState:
        if self.done:
            raise RuntimeError(f"import job {self.table_version} already {self.state.value}")
        self.polls += 1
        if isinstance(outcome, Err):
            self.state = JobState.FAILED
        else:
            self.last_status = outcome.value.status
            self.state = JobState.READY if outcome.value.ready else JobState.IN_PROGRESS
        return self.state


def start_import(client: LumiDBClient, manifest: str) -> Result[ImportJob, SDKError]:
    resp = client.post_json(client.endpoint(IMPORT_PATH), manifest)
    if isinstance(resp, Ok):
        logger.info("Import request finished", status=resp.value.status_code)
    doc = and_then(and_then(resp, HttpResponse.expect_ok), HttpResponse.json_object)
    version = and_then(doc, lambda d: string_field(d, "table_version"))
    job = map_ok(version, lambda v: ImportJob(table_version=v))
    if isinstance(job, Ok):
        logger.info("Import submitted", table_version=job.value.table_version)
    return job


def poll_import_status(client: LumiDBClient, table_version: str) -> Result[ImportStatus, SDKError]:
    url = client.endpoint(IMPORT_STATUS_PATH + table_version)
    resp = and_then(client.get(url), HttpResponse.expect_ok)
    if isinstance(resp, Err):
        return resp
    logger.debug("Import status response", body=resp.value.body.text())
    doc = resp.value.json_object()
    status = and_then(doc, lambda d: string_field(d, "status"))
    return map_ok(status, lambda s: ImportStatus(table_version=table_version, status=s))


def wait_for_import(
    client: LumiDBClient,
    job: ImportJob,
    *,
    interval: float = DEFAULT_POLL_INTERVAL,
    sleep: Callable[[float], None] = time.sleep,
    poll: Callable[[LumiDBClient, str], Result[ImportStatus, SDKError]] = poll_import_status,
) -> Result[ImportJob, SDKError]:
    """Poll until the job is ready or a poll fails.

    There is no attempt limit or deadline; callers wanting one should bound
    the loop themselves (e.g. with their own ``poll`` wrapper).
    """
    while True:
        outcome = poll(client, job.table_version)
        job.observe(outcome)
        if isinstance(outcome, Err):
            logger.error("Polling import status failed", table_version=job.table_version, error=str(outcome.error))
            return outcome
        logger.info("Import status", table_version=job.table_version, status=job.last_status, polls=job.polls)
        if job.state is JobState.READY:
            return Ok(job)
        sleep(interval)
