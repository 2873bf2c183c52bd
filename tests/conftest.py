"""Shared pytest fixtures for the LumiDB SDK tests.

Provides a scripted stand-in for ``requests.Session`` so every HTTP exchange
is deterministic and recorded, plus a client wired to it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import orjson
import pytest

from lumidb_sdk.client import LumiDBClient

BASE_URL = "https://lumidb.test"
API_KEY = "secret-key"


class FakeResponse:
    """Minimal streamed response: a status code and a list of body chunks.

    A chunk may be an exception instance, which is raised when reached.
    """

    def __init__(self, status_code: int = 200, body: Any = b"", chunks: Optional[List[Any]] = None):
        self.status_code = status_code
        if isinstance(body, (dict, list)):
            body = orjson.dumps(body)
        elif isinstance(body, str):
            body = body.encode("utf-8")
        self._chunks = chunks if chunks is not None else ([body] if body else [])
        self.closed = False

    def iter_content(self, chunk_size: int = 1):
        for chunk in self._chunks:
            if isinstance(chunk, BaseException):
                raise chunk
            yield chunk

    def close(self) -> None:
        self.closed = True


@dataclass
class RecordedCall:
    method: str
    url: str
    headers: Dict[str, str]
    body: Optional[bytes]
    timeout: Any
    verify: Any

    def json(self) -> Any:
        return orjson.loads(self.body)


class FakeSession:
    """Replays queued responses (or raises queued exceptions) in order."""

    def __init__(self, *script: Any) -> None:
        self.script: List[Any] = list(script)
        self.calls: List[RecordedCall] = []
        self.closed = False

    def queue(self, *items: Any) -> "FakeSession":
        self.script.extend(items)
        return self

    def request(self, method, url, headers=None, data=None, timeout=None, verify=None, stream=None):
        body = data.read() if hasattr(data, "read") else data
        self.calls.append(RecordedCall(method, url, dict(headers or {}), body, timeout, verify))
        if not self.script:
            raise AssertionError(f"unexpected request {method} {url}")
        item = self.script.pop(0)
        if isinstance(item, BaseException):
            raise item
        return item

    def close(self) -> None:
        self.closed = True


def upload_grant(asset_id: str, upload_url: Optional[str] = None) -> FakeResponse:
    return FakeResponse(200, {"upload_url": upload_url or f"https://storage.test/put/{asset_id}", "asset_id": asset_id})


@pytest.fixture
def session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def client(session: FakeSession) -> LumiDBClient:
    c = LumiDBClient(BASE_URL, API_KEY, session=session)
    yield c
    c.close()


@pytest.fixture
def data_file(tmp_path):
    """Write a small binary file and return its path as a string."""
    def _make(name: str = "points.laz", content: bytes = b"\x00\x01point-data\xff") -> str:
        path = tmp_path / name
        path.write_bytes(content)
        return str(path)
    return _make
