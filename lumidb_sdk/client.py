from __future__ import annotations
from dataclasses import dataclass, field
from typing import IO, Any, Dict, Optional, Union

import orjson
import requests
from loguru import logger

from .buffer import ResponseBuffer
from .errors import SDKError, ConfigurationError, HttpStatusError, JsonParseError, OutOfMemoryError, TransportError
from .result import Result, Ok, Err


@dataclass(frozen=True)
class HttpResponse:
    status_code: int
    body: ResponseBuffer

    def expect_ok(self) -> Result["HttpResponse", SDKError]:
        if self.status_code != 200:
            return Err(HttpStatusError(f"unexpected status {self.status_code}", code=self.status_code))
        return Ok(self)

    def json_object(self) -> Result[Dict[str, Any], SDKError]:
        doc = self.body.json()
        if isinstance(doc, Err):
            return doc
        if not isinstance(doc.value, dict):
            return Err(JsonParseError("expected a JSON object in response"))
        return doc


def string_field(doc: Dict[str, Any], name: str) -> Result[str, SDKError]:
    value = doc.get(name)
    if not isinstance(value, str):
        return Err(JsonParseError(f"no {name} in response"))
    return Ok(value)


@dataclass(frozen=True)
class LumiDBClient:
    """Authenticated access to a LumiDB service.

    ``base_url`` is normalized to end with ``/`` so API paths can be appended
    directly. The underlying session is released by :meth:`close` or by
    leaving a ``with`` block.

    TLS is verified against the CA bundle requests ships (certifi) unless
    ``verify`` names another bundle; there is no certificate pinning.
    """

    base_url: str
    api_key: str
    timeout: float = 300.0
    chunk_size: int = 64 * 1024
    verify: Union[bool, str] = True
    sign_uploads: bool = True
    session: requests.Session = field(default_factory=requests.Session, repr=False, compare=False)
    _closed: bool = field(default=False, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not self.base_url or not self.api_key:
            raise ConfigurationError("a service URL and an API key are required")
        if not self.base_url.endswith("/"):
            object.__setattr__(self, "base_url", self.base_url + "/")

    @classmethod
    def from_settings(cls, settings: Any, *, base_url: Optional[str] = None) -> "LumiDBClient":
        url = base_url or (str(settings.url) if settings.url else "")
        api_key = settings.api_key.get_secret_value() if settings.api_key else ""
        return cls(
            base_url=url,
            api_key=api_key,
            timeout=settings.timeout,
            chunk_size=settings.chunk_size,
            verify=settings.ca_bundle or settings.verify_tls,
            sign_uploads=settings.sign_uploads,
        )

    def __enter__(self) -> "LumiDBClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        if self._closed:
            return
        object.__setattr__(self, "_closed", True)
        self.session.close()

    def endpoint(self, path: str) -> str:
        return f"{self.base_url}{path.lstrip('/')}"

    def _headers(self, *, json_content: bool = True, authorize: bool = True) -> Dict[str, str]:
        h: Dict[str, str] = {}
        if authorize:
            h["Authorization"] = f"apikey {self.api_key}"
        if json_content:
            h["Content-Type"] = "application/json"
        return h

    def request(
        self,
        method: str,
        url: str,
        *,
        data: Union[bytes, IO[bytes], None] = None,
        json_content: bool = True,
        authorize: bool = True,
    ) -> Result[HttpResponse, SDKError]:
        """Issue one request and buffer its whole body.

        Headers are rebuilt on every call. Connection, timeout and TLS
        failures come back as ``TransportError``; the status code is not
        judged here, see :meth:`HttpResponse.expect_ok`.
        """
        if self._closed:
            return Err(ConfigurationError("client is closed"))
        headers = self._headers(json_content=json_content, authorize=authorize)
        body = ResponseBuffer()
        try:
            resp = self.session.request(
                method,
                url,
                headers=headers,
                data=data,
                timeout=self.timeout,
                verify=self.verify,
                stream=True,
            )
        except requests.RequestException as ex:
            logger.error("Request failed", method=method, url=url, error=str(ex))
            return Err(TransportError(f"{method} {url}: {ex}"))

        try:
            for chunk in resp.iter_content(chunk_size=self.chunk_size):
                if body.append(chunk) != len(chunk):
                    return Err(OutOfMemoryError(f"{method} {url}: response body could not be buffered"))
        except requests.RequestException as ex:
            logger.error("Reading response failed", method=method, url=url, error=str(ex))
            return Err(TransportError(f"{method} {url}: {ex}"))
        finally:
            resp.close()

        logger.debug("Request finished", method=method, url=url, status=resp.status_code, size=body.length)
        return Ok(HttpResponse(status_code=resp.status_code, body=body))

    def post_json(self, url: str, payload: Union[Dict[str, Any], str, bytes]) -> Result[HttpResponse, SDKError]:
        if isinstance(payload, dict):
            data = orjson.dumps(payload)
        elif isinstance(payload, str):
            data = payload.encode("utf-8")
        else:
            data = payload
        return self.request("POST", url, data=data)

    def get(self, url: str) -> Result[HttpResponse, SDKError]:
        return self.request("GET", url)

    def put_file(self, url: str, handle: IO[bytes], size: int) -> Result[HttpResponse, SDKError]:
        """Stream ``size`` bytes from ``handle`` as a PUT body.

        A zero-length file is sent as an empty body so the request carries
        ``Content-Length: 0`` instead of a chunked transfer.
        """
        data: Union[bytes, IO[bytes]] = handle if size > 0 else b""
        return self.request("PUT", url, data=data, json_content=False, authorize=self.sign_uploads)
