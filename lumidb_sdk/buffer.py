from __future__ import annotations
from typing import Any

import orjson
from loguru import logger

from .errors import JsonParseError, SDKError
from .result import Result, Ok, Err


class ResponseBuffer:
    """Growable in-memory sink for a streamed response body.

    Capacity is tracked separately from length and always leaves room for a
    trailing NUL after the last written byte, so the content can be handed to
    text consumers without copying. A fresh buffer has no storage at all.
    """

    def __init__(self) -> None:
        self._data = bytearray()
        self._length = 0

    @property
    def length(self) -> int:
        return self._length

    @property
    def capacity(self) -> int:
        return len(self._data)

    def __len__(self) -> int:
        return self._length

    def append(self, chunk: bytes) -> int:
        """Append ``chunk`` and return the number of bytes consumed.

        A short count (0 for a non-empty chunk) means the buffer could not
        grow; its previous content is left intact.
        """
        size = len(chunk)
        new_length = self._length + size

        if new_length + 1 > len(self._data):
            # double the required size for future growth
            new_capacity = (new_length + 1) * 2
            try:
                grown = bytearray(new_capacity)
            except MemoryError:
                logger.error("Failed to grow response buffer", requested=new_capacity, length=self._length)
                return 0
            grown[: self._length] = self._data[: self._length]
            self._data = grown

        self._data[self._length:new_length] = chunk
        self._length = new_length
        self._data[new_length] = 0
        return size

    def getvalue(self) -> bytes:
        return bytes(self._data[: self._length])

    def text(self, encoding: str = "utf-8") -> str:
        return self.getvalue().decode(encoding, errors="replace")

    def json(self) -> Result[Any, SDKError]:
        if self._length == 0:
            return Err(JsonParseError("empty response body"))
        try:
            return Ok(orjson.loads(self.getvalue()))
        except orjson.JSONDecodeError as ex:
            return Err(JsonParseError(f"invalid json: {ex}"))
