"""Header emission boundary: where a rendered policy leaves the core."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from starlette.responses import Response


@runtime_checkable
class HeaderSink(Protocol):
    """Anything that can put a finished header on an outgoing response."""

    def set(self, name: str, value: str) -> None:
        ...


class ResponseHeaderSink:
    """Write headers onto a Starlette response, replacing existing values."""

    def __init__(self, response: Response) -> None:
        self._response = response

    def set(self, name: str, value: str) -> None:
        self._response.headers[name] = value


class DictHeaderSink:
    """Collect headers in a plain dict for callers without a response object."""

    def __init__(self) -> None:
        self.headers: dict[str, str] = {}

    def set(self, name: str, value: str) -> None:
        self.headers[name] = value
