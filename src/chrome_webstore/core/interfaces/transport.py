"""Transport contract.

The core never opens connections itself; it hands a `StoreRequest` to a
`Transport` and gets a `RawResponse` back. Adapters (httpx, a test double)
are interchangeable behind this structural contract.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from chrome_webstore.core.services.request_builder import StoreRequest


@dataclass(frozen=True)
class RawResponse:
    """Undecoded upstream response."""

    status_code: int
    text: str
    url: str


@runtime_checkable
class Transport(Protocol):
    """Minimal contract for the network collaborator.

    Rules:
    - `send` is asynchronous because it performs I/O.
    - Connection, TLS and timeout failures surface as `NetworkError`.
    - Any HTTP status is returned as-is; interpreting it is the caller's job.
    """

    async def send(self, request: StoreRequest) -> RawResponse:
        ...
