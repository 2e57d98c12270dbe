"""Transport boundary used by the search service."""

from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

HTTP_POST = "POST"


@dataclass(frozen=True)
class TransportMetadata:
    """What the transport observed about the HTTP exchange."""

    status_code: int
    headers: dict[str, str] = field(default_factory=dict)

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300


@runtime_checkable
class Transport(Protocol):
    """Builds and executes requests against the search API.

    build_request raises RequestConstructionError. execute returns the raw
    body with its metadata, or raises TransportExecutionError (carrying the
    metadata when a response was received). Retry policy lives here, never in
    the service.
    """

    def build_request(self, path: str, method: str, body: dict[str, Any]) -> Any:
        ...

    async def execute(self, request: Any) -> tuple[bytes, TransportMetadata]:
        ...
