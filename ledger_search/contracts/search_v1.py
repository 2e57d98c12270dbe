"""Search API Contract v1.

Defines the canonical types for:
  - Flexible timestamps (FlexibleTime)
  - Search request body (SearchParams)
  - Response envelope (SearchResponse) with flat hits or grouped hits
  - The superset document (SearchDocument) shared by transactions, ledgers
    and balances

The search endpoint returns one heterogeneous document shape per collection,
so SearchDocument carries every field as optional and the caller infers the
resource kind from the collection it queried.
"""

from __future__ import annotations

import math
import re
from collections.abc import Iterator
from datetime import UTC, datetime, timedelta, timezone
from enum import StrEnum
from functools import total_ordering
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    GetCoreSchemaHandler,
    field_validator,
    model_validator,
)
from pydantic_core import core_schema

from ledger_search.errors import InvalidTimeFormat

# ---------------------------------------------------------------------------
# Resources
# ---------------------------------------------------------------------------


class Resource(StrEnum):
    """Collections known to be searchable. Any other name is passed through."""

    TRANSACTIONS = "transactions"
    LEDGERS = "ledgers"
    BALANCES = "balances"


# ---------------------------------------------------------------------------
# Flexible timestamps
# ---------------------------------------------------------------------------

_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)
_ZERO = datetime.min.replace(tzinfo=UTC)
_ONE_SECOND = timedelta(seconds=1)

_UNIX_SECONDS = re.compile(r"[+-]?\d+", re.ASCII)
_RFC3339 = re.compile(
    r"(\d{4})-(\d{2})-(\d{2})T(\d{2}):(\d{2}):(\d{2})(?:\.(\d+))?(Z|[+-]\d{2}:\d{2})",
    re.ASCII,
)


def _parse_rfc3339(raw: str) -> datetime:
    match = _RFC3339.fullmatch(raw)
    if not match:
        raise InvalidTimeFormat(raw)
    year, month, day, hour, minute, second, fraction, offset = match.groups()
    micros = int((fraction or "0")[:6].ljust(6, "0"))
    try:
        if offset == "Z":
            tz = UTC
        else:
            sign = -1 if offset[0] == "-" else 1
            delta = timedelta(hours=int(offset[1:3]), minutes=int(offset[4:6]))
            tz = timezone(sign * delta)
        parsed = datetime(
            int(year), int(month), int(day),
            int(hour), int(minute), int(second), micros,
            tzinfo=tz,
        )
        return parsed.astimezone(UTC)
    except (ValueError, OverflowError) as e:
        raise InvalidTimeFormat(raw) from e


@total_ordering
class FlexibleTime:
    """A point in time decoded from Unix seconds (number or string) or RFC3339.

    Always held in UTC and always encoded back as integer Unix seconds,
    whichever form it was decoded from.
    """

    __slots__ = ("_time",)

    def __init__(self, time: datetime):
        if time.tzinfo is None:
            time = time.replace(tzinfo=UTC)
        object.__setattr__(self, "_time", time.astimezone(UTC))

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("FlexibleTime is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError("FlexibleTime is immutable")

    def __reduce__(self) -> tuple[Any, ...]:
        return (type(self), (self._time,))

    @classmethod
    def zero(cls) -> FlexibleTime:
        """The unset instant, used for temporal keys missing from a document."""
        return cls(_ZERO)

    @classmethod
    def from_unix(cls, seconds: int) -> FlexibleTime:
        try:
            return cls(_EPOCH + timedelta(seconds=seconds))
        except OverflowError as e:
            raise InvalidTimeFormat(seconds) from e

    @classmethod
    def parse(cls, value: Any) -> FlexibleTime:
        """Decode a wire value. Raises InvalidTimeFormat for null, "" and junk."""
        if isinstance(value, FlexibleTime):
            return value
        if isinstance(value, datetime):
            return cls(value)
        # bool is an int subclass but never a timestamp
        if isinstance(value, bool) or value is None:
            raise InvalidTimeFormat(value)
        if isinstance(value, int):
            return cls.from_unix(value)
        if isinstance(value, float):
            if not math.isfinite(value):
                raise InvalidTimeFormat(value)
            return cls.from_unix(math.trunc(value))
        if isinstance(value, str):
            if not value:
                raise InvalidTimeFormat(value)
            if _UNIX_SECONDS.fullmatch(value):
                return cls.from_unix(int(value))
            return cls(_parse_rfc3339(value))
        raise InvalidTimeFormat(value)

    @property
    def time(self) -> datetime:
        return self._time

    @property
    def is_zero(self) -> bool:
        return self._time == _ZERO

    def unix(self) -> int:
        return (self._time - _EPOCH) // _ONE_SECOND

    def to_json(self) -> int:
        return self.unix()

    def isoformat(self) -> str:
        return self._time.isoformat()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FlexibleTime):
            return NotImplemented
        return self._time == other._time

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, FlexibleTime):
            return NotImplemented
        return self._time < other._time

    def __hash__(self) -> int:
        return hash(self._time)

    def __repr__(self) -> str:
        return f"FlexibleTime({self._time.isoformat()})"

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            cls.parse,
            serialization=core_schema.plain_serializer_function_ser_schema(
                cls.to_json, when_used="always"
            ),
        )


# ---------------------------------------------------------------------------
# Search request
# ---------------------------------------------------------------------------


class SearchParams(BaseModel):
    """Body of POST search/{resource}; echoed back as request_params."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    q: str = Field(default="", description="Query text, '*' matches everything")
    query_by: str = Field(default="", description="Comma-separated fields to query")
    filter_by: str | None = Field(default=None, description="e.g. 'status:APPLIED'")
    sort_by: str | None = Field(default=None, description="e.g. 'created_at:desc'")
    page: int | None = Field(default=None, description="1-based page number")
    per_page: int | None = Field(default=None)
    group_by: str | None = Field(
        default=None,
        description="Field to group hits by. Switches the response to grouped_hits.",
    )
    group_limit: int | None = Field(default=None, description="Max hits per group")

    def to_body(self) -> dict[str, Any]:
        """JSON body with unset optional keys left out."""
        return self.model_dump(mode="json", exclude_none=True)


# ---------------------------------------------------------------------------
# Documents
# ---------------------------------------------------------------------------


class MetaDataShape(StrEnum):
    MAPPING = "mapping"
    STRING = "string"
    SEQUENCE = "sequence"
    SCALAR = "scalar"
    ABSENT = "absent"


MetaData = dict[str, Any] | str | list[Any] | bool | int | float | None


class SearchDocument(BaseModel):
    """One indexed transaction, ledger or balance."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str

    # Transactions
    transaction_id: str = ""
    amount: float = 0.0
    amount_string: str = ""
    precise_amount: str = ""
    currency: str = ""
    description: str = ""
    reference: str = ""
    status: str = ""
    source: str = ""
    destination: str = ""
    sources: list[Any] = Field(default_factory=list)
    destinations: list[Any] = Field(default_factory=list)
    parent_transaction: str = ""
    hash: str = ""
    precision: int = 0
    rate: float = 0.0
    overdraft_limit: float = 0.0
    allow_overdraft: bool = False
    atomic: bool = False
    inflight: bool = False
    skip_queue: bool = False
    effective_date: FlexibleTime = Field(default_factory=FlexibleTime.zero)
    scheduled_for: FlexibleTime = Field(default_factory=FlexibleTime.zero)
    inflight_expiry_date: FlexibleTime = Field(default_factory=FlexibleTime.zero)

    # Balances
    balance_id: str = ""
    balance: str = ""
    credit_balance: str = ""
    debit_balance: str = ""

    # Ledgers (ledger_id is also set on balances)
    ledger_id: str = ""
    name: str = ""

    # Common
    created_at: FlexibleTime = Field(default_factory=FlexibleTime.zero)
    meta_data: MetaData = Field(
        default=None,
        description="Opaque payload kept exactly as sent: object, string, array or scalar",
    )

    @field_validator("sources", "destinations", mode="before")
    @classmethod
    def _null_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    @property
    def metadata_shape(self) -> MetaDataShape:
        if self.meta_data is None:
            return MetaDataShape.ABSENT
        if isinstance(self.meta_data, dict):
            return MetaDataShape.MAPPING
        if isinstance(self.meta_data, str):
            return MetaDataShape.STRING
        if isinstance(self.meta_data, list):
            return MetaDataShape.SEQUENCE
        return MetaDataShape.SCALAR


# ---------------------------------------------------------------------------
# Response envelope
# ---------------------------------------------------------------------------


class SearchHit(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    document: SearchDocument


class GroupedHit(BaseModel):
    """Hits sharing one value of the group_by field."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    group_key: list[str] = Field(default_factory=list)
    hits: list[SearchHit] = Field(default_factory=list)

    @field_validator("group_key", "hits", mode="before")
    @classmethod
    def _null_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value


class SearchResponse(BaseModel):
    """Result of search/{resource}.

    Exactly one of hits / grouped_hits is filled by the server, depending on
    whether the request carried group_by. Both default to empty lists.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    found: int = Field(default=0, description="Total matching documents")
    out_of: int = Field(default=0, description="Documents in the collection")
    page: int = 0
    search_time_ms: int = 0
    request_params: SearchParams = Field(default_factory=SearchParams)
    hits: list[SearchHit] = Field(default_factory=list)
    grouped_hits: list[GroupedHit] = Field(default_factory=list)

    @field_validator("hits", "grouped_hits", mode="before")
    @classmethod
    def _null_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    @model_validator(mode="after")
    def _one_hit_shape(self) -> SearchResponse:
        if self.hits and self.grouped_hits:
            raise ValueError("hits and grouped_hits are mutually exclusive")
        return self

    @property
    def is_grouped(self) -> bool:
        return bool(self.grouped_hits)

    def documents(self) -> Iterator[SearchDocument]:
        """Every document in response order, flat or grouped."""
        for hit in self.hits:
            yield hit.document
        for group in self.grouped_hits:
            for hit in group.hits:
                yield hit.document
