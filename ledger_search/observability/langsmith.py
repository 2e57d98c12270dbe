"""LangSmith tracing integration (opt-in with LANGSMITH_TRACING=true)."""

from __future__ import annotations

import atexit
import os
from typing import Any, Literal, cast

_ENABLED = os.getenv("LANGSMITH_TRACING", "").strip().lower() == "true"

_LangSmithRunType = Literal[
    "tool", "chain", "llm", "retriever", "embedding", "prompt", "parser"
]


class _NoOpRun:
    def end(self, outputs: dict[str, Any] | None = None) -> None:
        pass


class _NoOpTraceContext:
    def __enter__(self) -> _NoOpRun:
        return _NoOpRun()

    def __exit__(self, *args: Any) -> None:
        pass

    async def __aenter__(self) -> _NoOpRun:
        return _NoOpRun()

    async def __aexit__(self, *args: Any) -> None:
        pass


def _noop_trace(
    name: str,
    run_type: str = "chain",
    *,
    inputs: dict[str, Any] | None = None,
    metadata: dict[str, Any] | None = None,
    **kwargs: Any,
) -> _NoOpTraceContext:
    del name, run_type, inputs, metadata, kwargs
    return _NoOpTraceContext()


trace = _noop_trace

if _ENABLED:
    from langsmith import Client as LangSmithClient
    from langsmith.run_helpers import trace as _ls_trace

    _project = os.getenv("LANGSMITH_PROJECT", "ledger-search")
    _client = LangSmithClient()

    def trace(
        name: str,
        run_type: str = "chain",
        *,
        inputs: dict[str, Any] | None = None,
        metadata: dict[str, Any] | None = None,
        project_name: str | None = None,
        **kwargs: Any,
    ):
        return _ls_trace(
            name,
            run_type=cast("_LangSmithRunType", run_type),
            inputs=inputs or {},
            metadata=metadata or {},
            project_name=project_name or _project,
            client=_client,
            **kwargs,
        )

    atexit.register(_client.flush)
