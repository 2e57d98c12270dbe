"""Observability: LangSmith tracing (optional, env-controlled)."""

from ledger_search.observability.langsmith import trace

__all__ = ["trace"]
