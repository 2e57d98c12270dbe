"""Structured logging: console plus an optional JSON-lines event log."""

import json
import logging
import os
import sys
import threading
from dataclasses import asdict, dataclass
from datetime import datetime
from pathlib import Path
from typing import Any

from ledger_search.core.config import config


def _format_duration(seconds: float) -> str:
    if seconds < 0:
        return "0ms"
    if seconds >= 1:
        return f"{seconds:.1f}s"
    ms = seconds * 1000
    if ms >= 1:
        return f"{ms:.0f}ms"
    if ms > 0:
        return "<1ms"
    return "0ms"


def _short_reason(reason: str | None, max_len: int = 80) -> str:
    """One-line short reason for console (failed search)."""
    if not reason or not reason.strip():
        return ""
    s = reason.strip().replace("\n", " ").strip()
    return s[:max_len] + "..." if len(s) > max_len else s


def _use_color() -> bool:
    if os.environ.get("NO_COLOR"):
        return False
    try:
        return sys.stderr.isatty()
    except Exception:
        return False


def _c(role: str) -> str:
    if not _use_color():
        return ""
    codes = {
        "resource": "\033[38;5;81m",  # cyan
        "ok": "\033[38;5;78m",  # green
        "fail": "\033[38;5;203m",  # red
        "duration": "\033[38;5;221m",  # yellow
    }
    return codes.get(role, "")


def _reset() -> str:
    if not _use_color():
        return ""
    return "\033[0m"


@dataclass
class LogEvent:
    event_type: str
    timestamp: str
    data: dict[str, Any]

    def to_dict(self) -> dict:
        return asdict(self)

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), default=str)


class SearchLogger:
    def __init__(self, logs_dir: Path | None = None, level: str | None = None):
        logs_dir = logs_dir if logs_dir is not None else config.logs_dir
        self.log_file: Path | None = None
        if logs_dir is not None:
            logs_dir.mkdir(parents=True, exist_ok=True)
            self.log_file = logs_dir / "search.log"
        self._file_lock = threading.Lock()
        self._setup_console_logger(level or config.log_level)

    def _setup_console_logger(self, level: str):
        self.console = logging.getLogger("ledger_search")
        self.console.setLevel(logging.DEBUG)
        if not self.console.handlers:
            handler = logging.StreamHandler()
            handler.setLevel(getattr(logging, level, logging.INFO))
            handler.setFormatter(
                logging.Formatter("%(asctime)s │ %(message)s", datefmt="%H:%M:%S")
            )
            self.console.addHandler(handler)

    def log_event(self, event: LogEvent) -> None:
        if self.log_file is None:
            return
        with self._file_lock:
            with open(self.log_file, "a", encoding="utf-8") as f:
                f.write(event.to_json() + "\n")

    def _timestamp(self) -> str:
        return datetime.now().isoformat()

    def search_request(self, resource: str, body: dict[str, Any]) -> None:
        event = LogEvent(
            event_type="SEARCH_REQUEST",
            timestamp=self._timestamp(),
            data={"resource": resource, "body": body},
        )
        self.log_event(event)
        self.console.debug(
            f"Search {_c('resource')}{resource}{_reset()}  q={body.get('q', '')!r}"
        )

    def search_response(
        self,
        resource: str,
        status_code: int,
        found: int,
        hits: int,
        groups: int,
        duration_seconds: float,
    ) -> None:
        event = LogEvent(
            event_type="SEARCH_RESPONSE",
            timestamp=self._timestamp(),
            data={
                "resource": resource,
                "status_code": status_code,
                "found": found,
                "hits": hits,
                "groups": groups,
                "duration_seconds": round(duration_seconds, 3),
            },
        )
        self.log_event(event)
        shape = f"{groups} groups" if groups else f"{hits} hits"
        dur = f"{_c('duration')}{_format_duration(duration_seconds)}{_reset()}"
        self.console.info(
            f"{_c('ok')}✓{_reset()} {_c('resource')}{resource}{_reset()}  "
            f"[{status_code}]  found {found}  {shape}  in {dur}"
        )

    def search_error(
        self,
        resource: str,
        error: Exception,
        status_code: int | None,
        duration_seconds: float,
    ) -> None:
        reason = str(error)
        event = LogEvent(
            event_type="SEARCH_ERROR",
            timestamp=self._timestamp(),
            data={
                "resource": resource,
                "error_type": type(error).__name__,
                "error_reason": reason[:500],
                "status_code": status_code,
                "duration_seconds": round(duration_seconds, 3),
            },
        )
        self.log_event(event)
        status = f"[{status_code}]" if status_code is not None else "[no response]"
        self.console.warning(
            f"{_c('fail')}✗{_reset()} {_c('resource')}{resource}{_reset()}  {status}  "
            f"{type(error).__name__}: {_short_reason(reason)}"
        )


logger = SearchLogger()
