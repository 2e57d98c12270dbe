import json

from ledger_search.core.logger import LogEvent, SearchLogger, _format_duration
from ledger_search.errors import TransportExecutionError


def read_events(logger: SearchLogger) -> list[dict]:
    assert logger.log_file is not None
    return [json.loads(line) for line in logger.log_file.read_text().splitlines()]


def test_events_are_written_as_json_lines(tmp_path):
    logger = SearchLogger(logs_dir=tmp_path / "logs")

    logger.search_request("transactions", {"q": "*", "page": 1})
    logger.search_response("transactions", 200, found=12, hits=10, groups=0, duration_seconds=0.01234)
    logger.search_error("ledgers", TransportExecutionError("boom"), None, 0.5)

    events = read_events(logger)
    assert [e["event_type"] for e in events] == [
        "SEARCH_REQUEST",
        "SEARCH_RESPONSE",
        "SEARCH_ERROR",
    ]
    assert events[0]["data"] == {"resource": "transactions", "body": {"q": "*", "page": 1}}
    assert events[1]["data"]["found"] == 12
    assert events[1]["data"]["duration_seconds"] == 0.012
    assert events[2]["data"]["error_type"] == "TransportExecutionError"
    assert events[2]["data"]["status_code"] is None


def test_without_logs_dir_nothing_is_written(tmp_path):
    logger = SearchLogger(logs_dir=None)
    logger.log_file = None

    logger.log_event(LogEvent(event_type="X", timestamp="t", data={}))

    assert list(tmp_path.iterdir()) == []


def test_format_duration():
    assert _format_duration(2.345) == "2.3s"
    assert _format_duration(0.0123) == "12ms"
    assert _format_duration(0.0001) == "<1ms"
    assert _format_duration(0) == "0ms"
    assert _format_duration(-1) == "0ms"
