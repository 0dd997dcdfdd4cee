import json
import logging

from zaprelay.logging_config import JSONFormatter, LoggerAdapter, get_logger, setup_logging


def _record(msg="hello", **extra):
    record = logging.LogRecord("zaprelay.test", logging.INFO, __file__, 1, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter:
    def test_basic_fields(self):
        data = json.loads(JSONFormatter().format(_record()))

        assert data["level"] == "INFO"
        assert data["logger"] == "zaprelay.test"
        assert data["message"] == "hello"
        assert "timestamp" in data
        assert "context" not in data

    def test_context_is_included(self):
        data = json.loads(JSONFormatter().format(_record(context={"tenant_id": "t-1"})))

        assert data["context"] == {"tenant_id": "t-1"}

    def test_non_serializable_values_are_stringified(self):
        data = json.loads(JSONFormatter().format(_record(context={"value": object})))

        assert "object" in data["context"]["value"]


class TestLoggerAdapter:
    def test_merges_bound_and_call_context(self):
        adapter = LoggerAdapter(get_logger("test"), {"tenant_id": "t-1"})

        msg, kwargs = adapter.process("hi", {"context": {"phone_number": "5511999"}})

        assert msg == "hi"
        assert kwargs["extra"] == {"context": {"tenant_id": "t-1", "phone_number": "5511999"}}

    def test_call_context_overrides_bound(self):
        adapter = LoggerAdapter(get_logger("test"), {"step": "a"})

        _, kwargs = adapter.process("hi", {"context": {"step": "b"}})

        assert kwargs["extra"]["context"] == {"step": "b"}


def test_get_logger_namespaces_name():
    assert get_logger("webhook").name == "zaprelay.webhook"


def test_setup_logging_installs_json_handler():
    setup_logging("nonsense")

    root_logger = logging.getLogger()
    assert root_logger.level == logging.INFO
    assert [type(h.formatter) for h in root_logger.handlers] == [JSONFormatter]
    assert logging.getLogger("httpx").level == logging.WARNING
