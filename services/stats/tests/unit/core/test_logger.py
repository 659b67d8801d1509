import logging

from src.core import logger as logger_module
from src.core.config import Settings
from src.core.logger import RedactingFilter


def _record(msg, *args):
    return logging.LogRecord("t", logging.INFO, __file__, 1, msg, args, None)


def test_redacting_filter_blanks_sensitive_messages():
    record = _record("user password is %s", "hunter2")
    assert RedactingFilter(["password"]).filter(record) is True
    assert record.getMessage() == "[REDACTED SENSITIVE LOG CONTENT]"


def test_redacting_filter_leaves_other_messages():
    record = _record("visit_ingested")
    RedactingFilter(["password"]).filter(record)
    assert record.getMessage() == "visit_ingested"


def test_configure_logging_installs_redaction_once(monkeypatch):
    monkeypatch.setattr(logger_module, "_configured", False)
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        logger_module.configure_logging(Settings(app_environment="testing"))
        logger_module.configure_logging(Settings(app_environment="testing"))

        (handler,) = root.handlers
        assert sum(isinstance(f, RedactingFilter) for f in handler.filters) == 1
        assert logging.getLogger("uvicorn.access").level == logging.WARNING
    finally:
        root.handlers = saved_handlers
        root.setLevel(saved_level)
