import logging

from groove.core.context import bind_user_id, request_id_ctx_var, user_id_ctx_var
from groove.core.logging import RequestContextFilter, build_logging_config


def _record() -> logging.LogRecord:
    return logging.LogRecord("groove.test", logging.INFO, __file__, 1, "hello", None, None)


def test_filter_uses_placeholders_outside_requests() -> None:
    record = _record()

    assert RequestContextFilter().filter(record) is True
    assert record.request_id == "-"
    assert record.user_id == "-"


def test_filter_reads_bound_ids() -> None:
    request_token = request_id_ctx_var.set("req-42")
    user_token = user_id_ctx_var.set(None)
    try:
        bind_user_id("3f1c")
        record = _record()
        RequestContextFilter().filter(record)
    finally:
        user_id_ctx_var.reset(user_token)
        request_id_ctx_var.reset(request_token)

    assert record.request_id == "req-42"
    assert record.user_id == "3f1c"


def test_sql_logging_follows_echo_flag() -> None:
    quiet = build_logging_config("debug")
    loud = build_logging_config("info", sql_echo=True)

    assert quiet["loggers"]["sqlalchemy.engine"]["level"] == "WARNING"
    assert loud["loggers"]["sqlalchemy.engine"]["level"] == "INFO"
    assert quiet["root"]["level"] == "DEBUG"
