import json
import logging
from datetime import datetime
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

from loguru import logger

from household_inventory.core import logging as logging_module


def test_serialize_record_basic():
    record = {
        "time": datetime.now(),
        "level": SimpleNamespace(name="INFO"),
        "message": "Used one unit of item 3",
        "name": "household_inventory.services.items",
        "function": "use_item",
        "line": 123,
        "extra": {
            "account_id": 7,
            "item_id": 3,
            "_private": "hidden",
        },
    }

    serialized = json.loads(logging_module.serialize_record(record))
    assert serialized["message"] == "Used one unit of item 3"
    assert serialized["account_id"] == 7
    assert serialized["item_id"] == 3
    assert serialized["function"] == "use_item"
    assert "_private" not in serialized


def test_serialize_record_fallback():
    record = {
        "time": datetime.now(),
        "level": SimpleNamespace(name="ERROR"),
        "message": "Fails",
        "extra": {"custom": object()},  # non-serializable
    }

    serialized = logging_module.serialize_record(record)
    assert "Error serializing log" in serialized
    assert "Fails" in serialized


def test_intercept_handler_forwards_to_loguru():
    messages = []
    sink_id = logger.add(lambda msg: messages.append(msg.record), level="DEBUG")
    handler = logging_module.InterceptHandler()
    try:
        for level in (logging.INFO, logging.ERROR, logging.DEBUG):
            record = logging.LogRecord("uvicorn", level, __file__, 1, "request %s", ("done",), None)
            handler.emit(record)
    finally:
        logger.remove(sink_id)

    assert [m["level"].name for m in messages] == ["INFO", "ERROR", "DEBUG"]
    assert all(m["message"] == "request done" for m in messages)


def test_intercept_handler_custom_level():
    messages = []
    sink_id = logger.add(lambda msg: messages.append(msg.record), level=0)
    try:
        record = logging.LogRecord("sqlalchemy", 5, __file__, 1, "very verbose", None, None)
        record.levelname = "VERBOSE"
        logging_module.InterceptHandler().emit(record)
    finally:
        logger.remove(sink_id)

    assert messages[0]["level"].no == 5


@patch("household_inventory.core.logging.logger")
@patch("household_inventory.core.logging.settings.JSON_LOGS", True)
def test_configure_logging_json(mock_logger):
    mock_logger.add = MagicMock()
    mock_logger.remove = MagicMock()

    logging_module.configure_logging()
    mock_logger.add.assert_called()
    mock_logger.remove.assert_called()
    assert mock_logger.info.called
    assert all(
        isinstance(logging.getLogger(name).handlers[0], logging_module.InterceptHandler)
        for name in logging_module.INTERCEPTED_LOGGERS
    )


@patch("household_inventory.core.logging.logger")
@patch("household_inventory.core.logging.settings.JSON_LOGS", False)
def test_configure_logging_human(mock_logger):
    mock_logger.add = MagicMock()
    mock_logger.remove = MagicMock()

    logging_module.configure_logging()
    mock_logger.add.assert_called()
    mock_logger.remove.assert_called()
    assert mock_logger.info.called
