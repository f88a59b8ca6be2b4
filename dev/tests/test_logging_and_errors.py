import json
import logging
import sys

from rom_bridge.exceptions import NotEmptyError, NotFoundError, StoreError
from rom_bridge.logging_config import FastFormatter, JsonFormatter, cleanup_logging, setup_logging
from rom_bridge.utils import Err, Ok, capture, error_message, unwrap_or


def _record(level: int, msg: str, exc_info=None) -> logging.LogRecord:
    return logging.LogRecord(
        name="rom_bridge.test",
        level=level,
        pathname=__file__,
        lineno=42,
        msg=msg,
        args=(),
        exc_info=exc_info,
    )


def test_json_formatter_outputs_expected_fields():
    payload = json.loads(JsonFormatter().format(_record(logging.INFO, "hello")))

    assert payload["level"] == "INFO"
    assert payload["logger"] == "rom_bridge.test"
    assert payload["message"] == "hello"
    assert payload["lineno"] == 42
    assert "timestamp" in payload


def test_json_formatter_includes_exc_info():
    try:
        raise NotFoundError("gone", path="saves/ghost.sav")
    except NotFoundError:
        record = _record(logging.ERROR, "failed", sys.exc_info())

    payload = json.loads(JsonFormatter().format(record))
    assert "NotFoundError" in payload["exc_info"]


def test_fast_formatter_levels():
    formatter = FastFormatter()
    assert "WARNING [rom_bridge.test] careful" in formatter.format(_record(logging.WARNING, "careful"))
    assert "INFO    plain" in formatter.format(_record(logging.INFO, "plain"))
    assert "\033[" not in formatter.format(_record(logging.ERROR, "no colors"))
    assert FastFormatter(enable_colors=True).format(_record(logging.ERROR, "red")).startswith("\033[91m")


def test_setup_logging_file_handler(tmp_path):
    try:
        result = setup_logging("DEBUG", log_dir=str(tmp_path), enable_file_logging=True,
                               enable_console_logging=False, structured_json=True)
        assert set(result["handlers"]) == {"file"}
        logging.getLogger("rom_bridge.test").info("written")
        result["handlers"]["file"].flush()
        line = (tmp_path / "rom_bridge.log").read_text(encoding="utf-8").strip().splitlines()[-1]
        assert json.loads(line)["message"] == "written"
    finally:
        cleanup_logging()
        logging.getLogger("rom_bridge").setLevel(logging.NOTSET)


def test_error_to_dict():
    err = NotEmptyError("Directory not empty: tmp", path="tmp", entries=2)
    data = err.to_dict()

    assert isinstance(err, StoreError)
    assert data["error_code"] == "NOT_EMPTY"
    assert data["details"] == {"path": "tmp", "entries": 2}


def test_capture_wraps_project_errors_only():
    def missing():
        raise NotFoundError("gone")

    assert capture(lambda: 3) == Ok(3)
    result = capture(missing)
    assert isinstance(result, Err)
    assert result.code == "NOT_FOUND"
    assert error_message(result) == "gone"


def test_unwrap_or_falls_back_on_err():
    assert unwrap_or(Ok(b"state"), b"") == b"state"
    assert unwrap_or(Err(NotFoundError("gone")), b"") == b""
