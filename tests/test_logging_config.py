"""
Tests for log formatters and setup.
"""

import json
import logging
from pathlib import Path

from sitemap_writer.config import reload_config
from sitemap_writer.logging_config import (
    JsonFormatter,
    ReadableFormatter,
    get_logger,
    setup_logging,
)


def make_record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="sitemap_writer.sitemap.writer",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="Finished sitemap file",
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_includes_context():
    record = make_record(file_path=Path("/tmp/site_2.xml"), file_index=2, urls_in_file=10)
    data = json.loads(JsonFormatter().format(record))

    assert data["level"] == "INFO"
    assert data["logger"] == "sitemap_writer.sitemap.writer"
    assert data["message"] == "Finished sitemap file"
    assert data["file_path"] == str(Path("/tmp/site_2.xml"))
    assert data["file_index"] == "2"
    assert data["urls_in_file"] == "10"
    assert "urls_total" not in data
    assert data["timestamp"].endswith("Z")


def test_readable_formatter_truncates_long_paths():
    long_path = "/very/" + "deep/" * 20 + "sitemap.xml"
    output = ReadableFormatter().format(make_record(file_path=long_path, urls_total=3))

    assert "Finished sitemap file" in output
    assert "file=..." in output
    assert output.rstrip("]").endswith("total=3")
    assert "sitemap.xml" in output


def test_setup_logging_replaces_handlers(tmp_path):
    log_file = tmp_path / "writer.log"
    try:
        root = setup_logging(level="DEBUG", log_file=str(log_file))
        assert len(root.handlers) == 2
        get_logger("test").info("hello")
        assert json.loads(log_file.read_text(encoding="utf-8"))["message"] == "hello"

        root = setup_logging(level="WARNING")
        assert len(root.handlers) == 1
        assert root.level == logging.WARNING
    finally:
        for handler in list(root.handlers):
            root.removeHandler(handler)
            handler.close()
        root.setLevel(logging.NOTSET)


def test_get_logger_namespaced():
    assert get_logger("sitemap.writer").name == "sitemap_writer.sitemap.writer"


def test_setup_logging_defaults_to_configured_level(tmp_path):
    path = tmp_path / "sitemap.yaml"
    path.write_text("defaults:\n  log_level: DEBUG\n", encoding="utf-8")
    reload_config(path)
    root = logging.getLogger("sitemap_writer")
    try:
        assert setup_logging() is root
        assert root.level == logging.DEBUG
    finally:
        for handler in list(root.handlers):
            root.removeHandler(handler)
            handler.close()
        root.setLevel(logging.NOTSET)
