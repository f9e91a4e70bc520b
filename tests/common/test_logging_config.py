import json
import logging
import sys

import pytest

from common.logging_config import JSONFormatter, setup_logging


@pytest.mark.usefixtures("restore_root_logging")
@pytest.mark.parametrize(
    "verbose, quiet, expected",
    [
        (False, False, logging.INFO),
        (True, False, logging.DEBUG),
        (False, True, logging.WARNING),
        (True, True, logging.WARNING),
    ],
)
def test_setup_logging_console_level(verbose, quiet, expected):
    logger = setup_logging("provisioner-test", verbose=verbose, quiet=quiet)

    console_handlers = [
        h for h in logging.getLogger().handlers if type(h) is logging.StreamHandler
    ]
    assert logger.name == "provisioner-test"
    assert len(console_handlers) == 1
    assert console_handlers[0].level == expected


@pytest.mark.usefixtures("restore_root_logging")
def test_setup_logging_writes_json_file(tmp_path):
    log_file = tmp_path / "logs" / "provision.jsonl"

    logger = setup_logging("provisioner-test", quiet=True, log_file_path=log_file)
    logger.info("Copied a.dll", extra={"entry": "a.dll"})
    for handler in logging.getLogger().handlers:
        handler.flush()

    records = [json.loads(line) for line in log_file.read_text(encoding="utf-8").splitlines()]
    copied = [r for r in records if r["message"] == "Copied a.dll"]
    assert len(copied) == 1
    assert copied[0]["level"] == "INFO"
    assert copied[0]["extra"] == {"entry": "a.dll"}


def test_json_formatter_includes_exception():
    formatter = JSONFormatter("svc")
    try:
        raise ValueError("boom")
    except ValueError:
        record = logging.LogRecord("x", logging.ERROR, __file__, 1, "failed", None, sys.exc_info())

    entry = json.loads(formatter.format(record))

    assert entry["service"] == "svc"
    assert entry["message"] == "failed"
    assert "ValueError: boom" in entry["exception"]
