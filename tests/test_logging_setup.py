from __future__ import annotations

import logging

from ga4_site_report.logging_setup import setup_logger


def test_setup_logger_appends_to_file(tmp_path) -> None:
    log_path = tmp_path / "logs" / "script_log.log"
    log_path.parent.mkdir()
    log_path.write_text("previous run\n", encoding="utf-8")

    logger = setup_logger(log_path, "INFO", name="tests.logging.append", console=False)
    logger.info("Script started")
    logger.debug("hidden")
    for handler in logger.handlers:
        handler.flush()

    text = log_path.read_text(encoding="utf-8")
    assert text.startswith("previous run\n")
    assert ": INFO : tests.logging.append : Script started" in text
    assert "hidden" not in text


def test_setup_logger_does_not_duplicate_handlers(tmp_path) -> None:
    first = setup_logger(tmp_path / "a.log", name="tests.logging.dupes", console=False)
    second = setup_logger(tmp_path / "a.log", name="tests.logging.dupes", console=False)
    assert first is second
    assert len(second.handlers) == 1
    assert second.level == logging.DEBUG
