"""Tests for pipeline logger module."""

from __future__ import annotations

import logging

import pytest

from lending_tags.utils.logger import get_logger


def test_handlers_attached_on_first_message() -> None:
    """Test creating a logger adds no handlers until something is logged."""
    logger = get_logger("lending_tags.tests.lazy")
    assert logger.logger.handlers == []

    logger.debug("first")

    assert len(logger.logger.handlers) == 2


def test_get_logger_reuses_handlers() -> None:
    """Test repeated lookups and messages do not stack handlers."""
    first = get_logger("lending_tags.tests.reuse")
    first.info("one")
    second = get_logger("lending_tags.tests.reuse")
    second.info("two")
    assert first.logger is second.logger
    assert len(second.logger.handlers) == 2


def test_log_summary_reports_metrics(caplog: pytest.LogCaptureFixture) -> None:
    """Test recorded metrics are written in the run summary."""
    logger = get_logger("lending_tags.tests.summary")
    logger.record_metric("pages", 3)
    logger.record_metric("tags", 2500)

    with caplog.at_level(logging.INFO, logger="lending_tags.tests.summary"):
        logger.log_summary()

    assert "pages: 3" in caplog.text
    assert "tags: 2500" in caplog.text


def test_log_summary_without_metrics(caplog: pytest.LogCaptureFixture) -> None:
    """Test nothing is logged before any metric is recorded."""
    logger = get_logger("lending_tags.tests.empty")

    with caplog.at_level(logging.INFO, logger="lending_tags.tests.empty"):
        logger.log_summary()

    assert caplog.text == ""
