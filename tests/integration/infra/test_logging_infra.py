from __future__ import annotations

"""
Integration tests for Logging Infrastructure.

Verifies the QueueListener architecture, idempotency of configuration,
forced re-configuration and log file rotation.
"""

import logging
import time
from logging.handlers import QueueHandler, QueueListener
from pathlib import Path

import pytest

from dirstats.infra.logging import (
    CONFIGURED_FLAG_ATTR,
    HANDLER_TAG_ATTR,
    QUEUE_LISTENER_ATTR,
    LoggingConfig,
    configure_logging,
)


@pytest.fixture(autouse=True)
def reset_logging() -> None:
    """Clean up root logger handlers before and after each test."""
    def _reset() -> None:
        root = logging.getLogger()
        listener = getattr(root, QUEUE_LISTENER_ATTR, None)
        if isinstance(listener, QueueListener) and listener._thread is not None:
            listener.stop()
        setattr(root, QUEUE_LISTENER_ATTR, None)
        setattr(root, CONFIGURED_FLAG_ATTR, False)
        for h in list(root.handlers):
            if getattr(h, HANDLER_TAG_ATTR, False):
                root.removeHandler(h)
                h.close()

    _reset()
    yield
    _reset()


def _our_handlers() -> list:
    return [h for h in logging.getLogger().handlers if getattr(h, HANDLER_TAG_ATTR, False)]


def test_logging_idempotency() -> None:
    """Multiple configuration calls do not duplicate handlers."""
    cfg = LoggingConfig(level="INFO", console=True)

    configure_logging(cfg)
    first = _our_handlers()
    configure_logging(cfg)

    assert _our_handlers() == first
    assert len(first) == 1
    assert isinstance(first[0], QueueHandler)


def test_force_reconfigures_level() -> None:
    configure_logging(LoggingConfig(level="INFO"))
    configure_logging(LoggingConfig(level="DEBUG"), force=True)

    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert len(_our_handlers()) == 1


def test_unknown_level_falls_back_to_info() -> None:
    configure_logging(LoggingConfig(level="chatty"))

    assert logging.getLogger().level == logging.INFO


def test_file_logging_writes_records(tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "dirstats.log"
    configure_logging(LoggingConfig(level="DEBUG", console=False, log_file=str(log_file)))

    logging.getLogger("dirstats.test").info("scan complete")
    listener = getattr(logging.getLogger(), QUEUE_LISTENER_ATTR)
    listener.stop()

    content = log_file.read_text(encoding="utf-8")
    assert "scan complete" in content
    assert "dirstats.test" in content


def test_log_rotation(tmp_path: Path) -> None:
    """File rotation happens when the size limit is exceeded."""
    log_file = tmp_path / "rotate.log"
    cfg = LoggingConfig(
        level="DEBUG",
        console=False,
        log_file=str(log_file),
        max_bytes=100,
        backup_count=1,
    )

    configure_logging(cfg)
    logger = logging.getLogger("test_rotate")
    for _ in range(10):
        logger.debug("This is a long log message to trigger rotation." * 5)

    # Give the QueueListener time to drain
    time.sleep(0.5)

    assert (tmp_path / "rotate.log.1").exists()


def test_no_handlers_when_everything_disabled() -> None:
    configure_logging(LoggingConfig(console=False, log_file=None))

    assert _our_handlers() == []
