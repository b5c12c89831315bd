from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest
from loguru import logger

from chatmachine import logging_utils


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    for name in ("CHATMACHINE_MAX_TRANSITIONS_PER_TURN", "CHATMACHINE_LOG_LEVEL", "CHATMACHINE_LOG_PROFILE"):
        monkeypatch.delenv(name, raising=False)
    # Keep a stray .env in the working directory out of the settings.
    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def _reset_logging() -> Iterator[None]:
    yield
    logger.remove()
    logging_utils._CONFIGURED = None


@pytest.fixture
def log_messages() -> Iterator[list[str]]:
    messages: list[str] = []
    handler_id = logger.add(lambda message: messages.append(message.record["message"]), level="DEBUG")
    yield messages
    logger.remove(handler_id)
