from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest
import structlog

FIXTURE_GOROOT = Path(__file__).parent / "fixtures" / "goroot"
FIXTURE_UNIT_DIR = FIXTURE_GOROOT / "src" / "builtin"


@pytest.fixture(autouse=True)
def _reset_logging() -> Iterator[None]:
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    yield
    structlog.reset_defaults()
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)


@pytest.fixture
def fixture_goroot() -> Path:
    return FIXTURE_GOROOT


@pytest.fixture
def fixture_unit_dir() -> Path:
    return FIXTURE_UNIT_DIR
