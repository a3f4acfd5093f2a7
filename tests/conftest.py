"""
목적: pytest 공통 픽스처와 로깅 훅을 제공한다.
설명: .env를 로딩해 외부 DB 통합 테스트 환경 변수를 준비하고, SQLite 드라이버 픽스처와 테스트 결과 로깅을 제공한다.
디자인 패턴: 테스트 훅
참조: pyproject.toml, .env.sample, src/mongo_hybrid/integrations/db/client.py
"""

from __future__ import annotations

import logging
from pathlib import Path

import pytest
from dotenv import load_dotenv

from mongo_hybrid.integrations.db import create_driver
from mongo_hybrid.shared.logging import InMemoryLogger, LogLevel


_LOGGER = logging.getLogger("tests")
_ENV_FILE = Path(__file__).resolve().parents[1] / ".env"
_OUTCOME_LEVELS = {"passed": logging.INFO, "skipped": logging.WARNING, "failed": logging.ERROR}

if _ENV_FILE.exists():
    load_dotenv(_ENV_FILE, override=False)
else:
    _LOGGER.info(".env 파일이 없어 MySQL/PostgreSQL 통합 테스트는 건너뜁니다. (.env.sample 참고)")


@pytest.fixture
def sql_logger() -> InMemoryLogger:
    """실행 SQL을 모두 보관하는 로거를 반환한다."""

    return InMemoryLogger(name="tests.sql", emit_stdout=False, min_level=LogLevel.DEBUG)


@pytest.fixture
def sqlite_driver(tmp_path, sql_logger):
    """임시 파일 기반 SQLite 드라이버를 반환하고 테스트 후 연결을 닫는다."""

    options = {"connection": "sqlite", "dbname": str(tmp_path / "store.sqlite")}
    with create_driver(options, sql_logger) as driver:
        yield driver


def pytest_sessionstart(session) -> None:
    _LOGGER.info("테스트 세션 시작: %s", session.config.rootpath)


def pytest_runtest_logreport(report) -> None:
    """호출 단계 결과를 소요 시간과 함께 로깅한다."""

    if report.when != "call":
        return
    level = _OUTCOME_LEVELS.get(report.outcome, logging.INFO)
    _LOGGER.log(level, "테스트 %s: %s (%.3fs)", report.outcome, report.nodeid, report.duration)


def pytest_sessionfinish(session, exitstatus: int) -> None:
    _LOGGER.info("테스트 세션 종료 (exitstatus=%s, failed=%s)", exitstatus, session.testsfailed)
