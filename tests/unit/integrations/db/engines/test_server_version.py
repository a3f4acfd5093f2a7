"""
목적: 방언별 서버 버전 검증 규칙을 검증한다.
설명: 실제 서버 없이 버전 문자열을 주입해 최소 버전 비교와 드라이버 누락 오류를 확인한다.
디자인 패턴: 테스트 더블
참조: src/mongo_hybrid/integrations/db/base/connection.py, src/mongo_hybrid/integrations/db/engines
"""

from __future__ import annotations

from types import SimpleNamespace

import pytest

import mongo_hybrid.integrations.db.engines.mysql.connection as mysql_connection
from mongo_hybrid.integrations.db.base import ConfigurationError, DriverOptions
from mongo_hybrid.integrations.db.base.sql_common import parse_server_version
from mongo_hybrid.integrations.db.engines import (
    MysqlConnectionManager,
    PostgresConnectionManager,
    SqliteConnectionManager,
)


class _StubMysqlManager(MysqlConnectionManager):
    """서버 버전 문자열을 주입받는 MySQL 관리자."""

    def __init__(self, reported: str) -> None:
        super().__init__(DriverOptions(connection="mysql", dbname="test"))
        self._reported = reported

    def server_version(self) -> str:
        return self._reported


def _postgres_manager(number: int) -> PostgresConnectionManager:
    manager = PostgresConnectionManager(DriverOptions(connection="pgsql", dbname="test"))
    manager._connection = SimpleNamespace(server_version=number)
    return manager


@pytest.mark.parametrize(
    ("reported", "supported"),
    [
        ("5.7.9-log", True),
        ("8.0.36", True),
        ("5.7.8", False),
        ("5.5.5-10.2.6-MariaDB", True),
        ("5.5.5-10.2.5-MariaDB-1:10.2.5+maria~focal", False),
        ("10.11.6-MariaDB", True),
    ],
)
def test_mysql_minimum_versions(reported: str, supported: bool) -> None:
    """MySQL 5.7.9, MariaDB 10.2.6 이상만 허용한다."""

    manager = _StubMysqlManager(reported)

    if supported:
        manager.assert_supported()
        return
    with pytest.raises(ConfigurationError) as captured:
        manager.assert_supported()
    assert captured.value.code == "DB_SERVER_VERSION_UNSUPPORTED"


def test_mariadb_compat_prefix_is_stripped() -> None:
    """MariaDB 호환 접두사를 제거하고 실제 버전을 읽는다."""

    assert parse_server_version("5.5.5-10.4.12-MariaDB") == ("mariadb", (10, 4, 12))
    assert parse_server_version("8.0.36") == ("default", (8, 0, 36))


def test_postgres_server_version_conversion() -> None:
    """server_version 정수를 버전 문자열로 변환하고 9.5 미만은 거부한다."""

    assert _postgres_manager(90605).server_version() == "9.6.5"
    assert _postgres_manager(120005).server_version() == "12.5"
    _postgres_manager(90500).assert_supported()
    with pytest.raises(ConfigurationError):
        _postgres_manager(90400).assert_supported()


def test_unparseable_version_is_rejected() -> None:
    """해석할 수 없는 버전 문자열은 구성 오류로 처리한다."""

    with pytest.raises(ConfigurationError) as captured:
        _StubMysqlManager("unknown").assert_supported()

    assert captured.value.code == "DB_SERVER_VERSION_UNSUPPORTED"


def test_missing_mysql_driver_is_reported(monkeypatch) -> None:
    """mysql-connector-python이 없으면 연결 시 DB_DRIVER_MISSING을 던진다."""

    monkeypatch.setattr(mysql_connection, "mysql", None)
    manager = MysqlConnectionManager(DriverOptions(connection="mariadb", dbname="test"))

    with pytest.raises(ConfigurationError) as captured:
        manager.connect()

    assert captured.value.code == "DB_DRIVER_MISSING"
    assert "mysql-connector-python" in captured.value.detail.hint


def test_sqlite_runtime_is_supported() -> None:
    """현재 런타임의 SQLite는 JSON1을 포함하고 최소 버전을 만족한다."""

    manager = SqliteConnectionManager(DriverOptions(connection="sqlite", dbname=":memory:"))
    manager.connect()
    try:
        manager.assert_supported()
        assert manager.quote("it's") == "'it''s'"
    finally:
        manager.close()
