"""
목적: 드라이버 생성 진입점과 옵션 로딩을 검증한다.
설명: 연결 종류 검증, 별칭 정규화, .env 기반 옵션 병합을 확인한다.
디자인 패턴: 테스트 케이스
참조: src/mongo_hybrid/integrations/db/client.py, src/mongo_hybrid/shared/config/loader.py
"""

from __future__ import annotations

import os

import pytest

from mongo_hybrid import ConfigurationError, Driver, create_driver, load_driver_options
from mongo_hybrid.integrations.db.base import ConnectionKind


def test_unsupported_connection_is_rejected() -> None:
    """알 수 없는 연결 종류는 DB_UNSUPPORTED_CONNECTION 오류를 던진다."""

    with pytest.raises(ConfigurationError) as captured:
        create_driver({"connection": "oracle", "dbname": "x"})

    assert captured.value.code == "DB_UNSUPPORTED_CONNECTION"


def test_missing_required_option_is_invalid() -> None:
    """필수 옵션이 빠지면 DB_OPTIONS_INVALID 오류를 던진다."""

    with pytest.raises(ConfigurationError) as captured:
        create_driver({"connection": "sqlite"})

    assert captured.value.code == "DB_OPTIONS_INVALID"


def test_sqlite_alias_creates_driver(tmp_path) -> None:
    """sqlite3 별칭으로 드라이버를 만들고 컨텍스트 종료 시 연결을 닫는다."""

    with create_driver({"connection": "sqlite3", "dbname": str(tmp_path / "a.sqlite")}) as driver:
        assert isinstance(driver, Driver)
        assert driver.query_builder.dialect.name == "sqlite"
        assert driver.connection.is_connected

    assert not driver.connection.is_connected


def test_load_driver_options_from_dotenv(tmp_path, monkeypatch) -> None:
    """.env 값을 접두사 기준으로 읽고 오버라이드를 마지막에 적용한다."""

    env_file = tmp_path / ".env"
    env_file.write_text(
        "\n".join(
            [
                "MONGO_HYBRID__CONNECTION=postgres",
                "MONGO_HYBRID__HOST=db.local",
                "MONGO_HYBRID__PORT=5433",
                "MONGO_HYBRID__DBNAME=store",
                "MONGO_HYBRID__PASSWORD=1234",
                "MONGO_HYBRID__DRIVER_OPTIONS__CONNECT_TIMEOUT=3",
                "OTHER=ignored",
            ]
        ),
        encoding="utf-8",
    )
    for key in list(os.environ):
        if key.startswith("MONGO_HYBRID__"):
            monkeypatch.delenv(key)

    options = load_driver_options(dotenv_path=str(env_file), overrides={"username": "app"})

    assert options.connection is ConnectionKind.PGSQL
    assert options.host == "db.local"
    assert options.port == 5433
    assert options.password == "1234"
    assert options.username == "app"
    assert options.driver_options == {"connect_timeout": 3}


@pytest.mark.parametrize("raw", ["1.50", "-0", "true", "null", "0042"])
def test_load_driver_options_keeps_string_fields_verbatim(monkeypatch, raw) -> None:
    """문자열 옵션(비밀번호 등)은 숫자/불리언처럼 보여도 환경 변수 원문을 그대로 쓴다."""

    for key in list(os.environ):
        if key.startswith("MONGO_HYBRID__"):
            monkeypatch.delenv(key)
    monkeypatch.setenv("MONGO_HYBRID__CONNECTION", "sqlite")
    monkeypatch.setenv("MONGO_HYBRID__DBNAME", "2024")
    monkeypatch.setenv("MONGO_HYBRID__PASSWORD", raw)
    monkeypatch.setenv("MONGO_HYBRID__PORT", "5433")

    options = load_driver_options()

    assert options.password == raw
    assert options.dbname == "2024"
    assert options.port == 5433
