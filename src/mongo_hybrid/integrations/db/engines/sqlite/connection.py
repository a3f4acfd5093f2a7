"""
목적: SQLite 연결 관리 모듈을 제공한다.
설명: 연결 초기화/종료, REGEXP 함수 등록, PRAGMA 적용, JSON1 확장 확인을 담당한다.
디자인 패턴: 매니저 패턴
참조: src/mongo_hybrid/integrations/db/base/connection.py
"""

from __future__ import annotations

import re
import sqlite3
from typing import Any, Dict, Optional, Tuple

from mongo_hybrid.integrations.db.base.connection import BaseConnectionManager
from mongo_hybrid.integrations.db.base.errors import ConfigurationError
from mongo_hybrid.shared.exceptions import ErrorCode, ExceptionDetail


def _regexp(pattern: Optional[str], value: Any) -> int:
    """SQLite REGEXP 연산자 구현. X REGEXP Y는 regexp(Y, X)로 호출된다."""

    if pattern is None or value is None:
        return 0
    return 1 if re.search(pattern, str(value), re.IGNORECASE) else 0


class SqliteConnectionManager(BaseConnectionManager):
    """SQLite 연결 관리자."""

    _MIN_VERSION = (3, 9, 0)
    _QUOTE_SQL = "SELECT quote(?)"
    _DEFAULT_TIMEOUT_SECONDS = 5.0

    @property
    def name(self) -> str:
        return "sqlite"

    def connect(self) -> None:
        if self._connection is not None:
            return
        params: Dict[str, Any] = {
            "timeout": self._DEFAULT_TIMEOUT_SECONDS,
            "isolation_level": None,
            "check_same_thread": False,
        }
        params.update(self._options.driver_options)
        try:
            self._connection = sqlite3.connect(self._options.dbname, **params)
        except sqlite3.Error as error:
            raise self._connection_failed(error) from error
        self._connection.create_function("REGEXP", 2, _regexp, deterministic=True)
        self._apply_pragmas()
        self._logger.info("SQLite 연결이 초기화되었습니다.")

    def _quote_literal(self, text: str) -> str:
        row = self.ensure_connection().execute(self._QUOTE_SQL, (text,)).fetchone()
        return row[0]

    def server_version(self) -> str:
        return sqlite3.sqlite_version

    def minimum_version(self, flavor: str) -> Tuple[int, int, int]:
        return self._MIN_VERSION

    def assert_supported(self) -> None:
        super().assert_supported()
        try:
            self.ensure_connection().execute("SELECT json('{}')").fetchone()
        except sqlite3.OperationalError as error:
            detail = ExceptionDetail(
                code=ErrorCode.DB_DRIVER_MISSING,
                cause=str(error),
                hint="JSON1 확장이 포함된 SQLite 빌드를 사용하세요.",
                metadata={"server_version": sqlite3.sqlite_version},
            )
            raise ConfigurationError("SQLite JSON1 확장을 사용할 수 없습니다.", detail, error) from error

    def _apply_pragmas(self) -> None:
        if self._options.dbname == ":memory:":
            return
        try:
            self._connection.execute("PRAGMA journal_mode=WAL")
        except sqlite3.DatabaseError as error:
            self._logger.warning(f"SQLite PRAGMA 적용 경고: {error}")

    def _error_types(self) -> Tuple[type, ...]:
        return (sqlite3.Error,)

    def _error_code(self, error: Exception) -> Any:
        return getattr(error, "sqlite_errorname", None) or error.__class__.__name__
