"""
목적: PostgreSQL 연결 관리 모듈을 제공한다.
설명: psycopg2 연결 초기화, mogrify 기반 문자열 인용, 서버 버전 조회를 담당한다.
디자인 패턴: 매니저 패턴
참조: src/mongo_hybrid/integrations/db/base/connection.py
"""

from __future__ import annotations

from typing import Any, Dict, Tuple

from mongo_hybrid.integrations.db.base.connection import BaseConnectionManager

try:
    import psycopg2
except ImportError:  # pragma: no cover - 환경 의존 로딩
    psycopg2 = None


class PostgresConnectionManager(BaseConnectionManager):
    """PostgreSQL 연결 관리자.

    psycopg2 기본 커서는 클라이언트 측 버퍼를 사용한다.
    """

    _DEFAULT_PORT = 5432
    _DEFAULT_CHARSET = "UTF8"
    _MIN_VERSION = (9, 5, 0)

    @property
    def name(self) -> str:
        return "pgsql"

    def connect(self) -> None:
        if psycopg2 is None:
            raise self._driver_missing("psycopg2-binary")
        if self._connection is not None:
            return
        try:
            connection = psycopg2.connect(**self._connect_params())
            connection.set_client_encoding(self._options.charset or self._DEFAULT_CHARSET)
        except psycopg2.Error as error:
            raise self._connection_failed(error) from error
        connection.autocommit = True
        self._connection = connection
        self._logger.info("PostgreSQL 연결이 초기화되었습니다.")

    def _quote_literal(self, text: str) -> str:
        connection = self.ensure_connection()
        with connection.cursor() as cursor:
            quoted = cursor.mogrify("%s", (text,))
        return quoted.decode("utf-8") if isinstance(quoted, bytes) else quoted

    def server_version(self) -> str:
        number = self.ensure_connection().server_version
        major = number // 10000
        if major >= 10:
            return f"{major}.{number % 10000}"
        return f"{major}.{(number // 100) % 100}.{number % 100}"

    def minimum_version(self, flavor: str) -> Tuple[int, int, int]:
        return self._MIN_VERSION

    def _connect_params(self) -> Dict[str, Any]:
        options = self._options
        params: Dict[str, Any] = {
            "host": options.host,
            "port": options.port or self._DEFAULT_PORT,
            "dbname": options.dbname,
        }
        if options.username is not None:
            params["user"] = options.username
        if options.password is not None:
            params["password"] = options.password
        params.update(options.driver_options)
        return params

    def _error_types(self) -> Tuple[type, ...]:
        return (psycopg2.Error,)

    def _error_code(self, error: Exception) -> Any:
        return getattr(error, "pgcode", None)
