"""
목적: MySQL/MariaDB 연결 관리 모듈을 제공한다.
설명: mysql-connector-python 연결 초기화, 네이티브 문자열 인용, 서버 버전 조회를 담당한다.
디자인 패턴: 매니저 패턴
참조: src/mongo_hybrid/integrations/db/base/connection.py
"""

from __future__ import annotations

from typing import Any, Dict, Tuple

from mongo_hybrid.integrations.db.base.connection import BaseConnectionManager

try:
    import mysql.connector
    from mysql.connector.conversion import MySQLConverter
except ImportError:  # pragma: no cover - 환경 의존 로딩
    mysql = None
    MySQLConverter = None


class MysqlConnectionManager(BaseConnectionManager):
    """MySQL 연결 관리자.

    커서는 비버퍼 모드로 행을 스트리밍하며, 버려진 결과 집합은 consume_results로 자동 소비한다.
    """

    _DEFAULT_PORT = 3306
    _DEFAULT_CHARSET = "utf8mb4"
    _MIN_MYSQL_VERSION = (5, 7, 9)
    _MIN_MARIADB_VERSION = (10, 2, 6)

    @property
    def name(self) -> str:
        return "mysql"

    def connect(self) -> None:
        if mysql is None:
            raise self._driver_missing("mysql-connector-python")
        if self._connection is not None:
            return
        params = self._connect_params()
        try:
            self._connection = mysql.connector.connect(**params)
        except mysql.connector.Error as error:
            raise self._connection_failed(error) from error
        self._converter = MySQLConverter(params.get("charset", self._DEFAULT_CHARSET))
        self._logger.info("MySQL 연결이 초기화되었습니다.")

    def _quote_literal(self, text: str) -> str:
        escaped = self._converter.escape(text)
        if isinstance(escaped, (bytes, bytearray)):
            escaped = escaped.decode("utf-8")
        return f"'{escaped}'"

    def server_version(self) -> str:
        return self.ensure_connection().get_server_info()

    def minimum_version(self, flavor: str) -> Tuple[int, int, int]:
        if flavor == "mariadb":
            return self._MIN_MARIADB_VERSION
        return self._MIN_MYSQL_VERSION

    def _connect_params(self) -> Dict[str, Any]:
        options = self._options
        charset = options.charset or self._DEFAULT_CHARSET
        params: Dict[str, Any] = {
            "host": options.host,
            "port": options.port or self._DEFAULT_PORT,
            "database": options.dbname,
            "charset": charset,
            "autocommit": True,
            "consume_results": True,
        }
        if charset == self._DEFAULT_CHARSET:
            params["collation"] = "utf8mb4_unicode_ci"
        if options.username is not None:
            params["user"] = options.username
        if options.password is not None:
            params["password"] = options.password
        params.update(options.driver_options)
        return params

    def _error_types(self) -> Tuple[type, ...]:
        return (mysql.connector.Error,)

    def _error_code(self, error: Exception) -> Any:
        return getattr(error, "errno", None)
