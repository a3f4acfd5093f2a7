"""
목적: 방언별 연결 관리자의 공통 기반을 제공한다.
설명: 연결 수명, SQL 실행, 행 스트리밍, 드라이버 오류 래핑, 서버 버전 검증 흐름을 정의한다.
디자인 패턴: 매니저 패턴, 템플릿 메서드
참조: src/mongo_hybrid/integrations/db/engines/mysql/connection.py, src/mongo_hybrid/integrations/db/base/errors.py
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Iterator, List, Optional, Tuple

from mongo_hybrid.integrations.db.base.errors import (
    ConfigurationError,
    DocumentStoreError,
    StatementError,
)
from mongo_hybrid.integrations.db.base.models import DriverOptions
from mongo_hybrid.integrations.db.base.sql_common import parse_server_version, version_label
from mongo_hybrid.shared.const import SharedConst
from mongo_hybrid.shared.exceptions import ErrorCode, ExceptionDetail
from mongo_hybrid.shared.logging import LogContext, Logger, create_default_logger


class BaseConnectionManager(ABC):
    """연결 관리자 기반 클래스.

    Args:
        options: 드라이버 연결 옵션.
        logger: 주입 가능한 로거.
    """

    _QUOTE_SQL = "-- literal quoting"

    def __init__(self, options: DriverOptions, logger: Optional[Logger] = None) -> None:
        self._options = options
        base_logger = logger or create_default_logger(self.__class__.__name__)
        self._logger = base_logger.with_context(LogContext(dialect=self.name))
        self._connection: Any = None

    @property
    @abstractmethod
    def name(self) -> str:
        """연결 종류 이름을 반환한다."""

    @property
    def options(self) -> DriverOptions:
        """연결 옵션을 반환한다."""

        return self._options

    @property
    def is_connected(self) -> bool:
        """연결 여부를 반환한다."""

        return self._connection is not None

    @abstractmethod
    def connect(self) -> None:
        """연결을 초기화한다."""

    @abstractmethod
    def _quote_literal(self, text: str) -> str:
        """드라이버의 인용 기능으로 문자열 리터럴을 생성한다."""

    @abstractmethod
    def server_version(self) -> str:
        """서버가 보고한 버전 문자열을 반환한다."""

    @abstractmethod
    def minimum_version(self, flavor: str) -> Tuple[int, int, int]:
        """제품군별 최소 지원 버전을 반환한다."""

    @abstractmethod
    def _error_types(self) -> Tuple[type, ...]:
        """래핑 대상 드라이버 예외 타입을 반환한다."""

    @abstractmethod
    def _error_code(self, error: Exception) -> Any:
        """드라이버 예외에서 원본 오류 코드를 추출한다."""

    def quote(self, text: str) -> str:
        """문자열 리터럴을 인용한다. 드라이버 오류는 StatementError로 감싼다."""

        self.ensure_connection()
        try:
            return self._quote_literal(text)
        except self._error_types() as error:
            raise self._wrap_error(error, self._QUOTE_SQL) from error

    def close(self) -> None:
        """연결을 종료한다."""

        if self._connection is None:
            return
        self._connection.close()
        self._connection = None
        self._logger.info(f"{self.name} 연결이 종료되었습니다.")

    def ensure_connection(self) -> Any:
        """초기화된 연결 객체를 반환한다."""

        if self._connection is None:
            raise RuntimeError(f"{self.name} 연결이 초기화되지 않았습니다.")
        return self._connection

    def assert_supported(self) -> None:
        """서버 버전이 최소 요구 버전 이상인지 검증한다."""

        raw = self.server_version()
        try:
            flavor, version = parse_server_version(raw)
        except ValueError as error:
            detail = ExceptionDetail(
                code=ErrorCode.DB_SERVER_VERSION_UNSUPPORTED,
                cause=str(error),
                metadata={"server_version": raw},
            )
            raise ConfigurationError("서버 버전을 확인할 수 없습니다.", detail, error) from error
        required = self.minimum_version(flavor)
        if version < required:
            detail = ExceptionDetail(
                code=ErrorCode.DB_SERVER_VERSION_UNSUPPORTED,
                cause=f"{flavor} {version_label(version)} < {version_label(required)}",
                hint=f"{version_label(required)} 이상 버전의 서버를 사용하세요.",
                metadata={"server_version": raw, "flavor": flavor},
            )
            raise ConfigurationError(
                f"지원하지 않는 서버 버전입니다: {raw}",
                detail,
            )
        self._logger.info(f"{self.name} 서버 버전 확인 완료: {raw}")

    def execute(self, sql: str) -> Any:
        """SQL을 실행하고 드라이버 커서를 반환한다."""

        connection = self.ensure_connection()
        self._logger.debug("SQL 실행", metadata={SharedConst.SQL_METADATA_KEY: sql})
        try:
            cursor = connection.cursor()
            cursor.execute(sql)
        except self._error_types() as error:
            raise self._wrap_error(error, sql) from error
        return cursor

    def execute_statement(self, sql: str) -> int:
        """결과 집합이 없는 SQL을 실행하고 영향받은 행 수를 반환한다."""

        cursor = self.execute(sql)
        try:
            return cursor.rowcount
        finally:
            cursor.close()

    def fetch_all(self, sql: str) -> List[Any]:
        """SQL 결과를 모두 읽어 반환한다."""

        cursor = self.execute(sql)
        try:
            return list(cursor.fetchall())
        except self._error_types() as error:
            raise self._wrap_error(error, sql) from error
        finally:
            cursor.close()

    def iterate_rows(self, sql: str) -> Iterator[Any]:
        """SQL 결과 행을 하나씩 스트리밍한다."""

        cursor = self.execute(sql)
        try:
            while True:
                try:
                    row = cursor.fetchone()
                except self._error_types() as error:
                    raise self._wrap_error(error, sql) from error
                if row is None:
                    return
                yield row
        finally:
            cursor.close()

    def _driver_missing(self, package: str) -> ConfigurationError:
        detail = ExceptionDetail(
            code=ErrorCode.DB_DRIVER_MISSING,
            cause=f"{package} 패키지를 불러올 수 없습니다.",
            hint=f"pip install {package}",
            metadata={"connection": self.name},
        )
        return ConfigurationError(f"{package} 패키지가 설치되어 있지 않습니다.", detail)

    def _connection_failed(self, error: Exception) -> DocumentStoreError:
        self._logger.error(f"{self.name} 연결 실패: {error}")
        detail = ExceptionDetail(
            code=ErrorCode.DB_CONNECTION_FAILED,
            cause=str(error),
            metadata={
                "connection": self.name,
                "host": self._options.host,
                "dbname": self._options.dbname,
                "error_code": self._error_code(error),
            },
        )
        return DocumentStoreError(f"{self.name} 연결에 실패했습니다.", detail, error)

    def _wrap_error(self, error: Exception, sql: str) -> StatementError:
        code = self._error_code(error)
        self._logger.error(
            f"SQL 실행 실패: {error}",
            metadata={"sql": sql, "error_code": code},
        )
        detail = ExceptionDetail(
            code=ErrorCode.DB_STATEMENT_FAILED,
            cause=str(error),
            metadata={"sql": sql, "error_code": code, "dialect": self.name},
        )
        return StatementError(
            f"SQL 실행에 실패했습니다 (code={code}): {error}",
            detail,
            error,
        )
