"""
목적: 연결 종류별 드라이버 생성 진입점을 제공한다.
설명: 옵션을 검증하고 연결 종류에 맞는 방언/연결 관리자를 골라 드라이버를 조립한다.
디자인 패턴: 팩토리 패턴
참조: src/mongo_hybrid/integrations/db/document/driver.py, src/mongo_hybrid/shared/config/loader.py
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Mapping, Optional, Tuple, Type, Union

from pydantic import ValidationError

from mongo_hybrid.integrations.db.base.connection import BaseConnectionManager
from mongo_hybrid.integrations.db.base.dialect import BaseDialect
from mongo_hybrid.integrations.db.base.errors import ConfigurationError
from mongo_hybrid.integrations.db.base.models import ConnectionKind, DriverOptions
from mongo_hybrid.integrations.db.document.driver import Driver
from mongo_hybrid.integrations.db.engines import (
    MysqlConnectionManager,
    MysqlDialect,
    PostgresConnectionManager,
    PostgresDialect,
    SqliteConnectionManager,
    SqliteDialect,
)
from mongo_hybrid.shared.config import ConfigLoader
from mongo_hybrid.shared.const import SharedConst
from mongo_hybrid.shared.exceptions import ErrorCode, ExceptionDetail
from mongo_hybrid.shared.logging import Logger, create_default_logger

_ENGINES: Dict[ConnectionKind, Tuple[Type[BaseConnectionManager], Callable[..., BaseDialect]]] = {
    ConnectionKind.MYSQL: (MysqlConnectionManager, MysqlDialect),
    ConnectionKind.PGSQL: (PostgresConnectionManager, PostgresDialect),
    ConnectionKind.SQLITE: (SqliteConnectionManager, SqliteDialect),
}


def create_driver(
    options: Union[DriverOptions, Mapping[str, Any]],
    logger: Optional[Logger] = None,
) -> Driver:
    """옵션의 연결 종류로 방언과 연결 관리자를 선택해 드라이버를 생성한다."""

    logger = logger or create_default_logger("DocumentStore")
    resolved = _validate_options(options)
    connection_class, dialect_class = _ENGINES[resolved.connection]
    connection = connection_class(resolved, logger)
    dialect = dialect_class(connection.quote)
    logger.info(f"드라이버 생성: connection={resolved.connection.value}")
    return Driver(connection, dialect, logger)


def load_driver_options(
    prefix: str = SharedConst.ENV_PREFIX,
    json_path: Optional[str] = None,
    dotenv_path: Optional[str] = None,
    overrides: Optional[Mapping[str, Any]] = None,
    logger: Optional[Logger] = None,
) -> DriverOptions:
    """JSON 파일, .env 파일, 환경 변수, 오버라이드 순으로 병합해 연결 옵션을 만든다."""

    loader = ConfigLoader(logger)
    if json_path:
        loader.add_json_file(json_path)
    if dotenv_path:
        loader.add_dotenv(dotenv_path, prefix=prefix, raw_keys=DriverOptions.STRING_FIELDS)
    loader.add_env(prefix=prefix, raw_keys=DriverOptions.STRING_FIELDS)
    return _validate_options(loader.build(overrides))


def _validate_options(options: Union[DriverOptions, Mapping[str, Any]]) -> DriverOptions:
    if isinstance(options, DriverOptions):
        return options
    try:
        return DriverOptions.model_validate(dict(options))
    except ValidationError as error:
        fields = sorted({str(item["loc"][0]) for item in error.errors() if item.get("loc")})
        code = (
            ErrorCode.DB_UNSUPPORTED_CONNECTION
            if fields == ["connection"]
            else ErrorCode.DB_OPTIONS_INVALID
        )
        detail = ExceptionDetail(
            code=code,
            cause=str(error),
            hint="connection은 mysql, pgsql, sqlite 중 하나여야 합니다.",
            metadata={"fields": fields},
        )
        raise ConfigurationError("드라이버 옵션이 올바르지 않습니다.", detail, error) from error
