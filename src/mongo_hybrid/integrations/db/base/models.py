"""
목적: 문서 저장소 공통 모델을 정의한다.
설명: 연결 옵션, 조회 옵션, 필터 연산자 열거형을 제공한다.
디자인 패턴: 데이터 전송 객체(DTO), 값 객체
참조: src/mongo_hybrid/integrations/db/query_builder/query_builder.py, src/mongo_hybrid/integrations/db/client.py
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable, ClassVar, Dict, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from mongo_hybrid.integrations.db.base.errors import FilterCompileError
from mongo_hybrid.shared.exceptions import ErrorCode, ExceptionDetail

Document = Dict[str, Any]
Predicate = Callable[[Document], bool]
Filter = Union[Mapping[str, Any], Predicate, None]


class ConnectionKind(str, Enum):
    """지원하는 연결 종류."""

    MYSQL = "mysql"
    PGSQL = "pgsql"
    SQLITE = "sqlite"


_CONNECTION_ALIASES = {
    "mariadb": ConnectionKind.MYSQL,
    "postgres": ConnectionKind.PGSQL,
    "postgresql": ConnectionKind.PGSQL,
    "sqlite3": ConnectionKind.SQLITE,
}


class DriverOptions(BaseModel):
    """드라이버 연결 옵션 모델이다.

    Args:
        connection: 연결 종류(mysql/pgsql/sqlite 및 별칭).
        host: 접속 호스트.
        port: 접속 포트. None이면 드라이버 기본값을 쓴다.
        dbname: 데이터베이스 이름. sqlite는 파일 경로로 해석한다.
        charset: 문자셋. None이면 방언 기본값을 쓴다.
        username: 접속 사용자.
        password: 접속 비밀번호.
        driver_options: 하위 connect() 호출에 그대로 전달할 튜닝 옵션.
    """

    model_config = ConfigDict(frozen=True)

    STRING_FIELDS: ClassVar[Tuple[str, ...]] = ("host", "dbname", "charset", "username", "password")

    connection: ConnectionKind
    host: str = "127.0.0.1"
    port: Optional[int] = None
    dbname: str
    charset: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None
    driver_options: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("connection", mode="before")
    @classmethod
    def _normalize_connection(cls, value: Any) -> Any:
        if isinstance(value, str):
            lowered = value.strip().lower()
            return _CONNECTION_ALIASES.get(lowered, lowered)
        return value

    @field_validator("dbname", "username", "password", mode="before")
    @classmethod
    def _stringify(cls, value: Any) -> Any:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value


class FindOptions(BaseModel):
    """조회 옵션 모델이다.

    Args:
        sort: 필드별 정렬 방향(1/-1) 순서 사전.
        limit: 최대 결과 수. 0 또는 None이면 제한하지 않는다.
        skip: 건너뛸 결과 수.
        projection: 필드별 포함(True)/제외(False) 사전.
    """

    sort: Optional[Dict[str, Any]] = None
    limit: Optional[int] = Field(default=None, ge=0)
    skip: Optional[int] = Field(default=None, ge=0)
    projection: Optional[Dict[str, bool]] = None

    @classmethod
    def coerce(cls, options: Union["FindOptions", Mapping[str, Any], None]) -> "FindOptions":
        """사전 또는 None을 조회 옵션 모델로 변환한다."""

        if options is None:
            return cls()
        if isinstance(options, cls):
            return options
        payload = dict(options)
        if "fields" in payload and "projection" not in payload:
            payload["projection"] = payload.pop("fields")
        payload.pop("fields", None)
        return cls.model_validate(payload)


class FilterOperator(str, Enum):
    """필터 연산자 열거형.

    별칭($match, $preg, $fn, $f)은 parse()에서 대표 멤버로 정규화된다.
    """

    EQ = "$eq"
    NE = "$ne"
    GT = "$gt"
    GTE = "$gte"
    LT = "$lt"
    LTE = "$lte"
    IN = "$in"
    NIN = "$nin"
    HAS = "$has"
    ALL = "$all"
    REGEX = "$regex"
    SIZE = "$size"
    MOD = "$mod"
    EXISTS = "$exists"
    TEXT = "$text"
    FUNC = "$func"
    FUZZY = "$fuzzy"
    OPTIONS = "$options"

    @property
    def is_supported(self) -> bool:
        """SQL로 변환 가능한 연산자인지 반환한다."""

        return self not in {FilterOperator.FUNC, FilterOperator.FUZZY}

    @classmethod
    def parse(cls, key: str) -> "FilterOperator":
        """필터 키를 연산자로 변환한다."""

        alias = _OPERATOR_ALIASES.get(key)
        if alias is not None:
            return alias
        try:
            return cls(key)
        except ValueError as error:
            detail = ExceptionDetail(
                code=ErrorCode.FILTER_INVALID_CONDITION,
                cause=f"알 수 없는 연산자: {key}",
                metadata={"operator": key},
            )
            raise FilterCompileError(f"invalid condition {key}", detail, error) from error


_OPERATOR_ALIASES = {
    "$match": FilterOperator.REGEX,
    "$preg": FilterOperator.REGEX,
    "$fn": FilterOperator.FUNC,
    "$f": FilterOperator.FUNC,
}
