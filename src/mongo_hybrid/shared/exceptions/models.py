"""
목적: 공통 예외 모델과 에러 코드 목록을 정의한다.
설명: 문서 저장소가 사용하는 에러 코드 열거형과 코드/원인/힌트/메타데이터를 담는 Pydantic 모델을 제공한다.
디자인 패턴: 데이터 전송 객체(DTO)
참조: src/mongo_hybrid/shared/exceptions/base.py, src/mongo_hybrid/integrations/db/base/errors.py
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, field_validator


class ErrorCode(str, Enum):
    """문서 저장소 에러 코드.

    DB_* 코드는 구성/실행 단계, FILTER_* 코드는 필터 컴파일 단계, CURSOR_* 코드는 커서 상태 오류에 쓴다.
    """

    DB_UNSUPPORTED_CONNECTION = "DB_UNSUPPORTED_CONNECTION"
    DB_OPTIONS_INVALID = "DB_OPTIONS_INVALID"
    DB_DRIVER_MISSING = "DB_DRIVER_MISSING"
    DB_SERVER_VERSION_UNSUPPORTED = "DB_SERVER_VERSION_UNSUPPORTED"
    DB_CONNECTION_FAILED = "DB_CONNECTION_FAILED"
    DB_STATEMENT_FAILED = "DB_STATEMENT_FAILED"
    FILTER_INVALID_CONDITION = "FILTER_INVALID_CONDITION"
    FILTER_INVALID_ARGUMENT = "FILTER_INVALID_ARGUMENT"
    FILTER_OPERATOR_NOT_SUPPORTED = "FILTER_OPERATOR_NOT_SUPPORTED"
    CURSOR_ALREADY_CONSUMED = "CURSOR_ALREADY_CONSUMED"


class ExceptionDetail(BaseModel):
    """예외 상세 정보를 담는 모델이다.

    Args:
        code: 에러 코드. ErrorCode 멤버는 문자열 값으로 저장한다.
        cause: 에러의 직접 원인 설명.
        hint: 해결을 위한 힌트.
        metadata: 추가 메타데이터. 실행 오류는 SQL 문장과 드라이버 오류 코드를 담는다.
    """

    code: str = Field(..., description="에러 코드")
    cause: Optional[str] = Field(default=None, description="에러 원인")
    hint: Optional[str] = Field(default=None, description="해결 힌트")
    metadata: Dict[str, Any] = Field(default_factory=dict, description="추가 메타데이터")

    @field_validator("code", mode="before")
    @classmethod
    def _normalize_code(cls, value: Any) -> Any:
        if isinstance(value, ErrorCode):
            return value.value
        return value
