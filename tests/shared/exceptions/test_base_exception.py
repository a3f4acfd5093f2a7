"""
목적: 공통 예외 모델과 문서 저장소 예외 계층을 검증한다.
설명: 예외 메시지/상세 모델/원본 예외 저장과 실행 오류의 SQL/오류 코드 노출을 확인한다.
디자인 패턴: 도메인 예외 객체, DTO
참조: src/mongo_hybrid/shared/exceptions/base.py, src/mongo_hybrid/integrations/db/base/errors.py
"""

from __future__ import annotations

from mongo_hybrid.integrations.db.base import DocumentStoreError, StatementError
from mongo_hybrid.shared.exceptions import BaseAppException, ErrorCode, ExceptionDetail


def test_base_app_exception_to_dict() -> None:
    """BaseAppException의 직렬화 결과를 검증한다."""

    detail = ExceptionDetail(
        code="E-001",
        cause="입력 데이터 누락",
        hint="필수 파라미터를 확인하세요.",
        metadata={"field": "name"},
    )
    original = ValueError("name is required")
    error = BaseAppException(message="유효하지 않은 요청입니다.", detail=detail, original=original)

    result = error.to_dict()

    assert error.message == "유효하지 않은 요청입니다."
    assert error.code == "E-001"
    assert error.original is original
    assert result["detail"]["metadata"]["field"] == "name"
    assert "ValueError" in result["original"]


def test_statement_error_exposes_sql_and_driver_code() -> None:
    """실행 오류는 SQL 문장과 원본 오류 코드를 보존한다."""

    detail = ExceptionDetail(
        code=ErrorCode.DB_STATEMENT_FAILED,
        cause="UNIQUE constraint failed",
        metadata={"sql": "INSERT INTO t VALUES (1)", "error_code": 1062},
    )
    error = StatementError("SQL 실행에 실패했습니다.", detail)

    assert isinstance(error, DocumentStoreError)
    assert isinstance(error, BaseAppException)
    assert error.sql == "INSERT INTO t VALUES (1)"
    assert error.error_code == 1062
    assert error.code == "DB_STATEMENT_FAILED"
    assert error.to_dict()["detail"]["code"] == "DB_STATEMENT_FAILED"


def test_exception_string_includes_code_and_cause() -> None:
    """문자열 표현은 에러 코드와 원인을 포함한다."""

    detail = ExceptionDetail(code=ErrorCode.DB_DRIVER_MISSING, cause="psycopg2 없음")
    error = DocumentStoreError("드라이버가 없습니다.", detail)

    assert str(error) == "[DB_DRIVER_MISSING] 드라이버가 없습니다. (psycopg2 없음)"
    assert error.to_dict()["type"] == "DocumentStoreError"
    assert error.to_dict()["code"] == "DB_DRIVER_MISSING"
