"""
목적: 문서 저장소 예외 계층을 정의한다.
설명: 설정 오류, 필터 컴파일 오류, SQL 실행 오류, 커서 상태 오류를 구분한다.
디자인 패턴: 도메인 예외 객체
참조: src/mongo_hybrid/shared/exceptions/base.py
"""

from __future__ import annotations

from typing import Any, Optional

from mongo_hybrid.shared.exceptions import BaseAppException, ErrorCode, ExceptionDetail


class DocumentStoreError(BaseAppException):
    """문서 저장소 공통 예외."""


class ConfigurationError(DocumentStoreError):
    """드라이버 구성 단계에서 발생하는 치명적 오류."""


class FilterCompileError(DocumentStoreError):
    """필터/정렬 표현식을 SQL로 변환할 수 없을 때 발생하는 오류."""


class CursorStateError(DocumentStoreError):
    """이미 소비된 커서를 다시 순회할 때 발생하는 오류."""


class StatementError(DocumentStoreError):
    """SQL 실행 실패를 감싼 오류.

    상세 메타데이터에 실행한 SQL 문장과 드라이버 오류 코드를 보관한다.
    """

    @property
    def sql(self) -> Optional[str]:
        """실패한 SQL 문장을 반환한다."""

        return self.metadata.get("sql")

    @property
    def error_code(self) -> Any:
        """하위 드라이버의 원본 오류 코드를 반환한다."""

        return self.metadata.get("error_code")


def invalid_argument(operator: str, cause: str) -> FilterCompileError:
    """연산자 인자 형태 오류를 생성한다."""

    detail = ExceptionDetail(
        code=ErrorCode.FILTER_INVALID_ARGUMENT,
        cause=cause,
        metadata={"operator": operator},
    )
    return FilterCompileError(f"{operator} 연산자의 인자가 올바르지 않습니다.", detail)
