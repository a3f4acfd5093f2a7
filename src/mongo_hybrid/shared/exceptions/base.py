"""
목적: 공통 예외 베이스 클래스를 제공한다.
설명: 메시지와 Pydantic 상세 모델, 원본 예외를 함께 보관하고 에러 코드를 문자열 표현에 포함한다.
디자인 패턴: 도메인 예외 객체
참조: src/mongo_hybrid/shared/exceptions/models.py, src/mongo_hybrid/integrations/db/base/errors.py
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from mongo_hybrid.shared.exceptions.models import ExceptionDetail


class BaseAppException(Exception):
    """애플리케이션 공통 예외 클래스이다.

    str(error)는 "[코드] 메시지" 형식이며 원인이 있으면 덧붙인다.

    Args:
        message: 사용자 또는 시스템에 전달할 메시지.
        detail: 예외 상세 정보 모델.
        original: 원본 예외 객체.
    """

    def __init__(
        self,
        message: str,
        detail: ExceptionDetail,
        original: Optional[Exception] = None,
    ) -> None:
        super().__init__(message)
        self._message = message
        self._detail = detail
        self._original = original

    def __str__(self) -> str:
        text = f"[{self._detail.code}] {self._message}"
        if self._detail.cause:
            text = f"{text} ({self._detail.cause})"
        return text

    @property
    def message(self) -> str:
        """주입된 메시지를 반환한다."""

        return self._message

    @property
    def detail(self) -> ExceptionDetail:
        """예외 상세 모델을 반환한다."""

        return self._detail

    @property
    def code(self) -> str:
        """에러 코드를 반환한다."""

        return self._detail.code

    @property
    def metadata(self) -> Dict[str, Any]:
        """상세 모델의 메타데이터를 반환한다."""

        return self._detail.metadata

    @property
    def original(self) -> Optional[Exception]:
        """원본 예외를 반환한다."""

        return self._original

    def to_dict(self) -> Dict[str, Any]:
        """예외 정보를 로그/응답용 사전으로 변환한다."""

        return {
            "type": self.__class__.__name__,
            "code": self._detail.code,
            "message": self._message,
            "detail": self._detail.model_dump(),
            "original": repr(self._original) if self._original else None,
        }
