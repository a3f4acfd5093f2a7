"""
목적: 로깅 모델을 정의한다.
설명: 로그 레벨, 방언/컬렉션 컨텍스트, SQL 메타데이터를 담는 레코드를 Pydantic으로 제공한다.
디자인 패턴: 데이터 전송 객체(DTO)
참조: src/mongo_hybrid/shared/logging/logger.py
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from mongo_hybrid.shared.const import SharedConst


class LogLevel(str, Enum):
    """로그 레벨. 선언 순서가 심각도 순서다."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    @property
    def weight(self) -> int:
        return (list(LogLevel).index(self) + 1) * 10

    @classmethod
    def parse(cls, raw: Optional[str], default: "LogLevel") -> "LogLevel":
        """문자열을 로그 레벨로 변환한다. WARN은 WARNING으로 읽고, 해석할 수 없으면 기본값을 반환한다."""

        if not raw:
            return default
        name = raw.strip().upper()
        if name == "WARN":
            name = "WARNING"
        return cls.__members__.get(name, default)


class LogContext(BaseModel):
    """로그 컨텍스트.

    Args:
        dialect: SQL 방언 이름(mysql/pgsql/sqlite).
        collection: 컬렉션 식별자(db/name).
        tags: 자유형 태그.
    """

    dialect: Optional[str] = None
    collection: Optional[str] = None
    tags: Dict[str, str] = Field(default_factory=dict)

    def merged(self, other: Optional["LogContext"]) -> "LogContext":
        """other의 값이 우선하는 새 컨텍스트를 반환한다. 태그는 키 단위로 합친다."""

        if other is None:
            return self
        updates: Dict[str, Any] = other.model_dump(exclude_none=True, exclude={"tags"})
        updates["tags"] = {**self.tags, **other.tags}
        return self.model_copy(update=updates)


class LogRecord(BaseModel):
    """로그 레코드.

    Args:
        level: 로그 레벨.
        message: 로그 메시지.
        timestamp: 기록 시각(UTC).
        logger_name: 로거 이름.
        context: 로그 컨텍스트.
        metadata: 추가 메타데이터. SQL 실행 로그는 sql 키에 문장을 담는다.
    """

    level: LogLevel
    message: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    logger_name: str
    context: Optional[LogContext] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)

    @property
    def sql(self) -> Optional[str]:
        """기록된 SQL 문장을 반환한다."""

        return self.metadata.get(SharedConst.SQL_METADATA_KEY)

    def to_json_line(self) -> str:
        payload: Dict[str, Any] = {
            "timestamp": self.timestamp.isoformat(),
            "level": self.level.value,
            "logger": self.logger_name,
            "message": self.message,
        }
        if self.context is not None:
            payload["context"] = self.context.model_dump(exclude_none=True)
        if self.metadata:
            payload["metadata"] = self.metadata
        return json.dumps(payload, ensure_ascii=False, default=str)
