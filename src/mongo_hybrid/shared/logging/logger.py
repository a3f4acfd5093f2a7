"""
목적: 로거 인터페이스와 인메모리 구현체를 제공한다.
설명: 드라이버/컬렉션/연결 관리자가 주입받아 쓰는 로거와, 실행 SQL을 조회할 수 있는 크기 제한 저장소를 포함한다.
디자인 패턴: 전략 패턴, 저장소 패턴
참조: src/mongo_hybrid/shared/logging/models.py, src/mongo_hybrid/shared/const/__init__.py
"""

from __future__ import annotations

import os
import threading
from abc import ABC, abstractmethod
from collections import deque
from typing import Any, Deque, List, Optional

from mongo_hybrid.shared.const import SharedConst
from mongo_hybrid.shared.logging.models import LogContext, LogLevel, LogRecord


class LogRepository(ABC):
    """로그 저장소 인터페이스."""

    @abstractmethod
    def add(self, record: LogRecord) -> None:
        """로그 레코드를 저장한다."""

    @abstractmethod
    def list(self) -> List[LogRecord]:
        """저장된 로그를 기록 순서대로 반환한다."""

    @abstractmethod
    def clear(self) -> None:
        """저장된 로그를 비운다."""

    def statements(self) -> List[str]:
        """저장된 로그 중 SQL 실행 기록만 문장 목록으로 반환한다."""

        return [record.sql for record in self.list() if record.sql]


class InMemoryLogRepository(LogRepository):
    """인메모리 로그 저장소.

    여러 스레드가 같은 드라이버를 공유할 수 있어 잠금으로 보호한다.

    Args:
        max_records: 보관할 최대 레코드 수. 초과하면 오래된 것부터 버린다. None이면 제한하지 않는다.
    """

    def __init__(self, max_records: Optional[int] = None) -> None:
        if max_records is not None and max_records <= 0:
            raise ValueError("max_records는 1 이상이어야 합니다.")
        self._records: Deque[LogRecord] = deque(maxlen=max_records)
        self._lock = threading.Lock()

    def add(self, record: LogRecord) -> None:
        with self._lock:
            self._records.append(record)

    def list(self) -> List[LogRecord]:
        with self._lock:
            return list(self._records)

    def clear(self) -> None:
        with self._lock:
            self._records.clear()


class Logger(ABC):
    """로거 인터페이스.

    레벨별 메서드는 log()에 context/metadata 키워드를 그대로 넘긴다.
    """

    @abstractmethod
    def log(
        self,
        level: LogLevel,
        message: str,
        context: Optional[LogContext] = None,
        metadata: Optional[dict] = None,
    ) -> None:
        """로그를 기록한다."""

    @abstractmethod
    def with_context(self, context: LogContext) -> "Logger":
        """컨텍스트가 합쳐진 자식 로거를 반환한다. 자식은 같은 저장소를 쓴다."""

    def debug(self, message: str, **extra: Any) -> None:
        self.log(LogLevel.DEBUG, message, **extra)

    def info(self, message: str, **extra: Any) -> None:
        self.log(LogLevel.INFO, message, **extra)

    def warning(self, message: str, **extra: Any) -> None:
        self.log(LogLevel.WARNING, message, **extra)

    def error(self, message: str, **extra: Any) -> None:
        self.log(LogLevel.ERROR, message, **extra)

    def critical(self, message: str, **extra: Any) -> None:
        self.log(LogLevel.CRITICAL, message, **extra)


class InMemoryLogger(Logger):
    """인메모리 로거 구현체.

    Args:
        name: 로거 이름.
        repository: 로그 저장소.
        base_context: 모든 레코드에 병합할 기본 컨텍스트.
        emit_stdout: 표준 출력 JSON 기록 여부. None이면 MONGO_HYBRID_LOG_STDOUT을 따른다.
        min_level: 기록할 최소 레벨. None이면 MONGO_HYBRID_LOG_LEVEL을 따르고, 없으면 DEBUG다.
    """

    def __init__(
        self,
        name: str,
        repository: Optional[LogRepository] = None,
        base_context: Optional[LogContext] = None,
        emit_stdout: Optional[bool] = None,
        min_level: Optional[LogLevel] = None,
    ) -> None:
        self._name = name
        self._repository = repository or InMemoryLogRepository()
        self._base_context = base_context
        if emit_stdout is None:
            raw = os.getenv(SharedConst.LOG_STDOUT_ENV, "")
            emit_stdout = raw.strip().lower() in SharedConst.TRUTHY_VALUES
        self._emit_stdout = emit_stdout
        self._min_level = min_level or LogLevel.parse(
            os.getenv(SharedConst.LOG_LEVEL_ENV), LogLevel.DEBUG
        )

    @property
    def name(self) -> str:
        """로거 이름을 반환한다."""

        return self._name

    @property
    def repository(self) -> LogRepository:
        """저장소를 반환한다."""

        return self._repository

    def log(
        self,
        level: LogLevel,
        message: str,
        context: Optional[LogContext] = None,
        metadata: Optional[dict] = None,
    ) -> None:
        if level.weight < self._min_level.weight:
            return
        record = LogRecord(
            level=level,
            message=message,
            logger_name=self._name,
            context=self._resolve_context(context),
            metadata=metadata or {},
        )
        self._repository.add(record)
        if self._emit_stdout:
            print(record.to_json_line(), flush=True)

    def with_context(self, context: LogContext) -> "Logger":
        return InMemoryLogger(
            name=self._name,
            repository=self._repository,
            base_context=self._resolve_context(context),
            emit_stdout=self._emit_stdout,
            min_level=self._min_level,
        )

    def _resolve_context(self, context: Optional[LogContext]) -> Optional[LogContext]:
        if self._base_context is None:
            return context
        return self._base_context.merged(context)


def create_default_logger(name: str) -> InMemoryLogger:
    """기본 인메모리 로거를 생성한다.

    연결 관리자는 SQL 문장마다 DEBUG 로그를 남기므로 저장소 크기를 제한한다.
    """

    repository = InMemoryLogRepository(max_records=SharedConst.LOG_MAX_RECORDS)
    return InMemoryLogger(name=name, repository=repository)
