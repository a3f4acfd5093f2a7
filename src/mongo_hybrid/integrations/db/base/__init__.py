"""
목적: DB 공통 기반 모듈 공개 API를 제공한다.
설명: 방언/연결 인터페이스, 공통 모델, 예외 계층을 노출한다.
디자인 패턴: 퍼사드
참조: src/mongo_hybrid/integrations/db/base/dialect.py, src/mongo_hybrid/integrations/db/base/connection.py
"""

from mongo_hybrid.integrations.db.base.connection import BaseConnectionManager
from mongo_hybrid.integrations.db.base.dialect import BaseDialect, QuoteFunction
from mongo_hybrid.integrations.db.base.errors import (
    ConfigurationError,
    CursorStateError,
    DocumentStoreError,
    FilterCompileError,
    StatementError,
)
from mongo_hybrid.integrations.db.base.models import (
    ConnectionKind,
    Document,
    DriverOptions,
    Filter,
    FilterOperator,
    FindOptions,
    Predicate,
)

__all__ = [
    "BaseConnectionManager",
    "BaseDialect",
    "QuoteFunction",
    "ConfigurationError",
    "CursorStateError",
    "DocumentStoreError",
    "FilterCompileError",
    "StatementError",
    "ConnectionKind",
    "Document",
    "DriverOptions",
    "Filter",
    "FilterOperator",
    "FindOptions",
    "Predicate",
]
