"""
목적: DB 통합 모듈 공개 API를 제공한다.
설명: 드라이버 팩토리, 문서 저장소 타입, 공통 모델과 예외를 노출한다.
디자인 패턴: 퍼사드
참조: src/mongo_hybrid/integrations/db/client.py, src/mongo_hybrid/integrations/db/document
"""

from mongo_hybrid.integrations.db.base import (
    ConfigurationError,
    CursorStateError,
    DocumentStoreError,
    DriverOptions,
    FilterCompileError,
    FindOptions,
    StatementError,
)
from mongo_hybrid.integrations.db.client import create_driver, load_driver_options
from mongo_hybrid.integrations.db.document import (
    Collection,
    Cursor,
    Driver,
    ResultIterator,
    ResultSet,
    generate_object_id,
)
from mongo_hybrid.integrations.db.query_builder import QueryBuilder

__all__ = [
    "Collection",
    "ConfigurationError",
    "Cursor",
    "CursorStateError",
    "DocumentStoreError",
    "Driver",
    "DriverOptions",
    "FilterCompileError",
    "FindOptions",
    "QueryBuilder",
    "ResultIterator",
    "ResultSet",
    "StatementError",
    "create_driver",
    "generate_object_id",
    "load_driver_options",
]
