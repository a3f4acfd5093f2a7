"""
목적: mongo_hybrid 패키지 공개 API를 제공한다.
설명: 드라이버 생성 함수와 주요 도메인 타입을 최상위에서 노출한다.
디자인 패턴: 퍼사드
참조: src/mongo_hybrid/integrations/db/__init__.py
"""

from mongo_hybrid.integrations.db import (
    Collection,
    ConfigurationError,
    Cursor,
    CursorStateError,
    DocumentStoreError,
    Driver,
    DriverOptions,
    FilterCompileError,
    FindOptions,
    ResultIterator,
    ResultSet,
    StatementError,
    create_driver,
    generate_object_id,
    load_driver_options,
)
from mongo_hybrid.shared.exceptions import ErrorCode

__all__ = [
    "Collection",
    "ConfigurationError",
    "Cursor",
    "CursorStateError",
    "DocumentStoreError",
    "Driver",
    "DriverOptions",
    "ErrorCode",
    "FilterCompileError",
    "FindOptions",
    "ResultIterator",
    "ResultSet",
    "StatementError",
    "create_driver",
    "generate_object_id",
    "load_driver_options",
]
