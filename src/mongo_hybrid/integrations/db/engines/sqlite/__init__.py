"""
목적: SQLite 엔진 모듈 공개 API를 제공한다.
설명: SQLite 방언과 연결 관리자를 노출한다.
디자인 패턴: 퍼사드
참조: src/mongo_hybrid/integrations/db/engines/sqlite/dialect.py, src/mongo_hybrid/integrations/db/engines/sqlite/connection.py
"""

from mongo_hybrid.integrations.db.engines.sqlite.connection import SqliteConnectionManager
from mongo_hybrid.integrations.db.engines.sqlite.dialect import SqliteDialect

__all__ = ["SqliteConnectionManager", "SqliteDialect"]
