"""
목적: DB 엔진 구현체 공개 API를 제공한다.
설명: 방언별 SQL 전략과 연결 관리자를 노출한다.
디자인 패턴: 퍼사드
참조: src/mongo_hybrid/integrations/db/engines/mysql, src/mongo_hybrid/integrations/db/engines/postgres, src/mongo_hybrid/integrations/db/engines/sqlite
"""

from mongo_hybrid.integrations.db.engines.mysql import MysqlConnectionManager, MysqlDialect
from mongo_hybrid.integrations.db.engines.postgres import (
    PostgresConnectionManager,
    PostgresDialect,
)
from mongo_hybrid.integrations.db.engines.sqlite import SqliteConnectionManager, SqliteDialect

__all__ = [
    "MysqlConnectionManager",
    "MysqlDialect",
    "PostgresConnectionManager",
    "PostgresDialect",
    "SqliteConnectionManager",
    "SqliteDialect",
]
