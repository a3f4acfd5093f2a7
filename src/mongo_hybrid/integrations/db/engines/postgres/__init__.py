"""
목적: PostgreSQL 엔진 모듈 공개 API를 제공한다.
설명: PostgreSQL 방언과 연결 관리자를 노출한다.
디자인 패턴: 퍼사드
참조: src/mongo_hybrid/integrations/db/engines/postgres/dialect.py, src/mongo_hybrid/integrations/db/engines/postgres/connection.py
"""

from mongo_hybrid.integrations.db.engines.postgres.connection import PostgresConnectionManager
from mongo_hybrid.integrations.db.engines.postgres.dialect import PostgresDialect

__all__ = ["PostgresConnectionManager", "PostgresDialect"]
