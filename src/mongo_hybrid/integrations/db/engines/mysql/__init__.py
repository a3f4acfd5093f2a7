"""
목적: MySQL 엔진 모듈 공개 API를 제공한다.
설명: MySQL 방언과 연결 관리자를 노출한다.
디자인 패턴: 퍼사드
참조: src/mongo_hybrid/integrations/db/engines/mysql/dialect.py, src/mongo_hybrid/integrations/db/engines/mysql/connection.py
"""

from mongo_hybrid.integrations.db.engines.mysql.connection import MysqlConnectionManager
from mongo_hybrid.integrations.db.engines.mysql.dialect import MysqlDialect

__all__ = ["MysqlConnectionManager", "MysqlDialect"]
