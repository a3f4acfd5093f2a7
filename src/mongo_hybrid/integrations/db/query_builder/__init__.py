"""
목적: 쿼리 빌더 모듈 공개 API를 제공한다.
설명: 필터 트리를 SQL 절로 변환하는 컴파일러를 노출한다.
디자인 패턴: 퍼사드
참조: src/mongo_hybrid/integrations/db/query_builder/query_builder.py
"""

from mongo_hybrid.integrations.db.query_builder.query_builder import QueryBuilder

__all__ = ["QueryBuilder"]
