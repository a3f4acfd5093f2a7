"""
목적: 문서 컬렉션을 제공한다.
설명: 하나의 물리 테이블에 대한 삽입/갱신/교체/삭제/집계 SQL을 생성하고, 테이블 자동 생성과 삭제 통지를 관리한다.
디자인 패턴: 리포지토리 패턴
참조: src/mongo_hybrid/integrations/db/document/cursor.py, src/mongo_hybrid/integrations/db/query_builder/query_builder.py
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Union

from mongo_hybrid.integrations.db.base.connection import BaseConnectionManager
from mongo_hybrid.integrations.db.base.models import Document, Filter, FindOptions
from mongo_hybrid.integrations.db.base.sql_common import json_encode
from mongo_hybrid.integrations.db.document.cursor import Cursor
from mongo_hybrid.integrations.db.document.id_generator import ID_FIELD, with_object_id
from mongo_hybrid.integrations.db.query_builder import QueryBuilder
from mongo_hybrid.shared.logging import LogContext, Logger, create_default_logger

OptionsInput = Union[FindOptions, Mapping[str, Any], None]


def table_name_for(collection_id: str) -> str:
    """컬렉션 식별자(db/name)를 물리 테이블 이름으로 변환한다."""

    if not collection_id:
        raise ValueError("컬렉션 식별자가 비어 있습니다.")
    return collection_id.replace("/", "_")


class Collection:
    """하나의 테이블에 묶인 문서 컬렉션.

    Args:
        name: 컬렉션 식별자(db/name 또는 name).
        connection: 연결 관리자.
        query_builder: 필터 컴파일러.
        on_drop: 테이블 삭제 후 호출할 콜백. 컬렉션 식별자를 인자로 받는다.
        logger: 주입 가능한 로거.
    """

    def __init__(
        self,
        name: str,
        connection: BaseConnectionManager,
        query_builder: QueryBuilder,
        on_drop: Optional[Callable[[str], None]] = None,
        logger: Optional[Logger] = None,
    ) -> None:
        self._name = name
        self._table = table_name_for(name)
        self._connection = connection
        self._query_builder = query_builder
        self._on_drop = on_drop
        base_logger = logger or create_default_logger("Collection")
        self._logger = base_logger.with_context(LogContext(collection=name))
        self._table_ready = False
        self.ensure_table()

    @property
    def name(self) -> str:
        """컬렉션 식별자를 반환한다."""

        return self._name

    @property
    def table(self) -> str:
        """물리 테이블 이름을 반환한다."""

        return self._table

    @property
    def quoted_table(self) -> str:
        """인용된 테이블 이름을 반환한다."""

        return self._query_builder.dialect.quote_identifier(self._table)

    @property
    def connection(self) -> BaseConnectionManager:
        """연결 관리자를 반환한다."""

        return self._connection

    @property
    def query_builder(self) -> QueryBuilder:
        """필터 컴파일러를 반환한다."""

        return self._query_builder

    def ensure_table(self) -> None:
        """테이블이 없으면 생성한다."""

        if self._table_ready:
            return
        for statement in self._query_builder.dialect.build_create_table_statements(self._table):
            self._connection.execute_statement(statement)
        self._table_ready = True
        self._logger.info(f"컬렉션 테이블 준비 완료: {self._table}")

    def find(self, criteria: Filter = None, options: OptionsInput = None) -> Cursor:
        """조건에 맞는 문서 커서를 반환한다."""

        return Cursor(self, criteria, FindOptions.coerce(options))

    def find_one(self, criteria: Filter = None, options: OptionsInput = None) -> Optional[Document]:
        """조건에 맞는 첫 문서를 반환한다. 없으면 None을 반환한다."""

        limited = FindOptions.coerce(options).model_copy(update={"limit": 1})
        for document in self.find(criteria, limited):
            return document
        return None

    def insert_one(self, document: Mapping[str, Any]) -> Document:
        """문서를 저장하고 _id가 부여된 저장 문서를 반환한다."""

        stored = with_object_id(document)
        self._insert_rows([stored])
        return stored

    def insert_many(self, documents: Iterable[Mapping[str, Any]]) -> int:
        """문서 목록을 한 번의 다중 행 INSERT로 저장하고 저장 건수를 반환한다."""

        stored = [with_object_id(document) for document in documents]
        if not stored:
            return 0
        self._insert_rows(stored)
        return len(stored)

    def update_many(
        self,
        criteria: Filter,
        patch: Mapping[str, Any],
        options: OptionsInput = None,
    ) -> bool:
        """조건에 맞는 문서마다 patch를 얕게 병합해 다시 기록한다. 일치 문서가 있으면 True를 반환한다.

        쓰기 전에 대상 문서를 모두 실체화해 열린 결과 집합과 쓰기 문장이 겹치지 않게 한다.
        """

        lookup = FindOptions.coerce(options).model_copy(update={"projection": None})
        matches = self.find(criteria, lookup).to_array()
        for document in matches:
            merged = {**document, **dict(patch), ID_FIELD: document[ID_FIELD]}
            self._rewrite(document[ID_FIELD], merged)
        return bool(matches)

    def update_one(self, criteria: Filter, patch: Mapping[str, Any]) -> bool:
        """첫 번째 일치 문서만 병합 갱신한다."""

        return self.update_many(criteria, patch, FindOptions(limit=1))

    def replace_one(self, criteria: Filter, document: Mapping[str, Any]) -> bool:
        """첫 번째 일치 문서를 병합 없이 교체한다. 일치 문서가 없으면 False를 반환한다."""

        current = self.find_one(criteria)
        if current is None:
            return False
        replacement = {**dict(document), ID_FIELD: current[ID_FIELD]}
        self._rewrite(current[ID_FIELD], replacement)
        return True

    def delete_many(self, criteria: Filter = None) -> bool:
        """조건에 맞는 문서를 삭제한다."""

        self.ensure_table()
        if callable(criteria):
            ids = [document[ID_FIELD] for document in self.find(criteria).to_array()]
            if not ids:
                return True
            selector = self._query_builder.dialect.path_selector(ID_FIELD)
            values = self._query_builder.dialect.quote_values(ids)
            where = f"WHERE {selector} IN ({values})"
        else:
            where = self._query_builder.compile_where(criteria)
        sql = f"DELETE FROM {self.quoted_table}"
        if where:
            sql = f"{sql} {where}"
        self._connection.execute_statement(sql)
        return True

    def count_documents(self, criteria: Filter = None) -> int:
        """조건에 맞는 문서 수를 반환한다. 조건 함수는 프로세스 내에서 센다."""

        if callable(criteria):
            return sum(1 for _ in self.find(criteria))
        self.ensure_table()
        sql = f"SELECT COUNT(*) FROM {self.quoted_table}"
        where = self._query_builder.compile_where(criteria)
        if where:
            sql = f"{sql} {where}"
        rows = self._connection.fetch_all(sql)
        return int(rows[0][0]) if rows else 0

    def count(self, criteria: Filter = None) -> int:
        """count_documents의 별칭이다."""

        return self.count_documents(criteria)

    def drop(self) -> bool:
        """테이블을 삭제하고 소유 드라이버에 통지한다."""

        self._connection.execute_statement(
            self._query_builder.dialect.build_drop_table(self._table)
        )
        self._table_ready = False
        self._logger.info(f"컬렉션 테이블 삭제 완료: {self._table}")
        if self._on_drop is not None:
            self._on_drop(self._name)
        return True

    def _insert_rows(self, documents: List[Dict[str, Any]]) -> None:
        self.ensure_table()
        dialect = self._query_builder.dialect
        values = ", ".join(f"({dialect.quote_value(json_encode(doc))})" for doc in documents)
        sql = f"INSERT INTO {self.quoted_table} ({dialect.document_column}) VALUES {values}"
        self._connection.execute_statement(sql)

    def _rewrite(self, document_id: Any, document: Mapping[str, Any]) -> None:
        dialect = self._query_builder.dialect
        sql = (
            f"UPDATE {self.quoted_table} "
            f"SET {dialect.document_column} = {dialect.quote_value(json_encode(document))} "
            f"WHERE {dialect.path_selector(ID_FIELD)} = {dialect.quote_value(document_id)}"
        )
        self._connection.execute_statement(sql)
