"""
목적: 문서 저장소 드라이버 퍼사드를 제공한다.
설명: 하나의 연결과 컬렉션 레지스트리를 소유하고 find/insert/save/update/remove/count 등 문서 동사를 컬렉션에 위임한다.
디자인 패턴: 퍼사드, 아이덴티티 맵
참조: src/mongo_hybrid/integrations/db/document/collection.py, src/mongo_hybrid/integrations/db/client.py
"""

from __future__ import annotations

import threading
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from mongo_hybrid.integrations.db.base.connection import BaseConnectionManager
from mongo_hybrid.integrations.db.base.dialect import BaseDialect
from mongo_hybrid.integrations.db.base.errors import ConfigurationError
from mongo_hybrid.integrations.db.base.models import Document, Filter, FindOptions
from mongo_hybrid.integrations.db.document.collection import Collection, table_name_for
from mongo_hybrid.integrations.db.document.id_generator import ID_FIELD, with_object_id
from mongo_hybrid.integrations.db.document.result_iterator import ResultIterator, ResultSet
from mongo_hybrid.integrations.db.query_builder import QueryBuilder
from mongo_hybrid.shared.logging import LogContext, Logger, create_default_logger


class Driver:
    """문서 저장소 드라이버.

    생성 시 연결을 열고 서버 버전을 검증한다. 컬렉션 레지스트리는 잠금으로 보호된다.

    Args:
        connection: 연결 관리자.
        dialect: SQL 방언 전략 객체.
        logger: 주입 가능한 로거.
    """

    def __init__(
        self,
        connection: BaseConnectionManager,
        dialect: BaseDialect,
        logger: Optional[Logger] = None,
    ) -> None:
        base_logger = logger or create_default_logger("Driver")
        self._logger = base_logger.with_context(LogContext(dialect=dialect.name))
        self._connection = connection
        self._query_builder = QueryBuilder(dialect)
        self._collections: Dict[str, Collection] = {}
        self._lock = threading.RLock()
        connection.connect()
        try:
            connection.assert_supported()
        except ConfigurationError:
            connection.close()
            raise
        self._logger.info("문서 저장소 드라이버가 초기화되었습니다.")

    @property
    def connection(self) -> BaseConnectionManager:
        """연결 관리자를 반환한다."""

        return self._connection

    @property
    def query_builder(self) -> QueryBuilder:
        """필터 컴파일러를 반환한다."""

        return self._query_builder

    def get_collection(self, name: str, db: Optional[str] = None) -> Collection:
        """컬렉션을 반환한다. 같은 식별자는 드라이버 수명 동안 같은 인스턴스를 돌려준다."""

        collection_id = f"{db}/{name}" if db else name
        with self._lock:
            collection = self._collections.get(collection_id)
            if collection is None:
                collection = Collection(
                    collection_id,
                    self._connection,
                    self._query_builder,
                    on_drop=self._forget_collection,
                    logger=self._logger,
                )
                self._collections[collection_id] = collection
            return collection

    def has_collection(self, collection_id: str) -> bool:
        """테이블을 만들지 않고 컬렉션 존재 여부를 확인한다."""

        sql = self._query_builder.dialect.build_table_exists(table_name_for(collection_id))
        rows = self._connection.fetch_all(sql)
        return bool(rows and int(rows[0][0]) > 0)

    def drop_collection(self, collection_id: str) -> bool:
        """컬렉션 테이블을 삭제하고 레지스트리에서 제거한다."""

        return self.get_collection(collection_id).drop()

    def find(
        self,
        collection_id: str,
        criteria: Optional[Mapping[str, Any]] = None,
        return_iterator: bool = False,
    ) -> Union[ResultSet, ResultIterator]:
        """조회 기준(filter/sort/limit/skip/fields)으로 문서를 찾는다."""

        payload = dict(criteria or {})
        document_filter = payload.pop("filter", None)
        cursor = self.get_collection(collection_id).find(
            document_filter, FindOptions.coerce(payload)
        )
        if return_iterator:
            return ResultIterator(self, cursor)
        return ResultSet(self, cursor.to_array())

    def find_one(self, collection_id: str, criteria: Filter = None) -> Optional[Document]:
        """첫 번째 일치 문서를 반환한다."""

        return self.get_collection(collection_id).find_one(criteria)

    def find_one_by_id(self, collection_id: str, document_id: Any) -> Optional[Document]:
        """_id로 문서를 찾는다."""

        return self.find_one(collection_id, {ID_FIELD: document_id})

    def save(
        self,
        collection_id: str,
        document: Mapping[str, Any],
        is_create: bool = False,
    ) -> Document:
        """문서를 저장하고 저장된 문서를 반환한다.

        _id가 없으면 삽입하고, is_create이면 전체 교체, 아니면 병합 갱신한다.
        대상 _id가 아직 없으면 삽입한다.
        """

        collection = self.get_collection(collection_id)
        if document.get(ID_FIELD) in (None, ""):
            return collection.insert_one(document)
        criteria = {ID_FIELD: document[ID_FIELD]}
        if is_create:
            if not collection.replace_one(criteria, document):
                return collection.insert_one(document)
            return dict(document)
        if not collection.update_one(criteria, document):
            return collection.insert_one(document)
        return collection.find_one(criteria) or dict(document)

    def insert(
        self,
        collection_id: str,
        document: Union[Mapping[str, Any], Sequence[Mapping[str, Any]]],
    ) -> Union[Document, List[Document]]:
        """단일 문서 또는 문서 목록을 삽입하고 저장된 문서(들)를 반환한다."""

        collection = self.get_collection(collection_id)
        if isinstance(document, Mapping):
            return collection.insert_one(document)
        if isinstance(document, (list, tuple)):
            stored = [with_object_id(item) for item in document]
            collection.insert_many(stored)
            return stored
        raise TypeError(f"삽입할 수 없는 문서 타입입니다: {type(document).__name__}")

    def update(self, collection_id: str, criteria: Filter, data: Mapping[str, Any]) -> bool:
        """일치 문서 전체에 data를 병합한다."""

        return self.get_collection(collection_id).update_many(criteria, data)

    def remove(self, collection_id: str, criteria: Filter = None) -> bool:
        """일치 문서를 삭제한다."""

        return self.get_collection(collection_id).delete_many(criteria)

    def count(self, collection_id: str, criteria: Filter = None) -> int:
        """일치 문서 수를 반환한다."""

        return self.get_collection(collection_id).count_documents(criteria)

    def remove_field(self, collection_id: str, field: str, criteria: Filter = None) -> int:
        """일치 문서에서 필드를 제거해 다시 저장하고 변경 건수를 반환한다."""

        changed = 0
        for document in self.find(collection_id, {"filter": criteria}):
            if field not in document:
                continue
            updated = {key: value for key, value in document.items() if key != field}
            self.save(collection_id, updated, True)
            changed += 1
        return changed

    def rename_field(
        self,
        collection_id: str,
        field: str,
        new_field: str,
        criteria: Filter = None,
    ) -> int:
        """일치 문서의 필드 이름을 바꿔 다시 저장하고 변경 건수를 반환한다."""

        changed = 0
        for document in self.find(collection_id, {"filter": criteria}):
            if field not in document:
                continue
            updated = dict(document)
            updated[new_field] = updated.pop(field)
            self.save(collection_id, updated, True)
            changed += 1
        return changed

    def close(self) -> None:
        """연결을 종료하고 컬렉션 레지스트리를 비운다."""

        with self._lock:
            self._collections.clear()
        self._connection.close()

    def __enter__(self) -> "Driver":
        return self

    def __exit__(self, exc_type, exc, traceback) -> None:
        self.close()

    def _forget_collection(self, collection_id: str) -> None:
        with self._lock:
            self._collections.pop(collection_id, None)
        self._logger.info(f"컬렉션 캐시 제거: {collection_id}")
