"""
목적: 단일 패스 문서 커서를 제공한다.
설명: 첫 순회 시 SELECT를 실행해 행을 스트리밍하고, 조건 함수 필터/skip/limit/프로젝션을 프로세스 내에서 적용한다.
디자인 패턴: 이터레이터 패턴
참조: src/mongo_hybrid/integrations/db/document/collection.py, src/mongo_hybrid/integrations/db/document/projection.py
"""

from __future__ import annotations

from itertools import islice
from typing import TYPE_CHECKING, Any, Iterator, List, Optional

from mongo_hybrid.integrations.db.base.errors import CursorStateError
from mongo_hybrid.integrations.db.base.models import Document, Filter, FindOptions
from mongo_hybrid.integrations.db.base.sql_common import json_decode
from mongo_hybrid.integrations.db.document.projection import Projection
from mongo_hybrid.shared.exceptions import ErrorCode, ExceptionDetail

if TYPE_CHECKING:
    from mongo_hybrid.integrations.db.document.collection import Collection


class Cursor:
    """find() 한 번에 대응하는 지연 문서 시퀀스.

    상태: 생성(I/O 없음) -> 실체화(첫 순회에서 SQL 실행) -> 소진. 한 번만 순회할 수 있다.

    Args:
        collection: 조회 대상 컬렉션.
        criteria: 필터 트리 또는 조건 함수.
        options: 조회 옵션.
    """

    def __init__(
        self,
        collection: "Collection",
        criteria: Filter = None,
        options: Optional[FindOptions] = None,
    ) -> None:
        self._collection = collection
        self._criteria = criteria
        self._options = options or FindOptions()
        self._projection = Projection.from_spec(self._options.projection)
        self._consumed = False

    @property
    def options(self) -> FindOptions:
        """조회 옵션을 반환한다."""

        return self._options

    @property
    def consumed(self) -> bool:
        """순회가 시작되었는지 반환한다."""

        return self._consumed

    def __iter__(self) -> Iterator[Document]:
        if self._consumed:
            detail = ExceptionDetail(
                code=ErrorCode.CURSOR_ALREADY_CONSUMED,
                cause="커서는 한 번만 순회할 수 있습니다.",
                hint="to_array()로 결과를 실체화해 재사용하세요.",
                metadata={"collection": self._collection.name},
            )
            raise CursorStateError("이미 소비된 커서입니다.", detail)
        self._consumed = True
        return self._documents()

    def to_array(self) -> List[Document]:
        """남은 결과를 순서대로 리스트로 실체화한다."""

        return list(self)

    def _documents(self) -> Iterator[Document]:
        documents = self._filtered()
        if self._projection is None:
            return documents
        return (self._projection.apply(document) for document in documents)

    def _filtered(self) -> Iterator[Document]:
        options = self._options
        if callable(self._criteria):
            predicate = self._criteria
            rows = self._stream(self._build_select(None, pushdown_limit=False))
            matched = (document for document in rows if predicate(document))
            return self._slice(matched, options.skip, options.limit)
        rows = self._stream(self._build_select(self._criteria, pushdown_limit=True))
        if options.skip and not options.limit:
            return self._slice(rows, options.skip, None)
        return rows

    def _build_select(self, criteria: Any, pushdown_limit: bool) -> str:
        builder = self._collection.query_builder
        clauses = [
            f"SELECT {builder.dialect.document_column} FROM {self._collection.quoted_table}",
            builder.compile_where(criteria),
            builder.compile_order_by(self._options.sort),
        ]
        if pushdown_limit:
            clauses.append(builder.compile_limit(self._options.limit, self._options.skip))
        return " ".join(clause for clause in clauses if clause)

    def _stream(self, sql: str) -> Iterator[Document]:
        self._collection.ensure_table()
        for row in self._collection.connection.iterate_rows(sql):
            yield json_decode(row[0])

    @staticmethod
    def _slice(
        documents: Iterator[Document],
        skip: Optional[int],
        limit: Optional[int],
    ) -> Iterator[Document]:
        start = skip or 0
        stop = start + limit if limit else None
        return islice(documents, start, stop)
