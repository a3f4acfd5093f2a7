"""
목적: 관계 채움 결과 이터레이터와 결과 집합을 제공한다.
설명: hasOne/hasMany 관계를 보조 조회로 채우며, 같은 키의 반복 조회를 캐시로 줄인다.
디자인 패턴: 데코레이터 패턴, 이터레이터 패턴
참조: src/mongo_hybrid/integrations/db/document/driver.py, src/mongo_hybrid/integrations/db/document/cursor.py
"""

from __future__ import annotations

import copy
from typing import TYPE_CHECKING, Any, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

from mongo_hybrid.integrations.db.base.models import Document
from mongo_hybrid.integrations.db.document.id_generator import ID_FIELD

if TYPE_CHECKING:
    from mongo_hybrid.integrations.db.document.driver import Driver

_MISSING = object()


class RelationshipPopulator:
    """관계 채움 규칙과 조회 캐시를 보관한다.

    Args:
        driver: 관계 대상 컬렉션을 조회할 드라이버.
    """

    def __init__(self, driver: "Driver") -> None:
        self._driver = driver
        self._has_one: List[Tuple[str, str]] = []
        self._has_many: List[Tuple[str, str]] = []
        self._one_cache: Dict[str, Dict[Any, Optional[Document]]] = {}
        self._many_cache: Dict[Tuple[str, str, Any], List[Document]] = {}

    @property
    def active(self) -> bool:
        """등록된 관계가 있는지 반환한다."""

        return bool(self._has_one or self._has_many)

    def add_has_one(self, relations: Mapping[str, str]) -> None:
        """외래 키 필드 -> 대상 컬렉션 관계를 추가한다."""

        self._has_one.extend(relations.items())

    def add_has_many(self, relations: Mapping[str, str]) -> None:
        """대상 컬렉션 -> 역참조 필드 관계를 추가한다."""

        self._has_many.extend(relations.items())

    def populate(self, document: Document) -> Document:
        """관계가 채워진 새 문서를 반환한다. 캐시된 관계 문서는 문서마다 복사해 붙인다."""

        if not self.active:
            return document
        result = dict(document)
        for foreign_key, target in self._has_one:
            value = result.get(foreign_key)
            if not _is_reference(value):
                continue
            cache = self._one_cache.setdefault(target, {})
            if value not in cache:
                cache[value] = self._driver.find_one_by_id(target, value)
            result[foreign_key] = copy.deepcopy(cache[value])
        document_id = result.get(ID_FIELD)
        if document_id is None:
            return result
        for target, remote_key in self._has_many:
            cache_key = (target, remote_key, document_id)
            if cache_key not in self._many_cache:
                related = self._driver.find(target, {"filter": {remote_key: document_id}})
                self._many_cache[cache_key] = list(related)
            result[target] = copy.deepcopy(self._many_cache[cache_key])
        return result


def _is_reference(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, str):
        return value != ""
    return isinstance(value, int)


class ResultIterator:
    """커서를 감싸 문서마다 관계를 채우는 지연 이터레이터.

    관계가 등록되어 있으면 보조 조회 전에 커서를 먼저 모두 읽는다.
    비버퍼 결과 집합이 열린 연결에서 다른 문장을 실행할 수 없는 백엔드가 있기 때문이다.
    """

    def __init__(self, driver: "Driver", cursor: Iterable[Document]) -> None:
        self._cursor = cursor
        self._populator = RelationshipPopulator(driver)

    def has_one(self, relations: Mapping[str, str]) -> "ResultIterator":
        """hasOne 관계를 추가 등록한다."""

        self._populator.add_has_one(relations)
        return self

    def has_many(self, relations: Mapping[str, str]) -> "ResultIterator":
        """hasMany 관계를 추가 등록한다."""

        self._populator.add_has_many(relations)
        return self

    def __iter__(self) -> Iterator[Document]:
        source: Iterable[Document] = self._cursor
        if self._populator.active:
            source = list(source)
        for document in source:
            yield self._populator.populate(document)

    def to_array(self) -> List[Document]:
        """결과를 리스트로 실체화한다."""

        return list(self)


class ResultSet(list):
    """실체화된 find() 결과 목록. 관계 채움은 호출 즉시 적용된다."""

    def __init__(self, driver: "Driver", documents: Iterable[Document] = ()) -> None:
        super().__init__(documents)
        self._driver = driver

    def has_one(self, relations: Mapping[str, str]) -> "ResultSet":
        populator = RelationshipPopulator(self._driver)
        populator.add_has_one(relations)
        self[:] = [populator.populate(document) for document in self]
        return self

    def has_many(self, relations: Mapping[str, str]) -> "ResultSet":
        populator = RelationshipPopulator(self._driver)
        populator.add_has_many(relations)
        self[:] = [populator.populate(document) for document in self]
        return self

    def count(self, value: Any = _MISSING) -> int:
        """인자가 없으면 결과 건수를, 있으면 list.count와 같이 동작한다."""

        if value is _MISSING:
            return len(self)
        return super().count(value)

    def to_array(self) -> List[Document]:
        return list(self)
