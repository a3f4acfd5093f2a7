"""
목적: 문서 저장소 모듈 공개 API를 제공한다.
설명: 드라이버, 컬렉션, 커서, 결과 이터레이터, 식별자 생성기를 노출한다.
디자인 패턴: 퍼사드
참조: src/mongo_hybrid/integrations/db/document/driver.py
"""

from mongo_hybrid.integrations.db.document.collection import Collection, table_name_for
from mongo_hybrid.integrations.db.document.cursor import Cursor
from mongo_hybrid.integrations.db.document.driver import Driver
from mongo_hybrid.integrations.db.document.id_generator import (
    ID_FIELD,
    generate_object_id,
    with_object_id,
)
from mongo_hybrid.integrations.db.document.projection import Projection
from mongo_hybrid.integrations.db.document.result_iterator import (
    RelationshipPopulator,
    ResultIterator,
    ResultSet,
)

__all__ = [
    "Collection",
    "Cursor",
    "Driver",
    "ID_FIELD",
    "Projection",
    "RelationshipPopulator",
    "ResultIterator",
    "ResultSet",
    "generate_object_id",
    "table_name_for",
    "with_object_id",
]
