"""
목적: PostgreSQL 방언 필터 컴파일 결과를 검증한다.
설명: jsonb 경로 선택자와 포함 연산자, 함수 인덱스 DDL 문자열을 확인한다.
디자인 패턴: 테스트 케이스
참조: src/mongo_hybrid/integrations/db/engines/postgres/dialect.py, src/mongo_hybrid/integrations/db/query_builder/query_builder.py
"""

from __future__ import annotations

import pytest

from mongo_hybrid.integrations.db.engines.postgres import PostgresDialect
from mongo_hybrid.integrations.db.query_builder import QueryBuilder


_NUMERIC_N = (
    "(CASE WHEN jsonb_typeof(\"document\" #> '{\"n\"}') = 'number' "
    "THEN (\"document\" #>> '{\"n\"}')::numeric END)"
)


def _quote(text: str) -> str:
    return "'" + text.replace("'", "''") + "'"


@pytest.fixture
def builder() -> QueryBuilder:
    return QueryBuilder(PostgresDialect(_quote))


def test_path_selector_uses_text_array(builder: QueryBuilder) -> None:
    """경로 선택자는 #>>/#> 와 텍스트 배열 리터럴을 사용한다."""

    dialect = builder.dialect

    assert dialect.path_selector("a.b") == "\"document\" #>> '{\"a\",\"b\"}'"
    assert dialect.path_selector("tags", as_text=False) == "\"document\" #> '{\"tags\"}'"
    assert dialect.path_selector('odd,"key') == "\"document\" #>> '{\"odd,\\\"key\"}'"


def test_equality_and_numeric_range(builder: QueryBuilder) -> None:
    """동등 비교와 JSON 숫자만 numeric으로 캐스팅하는 범위 비교를 확인한다."""

    assert builder.compile_where({"content": "x"}) == "WHERE \"document\" #>> '{\"content\"}' = 'x'"
    assert builder.compile_where({"n": {"$gt": 10}}) == f"WHERE {_NUMERIC_N} > '10'"
    assert builder.compile_where({"n": {"$gt": "10"}}) == "WHERE \"document\" #>> '{\"n\"}' > '10'"


def test_containment_operators(builder: QueryBuilder) -> None:
    """$has/$all은 문자열이면 ?/?&, 아니면 @> jsonb 포함으로 변환한다."""

    tags = "\"document\" #> '{\"tags\"}'"

    assert builder.compile_where({"tags": {"$has": "x"}}) == f"WHERE {tags} ? 'x'"
    assert builder.compile_where({"tags": {"$has": 5}}) == f"WHERE {tags} @> '[5]'::jsonb"
    assert builder.compile_where({"tags": {"$all": ["a", "b"]}}) == f"WHERE {tags} ?& array['a', 'b']"
    assert builder.compile_where({"tags": {"$all": [1, 2]}}) == f"WHERE {tags} @> '[1,2]'::jsonb"
    assert builder.compile_where({"tags": {"$all": []}}) == "WHERE 1 = 0"


def test_regex_size_and_mod(builder: QueryBuilder) -> None:
    """정규식은 ~*, 배열 길이는 jsonb_typeof 보호, 나머지는 MOD로 변환한다."""

    assert builder.compile_where({"content": {"$regex": "Lorem.*"}}) == (
        "WHERE \"document\" #>> '{\"content\"}' ~* 'Lorem.*'"
    )
    assert builder.compile_where({"tags": {"$size": 1}}) == (
        "WHERE (CASE WHEN jsonb_typeof(\"document\" #> '{\"tags\"}') = 'array' "
        "THEN jsonb_array_length(\"document\" #> '{\"tags\"}') END) = 1"
    )
    assert builder.compile_where({"n": {"$mod": [4, 1]}}) == (
        f"WHERE MOD({_NUMERIC_N}, 4) = 1"
    )


def test_create_table_statements(builder: QueryBuilder) -> None:
    """테이블 DDL과 _id 함수 고유 인덱스를 생성한다."""

    statements = builder.dialect.build_create_table_statements("posts")

    assert statements == [
        "CREATE TABLE IF NOT EXISTS \"posts\" (\"id\" SERIAL PRIMARY KEY, \"document\" JSONB NOT NULL)",
        "CREATE UNIQUE INDEX IF NOT EXISTS \"idx_posts_id\" ON \"posts\" "
        "(((\"document\" ->> '_id')::text))",
    ]
    assert builder.compile_create_table("posts") == ";\n".join(statements)
