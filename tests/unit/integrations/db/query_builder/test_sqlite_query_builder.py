"""
목적: SQLite 방언 필터 컴파일 결과와 컴파일 오류 규칙을 검증한다.
설명: json_extract/json_each 기반 표현식과 연산자 오류 코드를 확인한다.
디자인 패턴: 테스트 케이스
참조: src/mongo_hybrid/integrations/db/engines/sqlite/dialect.py, src/mongo_hybrid/integrations/db/base/dialect.py
"""

from __future__ import annotations

import pytest

from mongo_hybrid.integrations.db.base import FilterCompileError, FilterOperator
from mongo_hybrid.integrations.db.engines.sqlite import SqliteDialect
from mongo_hybrid.integrations.db.query_builder import QueryBuilder


def _quote(text: str) -> str:
    return "'" + text.replace("'", "''") + "'"


@pytest.fixture
def builder() -> QueryBuilder:
    return QueryBuilder(SqliteDialect(_quote))


def test_native_numbers_and_booleans_are_not_quoted(builder: QueryBuilder) -> None:
    """json_extract 결과와 비교하도록 숫자/불리언은 인용하지 않는다."""

    assert builder.compile_where({"_o": 2}) == "WHERE json_extract(\"document\", '$._o') = 2"
    assert builder.compile_where({"flag": False}) == "WHERE json_extract(\"document\", '$.flag') = 0"
    assert builder.compile_where({"name": "O'Neil"}) == (
        "WHERE json_extract(\"document\", '$.name') = 'O''Neil'"
    )


def test_has_all_and_text(builder: QueryBuilder) -> None:
    """$has/$all은 json_each EXISTS로, $text는 ESCAPE 절을 포함한 LIKE로 변환한다."""

    has_a = "EXISTS (SELECT 1 FROM json_each(\"document\", '$.tags') WHERE json_each.value = 'a')"
    has_b = "EXISTS (SELECT 1 FROM json_each(\"document\", '$.tags') WHERE json_each.value = 'b')"

    assert builder.compile_where({"tags": {"$has": "a"}}) == f"WHERE {has_a}"
    assert builder.compile_where({"tags": {"$all": ["a", "b"]}}) == f"WHERE ({has_a} AND {has_b})"
    assert builder.compile_where({"t": {"$text": "a_b"}}) == (
        "WHERE json_extract(\"document\", '$.t') LIKE '%a\\_b%' ESCAPE '\\'"
    )


@pytest.mark.parametrize("key", ["$func", "$fn", "$f", "$fuzzy"])
def test_callback_operators_are_not_supported(builder: QueryBuilder, key: str) -> None:
    """콜백 연산자는 연산자 이름을 포함한 미지원 오류를 던진다."""

    with pytest.raises(FilterCompileError) as captured:
        builder.compile_where({"a": {key: "anything"}})

    assert captured.value.code == "FILTER_OPERATOR_NOT_SUPPORTED"
    assert key in captured.value.message


def test_unknown_operator_is_invalid_condition(builder: QueryBuilder) -> None:
    """알 수 없는 연산자는 invalid condition 오류를 던진다."""

    with pytest.raises(FilterCompileError) as captured:
        builder.compile_where({"a": {"$near": [0, 0]}})

    assert captured.value.code == "FILTER_INVALID_CONDITION"
    assert "$near" in captured.value.message


@pytest.mark.parametrize(
    "criteria",
    [
        {"a": {"$in": "x"}},
        {"a": {"$all": "x"}},
        {"a": {"$has": ["x"]}},
        {"a": {"$mod": 3}},
        {"a": {"$mod": [0, 1]}},
        {"a": {"$size": "2"}},
        {"a": {"$eq": {"nested": 1}}},
        {"a": {"$gt": [1]}},
        {"$or": {"a": 1}},
        {"a..b": 1},
    ],
)
def test_malformed_arguments_raise_compile_error(builder: QueryBuilder, criteria: dict) -> None:
    """인자 형태가 잘못되면 SQL 실행 전에 컴파일 오류를 던진다."""

    with pytest.raises(FilterCompileError):
        builder.compile_where(criteria)


def test_operator_parse_normalizes_aliases() -> None:
    """별칭 연산자는 대표 멤버로 정규화된다."""

    assert FilterOperator.parse("$match") is FilterOperator.REGEX
    assert FilterOperator.parse("$preg") is FilterOperator.REGEX
    assert FilterOperator.parse("$fn") is FilterOperator.FUNC
    assert FilterOperator.parse("$f") is FilterOperator.FUNC
    assert FilterOperator.FUNC.is_supported is False
    assert FilterOperator.EQ.is_supported is True
