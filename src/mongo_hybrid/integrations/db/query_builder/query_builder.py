"""
목적: 필터 표현식 컴파일러를 제공한다.
설명: MongoDB 스타일 필터 트리를 방언별 SQL WHERE/ORDER BY/LIMIT 절과 테이블 DDL로 변환한다.
디자인 패턴: 빌더 패턴, 인터프리터 패턴
참조: src/mongo_hybrid/integrations/db/base/dialect.py, src/mongo_hybrid/integrations/db/base/models.py
"""

from __future__ import annotations

import re
from typing import Any, List, Mapping, Optional

from mongo_hybrid.integrations.db.base.dialect import BaseDialect
from mongo_hybrid.integrations.db.base.errors import FilterCompileError, invalid_argument
from mongo_hybrid.integrations.db.base.models import FilterOperator
from mongo_hybrid.shared.exceptions import ErrorCode, ExceptionDetail

_LOGICAL_GLUE = {"$and": " AND ", "$or": " OR "}
_NOT_KEY = "$not"
_ASCENDING = {1, "1", "asc", "ascending"}
_DESCENDING = {-1, "-1", "desc", "descending"}


class QueryBuilder:
    """필터 컴파일러.

    Args:
        dialect: SQL 방언 전략 객체.
    """

    def __init__(self, dialect: BaseDialect) -> None:
        self._dialect = dialect

    @property
    def dialect(self) -> BaseDialect:
        """방언 전략 객체를 반환한다."""

        return self._dialect

    def compile_where(self, criteria: Optional[Mapping[str, Any]]) -> Optional[str]:
        """필터 트리를 WHERE 절로 변환한다. 조건이 없으면 None을 반환한다."""

        expression = self.compile_expression(criteria)
        if expression is None:
            return None
        return f"WHERE {expression}"

    def compile_expression(self, criteria: Optional[Mapping[str, Any]]) -> Optional[str]:
        """필터 트리를 WHERE 키워드 없는 불리언 표현식으로 변환한다."""

        if not criteria:
            return None
        return self._compile_segments(criteria)

    def compile_order_by(self, sort: Optional[Mapping[str, Any]]) -> Optional[str]:
        """정렬 사양을 ORDER BY 절로 변환한다."""

        if not sort:
            return None
        segments: List[str] = []
        for field, direction in sort.items():
            selector = self._dialect.path_selector(field, as_text=False)
            segments.append(f"{selector} {self._direction(field, direction)}")
        return "ORDER BY " + ", ".join(segments)

    def compile_limit(self, limit: Optional[int], offset: Optional[int] = None) -> Optional[str]:
        """LIMIT/OFFSET 절을 생성한다.

        limit 없이 주어진 offset은 무시한다. 커서가 이 경우의 skip을 직접 적용한다.
        """

        if not limit:
            return None
        if not offset:
            return f"LIMIT {int(limit)}"
        return f"LIMIT {int(limit)} OFFSET {int(offset)}"

    def compile_create_table(self, table: str) -> str:
        """컬렉션 테이블 생성 DDL을 반환한다."""

        return self._dialect.build_create_table(table)

    def _compile_segments(self, criteria: Mapping[str, Any]) -> Optional[str]:
        if not isinstance(criteria, Mapping):
            raise invalid_argument("filter", "필터는 매핑이어야 합니다.")
        segments: List[str] = []
        for key, value in criteria.items():
            if key in _LOGICAL_GLUE:
                segment = self._compile_logical(key, value)
            else:
                segment = self._compile_field(key, value)
            if segment:
                segments.append(segment)
        if not segments:
            return None
        return " AND ".join(segments)

    def _compile_logical(self, key: str, clauses: Any) -> Optional[str]:
        if not isinstance(clauses, (list, tuple)):
            raise invalid_argument(key, f"{key}는 하위 필터 배열이 필요합니다.")
        parts: List[str] = []
        for clause in clauses:
            compiled = self._compile_segments(clause)
            if compiled:
                parts.append(f"({compiled})")
        if not parts:
            return None
        return "(" + _LOGICAL_GLUE[key].join(parts) + ")"

    def _compile_field(self, field: str, value: Any) -> Optional[str]:
        if isinstance(value, Mapping) and list(value.keys()) == [_NOT_KEY]:
            negated = value[_NOT_KEY]
            if not isinstance(negated, Mapping):
                negated = {FilterOperator.REGEX.value: negated}
            inner = self._compile_conditions(field, negated)
            return f"NOT ({inner})" if inner else None
        if isinstance(value, Mapping):
            return self._compile_conditions(field, value)
        if isinstance(value, re.Pattern):
            return self._compile_conditions(field, {FilterOperator.REGEX.value: value})
        return self._compile_conditions(field, {FilterOperator.EQ.value: value})

    def _compile_conditions(self, field: str, conditions: Mapping[str, Any]) -> Optional[str]:
        parts: List[str] = []
        for key, argument in conditions.items():
            operator = FilterOperator.parse(key)
            if not operator.is_supported:
                detail = ExceptionDetail(
                    code=ErrorCode.FILTER_OPERATOR_NOT_SUPPORTED,
                    cause=f"{key} 연산자는 호스트 콜백 실행이 필요합니다.",
                    hint="조건 함수 필터를 사용하세요.",
                    metadata={"operator": key, "field": field},
                )
                raise FilterCompileError(f"operator {key} is not supported", detail)
            segment = self._dialect.compile_operator(operator, field, argument)
            if segment:
                parts.append(segment)
        if not parts:
            return None
        return " AND ".join(parts)

    def _direction(self, field: str, direction: Any) -> str:
        normalized = direction.strip().lower() if isinstance(direction, str) else direction
        if isinstance(normalized, bool):
            normalized = None
        if normalized in _ASCENDING:
            return "ASC"
        if normalized in _DESCENDING:
            return "DESC"
        raise invalid_argument("sort", f"알 수 없는 정렬 방향: {field}={direction!r}")
