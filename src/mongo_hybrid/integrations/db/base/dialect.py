"""
목적: SQL 방언 전략 인터페이스를 제공한다.
설명: 식별자/값 인용, JSON 경로 선택자, 연산자 컴파일, DDL 생성을 방언별로 구현하도록 정의한다.
디자인 패턴: 전략 패턴, 템플릿 메서드
참조: src/mongo_hybrid/integrations/db/base/models.py, src/mongo_hybrid/integrations/db/query_builder/query_builder.py
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from typing import Any, Callable, List, Optional, Sequence

from mongo_hybrid.integrations.db.base.errors import FilterCompileError, invalid_argument
from mongo_hybrid.integrations.db.base.models import FilterOperator
from mongo_hybrid.integrations.db.base.sql_common import (
    is_number,
    is_scalar,
    is_utf8_encodable,
    strip_regex_delimiters,
    wrap_like_value,
)
from mongo_hybrid.shared.exceptions import ErrorCode, ExceptionDetail

QuoteFunction = Callable[[str], str]

_COMPARISON_SQL = {
    FilterOperator.GT: ">",
    FilterOperator.GTE: ">=",
    FilterOperator.LT: "<",
    FilterOperator.LTE: "<=",
}


class BaseDialect(ABC):
    """SQL 방언 전략 인터페이스.

    Args:
        quote: 연결이 제공하는 문자열 리터럴 인용 함수.
    """

    ID_COLUMN = "id"
    DOCUMENT_COLUMN = "document"

    def __init__(self, quote: QuoteFunction) -> None:
        self._quote = quote

    @property
    @abstractmethod
    def name(self) -> str:
        """방언 이름을 반환한다."""

    @abstractmethod
    def quote_identifier(self, name: str) -> str:
        """식별자를 방언 규칙으로 인용한다."""

    @abstractmethod
    def path_selector(self, field: str, as_text: bool = True) -> str:
        """문서 컬럼에서 필드 값을 추출하는 SQL 표현식을 반환한다."""

    @abstractmethod
    def build_create_table_statements(self, table: str) -> List[str]:
        """컬렉션 테이블과 _id 고유 인덱스를 만드는 DDL 목록을 반환한다."""

    @abstractmethod
    def build_table_exists(self, table: str) -> str:
        """테이블 존재 여부를 COUNT로 반환하는 SQL을 생성한다."""

    def build_create_table(self, table: str) -> str:
        """DDL 목록을 하나의 문자열로 합쳐 반환한다."""

        return ";\n".join(self.build_create_table_statements(table))

    def build_drop_table(self, table: str) -> str:
        """테이블 삭제 SQL을 생성한다."""

        return f"DROP TABLE IF EXISTS {self.quote_identifier(table)}"

    @property
    def document_column(self) -> str:
        """인용된 문서 컬럼 이름을 반환한다."""

        return self.quote_identifier(self.DOCUMENT_COLUMN)

    def quote_value(self, value: Any) -> str:
        """스칼라 값을 SQL 리터럴로 인용한다."""

        if value is None:
            return "NULL"
        if isinstance(value, bool):
            return self._quote("true" if value else "false")
        if is_number(value):
            return self._quote(repr(value))
        if isinstance(value, str):
            if not is_utf8_encodable(value):
                raise invalid_argument("value", "UTF-8로 인코딩할 수 없는 문자열입니다.")
            return self._quote(value)
        raise invalid_argument(
            "value", f"스칼라 값만 인용할 수 있습니다: {type(value).__name__}"
        )

    def quote_values(self, values: Sequence[Any]) -> str:
        """값 목록을 쉼표로 연결된 리터럴로 인용한다."""

        return ", ".join(self.quote_value(value) for value in values)

    def numeric_selector(self, field: str) -> str:
        """필드 값을 숫자 비교가 가능한 표현식으로 반환한다."""

        return self.path_selector(field)

    def compile_operator(
        self,
        operator: FilterOperator,
        field: str,
        value: Any,
    ) -> Optional[str]:
        """단일 연산자를 SQL 불리언 표현식으로 변환한다.

        $options는 $regex 보조 키이므로 None을 반환한다.
        """

        selector = self.path_selector(field)
        if operator is FilterOperator.EQ:
            if value is None:
                return f"{selector} IS NULL"
            return f"{selector} = {self.quote_value(value)}"
        if operator is FilterOperator.NE:
            if value is None:
                return f"{selector} IS NOT NULL"
            return f"{selector} <> {self.quote_value(value)}"
        if operator in _COMPARISON_SQL:
            if not is_scalar(value) or value is None:
                raise invalid_argument(operator.value, "비교 연산자는 스칼라 값이 필요합니다.")
            target = self.numeric_selector(field) if is_number(value) else selector
            return f"{target} {_COMPARISON_SQL[operator]} {self.quote_value(value)}"
        if operator in {FilterOperator.IN, FilterOperator.NIN}:
            return self._compile_membership(operator, selector, value)
        if operator is FilterOperator.HAS:
            if value is None or not is_scalar(value):
                raise invalid_argument(operator.value, "$has는 단일 스칼라 값이 필요합니다.")
            return self._compile_has(field, value)
        if operator is FilterOperator.ALL:
            if not isinstance(value, (list, tuple)):
                raise invalid_argument(operator.value, "$all은 배열 값이 필요합니다.")
            if not value:
                return "1 = 0"
            if not all(is_scalar(item) and item is not None for item in value):
                raise invalid_argument(operator.value, "$all 배열은 스칼라 값만 허용합니다.")
            return self._compile_all(field, list(value))
        if operator is FilterOperator.REGEX:
            return self._compile_regex(selector, self._regex_source(value))
        if operator is FilterOperator.SIZE:
            if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                raise invalid_argument(operator.value, "$size는 0 이상의 정수가 필요합니다.")
            return self._compile_size(field, value)
        if operator is FilterOperator.MOD:
            divisor, remainder = self._mod_arguments(value)
            return self._compile_mod(field, divisor, remainder)
        if operator is FilterOperator.EXISTS:
            return f"{selector} IS NOT NULL" if value else f"{selector} IS NULL"
        if operator is FilterOperator.TEXT:
            if not isinstance(value, str):
                raise invalid_argument(operator.value, "$text는 문자열 값이 필요합니다.")
            return f"{selector} LIKE {self.quote_value(wrap_like_value(value))}{self._like_escape()}"
        if operator is FilterOperator.OPTIONS:
            return None
        detail = ExceptionDetail(
            code=ErrorCode.FILTER_OPERATOR_NOT_SUPPORTED,
            cause=f"SQL 엔진에서 지원하지 않는 연산자: {operator.value}",
            metadata={"operator": operator.value, "dialect": self.name},
        )
        raise FilterCompileError(f"operator {operator.value} is not supported", detail)

    def _compile_membership(self, operator: FilterOperator, selector: str, value: Any) -> str:
        if not isinstance(value, (list, tuple)):
            raise invalid_argument(operator.value, f"{operator.value}은 배열 값이 필요합니다.")
        if not value:
            return "1 = 0" if operator is FilterOperator.IN else "1 = 1"
        keyword = "IN" if operator is FilterOperator.IN else "NOT IN"
        return f"{selector} {keyword} ({self.quote_values(value)})"

    def _regex_source(self, value: Any) -> str:
        if isinstance(value, re.Pattern):
            value = value.pattern
        if not isinstance(value, str) or not value:
            raise invalid_argument("$regex", "정규식은 비어 있지 않은 문자열이어야 합니다.")
        return strip_regex_delimiters(value)

    def _mod_arguments(self, value: Any) -> tuple:
        if not isinstance(value, (list, tuple)) or not 1 <= len(value) <= 2:
            raise invalid_argument("$mod", "$mod는 [제수, 나머지] 배열이 필요합니다.")
        divisor = value[0]
        remainder = value[1] if len(value) == 2 else 0
        if not is_number(divisor) or not is_number(remainder) or divisor == 0:
            raise invalid_argument("$mod", "$mod 인자는 0이 아닌 제수와 숫자 나머지여야 합니다.")
        return divisor, remainder

    def _like_escape(self) -> str:
        return ""

    @abstractmethod
    def _compile_has(self, field: str, value: Any) -> str:
        """JSON 배열 필드에 단일 값이 포함되는지 검사하는 표현식을 반환한다."""

    @abstractmethod
    def _compile_all(self, field: str, values: List[Any]) -> str:
        """JSON 배열 필드가 모든 값을 포함하는지 검사하는 표현식을 반환한다."""

    @abstractmethod
    def _compile_regex(self, selector: str, pattern: str) -> str:
        """대소문자 구분 없는 정규식 일치 표현식을 반환한다."""

    @abstractmethod
    def _compile_size(self, field: str, size: int) -> str:
        """JSON 배열 길이 비교 표현식을 반환한다."""

    @abstractmethod
    def _compile_mod(self, field: str, divisor: Any, remainder: Any) -> str:
        """나머지 연산 비교 표현식을 반환한다."""
