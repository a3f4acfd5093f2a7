"""
목적: PostgreSQL 방언을 제공한다.
설명: jsonb 경로 선택자(#>>, #>), ?/?& 포함 연산자, 함수 기반 _id 고유 인덱스 DDL을 구현한다.
디자인 패턴: 전략 패턴
참조: src/mongo_hybrid/integrations/db/base/dialect.py
"""

from __future__ import annotations

from typing import Any, List

from mongo_hybrid.integrations.db.base.dialect import BaseDialect
from mongo_hybrid.integrations.db.base.sql_common import (
    json_encode,
    quote_identifier_with,
    split_field_path,
)


class PostgresDialect(BaseDialect):
    """PostgreSQL 방언 구현체."""

    @property
    def name(self) -> str:
        return "pgsql"

    def quote_identifier(self, name: str) -> str:
        return quote_identifier_with(name, '"')

    def path_selector(self, field: str, as_text: bool = True) -> str:
        arrow = "#>>" if as_text else "#>"
        return f"{self.document_column} {arrow} {self._quote(self._text_array(field))}"

    def numeric_selector(self, field: str) -> str:
        # JSON 숫자만 캐스팅한다. 문자열 값은 NULL이 되어 비교에서 빠진다.
        return (
            f"(CASE WHEN jsonb_typeof({self.path_selector(field, as_text=False)}) = 'number' "
            f"THEN ({self.path_selector(field)})::numeric END)"
        )

    def build_create_table_statements(self, table: str) -> List[str]:
        quoted = self.quote_identifier(table)
        index = self.quote_identifier(f"idx_{table}_id")
        return [
            f"CREATE TABLE IF NOT EXISTS {quoted} "
            f"({self.quote_identifier(self.ID_COLUMN)} SERIAL PRIMARY KEY, "
            f"{self.document_column} JSONB NOT NULL)",
            f"CREATE UNIQUE INDEX IF NOT EXISTS {index} ON {quoted} "
            f"((({self.document_column} ->> {self._quote('_id')})::text))",
        ]

    def build_table_exists(self, table: str) -> str:
        return (
            "SELECT COUNT(*) FROM information_schema.tables "
            f"WHERE table_schema = current_schema() AND table_name = {self.quote_value(table)}"
        )

    def _compile_has(self, field: str, value: Any) -> str:
        target = self.path_selector(field, as_text=False)
        if isinstance(value, str):
            return f"{target} ? {self.quote_value(value)}"
        return f"{target} @> {self._quote(json_encode([value]))}::jsonb"

    def _compile_all(self, field: str, values: List[Any]) -> str:
        target = self.path_selector(field, as_text=False)
        if all(isinstance(value, str) for value in values):
            return f"{target} ?& array[{self.quote_values(values)}]"
        return f"{target} @> {self._quote(json_encode(values))}::jsonb"

    def _compile_regex(self, selector: str, pattern: str) -> str:
        return f"{selector} ~* {self.quote_value(pattern)}"

    def _compile_size(self, field: str, size: int) -> str:
        target = self.path_selector(field, as_text=False)
        return (
            f"(CASE WHEN jsonb_typeof({target}) = 'array' "
            f"THEN jsonb_array_length({target}) END) = {size}"
        )

    def _compile_mod(self, field: str, divisor: Any, remainder: Any) -> str:
        return f"MOD({self.numeric_selector(field)}, {divisor!r}) = {remainder!r}"

    def _text_array(self, field: str) -> str:
        elements = []
        for segment in split_field_path(field):
            escaped = segment.replace("\\", "\\\\").replace('"', '\\"')
            elements.append(f'"{escaped}"')
        return "{" + ",".join(elements) + "}"
