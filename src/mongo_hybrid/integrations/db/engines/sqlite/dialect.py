"""
목적: SQLite 방언을 제공한다.
설명: JSON1 확장의 json_extract/json_each 기반 경로 선택자와 포함 검사, 표현식 인덱스 DDL을 구현한다.
디자인 패턴: 전략 패턴
참조: src/mongo_hybrid/integrations/db/base/dialect.py, src/mongo_hybrid/integrations/db/engines/sqlite/connection.py
"""

from __future__ import annotations

from typing import Any, List

from mongo_hybrid.integrations.db.base.dialect import BaseDialect
from mongo_hybrid.integrations.db.base.sql_common import (
    build_json_path,
    is_number,
    quote_identifier_with,
)


class SqliteDialect(BaseDialect):
    """SQLite 방언 구현체.

    json_extract는 SQL 네이티브 타입을 반환하므로 숫자와 불리언은 인용하지 않는다.
    """

    @property
    def name(self) -> str:
        return "sqlite"

    def quote_identifier(self, name: str) -> str:
        return quote_identifier_with(name, '"')

    def quote_value(self, value: Any) -> str:
        if isinstance(value, bool):
            return "1" if value else "0"
        if is_number(value):
            return repr(value)
        return super().quote_value(value)

    def path_selector(self, field: str, as_text: bool = True) -> str:
        return f"json_extract({self.document_column}, {self._json_path(field)})"

    def build_create_table_statements(self, table: str) -> List[str]:
        quoted = self.quote_identifier(table)
        index = self.quote_identifier(f"idx_{table}_id")
        return [
            f"CREATE TABLE IF NOT EXISTS {quoted} "
            f"({self.quote_identifier(self.ID_COLUMN)} INTEGER PRIMARY KEY AUTOINCREMENT, "
            f"{self.document_column} TEXT NOT NULL)",
            f"CREATE UNIQUE INDEX IF NOT EXISTS {index} ON {quoted} "
            f"({self.path_selector('_id')})",
        ]

    def build_table_exists(self, table: str) -> str:
        return (
            "SELECT COUNT(*) FROM sqlite_master "
            f"WHERE type = 'table' AND name = {self.quote_value(table)}"
        )

    def _compile_has(self, field: str, value: Any) -> str:
        return (
            f"EXISTS (SELECT 1 FROM json_each({self.document_column}, {self._json_path(field)}) "
            f"WHERE json_each.value = {self.quote_value(value)})"
        )

    def _compile_all(self, field: str, values: List[Any]) -> str:
        return "(" + " AND ".join(self._compile_has(field, value) for value in values) + ")"

    def _compile_regex(self, selector: str, pattern: str) -> str:
        return f"{selector} REGEXP {self.quote_value(pattern)}"

    def _compile_size(self, field: str, size: int) -> str:
        path = self._json_path(field)
        return (
            f"(json_type({self.document_column}, {path}) = 'array' "
            f"AND json_array_length({self.document_column}, {path}) = {size})"
        )

    def _compile_mod(self, field: str, divisor: Any, remainder: Any) -> str:
        return f"({self.path_selector(field)} % {divisor!r}) = {remainder!r}"

    def _like_escape(self) -> str:
        return " ESCAPE '\\'"

    def _json_path(self, field: str) -> str:
        return self._quote(build_json_path(field))
