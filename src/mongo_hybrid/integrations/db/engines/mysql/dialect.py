"""
목적: MySQL/MariaDB 방언을 제공한다.
설명: JSON 컬럼 경로 선택자(->>, ->), JSON_CONTAINS 기반 포함 검사, 생성 컬럼 기반 _id 고유 제약 DDL을 구현한다.
디자인 패턴: 전략 패턴
참조: src/mongo_hybrid/integrations/db/base/dialect.py
"""

from __future__ import annotations

from typing import Any, List

from mongo_hybrid.integrations.db.base.dialect import BaseDialect
from mongo_hybrid.integrations.db.base.sql_common import (
    build_json_path,
    json_encode,
    quote_identifier_with,
)


class MysqlDialect(BaseDialect):
    """MySQL 계열 방언 구현체."""

    ID_VIRTUAL_COLUMN = "_id_virtual"

    @property
    def name(self) -> str:
        return "mysql"

    def quote_identifier(self, name: str) -> str:
        return quote_identifier_with(name, "`")

    def path_selector(self, field: str, as_text: bool = True) -> str:
        arrow = "->>" if as_text else "->"
        return f"{self.document_column} {arrow} {self._quote(build_json_path(field))}"

    def numeric_selector(self, field: str) -> str:
        return f"CAST({self.path_selector(field)} AS DECIMAL(65, 30))"

    def build_create_table_statements(self, table: str) -> List[str]:
        id_path = self._quote(build_json_path("_id"))
        columns = ", ".join(
            [
                f"{self.quote_identifier(self.ID_COLUMN)} INT NOT NULL AUTO_INCREMENT PRIMARY KEY",
                f"{self.document_column} JSON NOT NULL",
                f"{self.quote_identifier(self.ID_VIRTUAL_COLUMN)} VARCHAR(255) "
                f"GENERATED ALWAYS AS (JSON_UNQUOTE(JSON_EXTRACT({self.document_column}, {id_path}))) "
                "VIRTUAL UNIQUE",
            ]
        )
        return [
            f"CREATE TABLE IF NOT EXISTS {self.quote_identifier(table)} ({columns}) "
            "ENGINE=InnoDB DEFAULT CHARSET=utf8mb4 COLLATE=utf8mb4_unicode_ci"
        ]

    def build_table_exists(self, table: str) -> str:
        return (
            "SELECT COUNT(*) FROM information_schema.tables "
            f"WHERE table_schema = DATABASE() AND table_name = {self.quote_value(table)}"
        )

    def _compile_has(self, field: str, value: Any) -> str:
        target = self.path_selector(field, as_text=False)
        return f"JSON_CONTAINS({target}, {self._json_literal(value)})"

    def _compile_all(self, field: str, values: List[Any]) -> str:
        target = self.path_selector(field, as_text=False)
        items = ", ".join(self._json_literal(value) for value in values)
        return f"JSON_CONTAINS({target}, JSON_ARRAY({items}))"

    def _compile_regex(self, selector: str, pattern: str) -> str:
        return f"LOWER({selector}) REGEXP LOWER({self.quote_value(pattern)})"

    def _compile_size(self, field: str, size: int) -> str:
        target = self.path_selector(field, as_text=False)
        return f"(JSON_TYPE({target}) = 'ARRAY' AND JSON_LENGTH({target}) = {size})"

    def _compile_mod(self, field: str, divisor: Any, remainder: Any) -> str:
        return f"MOD({self.numeric_selector(field)}, {divisor!r}) = {remainder!r}"

    def _json_literal(self, value: Any) -> str:
        if isinstance(value, str):
            return f"JSON_QUOTE({self.quote_value(value)})"
        return f"CAST({self._quote(json_encode(value))} AS JSON)"
