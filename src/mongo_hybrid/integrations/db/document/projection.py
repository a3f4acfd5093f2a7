"""
목적: 필드 프로젝션 규칙을 제공한다.
설명: 제외 필드 제거, 포함 필드 교집합, _id 유지 규칙을 문서 사본에 적용한다.
디자인 패턴: 값 객체
참조: src/mongo_hybrid/integrations/db/document/cursor.py
"""

from __future__ import annotations

import copy
from typing import Any, Dict, List, Mapping, Optional

from mongo_hybrid.integrations.db.document.id_generator import ID_FIELD


class Projection:
    """포함/제외 필드 마스크.

    제외 규칙을 먼저 적용하고, 포함 필드가 있으면 교집합을 남긴다.
    _id는 명시적으로 제외하지 않는 한 항상 유지한다. 점 표기 키는 중첩 필드를 가리킨다.
    """

    def __init__(self, spec: Mapping[str, Any]) -> None:
        self._includes: List[str] = [field for field, flag in spec.items() if flag]
        self._excludes: List[str] = [field for field, flag in spec.items() if not flag]
        self._keep_id = ID_FIELD not in self._excludes

    @classmethod
    def from_spec(cls, spec: Optional[Mapping[str, Any]]) -> Optional["Projection"]:
        """사양이 비어 있으면 None을 반환한다."""

        if not spec:
            return None
        return cls(spec)

    def apply(self, document: Mapping[str, Any]) -> Dict[str, Any]:
        """프로젝션이 적용된 새 문서를 반환한다."""

        result: Dict[str, Any] = copy.deepcopy(dict(document))
        for field in self._excludes:
            _remove_path(result, field.split("."))
        if self._includes:
            projected: Dict[str, Any] = {}
            if ID_FIELD in result:
                projected[ID_FIELD] = result[ID_FIELD]
            for field in self._includes:
                if field != ID_FIELD:
                    _copy_path(result, projected, field.split("."))
            result = projected
        if not self._keep_id:
            result.pop(ID_FIELD, None)
        return result


def _remove_path(document: Dict[str, Any], parts: List[str]) -> None:
    current: Any = document
    for part in parts[:-1]:
        if not isinstance(current, dict) or part not in current:
            return
        current = current[part]
    if isinstance(current, dict):
        current.pop(parts[-1], None)


def _copy_path(source: Dict[str, Any], target: Dict[str, Any], parts: List[str]) -> None:
    current: Any = source
    for part in parts:
        if not isinstance(current, dict) or part not in current:
            return
        current = current[part]
    node = target
    for part in parts[:-1]:
        node = node.setdefault(part, {})
    node[parts[-1]] = current
