"""
목적: 드라이버 설정 로더를 제공한다.
설명: dict/JSON 파일/.env 파일/환경 변수를 계층으로 쌓아 중첩 설정 사전으로 병합한다.
디자인 패턴: 빌더 패턴
참조: src/mongo_hybrid/shared/const/__init__.py, src/mongo_hybrid/integrations/db/client.py
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from dotenv import dotenv_values

from mongo_hybrid.shared.const import SharedConst
from mongo_hybrid.shared.logging import Logger, create_default_logger

_NULL_LITERALS = {"null", "none"}


class ConfigLoader:
    """설정 계층 로더.

    나중에 추가한 계층이 앞선 계층을 덮어쓰며, 중첩 사전은 키 단위로 병합한다.
    환경 변수 계열은 접두사를 떼고 구분자(__)로 나눈 경로에 값을 넣는다.
    MONGO_HYBRID__DRIVER_OPTIONS__CONNECT_TIMEOUT=3은 {"driver_options": {"connect_timeout": 3}}이 된다.

    Args:
        logger: 주입 가능한 로거.
    """

    def __init__(self, logger: Optional[Logger] = None) -> None:
        self._logger = logger or create_default_logger("ConfigLoader")
        self._layers: List[Tuple[str, Dict[str, Any]]] = []

    @property
    def sources(self) -> List[str]:
        """적용 순서대로 계층 이름을 반환한다."""

        return [label for label, _ in self._layers]

    def add_dict(self, data: Optional[Mapping[str, Any]], label: str = "dict") -> "ConfigLoader":
        """사전 계층을 추가한다."""

        if data:
            self._push(label, dict(data))
        return self

    def add_json_file(self, path: str, required: bool = False) -> "ConfigLoader":
        """JSON 파일 계층을 추가한다. 최상위는 객체여야 한다."""

        file_path = self._existing(path, required)
        if file_path is None:
            return self
        try:
            payload = json.loads(file_path.read_text(encoding=SharedConst.DEFAULT_ENCODING))
        except json.JSONDecodeError as error:
            raise ValueError(f"JSON 설정 파일 파싱에 실패했습니다: {path}") from error
        if not isinstance(payload, dict):
            raise ValueError(f"JSON 설정 파일은 최상위가 객체여야 합니다: {path}")
        self._push(f"json:{path}", payload)
        return self

    def add_dotenv(
        self,
        path: str,
        prefix: str = SharedConst.ENV_PREFIX,
        required: bool = False,
        raw_keys: Iterable[str] = (),
    ) -> "ConfigLoader":
        """.env 파일 계층을 추가한다. os.environ은 바꾸지 않는다.

        raw_keys에 속한 점 표기 경로(예: "password")는 형 변환 없이 문자열 그대로 둔다.
        """

        file_path = self._existing(path, required)
        if file_path is None:
            return self
        values = dotenv_values(file_path, encoding=SharedConst.DEFAULT_ENCODING)
        pairs = ((key, value) for key, value in values.items() if value is not None)
        self._push(f"dotenv:{path}", _nest_prefixed(pairs, prefix, raw_keys))
        return self

    def add_env(
        self,
        prefix: str = SharedConst.ENV_PREFIX,
        raw_keys: Iterable[str] = (),
    ) -> "ConfigLoader":
        """현재 프로세스 환경 변수 계층을 추가한다. raw_keys는 add_dotenv와 같다."""

        self._push("env", _nest_prefixed(os.environ.items(), prefix, raw_keys))
        return self

    def build(self, overrides: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        """계층을 순서대로 병합하고 overrides를 마지막에 적용한다."""

        merged: Dict[str, Any] = {}
        for _, layer in self._layers:
            merged = _deep_merge(merged, layer)
        if overrides:
            merged = _deep_merge(merged, dict(overrides))
        return merged

    def _push(self, label: str, layer: Dict[str, Any]) -> None:
        if not layer:
            return
        self._layers.append((label, layer))
        self._logger.debug(f"설정 계층 추가: {label}", metadata={"keys": sorted(layer)})

    def _existing(self, path: str, required: bool) -> Optional[Path]:
        if not path:
            raise ValueError("path는 비어 있을 수 없습니다.")
        file_path = Path(path)
        if file_path.exists():
            return file_path
        if required:
            raise FileNotFoundError(path)
        self._logger.warning(f"설정 파일이 없어 건너뜁니다: {path}")
        return None


def _nest_prefixed(
    pairs: Iterable[Tuple[str, str]],
    prefix: str,
    raw_keys: Iterable[str] = (),
) -> Dict[str, Any]:
    raw_paths = {key.lower() for key in raw_keys}
    nested: Dict[str, Any] = {}
    for key, raw in pairs:
        if not key.startswith(prefix):
            continue
        path = [part.lower() for part in key[len(prefix) :].split(SharedConst.ENV_NESTED_DELIMITER) if part]
        if not path:
            continue
        node = nested
        for part in path[:-1]:
            child = node.get(part)
            if not isinstance(child, dict):
                child = node[part] = {}
            node = child
        node[path[-1]] = raw if ".".join(path) in raw_paths else _coerce_scalar(raw)
    return nested


def _deep_merge(base: Dict[str, Any], incoming: Mapping[str, Any]) -> Dict[str, Any]:
    merged = dict(base)
    for key, value in incoming.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, Mapping):
            merged[key] = _deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def _coerce_scalar(raw: str) -> Any:
    """환경 변수 문자열을 bool/None/int/float/JSON 값으로 해석한다. 실패하면 문자열 그대로 둔다.

    숫자는 다시 직렬화했을 때 원문과 같을 때만 변환한다("1.50", "-0"은 문자열로 남는다).
    """

    text = raw.strip()
    lowered = text.lower()
    if lowered in {"true", "false"}:
        return lowered == "true"
    if lowered in _NULL_LITERALS:
        return None
    if text[:1] in {"{", "["}:
        try:
            return json.loads(text)
        except json.JSONDecodeError:
            return raw
    if text.lstrip("-").replace(".", "", 1).isdigit():
        try:
            number = json.loads(text)
        except json.JSONDecodeError:
            return raw
        return number if json.dumps(number) == text else raw
    return raw
