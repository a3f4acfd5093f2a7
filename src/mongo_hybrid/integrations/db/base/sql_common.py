"""
목적: SQL 방언 구현체가 공통으로 사용하는 유틸리티를 제공한다.
설명: 식별자 인용, 필드 경로 분해, JSON 직렬화, LIKE 패턴 이스케이프, 서버 버전 파싱을 통합한다.
디자인 패턴: 유틸리티 모듈
참조: src/mongo_hybrid/integrations/db/base/dialect.py, src/mongo_hybrid/integrations/db/engines
"""

from __future__ import annotations

import json
import re
from typing import Any, List, Sequence, Tuple

from mongo_hybrid.integrations.db.base.errors import invalid_argument

_PLAIN_KEY_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
_VERSION_RE = re.compile(r"(\d+)(?:\.(\d+))?(?:\.(\d+))?")
_MARIADB_COMPAT_PREFIX = "5.5.5-"


def quote_identifier_with(name: str, quote_char: str) -> str:
    """식별자를 감싸고 내부 인용 문자를 두 번 써서 이스케이프한다."""

    if not name:
        raise ValueError("식별자 이름이 비어 있습니다.")
    escaped = name.replace(quote_char, quote_char * 2)
    return f"{quote_char}{escaped}{quote_char}"


def split_field_path(field: str) -> List[str]:
    """점으로 구분된 필드 경로를 세그먼트 목록으로 분해한다."""

    if not isinstance(field, str) or not field:
        raise invalid_argument("field", "필드 이름은 비어 있지 않은 문자열이어야 합니다.")
    segments = field.split(".")
    if any(not segment for segment in segments):
        raise invalid_argument("field", f"비어 있는 경로 세그먼트가 있습니다: {field}")
    return segments


def build_json_path(field: str) -> str:
    """MySQL/SQLite JSON 경로 문자열($.a.b[0])을 생성한다."""

    path = "$"
    for segment in split_field_path(field):
        if segment.isdigit():
            path += f"[{segment}]"
        elif _PLAIN_KEY_RE.match(segment):
            path += f".{segment}"
        else:
            escaped = segment.replace("\\", "\\\\").replace('"', '\\"')
            path += f'."{escaped}"'
    return path


def json_encode(value: Any) -> str:
    """문서를 JSON 문자열로 직렬화한다. 유니코드와 슬래시는 이스케이프하지 않는다.

    UTF-8로 인코딩할 수 없는 짝 없는 서로게이트가 있으면 \\uXXXX 이스케이프로 직렬화한다.
    """

    text = json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    if is_utf8_encodable(text):
        return text
    return json.dumps(value, ensure_ascii=True, separators=(",", ":"))


def is_utf8_encodable(text: str) -> bool:
    """문자열을 UTF-8로 인코딩할 수 있는지 반환한다."""

    try:
        text.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def json_decode(raw: Any) -> Any:
    """드라이버가 반환한 JSON 컬럼 값을 파이썬 객체로 변환한다."""

    if raw is None:
        return None
    if isinstance(raw, (bytes, bytearray)):
        raw = raw.decode("utf-8")
    if isinstance(raw, str):
        return json.loads(raw)
    return raw


def wrap_like_value(value: str) -> str:
    """LIKE 특수 문자를 이스케이프하고 부분 일치 패턴으로 감싼다."""

    escaped = value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def is_scalar(value: Any) -> bool:
    """SQL 리터럴로 인용 가능한 스칼라 값인지 확인한다."""

    return value is None or isinstance(value, (str, int, float, bool))


def is_number(value: Any) -> bool:
    """bool을 제외한 숫자 값인지 확인한다."""

    return isinstance(value, (int, float)) and not isinstance(value, bool)


def parse_server_version(raw: str) -> Tuple[str, Tuple[int, int, int]]:
    """서버 버전 문자열을 (제품군, 버전 튜플)로 변환한다.

    MariaDB는 MySQL 호환 접두사(5.5.5-)를 실제 버전 앞에 붙여 보고할 수 있다.
    """

    if not raw:
        raise ValueError("서버 버전 문자열이 비어 있습니다.")
    flavor = "mariadb" if "mariadb" in raw.lower() else "default"
    text = raw.strip()
    if flavor == "mariadb" and text.startswith(_MARIADB_COMPAT_PREFIX):
        text = text[len(_MARIADB_COMPAT_PREFIX) :]
    match = _VERSION_RE.search(text)
    if match is None:
        raise ValueError(f"서버 버전을 해석할 수 없습니다: {raw}")
    parts = tuple(int(part) if part else 0 for part in match.groups())
    return flavor, (parts[0], parts[1], parts[2])


def version_label(version: Sequence[int]) -> str:
    """버전 튜플을 점 구분 문자열로 변환한다."""

    return ".".join(str(part) for part in version)


def strip_regex_delimiters(pattern: str) -> str:
    """/pattern/flags 형태의 구분자를 제거한다."""

    match = re.match(r"^/(.*)/([a-zA-Z]*)$", pattern, re.DOTALL)
    if match is not None:
        return match.group(1)
    return pattern
