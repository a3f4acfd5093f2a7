"""
목적: 문서 식별자 생성기를 제공한다.
설명: 타임스탬프/호스트/프로세스/난수로 구성된 24자리 16진수 ObjectId 형태 식별자를 생성한다.
디자인 패턴: 팩토리 함수
참조: src/mongo_hybrid/integrations/db/document/collection.py
"""

from __future__ import annotations

import hashlib
import os
import secrets
import socket
import struct
import time
from typing import Any, Dict, Mapping

ID_FIELD = "_id"

_HOST_BYTES = hashlib.md5(socket.gethostname().encode("utf-8")).digest()[:3]


def generate_object_id() -> str:
    """24자리 소문자 16진수 식별자를 생성한다.

    구성: 타임스탬프 4바이트 + 호스트 해시 3바이트 + 프로세스 ID 2바이트 + 난수 3바이트.
    """

    timestamp = struct.pack(">I", int(time.time()) & 0xFFFFFFFF)
    pid = struct.pack(">H", os.getpid() & 0xFFFF)
    return (timestamp + _HOST_BYTES + pid + secrets.token_bytes(3)).hex()


def with_object_id(document: Mapping[str, Any]) -> Dict[str, Any]:
    """_id가 없으면 새 식별자를 부여한 사본을 반환한다. 입력은 변경하지 않는다."""

    stored = dict(document)
    if stored.get(ID_FIELD) in (None, ""):
        stored[ID_FIELD] = generate_object_id()
    return stored
