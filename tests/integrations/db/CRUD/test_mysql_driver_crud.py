"""
목적: MySQL/MariaDB 드라이버의 기본 CRUD 동작을 검증한다.
설명: 실제 MySQL 환경에서 문서 저장/조회/갱신/삭제 흐름을 확인한다.
디자인 패턴: 테스트 케이스
참조: src/mongo_hybrid/integrations/db/engines/mysql
"""

from __future__ import annotations

import logging
import os
import uuid

import pytest

from mongo_hybrid import create_driver


_LOGGER = logging.getLogger("tests.crud")


def _log_step(action: str, **context) -> None:
    """CRUD 단계별 동작을 로깅한다."""

    if context:
        payload = ", ".join(f"{key}={value}" for key, value in context.items())
        _LOGGER.info("%s | %s", action, payload)
        return
    _LOGGER.info("%s", action)


def test_mysql_driver_basic_crud() -> None:
    """MySQL CRUD 기본 동작을 검증한다."""

    options = _mysql_options()
    if not options:
        pytest.skip("MYSQL_HOST/MYSQL_USER/MYSQL_PW/MYSQL_DATABASE 환경 변수가 필요합니다.")
    pytest.importorskip("mysql.connector")

    _log_step("드라이버 생성", host=options["host"], dbname=options["dbname"])
    with create_driver(options) as driver:
        collection = f"items_{uuid.uuid4().hex[:8]}"
        try:
            _log_step("문서 저장", collection=collection)
            stored = driver.insert(
                collection,
                [
                    {"content": "Lorem ipsum", "_o": 1, "tags": ["a", "b"]},
                    {"content": "Etiam tempor", "_o": 10, "tags": ["b"]},
                ],
            )
            _log_step("문서 조회", doc_id=stored[0]["_id"])
            assert driver.find_one_by_id(collection, stored[0]["_id"]) == stored[0]

            _log_step("정렬 조회", sort="_o desc")
            ordered = driver.find(collection, {"sort": {"_o": -1}})
            assert [document["_o"] for document in ordered] == [10, 1]

            _log_step("조건 조회")
            assert driver.count(collection, {"_o": {"$gt": 2}}) == 1
            assert driver.count(collection, {"content": {"$regex": "lorem"}}) == 1
            assert driver.count(collection, {"tags": {"$all": ["a", "b"]}}) == 1
            assert driver.count(collection, {"tags": {"$size": 1}}) == 1

            _log_step("문서 갱신", doc_id=stored[0]["_id"])
            driver.update(collection, {"_id": stored[0]["_id"]}, {"content": "changed"})
            updated = driver.find_one_by_id(collection, stored[0]["_id"])
            assert updated["content"] == "changed"
            assert updated["tags"] == ["a", "b"]

            _log_step("문서 삭제", doc_id=stored[1]["_id"])
            driver.remove(collection, {"_id": stored[1]["_id"]})
            assert driver.count(collection) == 1
        finally:
            _log_step("컬렉션 삭제", name=collection)
            driver.drop_collection(collection)
    _log_step("연결 종료")


def _mysql_options() -> dict | None:
    host = os.getenv("MYSQL_HOST")
    user = os.getenv("MYSQL_USER")
    password = os.getenv("MYSQL_PW")
    database = os.getenv("MYSQL_DATABASE")
    port_raw = os.getenv("MYSQL_PORT", "3306")
    if not host or not user or not database or not port_raw.isdigit():
        return None
    return {
        "connection": "mysql",
        "host": host,
        "port": int(port_raw),
        "dbname": database,
        "username": user,
        "password": password,
    }
