"""
목적: 설정 로더 병합 규칙을 검증한다.
설명: dict/JSON/.env/환경 변수 병합 순서와 값 타입 해석을 확인한다.
디자인 패턴: 빌더 패턴
참조: src/mongo_hybrid/shared/config/loader.py
"""

from __future__ import annotations

import json

import pytest

from mongo_hybrid.shared.config import ConfigLoader


def test_config_loader_merges_sources_in_order(tmp_path, monkeypatch) -> None:
    """뒤에 추가한 소스가 앞선 값을 덮어쓰는지 확인한다."""

    json_path = tmp_path / "store.json"
    json_path.write_text(
        json.dumps({"connection": "mysql", "host": "db", "driver_options": {"a": 1}}),
        encoding="utf-8",
    )
    env_path = tmp_path / ".env"
    env_path.write_text("TEST_MH__PORT=3307\nTEST_MH__DRIVER_OPTIONS__B=true\n", encoding="utf-8")
    monkeypatch.setenv("TEST_MH__HOST", "127.0.0.1")

    loader = ConfigLoader()
    loader.add_dict({"dbname": "base"})
    loader.add_json_file(str(json_path), required=True)
    loader.add_dotenv(str(env_path), prefix="TEST_MH__")
    loader.add_env(prefix="TEST_MH__")
    config = loader.build({"dbname": "override"})

    assert config["connection"] == "mysql"
    assert config["host"] == "127.0.0.1"
    assert config["port"] == 3307
    assert config["dbname"] == "override"
    assert config["driver_options"] == {"a": 1, "b": True}


def test_config_loader_skips_missing_optional_file(tmp_path) -> None:
    """선택 파일이 없으면 건너뛰고, 필수 파일이면 예외를 던진다."""

    loader = ConfigLoader()
    loader.add_json_file(str(tmp_path / "missing.json"))
    assert loader.build() == {}

    with pytest.raises(FileNotFoundError):
        loader.add_json_file(str(tmp_path / "missing.json"), required=True)


def test_config_loader_rejects_non_object_json(tmp_path) -> None:
    """최상위가 객체가 아닌 JSON은 거부한다."""

    json_path = tmp_path / "list.json"
    json_path.write_text("[1, 2]", encoding="utf-8")

    with pytest.raises(ValueError):
        ConfigLoader().add_json_file(str(json_path))


def test_config_loader_env_values_are_typed(tmp_path, monkeypatch) -> None:
    """환경 변수 값은 bool/None/숫자/JSON으로 해석하고, 해석할 수 없으면 문자열로 둔다."""

    monkeypatch.setenv("TEST_TYPED__FLAG", "TRUE")
    monkeypatch.setenv("TEST_TYPED__EMPTY", "null")
    monkeypatch.setenv("TEST_TYPED__RATIO", "0.5")
    monkeypatch.setenv("TEST_TYPED__CODE", "007")
    monkeypatch.setenv("TEST_TYPED__DRIVER_OPTIONS__SSL", '{"ca": "/etc/ca.pem"}')

    loader = ConfigLoader().add_env(prefix="TEST_TYPED__")
    config = loader.build()

    assert loader.sources == ["env"]
    assert config == {
        "flag": True,
        "empty": None,
        "ratio": 0.5,
        "code": "007",
        "driver_options": {"ssl": {"ca": "/etc/ca.pem"}},
    }


def test_config_loader_keeps_raw_keys_and_non_canonical_numbers(monkeypatch) -> None:
    """raw_keys 경로와 다시 직렬화하면 달라지는 숫자는 원문 문자열로 남는다."""

    monkeypatch.setenv("TEST_RAW__SECRET", "true")
    monkeypatch.setenv("TEST_RAW__NESTED__TOKEN", "12")
    monkeypatch.setenv("TEST_RAW__PRICE", "1.50")
    monkeypatch.setenv("TEST_RAW__ZERO", "-0")
    monkeypatch.setenv("TEST_RAW__COUNT", "12")

    config = ConfigLoader().add_env(prefix="TEST_RAW__", raw_keys=("secret", "nested.token")).build()

    assert config == {
        "secret": "true",
        "nested": {"token": "12"},
        "price": "1.50",
        "zero": "-0",
        "count": 12,
    }
