"""
목적: 문서 저장소 공통 상수를 제공한다.
설명: 설정 로더의 환경 변수 규칙과 로거의 출력/보관 규칙을 한곳에 모은다.
디자인 패턴: 상수 객체
참조: src/mongo_hybrid/shared/config/loader.py, src/mongo_hybrid/shared/logging/logger.py
"""


class SharedConst:
    """공통 상수 집합이다.

    Attributes:
        DEFAULT_ENCODING: 설정 파일 인코딩.
        ENV_PREFIX: 드라이버 옵션 환경 변수 접두사. MONGO_HYBRID__HOST는 host가 된다.
        ENV_NESTED_DELIMITER: 접두사 뒤 키를 중첩 경로로 나누는 구분자.
        LOG_STDOUT_ENV: 1/true면 로그를 JSON 한 줄로 표준 출력에 쓴다.
        LOG_LEVEL_ENV: 기록할 최소 로그 레벨.
        LOG_MAX_RECORDS: 기본 로거가 메모리에 보관하는 최대 레코드 수.
        SQL_METADATA_KEY: 실행 SQL을 담는 로그 메타데이터 키.
    """

    DEFAULT_ENCODING = "utf-8"
    ENV_PREFIX = "MONGO_HYBRID__"
    ENV_NESTED_DELIMITER = "__"
    LOG_STDOUT_ENV = "MONGO_HYBRID_LOG_STDOUT"
    LOG_LEVEL_ENV = "MONGO_HYBRID_LOG_LEVEL"
    LOG_MAX_RECORDS = 1000
    SQL_METADATA_KEY = "sql"
    TRUTHY_VALUES = frozenset({"1", "true", "yes", "on"})


__all__ = ["SharedConst"]
