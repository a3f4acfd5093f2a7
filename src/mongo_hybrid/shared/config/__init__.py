"""
목적: 설정 모듈 공개 API를 제공한다.
설명: dict/JSON/.env/환경 변수 병합 로더를 노출한다.
디자인 패턴: 퍼사드
참조: src/mongo_hybrid/shared/config/loader.py
"""

from mongo_hybrid.shared.config.loader import ConfigLoader

__all__ = ["ConfigLoader"]
