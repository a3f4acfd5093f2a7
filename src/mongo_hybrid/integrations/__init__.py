"""
목적: 외부 저장소 연동 패키지를 정의한다.
설명: 관계형 DB 기반 문서 저장소 연동 모듈을 하위 패키지로 제공한다.
디자인 패턴: 패키지 구성
참조: src/mongo_hybrid/integrations/db/__init__.py
"""
