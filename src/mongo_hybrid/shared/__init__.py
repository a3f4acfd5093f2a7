"""
목적: 공통 모듈 패키지를 정의한다.
설명: 로깅, 예외, 설정, 상수 모듈을 하위 패키지로 제공한다.
디자인 패턴: 패키지 구성
참조: src/mongo_hybrid/shared/logging, src/mongo_hybrid/shared/exceptions
"""
