"""utils: 유틸리티 함수들을 모아놓은 패키지.

Modules:
    secure_random: 암호학적 난수 소스와 Fisher-Yates 섞기
    formatters: 날짜/시간 포맷팅
    exceptions: 생성 엔진 예외와 HTTP 에러 헬퍼
"""
