"""config.py: 부하 테스트 설정값.

Rate Limit(생성 30회/분, 분석 60회/분)을 고려하여 대기 시간을 정합니다.
"""

# 요청 타임아웃 (초)
REQUEST_TIMEOUT = 10

# 429 응답 후 재시도 대기 (초)
RATE_LIMIT_RETRY_WAIT = 5

# 사용자 프로필별 대기 시간 (초)
BROWSER_WAIT = (1, 3)
GENERATOR_WAIT = (2, 5)
BULK_WAIT = (5, 10)

# 생성 요청 파라미터
LENGTH_CHOICES = (8, 12, 16, 20, 32)
COUNT_CHOICES = (1, 5, 10)
COMPOSITION_CHOICES = (
    "none",
    "web-standard",
    "high-security",
    "enterprise-policy",
    "custom-symbols",
)
BULK_LENGTH = 128
BULK_COUNT = 100

# 분석 요청에 사용할 샘플 비밀번호
ANALYSIS_SAMPLES = (
    "password",
    "qwerty123",
    "Tr0ub4dor&3",
    "correct-horse-battery-staple",
    "Zx9!mK2@pL7#",
)
