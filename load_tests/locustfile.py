"""locustfile.py: 비밀번호 생성 API 부하 테스트.

대상: AWS 배포 환경 (API Gateway → Lambda)
도구: Locust (Python)
규모: 동시 50-200명

실행:
    # UI 모드 (브라우저에서 localhost:8089 접속)
    locust -f load_tests/locustfile.py --host=http://127.0.0.1:8000

    # Headless 모드 (CLI에서 직접 결과 확인)
    locust -f load_tests/locustfile.py \
        --host=http://127.0.0.1:8000 \
        --users=100 --spawn-rate=5 --run-time=10m --headless

    # 특정 사용자 프로필만 실행
    locust -f load_tests/locustfile.py --host=http://127.0.0.1:8000 GeneratorUser

주의사항:
    - Rate Limiter: Lambda 인스턴스마다 독립적인 인메모리 카운터 사용
      → 여러 인스턴스에 분산되면 실제 제한보다 관대하게 적용됨
    - 같은 IP에서 실행하면 Rate Limit에 빠르게 도달합니다.
      로컬 측정 시에는 TESTING=true로 서버를 실행하세요.
"""

import logging
import random
import uuid

import gevent
from locust import HttpUser, between, events, task

from load_tests.config import (
    ANALYSIS_SAMPLES,
    BROWSER_WAIT,
    BULK_COUNT,
    BULK_LENGTH,
    BULK_WAIT,
    COMPOSITION_CHOICES,
    COUNT_CHOICES,
    GENERATOR_WAIT,
    LENGTH_CHOICES,
    RATE_LIMIT_RETRY_WAIT,
    REQUEST_TIMEOUT,
)

logger = logging.getLogger(__name__)


# ============================================================
# 이벤트 핸들러
# ============================================================

@events.test_start.add_listener
def on_test_start(_environment, **_kwargs) -> None:
    logger.info("=== 부하 테스트 시작 ===")


@events.test_stop.add_listener
def on_test_stop(_environment, **_kwargs) -> None:
    logger.info("=== 부하 테스트 종료 ===")


# ============================================================
# 기반 클래스: 세션 헤더와 공통 요청 처리
# ============================================================

class PasswordClientUser(HttpUser):
    """비밀번호 API 사용자 기반 클래스.

    on_start()에서 고유 세션 ID를 만들고 프리셋 목록을 한 번 조회합니다.
    하위 클래스에서 @task와 wait_time만 정의하면 됩니다.
    """

    abstract = True

    def on_start(self) -> None:
        self._session_id = uuid.uuid4().hex
        self._presets: list[str] = list(COMPOSITION_CHOICES)
        self._load_presets()

    def _headers(self) -> dict:
        return {"X-Session-ID": self._session_id}

    def _load_presets(self) -> None:
        """프리셋 목록을 조회하여 생성 요청에 사용할 구성 ID를 갱신합니다."""
        with self.client.get(
            "/v1/passwords/presets",
            timeout=REQUEST_TIMEOUT,
            catch_response=True,
            name="/v1/passwords/presets",
        ) as resp:
            if resp.status_code == 200:
                presets = resp.json().get("data", {}).get("presets", [])
                ids = [preset["id"] for preset in presets if "id" in preset]
                if ids:
                    self._presets = ids + ["none", "custom-symbols"]
                resp.success()
            else:
                resp.failure(f"프리셋 조회 실패: {resp.status_code}")

    def _post(self, path: str, payload: dict, name: str) -> None:
        """POST 요청 수행. 429 시 1회 재시도."""
        for attempt in range(2):
            with self.client.post(
                path,
                json=payload,
                headers=self._headers(),
                timeout=REQUEST_TIMEOUT,
                catch_response=True,
                name=name,
            ) as resp:
                if resp.status_code == 200:
                    resp.success()
                    return
                if resp.status_code == 429 and attempt == 0:
                    resp.failure("Rate Limited")
                    # gevent.sleep: gevent 허브에 제어를 반환하여 다른 greenlet이 실행됨
                    gevent.sleep(RATE_LIMIT_RETRY_WAIT)
                    continue
                body = resp.text[:200] if resp.text else "(빈 응답)"
                resp.failure(f"{name} 실패: {resp.status_code} ({body})")
                return

    # ── 공통 태스크 함수 (하위 클래스의 @task에서 호출) ────

    def _generate_with_composition(self) -> None:
        self._post(
            "/v1/passwords/composition",
            {
                "length": random.choice(LENGTH_CHOICES),
                "count": random.choice(COUNT_CHOICES),
                "composition": random.choice(self._presets),
                "excludeAmbiguous": random.random() < 0.3,
            },
            "/v1/passwords/composition",
        )

    def _generate_basic(self) -> None:
        self._post(
            "/v1/passwords",
            {
                "length": random.choice(LENGTH_CHOICES),
                "count": random.choice(COUNT_CHOICES),
                "useSymbols": random.random() < 0.5,
            },
            "/v1/passwords [basic]",
        )

    def _analyze(self) -> None:
        self._post(
            "/v1/passwords/analysis",
            {"password": random.choice(ANALYSIS_SAMPLES)},
            "/v1/passwords/analysis",
        )

    def _view_history(self) -> None:
        with self.client.get(
            "/v1/passwords/history?limit=20",
            headers=self._headers(),
            timeout=REQUEST_TIMEOUT,
            catch_response=True,
            name="/v1/passwords/history",
        ) as resp:
            if resp.status_code == 200:
                resp.success()
            else:
                resp.failure(f"이력 조회 실패: {resp.status_code}")


# ============================================================
# 사용자 프로필
# ============================================================

class BrowserUser(PasswordClientUser):
    """프리셋을 둘러보고 기존 비밀번호를 분석하는 사용자."""

    wait_time = between(*BROWSER_WAIT)

    @task(3)
    def load_presets(self) -> None:
        self._load_presets()

    @task(5)
    def analyze(self) -> None:
        self._analyze()

    @task(1)
    def generate_basic(self) -> None:
        self._generate_basic()


class GeneratorUser(PasswordClientUser):
    """구성 프리셋으로 비밀번호를 생성하는 일반 사용자."""

    wait_time = between(*GENERATOR_WAIT)

    @task(5)
    def generate_with_composition(self) -> None:
        self._generate_with_composition()

    @task(2)
    def generate_basic(self) -> None:
        self._generate_basic()

    @task(1)
    def view_history(self) -> None:
        self._view_history()


class BulkUser(PasswordClientUser):
    """최대 길이/개수로 생성하는 사용자 (CPU 상한 측정용)."""

    wait_time = between(*BULK_WAIT)

    @task
    def generate_bulk(self) -> None:
        self._post(
            "/v1/passwords/composition",
            {"length": BULK_LENGTH, "count": BULK_COUNT, "composition": "high-security"},
            "/v1/passwords/composition [bulk]",
        )
