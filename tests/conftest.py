import sys
import os

# Rate Limiter 우회를 위한 테스트 환경 변수 설정
os.environ["TESTING"] = "true"

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from main import app
from models.generation_record_models import generation_record_store
from faker import Faker


class ScriptedRandomSource:
    """미리 정한 값을 순서대로 돌려주는 테스트용 난수 소스.

    값이 바닥나면 0을 반환합니다. 모든 호출 인자는 calls에 기록됩니다.
    """

    def __init__(self, values=()):
        self._values = list(values)
        self.calls: list[int] = []

    def uniform_index(self, n: int) -> int:
        self.calls.append(n)
        value = self._values.pop(0) if self._values else 0
        assert 0 <= value < n, f"scripted value {value} out of range for n={n}"
        return value


@pytest_asyncio.fixture
async def client():
    """API 테스트를 위한 Async Client (생성 이력 저장소를 비운 상태로 시작)"""
    await generation_record_store.clear()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    await generation_record_store.clear()


@pytest.fixture
def fake():
    return Faker("ko_KR")


@pytest.fixture
def session_client_headers(fake):
    """생성 이력 조회용 세션 헤더"""
    return {"X-Session-ID": fake.uuid4(), "User-Agent": fake.user_agent()}


@pytest.fixture
def scripted_rng():
    """ScriptedRandomSource 팩토리"""
    return ScriptedRandomSource
