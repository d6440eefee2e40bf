"""generation_record_models: 생성 이력 저장소 모듈.

생성된 비밀번호의 평문은 저장하지 않고, 솔트를 붙인 SHA-256 해시와
요청 메타데이터만 만료 시간과 함께 메모리에 보관합니다.
"""

import asyncio
import hashlib
import logging
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Iterable

from core.config import settings

logger = logging.getLogger("api")


@dataclass(frozen=True)
class RequestMetadata:
    """생성 요청의 출처 정보."""

    session_id: str | None = None
    ip_address: str | None = None
    user_agent: str | None = None


@dataclass(frozen=True)
class GenerationRecord:
    """비밀번호 생성 이력 레코드.

    Attributes:
        password_hash: "salt:hexdigest" 형식의 해시.
        composition: 사용한 구성 ID.
        length: 비밀번호 길이.
        strength: 강도 분류.
        estimated_crack_time: 크래킹 시간 추정 표현.
        metadata: 요청 출처 정보.
        created_at: 생성 시간.
        expires_at: 만료 시간.
    """

    password_hash: str
    composition: str
    length: int
    strength: str
    estimated_crack_time: str
    metadata: RequestMetadata
    created_at: datetime
    expires_at: datetime

    def is_expired(self, now: datetime | None = None) -> bool:
        return self.expires_at <= (now or datetime.now(timezone.utc))


def hash_generated_password(password: str, salt: str | None = None) -> str:
    """생성된 비밀번호의 솔트 해시를 반환합니다 (저장용).

    Args:
        password: 평문 비밀번호.
        salt: 16바이트 hex 솔트 (기본: 무작위 생성).

    Returns:
        "salt:hexdigest" 문자열.
    """
    salt = salt or secrets.token_hex(16)
    digest = hashlib.sha256(
        f"{settings.PASSWORD_SALT}{password}{salt}".encode("utf-8")
    ).hexdigest()
    return f"{salt}:{digest}"


class GenerationRecordStore:
    """메모리 기반 생성 이력 저장소.

    Lambda 인스턴스마다 독립적으로 유지되며, 만료 레코드는
    주기적인 정리 작업(cleanup_expired)으로 제거됩니다.
    보관 수가 상한을 넘으면 가장 오래된 레코드부터 일괄 제거합니다.
    """

    def __init__(self, retention_hours: int | None = None, max_records: int | None = None):
        """GenerationRecordStore 초기화.

        Args:
            retention_hours: 보관 시간 (기본: settings.GENERATION_RETENTION_HOURS).
            max_records: 최대 보관 레코드 수 (기본: settings.GENERATION_MAX_RECORDS).
        """
        self._records: list[GenerationRecord] = []
        self._lock = asyncio.Lock()
        self.retention_hours = (
            retention_hours
            if retention_hours is not None
            else settings.GENERATION_RETENTION_HOURS
        )
        self.max_records = (
            max_records if max_records is not None else settings.GENERATION_MAX_RECORDS
        )

    def _evict_oldest(self) -> None:
        # 상한 초과분과 상한의 10% 중 큰 수만큼 오래된 레코드를 일괄 제거 (분할 상환 O(1))
        overflow = len(self._records) - self.max_records
        eviction_count = min(len(self._records), max(overflow, self.max_records // 10, 1))
        self._records.sort(key=lambda record: record.created_at)
        del self._records[:eviction_count]

        logger.warning(
            f"생성 이력 배치 제거: {eviction_count}개 레코드 제거 "
            f"(남은 레코드: {len(self._records)}개)"
        )

    async def add_records(
        self,
        passwords: Iterable[str],
        composition: str,
        length: int,
        strength: str,
        estimated_crack_time: str,
        metadata: RequestMetadata,
        now: datetime | None = None,
    ) -> int:
        """생성된 비밀번호들의 해시를 저장합니다.

        Returns:
            저장된 레코드 수.
        """
        created_at = now or datetime.now(timezone.utc)
        expires_at = created_at + timedelta(hours=self.retention_hours)
        records = [
            GenerationRecord(
                password_hash=hash_generated_password(password),
                composition=composition,
                length=length,
                strength=strength,
                estimated_crack_time=estimated_crack_time,
                metadata=metadata,
                created_at=created_at,
                expires_at=expires_at,
            )
            for password in passwords
        ]
        async with self._lock:
            self._records.extend(records)
            if len(self._records) > self.max_records:
                self._evict_oldest()
        return len(records)

    async def get_records(
        self, session_id: str | None = None, now: datetime | None = None
    ) -> list[GenerationRecord]:
        """만료되지 않은 레코드를 최신순으로 조회합니다."""
        now = now or datetime.now(timezone.utc)
        async with self._lock:
            records = [
                record
                for record in self._records
                if not record.is_expired(now)
                and (session_id is None or record.metadata.session_id == session_id)
            ]
        return sorted(records, key=lambda record: record.created_at, reverse=True)

    async def cleanup_expired(self, now: datetime | None = None) -> int:
        """만료된 레코드를 일괄 삭제합니다.

        Returns:
            삭제된 레코드 수.
        """
        now = now or datetime.now(timezone.utc)
        async with self._lock:
            before = len(self._records)
            self._records = [record for record in self._records if not record.is_expired(now)]
            deleted = before - len(self._records)
        logger.info("만료된 생성 이력 %d개 정리 완료", deleted)
        return deleted

    async def clear(self) -> None:
        async with self._lock:
            self._records.clear()


# 전역 생성 이력 저장소 인스턴스
generation_record_store = GenerationRecordStore()


async def cleanup_expired_records() -> int:
    """전역 저장소의 만료 레코드를 정리합니다."""
    return await generation_record_store.cleanup_expired()
