"""test_generation_record_models: 생성 이력 저장소 테스트."""

from datetime import datetime, timedelta, timezone

import pytest

from models.generation_record_models import (
    GenerationRecordStore,
    RequestMetadata,
    hash_generated_password,
)


NOW = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


async def _add(store, passwords, session_id="session-a", now=NOW):
    return await store.add_records(
        passwords,
        composition="high-security",
        length=16,
        strength="strong",
        estimated_crack_time="billions of years",
        metadata=RequestMetadata(session_id=session_id, ip_address="127.0.0.1"),
        now=now,
    )


class TestPasswordHash:
    def test_plaintext_not_stored(self, fake):
        password = fake.password(length=16)

        password_hash = hash_generated_password(password)

        assert password not in password_hash
        salt, _, digest = password_hash.partition(":")
        assert len(salt) == 32
        assert len(digest) == 64

    def test_random_salt(self, fake):
        password = fake.password(length=16)

        assert hash_generated_password(password) != hash_generated_password(password)

    def test_fixed_salt_deterministic(self):
        assert hash_generated_password("abc", "00ff") == hash_generated_password("abc", "00ff")

    def test_same_salt_reproduces_hash(self, fake):
        password = fake.password(length=16)
        password_hash = hash_generated_password(password)
        salt = password_hash.partition(":")[0]

        assert hash_generated_password(password, salt) == password_hash
        assert hash_generated_password(password + "x", salt) != password_hash


class TestGenerationRecordStore:
    @pytest.fixture
    def store(self):
        return GenerationRecordStore(retention_hours=24)

    @pytest.mark.asyncio
    async def test_add_and_get(self, store):
        added = await _add(store, ["Aa1!aaaaaaaaaaaa", "Bb2@bbbbbbbbbbbb"])

        records = await store.get_records("session-a", now=NOW)

        assert added == 2
        assert len(records) == 2
        assert records[0].expires_at == NOW + timedelta(hours=24)
        expected = {
            hash_generated_password(record_password, record.password_hash.partition(":")[0])
            for record in records
            for record_password in ("Aa1!aaaaaaaaaaaa", "Bb2")
        }
        assert {record.password_hash for record in records} <= expected

    @pytest.mark.asyncio
    async def test_filter_by_session(self, store):
        await _add(store, ["one"], session_id="session-a")
        await _add(store, ["two", "three"], session_id="session-b")

        assert len(await store.get_records("session-a", now=NOW)) == 1
        assert len(await store.get_records("session-b", now=NOW)) == 2
        assert len(await store.get_records(now=NOW)) == 3

    @pytest.mark.asyncio
    async def test_newest_first(self, store):
        await _add(store, ["old"], now=NOW)
        await _add(store, ["new"], now=NOW + timedelta(hours=1))

        records = await store.get_records("session-a", now=NOW + timedelta(hours=2))

        assert records[0].created_at > records[1].created_at

    @pytest.mark.asyncio
    async def test_expired_records_hidden(self, store):
        await _add(store, ["old"], now=NOW)

        records = await store.get_records("session-a", now=NOW + timedelta(hours=24))

        assert records == []

    @pytest.mark.asyncio
    async def test_cleanup_expired(self, store):
        await _add(store, ["old"], now=NOW)
        await _add(store, ["new"], now=NOW + timedelta(hours=20))

        deleted = await store.cleanup_expired(now=NOW + timedelta(hours=25))

        assert deleted == 1
        assert len(await store.get_records(now=NOW + timedelta(hours=25))) == 1

    @pytest.mark.asyncio
    async def test_clear(self, store):
        await _add(store, ["one", "two"])

        await store.clear()

        assert await store.get_records(now=NOW) == []

    @pytest.mark.asyncio
    async def test_max_records_evicts_oldest(self):
        """보관 수 상한을 넘으면 가장 오래된 레코드부터 제거합니다."""
        store = GenerationRecordStore(retention_hours=24, max_records=10)

        for i in range(25):
            await _add(store, [f"password-{i}"], now=NOW + timedelta(minutes=i))

        records = await store.get_records(now=NOW + timedelta(hours=1))

        assert len(records) <= 10
        assert records[0].created_at == NOW + timedelta(minutes=24)
        assert min(record.created_at for record in records) > NOW

    @pytest.mark.asyncio
    async def test_single_batch_larger_than_cap(self):
        store = GenerationRecordStore(retention_hours=24, max_records=5)

        added = await _add(store, [f"password-{i}" for i in range(12)])

        assert added == 12
        assert len(await store.get_records(now=NOW)) <= 5
