from __future__ import annotations

import os

# 测试不连 PostgreSQL，必须在导入 app 之前设置
os.environ.setdefault("SQLALCHEMY_DATABASE_URI", "sqlite://")
os.environ.setdefault("EMAIL_MODE", "console")

import pytest
import redis
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.api.v1.api import api_router
from app.core.cache import VerificationCodeCache, get_code_cache
from app.core.errors import DeliveryError, register_exception_handlers
from app.db.session import get_db, init_db
from app.services.account_store import AccountStore
from app.services.mailer import get_code_sender


class FakeRedis:
    """只实现用到的 set/get/ttl，过期时间按手动推进的时钟计算。"""

    def __init__(self):
        self.now = 0.0
        self.fail = False
        self.set_calls = 0
        self._data: dict[str, tuple[str, float | None]] = {}

    def advance(self, seconds: float) -> None:
        self.now += seconds

    def _live(self, key: str):
        item = self._data.get(key)
        if item is None:
            return None
        value, expires_at = item
        if expires_at is not None and self.now >= expires_at:
            del self._data[key]
            return None
        return item

    def set(self, key: str, value: str, ex: int | None = None):
        if self.fail:
            raise redis.ConnectionError("redis is down")
        self.set_calls += 1
        self._data[key] = (value, self.now + ex if ex else None)
        return True

    def get(self, key: str):
        item = self._live(key)
        return None if item is None else item[0]

    def ttl(self, key: str) -> int:
        item = self._live(key)
        if item is None:
            return -2
        if item[1] is None:
            return -1
        return int(item[1] - self.now)

    def keys(self) -> list[str]:
        return [k for k in list(self._data) if self._live(k) is not None]


class Outbox:
    def __init__(self):
        self.sent: list[tuple[str, str]] = []
        self.fail = False

    def send(self, email: str, code: str) -> None:
        if self.fail:
            raise DeliveryError("发送短信失败", extra={"code": ""})
        self.sent.append((email, code))


@pytest.fixture()
def session_factory():
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    init_db(engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def accounts(db) -> AccountStore:
    return AccountStore(db)


@pytest.fixture()
def fake_redis() -> FakeRedis:
    return FakeRedis()


@pytest.fixture()
def code_cache(fake_redis) -> VerificationCodeCache:
    return VerificationCodeCache(fake_redis, key_prefix="sms_code:", ttl_seconds=300)


@pytest.fixture()
def outbox() -> Outbox:
    return Outbox()


@pytest.fixture()
def client(session_factory, code_cache, outbox) -> TestClient:
    app = FastAPI()
    register_exception_handlers(app)
    app.include_router(api_router, prefix="/api/v1")

    def _get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_code_cache] = lambda: code_cache
    app.dependency_overrides[get_code_sender] = lambda: outbox
    return TestClient(app)
