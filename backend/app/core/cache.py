# 文件位置: backend/app/core/cache.py
from typing import Optional

import redis

from app.core.config import settings

# 1. 进程级 Redis 客户端 (连接池内部线程安全，创建时不会立即连接)
redis_client = redis.Redis.from_url(settings.REDIS_URL, decode_responses=True)


class VerificationCodeCache:
    """按邮箱存放一次性验证码，每个邮箱同一时间只有一个有效验证码。"""

    def __init__(self, client: redis.Redis, key_prefix: str, ttl_seconds: int):
        self.client = client
        self.key_prefix = key_prefix
        self.ttl_seconds = ttl_seconds

    def key_for(self, email: str) -> str:
        return f"{self.key_prefix}{email}"

    def save(self, email: str, code: str) -> None:
        # SET ... EX 会覆盖旧值并重置过期时间
        self.client.set(self.key_for(email), code, ex=self.ttl_seconds)

    def get(self, email: str) -> Optional[str]:
        return self.client.get(self.key_for(email))

    def ttl(self, email: str) -> int:
        return int(self.client.ttl(self.key_for(email)))


# 2. 给 API 用的依赖
def get_code_cache() -> VerificationCodeCache:
    return VerificationCodeCache(
        redis_client,
        key_prefix=settings.SMS_CODE_KEY_PREFIX,
        ttl_seconds=settings.SMS_CODE_TTL_SECONDS,
    )
