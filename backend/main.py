# 文件位置: backend/main.py
import logging
import os
import sys
from contextlib import asynccontextmanager

# ==========================================
# 1. 路径修复 (必须放在最前面)
# ==========================================
current_dir = os.path.dirname(os.path.abspath(__file__))
sys.path.append(current_dir)

# ==========================================
# 2. 导入必要的库
# ==========================================
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.v1.api import api_router
from app.core.config import settings
from app.core.errors import register_exception_handlers
from app.db.session import Base, engine, init_db

# ==========================================
# 3. 日志
# ==========================================
logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("talkhive")


# ==========================================
# 4. 启动时自动建表
# ==========================================
@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("正在检查数据库连接...")
    if os.getenv("RESET_DB", "").strip().lower() in ("1", "true", "yes"):
        Base.metadata.drop_all(bind=engine)
    init_db()
    logger.info("数据库表结构同步完成")
    yield


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.PROJECT_NAME,
        openapi_url=f"{settings.API_V1_STR}/openapi.json",
        lifespan=lifespan,
    )

    # ==========================================
    # 5. 配置 CORS (跨域)
    # ==========================================
    app.add_middleware(
        CORSMiddleware,
        allow_origin_regex=settings.CORS_ALLOW_ORIGIN_REGEX,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ==========================================
    # 6. 统一错误响应 + 业务路由
    # ==========================================
    register_exception_handlers(app)
    app.include_router(api_router, prefix=settings.API_V1_STR)

    @app.get("/")
    def root() -> dict:
        return {"success": True, "message": settings.PROJECT_NAME, "docs": "/docs", "health": "/healthz"}

    @app.get("/healthz")
    def healthz() -> dict:
        return {"success": True, "message": "ok"}

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="127.0.0.1", port=8002)
