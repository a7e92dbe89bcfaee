# 文件位置: backend/app/db/session.py
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from app.core.config import settings


def _connect_args(uri: str) -> dict:
    # SQLite 默认禁止跨线程使用连接，FastAPI 的同步接口跑在线程池里
    if uri.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


# 账号表所在的数据库引擎
engine = create_engine(
    settings.SQLALCHEMY_DATABASE_URI,
    pool_pre_ping=True,
    connect_args=_connect_args(settings.SQLALCHEMY_DATABASE_URI),
)

# 每个请求从这里拿一个会话
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# 所有 ORM 模型的基类
Base = declarative_base()


def init_db(bind: Engine = engine) -> None:
    """建表 (只建不存在的表，不做迁移)。"""
    import app.models.account  # noqa: F401  注册模型到 Base.metadata

    Base.metadata.create_all(bind=bind)


def get_db():
    db: Session = SessionLocal()
    try:
        yield db
    finally:
        db.close()
