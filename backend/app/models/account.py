# 文件位置: backend/app/models/account.py
from sqlalchemy import Boolean, Column, DateTime, String
from sqlalchemy.sql import func

from app.db.session import Base


class AccountInfo(Base):
    __tablename__ = "account_infos"

    # 用户自己选的账号 ID，作为主键
    id = Column(String(64), primary_key=True, index=True, comment="账号ID")
    email = Column(String(255), unique=True, index=True, nullable=False, comment="邮箱")
    phone = Column(String(32), nullable=False, comment="手机号")
    password = Column(String(255), nullable=False, comment="密码哈希")
    nickname = Column(String(64), nullable=False, comment="昵称")
    avatar = Column(String, nullable=False, default="", comment="头像")
    gender = Column(String(16), nullable=False, default="", comment="性别")
    birthday = Column(String(32), nullable=False, default="", comment="生日")
    friend_permission_id = Column(Boolean, nullable=False, default=True, comment="允许通过ID添加好友")
    friend_permission_nickname = Column(Boolean, nullable=False, default=True, comment="允许通过昵称添加好友")
    deactivate = Column(Boolean, nullable=False, default=False, comment="是否已注销")
    created_at = Column(DateTime(timezone=True), server_default=func.now(), comment="创建时间")
