# 文件位置: backend/app/services/account_store.py
import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import ConflictError, PersistenceError
from app.models.account import AccountInfo

logger = logging.getLogger(__name__)


class AccountStore:
    """账号表的点查询与写入，一个请求一个实例。"""

    def __init__(self, db: Session):
        self.db = db

    def _first(self, *criteria) -> Optional[AccountInfo]:
        try:
            return self.db.query(AccountInfo).filter(*criteria).first()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise PersistenceError("查询用户信息失败") from e

    def find_by_id(self, account_id: str) -> Optional[AccountInfo]:
        return self._first(AccountInfo.id == account_id)

    def find_by_email(self, email: str) -> Optional[AccountInfo]:
        return self._first(AccountInfo.email == email)

    def email_registered(self, email: str) -> bool:
        return self.find_by_email(email) is not None

    def create(self, account: AccountInfo) -> AccountInfo:
        # 先查重，写入前就拒绝
        if self.find_by_id(account.id) is not None:
            raise ConflictError("当前账号ID已被使用")
        if self.find_by_email(account.email) is not None:
            raise ConflictError("邮箱已被使用")

        self.db.add(account)
        try:
            self.db.commit()
        except IntegrityError as e:
            # 并发注册时查重和提交之间被别人抢先，唯一约束兜底
            self.db.rollback()
            raise ConflictError("当前账号ID或邮箱已被使用") from e
        except SQLAlchemyError as e:
            self.db.rollback()
            raise PersistenceError("保存用户信息失败") from e
        self.db.refresh(account)
        logger.info("account created: id=%s", account.id)
        return account

    def save(self, account: AccountInfo, error_message: str = "保存用户信息失败") -> AccountInfo:
        try:
            merged = self.db.merge(account)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise PersistenceError(error_message) from e
        return merged
