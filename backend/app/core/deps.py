# 文件位置: backend/app/core/deps.py
from typing import Callable, Optional, Type, TypeVar

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel
from pydantic import ValidationError as SchemaError
from sqlalchemy.orm import Session

from app.core.cache import VerificationCodeCache, get_code_cache
from app.core.config import settings
from app.core.errors import AuthError, ValidationError
from app.core.security import decode_access_token
from app.db.session import get_db
from app.models.account import AccountInfo
from app.services.account_store import AccountStore
from app.services.code_issuer import CodeIssuer
from app.services.mailer import EmailCodeSender, get_code_sender

ModelT = TypeVar("ModelT", bound=BaseModel)

bearer = HTTPBearer(auto_error=False)


def json_body(model: Type[ModelT], message: str) -> Callable:
    """解析 JSON 请求体，格式不对时返回各接口自己的 400 提示。"""

    async def _parse(request: Request) -> ModelT:
        try:
            raw = await request.json()
        except ValueError:
            raise ValidationError(message)
        if not isinstance(raw, dict):
            raise ValidationError(message)
        try:
            return model.model_validate(raw)
        except SchemaError:
            raise ValidationError(message)

    return _parse


def get_account_store(db: Session = Depends(get_db)) -> AccountStore:
    return AccountStore(db)


def get_code_issuer(
    accounts: AccountStore = Depends(get_account_store),
    cache: VerificationCodeCache = Depends(get_code_cache),
    sender: EmailCodeSender = Depends(get_code_sender),
) -> CodeIssuer:
    return CodeIssuer(accounts, cache, sender, code_length=settings.SMS_CODE_LENGTH)


def get_current_account(
    creds: Optional[HTTPAuthorizationCredentials] = Depends(bearer),
    accounts: AccountStore = Depends(get_account_store),
) -> AccountInfo:
    if creds is None:
        raise AuthError("未登录")
    try:
        payload = decode_access_token(creds.credentials)
    except ValueError:
        raise AuthError("无效的 Token")

    sub = payload.get("sub")
    if not sub:
        raise AuthError("无效的 Token")

    account = accounts.find_by_id(str(sub))
    if account is None:
        raise AuthError("用户不存在")
    return account
