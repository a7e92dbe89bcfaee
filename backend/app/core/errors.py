# 文件位置: backend/app/core/errors.py
"""
认证服务的异常体系。

    AuthServiceError (base)
    ├── ValidationError       400  输入格式错误 / 字段为空 / 前置条件不满足
    │   └── NotFoundError     404  账号不存在
    ├── ConflictError         409  账号 ID 或邮箱已被占用
    ├── AuthError             401  账号密码错误 / 账号已注销 / Token 无效
    └── DependencyError       500  外部依赖失败
        ├── CacheWriteError        写 Redis 失败
        ├── DeliveryError          发送验证码失败
        ├── PersistenceError       写数据库失败
        └── SigningError           签发 Token 失败

所有异常都在接口边界统一转换成 {"success": false, "message": ...}。
"""
import logging
from typing import Any, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class AuthServiceError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, extra: Optional[dict[str, Any]] = None):
        self.message = message
        self.extra = extra or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {"success": False, "message": self.message, **self.extra}


class ValidationError(AuthServiceError):
    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(ValidationError):
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(AuthServiceError):
    status_code = status.HTTP_409_CONFLICT


class AuthError(AuthServiceError):
    status_code = status.HTTP_401_UNAUTHORIZED


class DependencyError(AuthServiceError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class CacheWriteError(DependencyError):
    pass


class DeliveryError(DependencyError):
    pass


class PersistenceError(DependencyError):
    pass


class SigningError(DependencyError):
    pass


async def auth_service_error_handler(request: Request, exc: AuthServiceError) -> JSONResponse:
    if isinstance(exc, DependencyError):
        logger.exception("%s %s failed: %s", request.method, request.url.path, exc.message, exc_info=exc)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"success": False, "message": "Json输入格式错误"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AuthServiceError, auth_service_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
