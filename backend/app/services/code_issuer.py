# 文件位置: backend/app/services/code_issuer.py
"""
验证码签发。

流程: 校验邮箱格式 -> 校验命令 -> 按用途检查邮箱是否已注册 -> 生成定长数字验证码
-> 写入 Redis (5 分钟过期，覆盖旧值) -> 通过邮件发送。
任何一步失败都直接结束本次请求，不重试。
"""
import logging
import secrets
from enum import Enum
from typing import Union

import redis

from app.core.cache import VerificationCodeCache
from app.core.errors import CacheWriteError, ValidationError
from app.core.validators import is_valid_email
from app.services.account_store import AccountStore
from app.services.mailer import EmailCodeSender

logger = logging.getLogger(__name__)


class CodePurpose(str, Enum):
    SMS_LOGIN = "smsLogin"
    REGISTER = "register"
    RESET_PASSWORD = "resetPassword"


SUCCESS_MESSAGES = {
    CodePurpose.SMS_LOGIN: "短信登录验证码发送成功",
    CodePurpose.REGISTER: "短信验证码已发送，请查看您的邮箱",
    CodePurpose.RESET_PASSWORD: "重置密码的验证码已发送，请查看您的邮箱",
}


def parse_purpose(command: str) -> CodePurpose:
    try:
        return CodePurpose(command)
    except ValueError:
        raise ValidationError("无效的命令")


def generate_code(length: int = 6) -> str:
    # 保留前导 0，所以返回定长字符串而不是数字
    return f"{secrets.randbelow(10 ** length):0{length}d}"


class CodeIssuer:
    def __init__(
        self,
        accounts: AccountStore,
        cache: VerificationCodeCache,
        sender: EmailCodeSender,
        code_length: int = 6,
    ):
        self.accounts = accounts
        self.cache = cache
        self.sender = sender
        self.code_length = code_length

    def check_precondition(self, email: str, purpose: CodePurpose) -> None:
        registered = self.accounts.email_registered(email)
        if purpose is CodePurpose.REGISTER:
            if registered:
                raise ValidationError("该邮箱已注册，不可重复注册")
        elif not registered:
            raise ValidationError("该邮箱未注册")

    def issue_code(self, email: str, purpose: Union[CodePurpose, str]) -> str:
        # 先校验邮箱，再校验命令
        if not is_valid_email(email):
            raise ValidationError("邮箱格式不正确")
        purpose = parse_purpose(purpose)
        self.check_precondition(email, purpose)

        code = generate_code(self.code_length)
        try:
            self.cache.save(email, code)
        except redis.RedisError as e:
            raise CacheWriteError("保存验证码到Redis失败", extra={"code": ""}) from e

        self.sender.send(email, code)
        logger.info("verification code issued: email=%s purpose=%s", email, purpose.value)
        return code
