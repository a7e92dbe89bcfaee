# 文件位置: backend/app/core/validators.py
import re

from email_validator import EmailNotValidError, validate_email

# 大陆手机号: 1 开头，第二位 3-9，共 11 位
_PHONE_RE = re.compile(r"^1[3-9]\d{9}$")


def is_valid_phone(phone: str) -> bool:
    return bool(_PHONE_RE.fullmatch(phone or ""))


def is_valid_email(email: str) -> bool:
    if not email:
        return False
    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True
