# 文件位置: backend/app/services/mailer.py
import logging
import smtplib
from email.message import EmailMessage

from app.core.config import Settings, settings
from app.core.errors import DeliveryError

logger = logging.getLogger(__name__)


class EmailCodeSender:
    """把验证码发到邮箱。

    EMAIL_MODE=console 只把验证码打到日志 (开发用)。
    EMAIL_MODE=smtp 通过配置好的 SMTP 发信。
    """

    def __init__(self, config: Settings):
        self.config = config

    def send(self, email: str, code: str) -> None:
        mode = self.config.EMAIL_MODE.lower()
        if mode == "console":
            logger.info("[模拟邮件] 发送给 %s: %s", email, code)
            return
        if mode != "smtp":
            logger.error("Unknown EMAIL_MODE: %s", self.config.EMAIL_MODE)
            raise DeliveryError("发送短信失败", extra={"code": ""})
        if not self.config.SMTP_HOST or not self.config.SMTP_USER or not self.config.SMTP_PASS:
            logger.error("SMTP is not configured (SMTP_HOST/SMTP_USER/SMTP_PASS)")
            raise DeliveryError("发送短信失败", extra={"code": ""})

        msg = EmailMessage()
        msg["Subject"] = "TalkHive 验证码"
        msg["From"] = self.config.SMTP_FROM
        msg["To"] = email
        minutes = self.config.SMS_CODE_TTL_SECONDS // 60
        msg.set_content(f"您的验证码是: {code}\n\n验证码 {minutes} 分钟内有效。")

        try:
            with smtplib.SMTP(self.config.SMTP_HOST, self.config.SMTP_PORT, timeout=10) as s:
                s.starttls()
                s.login(self.config.SMTP_USER, self.config.SMTP_PASS)
                s.send_message(msg)
        except (smtplib.SMTPException, OSError) as e:
            raise DeliveryError("发送短信失败", extra={"code": ""}) from e
        logger.info("verification code mailed to %s", email)


def get_code_sender() -> EmailCodeSender:
    return EmailCodeSender(settings)
