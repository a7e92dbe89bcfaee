from __future__ import annotations

import smtplib

import pytest

from app.core.config import Settings
from app.core.errors import DeliveryError
from app.services.mailer import EmailCodeSender


def _smtp_settings(**overrides) -> Settings:
    config = Settings()
    config.EMAIL_MODE = "smtp"
    config.SMTP_HOST = "smtp.talkhive.local"
    config.SMTP_PORT = 587
    config.SMTP_USER = "bot"
    config.SMTP_PASS = "secret"
    for key, value in overrides.items():
        setattr(config, key, value)
    return config


class _RecordingSMTP:
    instances: list["_RecordingSMTP"] = []

    def __init__(self, host, port, timeout=None):
        self.host = host
        self.port = port
        self.calls: list[str] = []
        self.messages = []
        _RecordingSMTP.instances.append(self)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def starttls(self):
        self.calls.append("starttls")

    def login(self, user, password):
        self.calls.append(f"login:{user}")

    def send_message(self, msg):
        self.calls.append("send")
        self.messages.append(msg)


def test_console_mode_only_logs(caplog: pytest.LogCaptureFixture, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(smtplib, "SMTP", lambda *a, **k: pytest.fail("console mode must not open SMTP"))
    config = Settings()
    config.EMAIL_MODE = "console"
    with caplog.at_level("INFO", logger="app.services.mailer"):
        EmailCodeSender(config).send("a@b.com", "012345")
    assert "012345" in caplog.text


def test_smtp_mode_sends_code(monkeypatch: pytest.MonkeyPatch):
    _RecordingSMTP.instances.clear()
    monkeypatch.setattr(smtplib, "SMTP", _RecordingSMTP)

    EmailCodeSender(_smtp_settings()).send("a@b.com", "012345")

    (smtp,) = _RecordingSMTP.instances
    assert (smtp.host, smtp.port) == ("smtp.talkhive.local", 587)
    assert smtp.calls == ["starttls", "login:bot", "send"]
    msg = smtp.messages[0]
    assert msg["To"] == "a@b.com"
    assert "012345" in msg.get_content()


def test_smtp_failure_raises_delivery_error(monkeypatch: pytest.MonkeyPatch):
    class _Refusing(_RecordingSMTP):
        def send_message(self, msg):
            raise smtplib.SMTPRecipientsRefused({"a@b.com": (550, b"no such user")})

    monkeypatch.setattr(smtplib, "SMTP", _Refusing)
    with pytest.raises(DeliveryError) as exc_info:
        EmailCodeSender(_smtp_settings()).send("a@b.com", "012345")
    assert exc_info.value.to_dict() == {"success": False, "message": "发送短信失败", "code": ""}


@pytest.mark.parametrize("config", [_smtp_settings(SMTP_HOST=""), _smtp_settings(EMAIL_MODE="pigeon")])
def test_misconfigured_sender_raises_delivery_error(config: Settings):
    with pytest.raises(DeliveryError):
        EmailCodeSender(config).send("a@b.com", "012345")
