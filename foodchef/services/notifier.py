# foodchef/services/notifier.py
import html
import logging
import re
import smtplib
from email.message import EmailMessage
from email.utils import formataddr
from typing import Optional, Protocol

import requests

from foodchef.core.config import SmtpConfig, TelegramConfig, Settings

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    def send(self, recipient: str, subject: str, body_html: str) -> bool:
        ...


class SmtpNotifier:
    """Sends HTML email to customers."""

    def __init__(self, config: SmtpConfig):
        self.config = config

    def build_message(self, recipient: str, subject: str, body_html: str) -> EmailMessage:
        msg = EmailMessage()
        msg["From"] = formataddr((self.config.from_name, self.config.from_email))
        msg["Reply-To"] = self.config.from_email
        msg["To"] = recipient
        msg["Subject"] = subject
        msg["X-Mailer"] = "Food Chef Cafe Management System"
        msg.set_content(html_to_text(body_html))
        msg.add_alternative(body_html, subtype="html")
        return msg

    def send(self, recipient: str, subject: str, body_html: str) -> bool:
        msg = self.build_message(recipient, subject, body_html)
        try:
            with smtplib.SMTP(self.config.host, self.config.port, timeout=self.config.timeout) as smtp:
                if self.config.use_tls:
                    smtp.starttls()
                if self.config.username:
                    smtp.login(self.config.username, self.config.password)
                smtp.send_message(msg)
            logger.info(f"📤 EMAIL SENT TO {recipient}: {subject}")
            return True
        except (smtplib.SMTPException, OSError) as e:
            logger.warning(f"⚠️ Email to {recipient} failed: {e}")
            return False


class TelegramNotifier:
    """
    Posts staff alerts (new orders, contact messages) to a Telegram chat.
    ``recipient`` is the chat id; the staff chat from config is used when empty.
    """

    def __init__(self, config: TelegramConfig):
        self.config = config

    def send(self, recipient: str, subject: str, body_html: str) -> bool:
        chat_id = recipient or self.config.staff_chat_id
        if not self.config.bot_token or not chat_id:
            return False

        url = f"https://api.telegram.org/bot{self.config.bot_token}/sendMessage"
        payload = {"chat_id": chat_id, "text": f"{subject}\n\n{html_to_text(body_html)}"}
        try:
            response = requests.post(url, json=payload, timeout=self.config.timeout)
            response.raise_for_status()
            return True
        except requests.RequestException as e:
            logger.warning(f"⚠️ Telegram Send Failed: {e}")
            return False


_TAG = re.compile(r"<[^>]+>")
_BLANKS = re.compile(r"\n\s*\n+")


def html_to_text(body_html: str) -> str:
    text = re.sub(r"<(br|/p|/h\d|/li|/tr)\s*/?>", "\n", body_html, flags=re.I)
    text = html.unescape(_TAG.sub("", text))
    lines = [line.strip() for line in text.splitlines()]
    return _BLANKS.sub("\n\n", "\n".join(lines)).strip()


def build_customer_notifier(settings: Settings) -> Optional[Notifier]:
    if not settings.SMTP_HOST:
        return None
    return SmtpNotifier(settings.smtp_config())


def build_staff_notifier(settings: Settings) -> Optional[Notifier]:
    if not settings.TELEGRAM_BOT_TOKEN or not settings.STAFF_CHAT_ID:
        return None
    return TelegramNotifier(settings.telegram_config())
