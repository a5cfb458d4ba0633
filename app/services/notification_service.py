from dataclasses import dataclass
from email.message import EmailMessage
from typing import Any, Awaitable, Callable, Dict, Optional
import asyncio
import logging
import smtplib
from app.core.config import Settings
from app.core.exceptions import NotificationError
from app.services.email_templates import NotificationKind, render

logger = logging.getLogger(__name__)

EmailTransport = Callable[[EmailMessage], Awaitable[None]]

@dataclass(frozen=True)
class EmailConfig:
    host: str
    port: int
    username: str
    password: str
    sender: str
    use_tls: bool = True
    timeout: int = 30
    admin_email: str = ""
    base_url: str = ""
    deposit_link: str = ""

    @classmethod
    def from_settings(cls, settings: Settings) -> "EmailConfig":
        return cls(
            host=settings.EMAIL_HOST,
            port=settings.EMAIL_PORT,
            username=settings.EMAIL_USERNAME,
            password=settings.EMAIL_PASSWORD,
            sender=settings.EMAIL_FROM or settings.EMAIL_USERNAME,
            use_tls=settings.EMAIL_USE_TLS,
            timeout=settings.EMAIL_TIMEOUT,
            admin_email=settings.ADMIN_EMAIL or settings.EMAIL_USERNAME,
            base_url=settings.FRONTEND_URL.rstrip("/"),
            deposit_link=settings.DEPOSIT_LINK,
        )

@dataclass
class NotificationResult:
    kind: str
    recipient: str
    sent: bool
    error: Optional[str] = None

    def as_status(self) -> Dict[str, Any]:
        return {"sent": self.sent, "error": self.error}

class SMTPTransport:
    """Sends messages with smtplib on a worker thread."""

    def __init__(self, config: EmailConfig):
        self.config = config

    async def __call__(self, message: EmailMessage) -> None:
        if not self.config.username:
            raise NotificationError("Email transport not configured")
        await asyncio.to_thread(self._send, message)

    def _send(self, message: EmailMessage) -> None:
        config = self.config
        with smtplib.SMTP(config.host, config.port, timeout=config.timeout) as server:
            if config.use_tls:
                server.starttls()
            server.login(config.username, config.password)
            server.send_message(message)

class NotificationDispatcher:
    """
    Renders and sends transactional emails.

    notify never raises: every failure is logged and returned as an
    unsent NotificationResult so booking writes that already happened
    are never undone by a mail problem.
    """

    def __init__(self, config: EmailConfig, transport: Optional[EmailTransport] = None):
        self.config = config
        self.transport = transport or SMTPTransport(config)

    async def notify(
        self,
        kind: NotificationKind,
        recipient: str,
        params: Dict[str, Any]
    ) -> NotificationResult:
        kind = NotificationKind(kind)

        if not recipient:
            logger.error(f"No recipient for {kind.value} email")
            return NotificationResult(kind=kind.value, recipient="", sent=False, error="No recipient")

        try:
            subject, text = render(kind, self._with_defaults(params))

            message = EmailMessage()
            message["From"] = self.config.sender
            message["To"] = recipient
            message["Subject"] = subject
            message.set_content(text)

            await self.transport(message)
        except (NotificationError, smtplib.SMTPException, OSError, ValueError) as e:
            error = e.message if isinstance(e, NotificationError) else str(e)
            logger.error(f"Failed to send {kind.value} email to {recipient}: {error}")
            return NotificationResult(kind=kind.value, recipient=recipient, sent=False, error=error)
        except Exception as e:
            logger.exception(f"Unexpected error sending {kind.value} email to {recipient}")
            return NotificationResult(kind=kind.value, recipient=recipient, sent=False, error=str(e))

        logger.info(f"Email {kind.value} sent successfully to {recipient}")
        return NotificationResult(kind=kind.value, recipient=recipient, sent=True)

    async def notify_admin(self, kind: NotificationKind, params: Dict[str, Any]) -> NotificationResult:
        return await self.notify(kind, self.config.admin_email, params)

    def _with_defaults(self, params: Dict[str, Any]) -> Dict[str, Any]:
        merged = {"baseUrl": self.config.base_url, "depositLink": self.config.deposit_link}
        merged.update({key: value for key, value in params.items() if value is not None})
        return merged
