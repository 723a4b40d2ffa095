from __future__ import annotations

import asyncio
import smtplib
import ssl
from dataclasses import dataclass, field
from email.message import EmailMessage
from typing import Dict, Optional, Tuple

from app.core.config import Settings


@dataclass
class DeliveryReceipt:
    """What the mail gateway reported for one accepted message."""

    message_id: Optional[str]
    recipients: Tuple[str, ...]
    refused: Dict[str, Tuple[int, bytes]] = field(default_factory=dict)

    @property
    def response(self) -> str:
        accepted = [r for r in self.recipients if r not in self.refused]
        return (
            f"accepted={','.join(accepted) or '-'} "
            f"refused={','.join(self.refused) or '-'} "
            f"message_id={self.message_id or '-'}"
        )


def _send_email_sync(message: EmailMessage, settings: Settings) -> DeliveryReceipt:
    with smtplib.SMTP(
        settings.SMTP_HOST, settings.SMTP_PORT, timeout=settings.SMTP_TIMEOUT
    ) as server:
        server.starttls(context=ssl.create_default_context())
        server.login(settings.EMAIL_USER, settings.EMAIL_PASS.get_secret_value())
        refused = server.send_message(message)

    recipients = tuple(
        addr.strip() for addr in (message.get("To") or "").split(",") if addr.strip()
    )
    return DeliveryReceipt(
        message_id=message.get("Message-ID"),
        recipients=recipients,
        refused=dict(refused),
    )


async def send_email(message: EmailMessage, settings: Settings) -> DeliveryReceipt:
    """Send one message through the SMTP gateway without blocking the event loop.

    Errors from the gateway propagate unchanged; nothing is retried.
    """
    return await asyncio.to_thread(_send_email_sync, message, settings)
