"""Contact service for messages sent through the contact form."""

import logging
import uuid
from datetime import UTC, datetime

from canteen_mate.models.result_models import ErrorCode, ServiceResult
from canteen_mate.models.user_models import ContactMessage, ContactStatusEnum
from canteen_mate.observability import traced
from canteen_mate.observability.metrics import record_store_write_failure
from canteen_mate.repositories.canteen_repositories import ContactMessageRepository
from canteen_mate.services.latency import LatencySimulator

logger = logging.getLogger(__name__)


class ContactService:
    """Service for recording and listing contact messages (append-only)."""

    def __init__(
        self,
        message_repository: ContactMessageRepository,
        latency: LatencySimulator | None = None,
    ) -> None:
        self.message_repository = message_repository
        self.latency = latency or LatencySimulator()

    @traced("contact.send")
    async def send_message(
        self, name: str, email: str, subject: str, message: str
    ) -> ServiceResult[ContactMessage]:
        """Record a new message ahead of all earlier ones.

        Returns:
            ServiceResult with the stored message
        """
        await self.latency.pause("contact.send")

        messages = self.message_repository.load_all()
        if messages is None:
            return ServiceResult.fail(ErrorCode.OPERATION_FAILED, "Failed to send message")

        new_message = ContactMessage(
            id=f"msg_{uuid.uuid4().hex[:12]}",
            name=name,
            email=email,
            subject=subject,
            message=message,
            created_at=datetime.now(UTC),
            status=ContactStatusEnum.NEW,
        )

        if not self.message_repository.save_all([new_message, *messages]):
            record_store_write_failure("contact_messages")
            return ServiceResult.fail(ErrorCode.OPERATION_FAILED, "Failed to send message")

        logger.info(f"Contact message {new_message.id} received")
        return ServiceResult.ok(new_message, message="Message sent successfully")

    @traced("contact.list")
    async def get_messages(self) -> ServiceResult[list[ContactMessage]]:
        messages = self.message_repository.load_all()
        if messages is None:
            return ServiceResult.fail(ErrorCode.OPERATION_FAILED, "Failed to fetch messages")

        return ServiceResult.ok(messages)
