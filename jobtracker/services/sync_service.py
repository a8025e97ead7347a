"""Gmail inbox scan that turns application emails into tracker records."""

import logging
from dataclasses import dataclass

import httpx

from jobtracker.core.exceptions import (
    MessageProcessingError,
    NotConnectedError,
    RepositoryError,
)
from jobtracker.repositories.application_repository import ApplicationRepository
from jobtracker.services.classifier import classify
from jobtracker.services.gmail_client import GmailAPIError, GmailClient
from jobtracker.utils.email_text import collect_text, get_header, parse_message_date

logger = logging.getLogger(__name__)

SYNC_QUERY = "newer_than:30d"
PAGE_SIZE = 200
MAX_MESSAGES = 1000


@dataclass
class SyncResult:
    """Counters reported after a sync pass."""

    new_applications: int = 0
    total_messages: int = 0


class SyncService:
    """Scans recent mail and records detected applications."""

    def __init__(self, gmail: GmailClient, repository: ApplicationRepository):
        self.gmail = gmail
        self.repository = repository

    async def collect_message_ids(self) -> list[str]:
        """Page through recent message ids, stopping at MAX_MESSAGES."""
        message_ids: list[str] = []
        page_token = None
        while True:
            try:
                ids, page_token = await self.gmail.list_message_ids(
                    SYNC_QUERY, page_token=page_token, max_results=PAGE_SIZE
                )
            except GmailAPIError as e:
                if e.status_code == 401:
                    raise NotConnectedError("Gmail access token was rejected") from e
                raise
            message_ids.extend(ids)
            if len(message_ids) >= MAX_MESSAGES:
                logger.info(f"Message cap of {MAX_MESSAGES} reached, stopping listing")
                break
            if not page_token:
                break
        return message_ids[:MAX_MESSAGES]

    async def process_message(self, message_id: str) -> bool:
        """Classify one message; returns True when a new record was created."""
        message = await self.gmail.get_message(message_id)
        payload = message.get("payload") or {}
        headers = payload.get("headers") or []

        subject = get_header(headers, "Subject")
        sender = get_header(headers, "From")
        body = collect_text(payload, message_id)

        result = classify(subject, body, sender)
        if not result.is_application:
            return False

        existing = await self.repository.find_by_field("email_id", message_id)
        if existing:
            logger.debug(f"Message {message_id} already tracked, skipping")
            return False

        await self.repository.create(
            {
                "company": result.company,
                "position": result.position,
                "application_date": parse_message_date(
                    get_header(headers, "Date"), message.get("internalDate")
                ),
                "status": result.status.value,
                "email_id": message_id,
                "notes": f"Auto-detected from email: {subject}",
            }
        )
        logger.info(
            f"Created {result.status.value} application for {result.company} "
            f"from message {message_id}"
        )
        return True

    async def sync(self) -> SyncResult:
        """Run one sync pass over recent mail.

        Failures on individual messages are logged and skipped; a failure
        while listing messages aborts the pass.
        """
        if not self.gmail.access_token:
            raise NotConnectedError()

        message_ids = await self.collect_message_ids()
        result = SyncResult(total_messages=len(message_ids))

        for message_id in message_ids:
            try:
                if await self.process_message(message_id):
                    result.new_applications += 1
            except (
                MessageProcessingError,
                GmailAPIError,
                RepositoryError,
                httpx.RequestError,
            ) as e:
                logger.error(f"Error processing message {message_id}: {e}")
            except (KeyError, TypeError, AttributeError, ValueError) as e:
                logger.error(f"Malformed message {message_id}: {e}")

        logger.info(
            f"Gmail sync finished: {result.new_applications} new applications "
            f"from {result.total_messages} messages"
        )
        return result
