"""
AI Actions

Ticket summary and reply suggestion for agents. The provider is an injected
capability; the only implementation shipped is a mock that waits a short
delay and fills a fixed template.
"""
import asyncio
from typing import Protocol, Sequence

from helpdesk.models.schemas import Comment, Ticket
from helpdesk.utils.logger import get_logger

logger = get_logger(__name__)

SUMMARY_PREVIEW_CHARS = 100


class AIActionProvider(Protocol):
    """Text generation used by the ticket assist endpoints."""

    async def summarize(self, ticket: Ticket, comments: Sequence[Comment]) -> str:
        ...

    async def suggest_reply(self, ticket: Ticket, comments: Sequence[Comment]) -> str:
        ...


class MockAIActions:
    """
    Canned AI actions.

    Each call sleeps for `delay_seconds` to mimic generation latency. The
    sleep is asynchronous, so other requests are served meanwhile.
    """

    def __init__(self, delay_seconds: float = 1.5):
        self.delay_seconds = delay_seconds

    async def _wait(self) -> None:
        if self.delay_seconds > 0:
            await asyncio.sleep(self.delay_seconds)

    async def summarize(self, ticket: Ticket, comments: Sequence[Comment]) -> str:
        await self._wait()
        preview = (ticket.description or "")[:SUMMARY_PREVIEW_CHARS]
        logger.info("Generated mock summary for ticket %s", ticket.id)
        return (
            f"Summary: {ticket.title} - {preview}... "
            f"{len(comments)} comment(s) received. Status requires attention."
        )

    async def suggest_reply(self, ticket: Ticket, comments: Sequence[Comment]) -> str:
        await self._wait()
        logger.info("Generated mock reply for ticket %s", ticket.id)
        return (
            f'Thank you for contacting us regarding "{ticket.title}". '
            "We've reviewed your issue and are working on a solution. "
            "We'll keep you updated on the progress. "
            "Is there anything else we can help you with?"
        )
