"""
Delayed deletion of ticket channels.

Each closing ticket owns one asyncio task that sleeps for the configured
delay and then deletes the channel. The task is cancelled when the channel
disappears through another path or when the bot shuts down.
"""

import asyncio
from typing import Dict

import discord

from recruitbot.util.logger import get_logger

logger = get_logger("ticket_closer")


class TicketCloser:
    """Registry of pending ticket deletions keyed by channel id."""

    def __init__(self):
        self._pending: Dict[int, asyncio.Task] = {}

    def is_closing(self, channel_id: int) -> bool:
        task = self._pending.get(channel_id)
        return task is not None and not task.done()

    def schedule(self, channel: discord.abc.GuildChannel, delay_seconds: float) -> bool:
        """Schedule the deletion of ``channel``.

        Returns False, scheduling nothing, when a deletion is already pending.
        """
        if self.is_closing(channel.id):
            return False

        task = asyncio.create_task(self._delete_after(channel, delay_seconds), name=f"close-ticket-{channel.id}")
        self._pending[channel.id] = task
        task.add_done_callback(lambda completed: self._forget(channel.id, completed))
        logger.info(
            "[TICKET CLOSER] Channel %s will be deleted in %.1fs (%d pending)",
            channel.id,
            delay_seconds,
            self.pending_count(),
        )
        return True

    def cancel(self, channel_id: int) -> bool:
        """Cancel a pending deletion; returns whether one was pending."""
        task = self._pending.pop(channel_id, None)
        if task is None or task.done():
            return False
        task.cancel()
        logger.debug("[TICKET CLOSER] Cancelled pending deletion of channel %s", channel_id)
        return True

    def pending_count(self) -> int:
        return sum(1 for task in self._pending.values() if not task.done())

    async def shutdown(self) -> None:
        """Cancel every pending deletion and wait for the tasks to finish."""
        tasks = list(self._pending.values())
        self._pending.clear()
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        logger.info("[TICKET CLOSER] Shutdown complete (%d pending deletions cancelled)", len(tasks))

    def _forget(self, channel_id: int, completed: asyncio.Task) -> None:
        if self._pending.get(channel_id) is completed:
            del self._pending[channel_id]
        if not completed.cancelled() and completed.exception() is not None:
            logger.error(
                "[TICKET CLOSER] Unexpected error while closing channel %s",
                channel_id,
                exc_info=completed.exception(),
            )

    async def _delete_after(self, channel: discord.abc.GuildChannel, delay_seconds: float) -> None:
        await asyncio.sleep(delay_seconds)
        try:
            await channel.delete(reason="Ticket de recrutement fermé")
        except discord.HTTPException as exc:
            # The channel may already be gone; nobody is left to tell.
            logger.debug("[TICKET CLOSER] Deleting channel %s failed: %s", channel.id, exc)
            return
        logger.info("[TICKET CLOSER] Deleted ticket channel %s", channel.id)


# Global ticket closer instance
ticket_closer = TicketCloser()
