"""Cooperative timer used to pace animations on the client's event loop."""

from __future__ import annotations

import asyncio


class AsyncioScheduler:
    """Schedules delays and background tasks on the running asyncio loop."""

    def schedule(self, delay):
        """Return an awaitable that completes after ``delay`` seconds."""
        return asyncio.sleep(delay)

    def spawn(self, coro):
        return asyncio.ensure_future(coro)
