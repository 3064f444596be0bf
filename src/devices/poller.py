"""
Active app polling for a single device
"""

import asyncio
import logging
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = 5


class ActiveAppPoller:
    """Background loop refreshing a device's foreground app.

    One loop task per device, so ticks never overlap. Query failures are
    swallowed; an unreachable device simply produces no notifications.
    """

    def __init__(self, device, interval: float = DEFAULT_POLL_INTERVAL):
        self.device = device
        self.interval = interval
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self):
        if self.running:
            return
        self._task = asyncio.create_task(self._run(), name=f"poll-{self.device.id}")
        logger.debug(f"Active app polling started for {self.device.id} (every {self.interval}s)")

    async def stop(self):
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        logger.debug(f"Active app polling stopped for {self.device.id}")

    async def tick(self) -> bool:
        """Poll once; return True if a change notification was emitted"""
        try:
            app = await self.device.client.active_app()
        except Exception as e:
            logger.debug(f"Poll failed for {self.device.id}: {e}")
            return False
        return self.device.update_active_app(app)

    async def _run(self):
        # Seeding already fetched the current app, so wait before the first tick
        while True:
            await asyncio.sleep(self.interval)
            await self.tick()
