"""Concurrent CDN image existence checks."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence

import httpx

logger = logging.getLogger(__name__)

_USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"


class ImageProber:
    """Checks candidate image URLs with HEAD requests under a shared deadline.

    Each probe has its own timeout and the whole batch has one deadline. Probes
    still running when the deadline passes are abandoned: they keep running,
    their results are discarded, and they are tracked in ``pending_probes`` so
    ``aclose`` can cancel them at shutdown. With ``cancel_pending`` the
    abandoned probes are cancelled at the deadline instead.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        *,
        probe_timeout: float = 5.0,
        batch_timeout: float = 10.0,
        cancel_pending: bool = False,
    ) -> None:
        self._http = http_client
        self.probe_timeout = probe_timeout
        self.batch_timeout = batch_timeout
        self.cancel_pending = cancel_pending
        self.pending_probes: set[asyncio.Task[bool]] = set()

    async def exists(self, url: str) -> bool:
        """Return True when the CDN answers the HEAD request with a 2xx status.

        ``probe_timeout`` bounds the whole request, not each httpx phase.
        """
        try:
            async with asyncio.timeout(self.probe_timeout):
                response = await self._http.head(
                    url,
                    headers={"User-Agent": _USER_AGENT},
                    timeout=self.probe_timeout,
                )
        except TimeoutError:
            logger.debug("Timed out checking image %s", url)
            return False
        except httpx.HTTPError as exc:
            logger.debug("Error checking image %s: %s", url, exc)
            return False
        return response.is_success

    async def filter_existing(self, urls: Sequence[str]) -> list[str]:
        """Return the URLs whose probe succeeded before the batch deadline.

        Result order follows the input order.
        """
        if not urls:
            return []

        tasks = {asyncio.create_task(self.exists(url)): url for url in urls}
        done, pending = await asyncio.wait(tasks, timeout=self.batch_timeout)

        if pending:
            logger.warning(
                "Timeout reached while checking images; %d of %d probes unfinished",
                len(pending),
                len(tasks),
            )
            for task in pending:
                if self.cancel_pending:
                    task.cancel()
                else:
                    self.pending_probes.add(task)
                    task.add_done_callback(self.pending_probes.discard)

        existing = {tasks[task] for task in done if self._succeeded(task)}
        return [url for url in urls if url in existing]

    async def aclose(self) -> None:
        """Cancel abandoned probes that are still running."""
        leftovers = list(self.pending_probes)
        for task in leftovers:
            task.cancel()
        if leftovers:
            await asyncio.gather(*leftovers, return_exceptions=True)
        self.pending_probes.clear()

    @staticmethod
    def _succeeded(task: asyncio.Task[bool]) -> bool:
        if task.cancelled():
            return False
        error = task.exception()
        if error is not None:
            logger.warning("Image probe raised unexpectedly: %s", error)
            return False
        return bool(task.result())
