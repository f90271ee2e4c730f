# portal/client/refresh.py
import asyncio
import logging
from typing import Awaitable, Callable, Optional

logger = logging.getLogger(__name__)


class RefreshCoordinator:
    """Single-flight wrapper around a token refresh call.

    The first caller of :meth:`acquire` runs ``refresh``; everyone who calls
    :meth:`acquire` while that call is running waits on the same future and
    gets the same token, or the same exception. The in-flight future is
    dropped before waiters are woken, so a caller arriving after settlement
    starts a new refresh instead of reading a stale result.
    """

    def __init__(self, refresh: Callable[[], Awaitable[str]]):
        self._refresh = refresh
        self._inflight: Optional[asyncio.Future] = None
        self.refresh_count = 0

    @property
    def in_flight(self) -> bool:
        return self._inflight is not None

    async def acquire(self) -> str:
        if self._inflight is not None:
            logger.debug("Refresh already in flight, waiting for it")
            # shield: a cancelled waiter must not cancel the shared refresh
            return await asyncio.shield(self._inflight)

        fut = asyncio.get_running_loop().create_future()
        self._inflight = fut
        self.refresh_count += 1
        try:
            token = await self._refresh()
        except asyncio.CancelledError:
            self._release()
            fut.cancel()
            raise
        except Exception as exc:
            self._release()
            fut.set_exception(exc)
            # mark retrieved; the leader re-raises it below
            fut.exception()
            raise
        self._release()
        fut.set_result(token)
        return token

    def _release(self) -> None:
        self._inflight = None
