# portal/store/state.py
import logging
from copy import copy
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Generic, Optional, TypeVar

from portal.client.http import ApiClient
from portal.core.errors import ApiError, SessionExpiredError

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


class Status(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


@dataclass
class ResourceState(Generic[T]):
    """Phase of a slice's last action plus the data it holds.

    ``error`` is the user-facing message of the last failure and
    ``error_code`` the upstream HTTP status behind it (None for network
    failures). Starting a new action clears both.
    """

    data: Optional[T] = None
    status: Status = Status.IDLE
    error: Optional[str] = None
    error_code: Optional[int] = None

    @property
    def is_loading(self) -> bool:
        return self.status is Status.LOADING

    def start(self) -> None:
        self.status = Status.LOADING
        self.error = None
        self.error_code = None

    def succeed(self) -> None:
        self.status = Status.SUCCESS

    def fail(self, message: str, code: Optional[int] = None) -> None:
        self.status = Status.ERROR
        self.error = message
        self.error_code = code

    def clear_error(self) -> None:
        self.error = None
        self.error_code = None
        if self.status is Status.ERROR:
            self.status = Status.IDLE

    def reset(self, data: Optional[T] = None) -> None:
        self.data = data
        self.status = Status.IDLE
        self.error = None
        self.error_code = None


class Slice(Generic[T]):
    """One domain's state and the async actions that change it.

    Actions never raise for upstream failures: the message lands in
    ``state.error`` and the action returns None. An expired session is the
    exception; it propagates so the portal logs the user out.
    """

    name = "slice"

    def __init__(self, client: ApiClient, initial: Optional[T] = None):
        self.client = client
        self._initial = initial
        self.state: ResourceState[T] = ResourceState(data=initial)

    @property
    def error(self) -> Optional[str]:
        return self.state.error

    def clear_error(self) -> None:
        self.state.clear_error()

    def reset(self) -> None:
        self.state.reset(copy(self._initial))

    async def _run(self, action: Awaitable[R], fallback: str) -> Optional[R]:
        self.state.start()
        try:
            result = await action
        except SessionExpiredError as e:
            self.state.fail(e.message, e.status_code)
            raise
        except ApiError as e:
            self.state.fail(e.server_message or fallback, e.status_code)
            logger.info("%s action failed (%s): %s", self.name, e.status_code, e.message)
            return None
        except ValueError as e:
            # a 2xx body that does not parse (pydantic ValidationError is a ValueError);
            # no status code, so the page reports a bad gateway
            self.state.fail(fallback)
            logger.warning("%s action got an unreadable upstream response: %s", self.name, e)
            return None
        self.state.succeed()
        return result
