"""Base use case."""

import asyncio
from abc import ABC, abstractmethod
from typing import Any, Awaitable

from enroll.domain.error import NotificationFailure


class BaseUseCase(ABC):
    """Base use case for orchestrating domain services."""

    @abstractmethod
    async def execute(self, request: Any) -> Any:
        pass


async def send_notification(send: Awaitable[None], timeout: float) -> None:
    """Await an email dispatch, bounded by timeout.

    Raises:
        NotificationFailure: If the notifier fails or does not finish in time
    """
    try:
        await asyncio.wait_for(send, timeout)
    except asyncio.TimeoutError as e:
        raise NotificationFailure("Email dispatch timed out") from e
