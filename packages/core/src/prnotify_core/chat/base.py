"""Abstract outbound messaging transport."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from prnotify_core.types import UserID


class BaseChatService(ABC):
    """Delivers one text message to one user.

    send_message() should raise on delivery failure. The handlers do not
    retry; the error fails the event that triggered the send.
    """

    @abstractmethod
    async def send_message(self, to: UserID, message: str) -> None:
        """Deliver ``message`` to user ``to``."""

    async def aclose(self) -> None:
        """Release any connections held by the transport."""
