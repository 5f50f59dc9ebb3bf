"""Console transport: prints messages instead of delivering them.

Default transport and the one behind `prnotify notify --shadow`, so a team
can see who would be notified before wiring up a real chat service.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape

from prnotify_core.chat.base import BaseChatService

if TYPE_CHECKING:
    from prnotify_core.types import UserID


class ConsoleChatService(BaseChatService):
    def __init__(self, console: Console | None = None):
        self._console = console or Console()

    async def send_message(self, to: UserID, message: str) -> None:
        self._console.print(f"[bold cyan]→ @{escape(to)}[/bold cyan]  {escape(message)}")
