"""Abstract settings store interface.

Any storage backend for notification preferences (Gist, SQLite, Postgres)
implements this interface. The notification handlers depend on BaseStore,
not on a concrete backend, so backends and test doubles are swappable.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from prnotify_store.models import UserSettings


class BaseStore(ABC):
    """Pluggable persistence layer for user notification settings.

    Reads must never report "not found": a user without a stored record gets
    default settings. Only transport or storage failures raise.
    """

    @abstractmethod
    async def get_user_settings(self, user_id: str) -> UserSettings:
        """Return the settings for ``user_id``, default-populated if absent."""

    @abstractmethod
    async def set_user_settings(self, user_id: str, settings: UserSettings) -> None:
        """Replace the stored settings for ``user_id``."""

    def close(self) -> None:
        """Release any resources held by the store (connections, file handles).

        Default is a no-op so callers can always call close() safely.
        """
