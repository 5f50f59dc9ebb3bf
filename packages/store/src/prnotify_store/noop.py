"""No-op store, the default when no store is configured.

Every user is treated as opted in and nothing is persisted. Using a NoOpStore
rather than None lets the handlers always consult the store.
"""

from __future__ import annotations

from prnotify_store.base import BaseStore
from prnotify_store.models import UserSettings, default_settings


class NoOpStore(BaseStore):
    """Returns default settings for everyone and discards writes."""

    async def get_user_settings(self, user_id: str) -> UserSettings:
        return default_settings(user_id)

    async def set_user_settings(self, user_id: str, settings: UserSettings) -> None:
        pass  # intentional no-op
