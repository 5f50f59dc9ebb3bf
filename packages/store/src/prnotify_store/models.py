"""Notification settings data models.

Decoupled from prnotify_core so the store layer can be used independently:
user ids are plain strings here, which is what the core's UserID wraps.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class UserSettings:
    """Per-user notification preferences.

    ``enabled`` is optional on purpose: a record with no explicit flag means
    the user never opted out, and is treated as enabled.
    """

    user_id: str
    enabled: bool | None = None

    @property
    def is_enabled(self) -> bool:
        return self.enabled is None or bool(self.enabled)


def default_settings(user_id: str) -> UserSettings:
    """Return the settings used when nothing is stored for ``user_id``."""
    return UserSettings(user_id=user_id, enabled=True)
