"""GistStore: zero-infrastructure team settings via a GitHub Gist.

A team that already runs prnotify from GitHub Actions can keep everyone's
notification preferences next to the code: a private Gist readable by every
org member, edited with the same token the workflow uses.

Data format: a single JSON file named `prnotify_settings.json` inside the
Gist, holding an object keyed by user id:

    {"alice": {"enabled": false}, "bob": {}}

GitHub API failures are not swallowed here: a settings read that silently
fell back to defaults would notify users who opted out.
"""

from __future__ import annotations

import asyncio
import json
import logging

from github import Github

from prnotify_store.base import BaseStore
from prnotify_store.models import UserSettings, default_settings

logger = logging.getLogger(__name__)

_GIST_FILENAME = "prnotify_settings.json"


class GistStore(BaseStore):
    """Stores notification settings in a GitHub Gist as one JSON object.

    Every call reads the whole file; set_user_settings() rewrites it. Fine for
    teams of hundreds of users, not for a public service.

    The Gist ID is stored in .prnotify.yml under `gist_id`. Running
    `prnotify init` creates the Gist and writes the ID automatically.
    """

    def __init__(self, gist_id: str, token: str):
        self._gist_id = gist_id
        self._gh = Github(token)

    def _get_gist(self):
        return self._gh.get_gist(self._gist_id)

    async def get_user_settings(self, user_id: str) -> UserSettings:
        records = await asyncio.to_thread(self._load)
        entry = records.get(user_id)
        if entry is None:
            return default_settings(user_id)
        return UserSettings(user_id=user_id, enabled=entry.get("enabled"))

    async def set_user_settings(self, user_id: str, settings: UserSettings) -> None:
        await asyncio.to_thread(self._save, user_id, settings)

    def _load(self) -> dict:
        return self._read_records(self._get_gist())

    def _save(self, user_id: str, settings: UserSettings) -> None:
        gist = self._get_gist()
        records = self._read_records(gist)
        records[user_id] = self._to_dict(settings)
        gist.edit(files={_GIST_FILENAME: {"content": json.dumps(records, indent=2, sort_keys=True)}})
        logger.debug("Updated %s in gist %s", user_id, self._gist_id)

    def _read_records(self, gist) -> dict:
        """Read the current JSON object from the Gist file, or return {}."""
        file_obj = gist.files.get(_GIST_FILENAME)
        if file_obj is None:
            return {}
        try:
            data = json.loads(file_obj.content or "{}")
        except json.JSONDecodeError:
            logger.warning("Gist %s holds malformed %s; treating as empty", self._gist_id, _GIST_FILENAME)
            return {}
        return data if isinstance(data, dict) else {}

    @staticmethod
    def _to_dict(settings: UserSettings) -> dict:
        if settings.enabled is None:
            return {}
        return {"enabled": settings.enabled}
