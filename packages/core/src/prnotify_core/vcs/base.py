"""Abstract version-control backend.

The handlers only ever see BaseVCS, so a GitHub, GitLab or in-memory backend
can be swapped in without touching notification logic. Every operation is a
coroutine: backends talk to remote APIs and the handlers fan out over them.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from prnotify_core.types import UserID

if TYPE_CHECKING:
    from prnotify_core.types import PR, PRID, Comment, CommentID, Review, ReviewRequest

MENTION_RE = re.compile(r"@([a-zA-Z_\-]+)")


def extract_mentions(text: str | None) -> list[UserID]:
    """Return the users mentioned as ``@name`` in ``text``, first-seen order, no repeats."""
    if not text:
        return []
    return [UserID(name) for name in dict.fromkeys(MENTION_RE.findall(text))]


def thread_for(comments: list[Comment], comment_id: CommentID) -> list[Comment]:
    """Return every comment in the reply thread containing ``comment_id``.

    Replies are grouped by the root reached through ``in_reply_to`` links, so
    both flat threads (every reply points at the root) and nested ones work.
    Input order is preserved. Returns [] if ``comment_id`` is not present.

    If ``in_reply_to`` links form a cycle, the smallest id in the cycle is its
    root, so every comment on or hanging off the cycle shares one thread.
    """
    by_id = {c.id: c for c in comments}
    if comment_id not in by_id:
        return []

    def root_of(c: Comment) -> CommentID:
        path: list[CommentID] = []
        while c.in_reply_to is not None and c.in_reply_to in by_id:
            if c.id in path:
                return min(path[path.index(c.id) :])
            path.append(c.id)
            c = by_id[c.in_reply_to]
        return c.id

    root = root_of(by_id[comment_id])
    return [c for c in comments if root_of(c) == root]


class BaseVCS(ABC):
    """Read access to PRs and their discussion, plus comment creation."""

    @abstractmethod
    async def get_pr(self, pr_id: PRID) -> PR | None:
        """Return the PR, or None if it does not exist."""

    @abstractmethod
    async def get_comments_by_pr(self, pr_id: PRID) -> list[Comment]:
        """Return every comment on the PR, oldest first."""

    @abstractmethod
    async def get_comment_thread(self, pr_id: PRID, comment_id: CommentID) -> list[Comment]:
        """Return the thread containing ``comment_id``, oldest first."""

    async def get_mentions(self, text: str) -> list[UserID]:
        """Return the users mentioned in ``text``.

        Backends whose mention syntax differs, or that resolve mentions
        against a user directory, override this.
        """
        return extract_mentions(text)

    @abstractmethod
    async def get_review_requests_by_pr(self, pr_id: PRID) -> list[ReviewRequest]:
        """Return the review requests made on the PR."""

    @abstractmethod
    async def get_reviews_by_pr(self, pr_id: PRID) -> list[Review]:
        """Return the submitted reviews on the PR."""

    @abstractmethod
    async def create_comment(self, comment: Comment) -> None:
        """Post ``comment`` to the PR, as a reply when ``in_reply_to`` is set."""
