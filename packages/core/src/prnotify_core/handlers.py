"""Notification handlers: who hears about a comment, review request or review.

Each handler runs the same pipeline for its event:

    fetch the PR → resolve candidate recipients → drop the actor and anyone
    who opted out → send every survivor the formatted message

Collaborators are injected, never constructed here, so tests pass doubles.
All fan-outs use asyncio.gather: every branch is started before any is
awaited, and the first failure fails the whole event. Handlers keep no state
between calls and may run concurrently.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Iterable
from typing import TYPE_CHECKING, TypeVar

from prnotify_core.errors import InternalError
from prnotify_core.formatting import format_notification

if TYPE_CHECKING:
    from prnotify_core.chat.base import BaseChatService
    from prnotify_core.types import PR, Comment, Event, Review, ReviewRequest, UserID
    from prnotify_core.vcs.base import BaseVCS
    from prnotify_store.base import BaseStore

    Formatter = Callable[[PR, Event], str]

logger = logging.getLogger(__name__)

T = TypeVar("T")


def uniq(items: Iterable[T]) -> list[T]:
    """Drop repeats, keeping the first occurrence of each item."""
    return list(dict.fromkeys(items))


async def gather_filter(items: list[T], predicate: Callable[[T], Awaitable[bool]]) -> list[T]:
    """Evaluate ``predicate`` for all items concurrently, then keep the true ones.

    Input order is preserved. If any predicate raises, the error propagates.
    """
    results = await asyncio.gather(*(predicate(item) for item in items))
    return [item for item, keep in zip(items, results) if keep]


class Handlers:
    def __init__(
        self,
        store: BaseStore,
        vcs: BaseVCS,
        chat_service: BaseChatService,
        formatter: Formatter = format_notification,
    ):
        self.store = store
        self.vcs = vcs
        self.chat_service = chat_service
        self.formatter = formatter

    # ------------------------------------------------------------------ #
    # Recipient resolution                                                #
    # ------------------------------------------------------------------ #

    async def ok_to_message_user(self, user_id: UserID, pr: PR) -> bool:
        """Return whether ``user_id`` currently accepts notifications.

        ``pr`` is accepted so per-PR preferences can be added without
        changing callers; today the setting is global per user.
        """
        settings = await self.store.get_user_settings(user_id)
        return settings.is_enabled

    async def get_involved_users(self, pr: PR, comment: Comment) -> list[UserID]:
        """Return the PR author plus every author and mentioned user in the comment's thread."""
        if pr.id != comment.pr:
            raise InternalError(f"Mismatched PR ({pr.id}) and comment ({comment.id}) in get_involved_users")

        thread = await self.vcs.get_comment_thread(pr.id, comment.id)

        async def involved_in(c: Comment) -> list[UserID]:
            mentions = await self.vcs.get_mentions(c.body)
            return [c.author, *mentions]

        per_comment = await asyncio.gather(*(involved_in(c) for c in thread))
        return uniq([pr.author, *(user for users in per_comment for user in users)])

    async def _require_pr(self, event: Event) -> PR:
        pr = await self.vcs.get_pr(event.pr)
        if pr is None:
            raise InternalError(f"No PR for ID {event.pr}")
        return pr

    async def _filter_recipients(self, candidates: list[UserID], actor: UserID, pr: PR) -> list[UserID]:
        async def wants_message(user_id: UserID) -> bool:
            return user_id != actor and await self.ok_to_message_user(user_id, pr)

        return await gather_filter(candidates, wants_message)

    async def _dispatch(self, recipients: list[UserID], message: str) -> None:
        await asyncio.gather(*(self.chat_service.send_message(r, message) for r in recipients))

    # ------------------------------------------------------------------ #
    # Event handlers                                                       #
    # ------------------------------------------------------------------ #

    async def handle_new_comment(self, comment: Comment) -> list[UserID]:
        """Notify everyone involved in the comment's thread except its author.

        Returns the users a message was sent to.
        """
        pr = await self._require_pr(comment)

        candidates = uniq([pr.author, *(await self.get_involved_users(pr, comment))])
        logger.debug("Comment %s on PR %s: candidates %s", comment.id, pr.id, candidates)

        recipients = await self._filter_recipients(candidates, comment.author, pr)
        await self._dispatch(recipients, self.formatter(pr, comment))
        logger.info("Comment %s on PR %s: notified %s", comment.id, pr.id, recipients)
        return recipients

    async def handle_new_review_request(self, review_request: ReviewRequest) -> list[UserID]:
        """Notify the requested reviewer, if they accept notifications.

        The preference check is awaited and honored before sending.
        """
        pr = await self._require_pr(review_request)

        requestee = review_request.requestee
        if not await self.ok_to_message_user(requestee, pr):
            logger.info("Review request %s on PR %s: %s opted out", review_request.id, pr.id, requestee)
            return []

        await self.chat_service.send_message(requestee, self.formatter(pr, review_request))
        logger.info("Review request %s on PR %s: notified %s", review_request.id, pr.id, requestee)
        return [requestee]

    async def handle_new_review(self, review: Review) -> list[UserID]:
        """Notify the PR author and anyone mentioned in the review body, except the reviewer."""
        pr = await self._require_pr(review)

        mentions = await self.vcs.get_mentions(review.body) if review.body else []
        candidates = uniq([pr.author, *mentions])
        logger.debug("Review %s on PR %s: candidates %s", review.id, pr.id, candidates)

        recipients = await self._filter_recipients(candidates, review.reviewer, pr)
        await self._dispatch(recipients, self.formatter(pr, review))
        logger.info("Review %s on PR %s: notified %s", review.id, pr.id, recipients)
        return recipients
