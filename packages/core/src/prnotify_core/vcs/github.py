"""GitHub backend for BaseVCS, built on PyGithub.

PyGithub is blocking, so each operation runs its API calls in a worker
thread via asyncio.to_thread. PR ids are PR numbers rendered as strings;
comment ids are pull request review comment ids.
"""

from __future__ import annotations

import asyncio
import logging

from github import Github, UnknownObjectException

from prnotify_core.types import (
    PR,
    PRID,
    Comment,
    CommentID,
    Review,
    ReviewID,
    ReviewRequest,
    ReviewRequestID,
    UserID,
)
from prnotify_core.vcs.base import BaseVCS, thread_for

logger = logging.getLogger(__name__)

# GitHub shows deleted accounts as "ghost"; the API returns no user at all.
_GHOST = UserID("ghost")

_REVIEW_STATES = {
    "APPROVED": "ACCEPT",
    "CHANGES_REQUESTED": "REQUEST_CHANGES",
    "COMMENTED": "COMMENT",
}


def get_repo(repo_name: str, token: str):
    return Github(token).get_repo(repo_name)


def _login(user) -> UserID:
    return UserID(user.login) if user is not None else _GHOST


def _to_comment(pr_id: PRID, c) -> Comment:
    reply_to = getattr(c, "in_reply_to_id", None)
    return Comment(
        id=CommentID(str(c.id)),
        pr=pr_id,
        author=_login(c.user),
        body=c.body or "",
        in_reply_to=CommentID(str(reply_to)) if reply_to else None,
    )


class GitHubVCS(BaseVCS):
    """BaseVCS over one GitHub repository."""

    def __init__(self, repo):
        self._repo = repo

    @classmethod
    def from_token(cls, repo_name: str, token: str) -> GitHubVCS:
        return cls(get_repo(repo_name, token))

    def _pull(self, pr_id: PRID):
        return self._repo.get_pull(int(pr_id))

    async def get_pr(self, pr_id: PRID) -> PR | None:
        try:
            pull = await asyncio.to_thread(self._pull, pr_id)
        except UnknownObjectException:
            logger.debug("PR %s not found in %s", pr_id, self._repo.full_name)
            return None
        return PR(id=PRID(str(pull.number)), author=_login(pull.user), name=pull.title, url=pull.html_url)

    async def get_comments_by_pr(self, pr_id: PRID) -> list[Comment]:
        return await asyncio.to_thread(self._list_comments, pr_id)

    def _list_comments(self, pr_id: PRID) -> list[Comment]:
        return [_to_comment(pr_id, c) for c in self._pull(pr_id).get_review_comments()]

    async def get_comment_thread(self, pr_id: PRID, comment_id: CommentID) -> list[Comment]:
        comments = await self.get_comments_by_pr(pr_id)
        thread = thread_for(comments, comment_id)
        logger.debug("Thread of comment %s on PR %s has %d comment(s)", comment_id, pr_id, len(thread))
        return thread

    async def get_review_requests_by_pr(self, pr_id: PRID) -> list[ReviewRequest]:
        return await asyncio.to_thread(self._list_review_requests, pr_id)

    def _list_review_requests(self, pr_id: PRID) -> list[ReviewRequest]:
        """Review requests come from the issue timeline, which records who asked whom."""
        requests = []
        for event in self._pull(pr_id).as_issue().get_events():
            if event.event != "review_requested" or event.requested_reviewer is None:
                continue  # team requests carry no requested_reviewer
            requests.append(
                ReviewRequest(
                    id=ReviewRequestID(str(event.id)),
                    pr=pr_id,
                    requester=_login(event.actor),
                    requestee=_login(event.requested_reviewer),
                )
            )
        return requests

    async def get_reviews_by_pr(self, pr_id: PRID) -> list[Review]:
        return await asyncio.to_thread(self._list_reviews, pr_id)

    def _list_reviews(self, pr_id: PRID) -> list[Review]:
        reviews = []
        for r in self._pull(pr_id).get_reviews():
            status = _REVIEW_STATES.get(r.state)
            if status is None:
                continue  # PENDING and DISMISSED reviews notify nobody
            reviews.append(
                Review(
                    id=ReviewID(str(r.id)),
                    pr=pr_id,
                    reviewer=_login(r.user),
                    status=status,
                    body=r.body or None,
                )
            )
        return reviews

    async def create_comment(self, comment: Comment) -> None:
        await asyncio.to_thread(self._create_comment, comment)

    def _create_comment(self, comment: Comment) -> None:
        pull = self._pull(comment.pr)
        if comment.in_reply_to:
            pull.create_review_comment_reply(int(comment.in_reply_to), comment.body)
        else:
            pull.create_issue_comment(comment.body)
