"""Default notification text.

Any callable with the signature of format_notification() can be handed to
Handlers instead, e.g. one that renders Slack blocks or Markdown.
"""

from __future__ import annotations

from prnotify_core.types import PR, Comment, Event, Review, ReviewRequest

PREVIEW_CHARS = 280

_REVIEW_VERBS = {
    "ACCEPT": "approved",
    "REQUEST_CHANGES": "requested changes on",
    "COMMENT": "commented on",
}


def _preview(text: str) -> str:
    text = " ".join(text.split())
    if len(text) <= PREVIEW_CHARS:
        return text
    return text[: PREVIEW_CHARS - 1].rstrip() + "…"


def format_comment(pr: PR, comment: Comment) -> str:
    return f"{comment.author} commented on {pr.name} ({pr.url}): {_preview(comment.body)}"


def format_review_request(pr: PR, request: ReviewRequest) -> str:
    return f"{request.requester} requested your review on {pr.name} ({pr.url})"


def format_review(pr: PR, review: Review) -> str:
    text = f"{review.reviewer} {_REVIEW_VERBS[review.status]} {pr.name} ({pr.url})"
    if review.body:
        text += f": {_preview(review.body)}"
    return text


def format_notification(pr: PR, event: Event) -> str:
    """Render the message sent to every recipient of ``event`` on ``pr``."""
    if isinstance(event, Comment):
        return format_comment(pr, event)
    if isinstance(event, ReviewRequest):
        return format_review_request(pr, event)
    if isinstance(event, Review):
        return format_review(pr, event)
    raise TypeError(f"Unsupported event type: {type(event).__name__}")
