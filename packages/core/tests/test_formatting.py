"""Tests for default notification text."""

import pytest
from prnotify_fakes import make_comment, make_pr

from prnotify_core.formatting import PREVIEW_CHARS, format_notification
from prnotify_core.types import Review, ReviewRequest

PR = make_pr("3", author="alice")


def test_comment_message():
    text = format_notification(PR, make_comment("c1", "bob", "Why  is\nthis needed?", pr="3"))
    assert text == "bob commented on Fix login bug (https://github.com/owner/repo/pull/3): Why is this needed?"


def test_review_request_message():
    request = ReviewRequest(id="rr", pr="3", requester="alice", requestee="bob")
    assert format_notification(PR, request) == (
        "alice requested your review on Fix login bug (https://github.com/owner/repo/pull/3)"
    )


@pytest.mark.parametrize(
    "status, verb",
    [("ACCEPT", "approved"), ("REQUEST_CHANGES", "requested changes on"), ("COMMENT", "commented on")],
)
def test_review_message_verbs(status, verb):
    review = Review(id="r", pr="3", reviewer="carol", status=status)
    assert format_notification(PR, review) == f"carol {verb} Fix login bug (https://github.com/owner/repo/pull/3)"


def test_review_message_includes_body():
    review = Review(id="r", pr="3", reviewer="carol", status="ACCEPT", body="@dave looks good")
    assert format_notification(PR, review).endswith(": @dave looks good")


def test_long_body_is_truncated():
    text = format_notification(PR, make_comment("c1", "bob", "x" * (PREVIEW_CHARS * 2), pr="3"))
    body = text.split(": ", 1)[1]
    assert len(body) == PREVIEW_CHARS
    assert body.endswith("…")


def test_unknown_event_type_raises():
    with pytest.raises(TypeError):
        format_notification(PR, object())
