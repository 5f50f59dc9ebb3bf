"""Domain records shared by the handlers and the VCS collaborators.

Identifiers are all strings on the wire, but each kind gets its own NewType
so a CommentID can't be passed where a PRID is expected without a type
checker noticing.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, NewType, Union

UserID = NewType("UserID", str)
PRID = NewType("PRID", str)
CommentID = NewType("CommentID", str)
ReviewRequestID = NewType("ReviewRequestID", str)
ReviewID = NewType("ReviewID", str)

ReviewStatus = Literal["ACCEPT", "REQUEST_CHANGES", "COMMENT"]


@dataclass(frozen=True)
class PR:
    id: PRID
    author: UserID
    name: str
    url: str


@dataclass(frozen=True)
class Comment:
    id: CommentID
    pr: PRID
    author: UserID
    body: str
    in_reply_to: CommentID | None = None


@dataclass(frozen=True)
class ReviewRequest:
    id: ReviewRequestID
    pr: PRID
    requester: UserID
    requestee: UserID


@dataclass(frozen=True)
class Review:
    id: ReviewID
    pr: PRID
    reviewer: UserID
    status: ReviewStatus
    body: str | None = None


Event = Union[Comment, ReviewRequest, Review]
