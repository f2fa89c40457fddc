"""Application community – forum voting and comments."""
from __future__ import annotations

from fitview.adapters.http.gateway import FitnessApi
from fitview.application.cache import QueryCache
from fitview.kernel.errors import ForbiddenError, UnauthorizedError, ValidationError
from fitview.kernel.records import Comment, ForumPost, VoteType
from fitview.observability.logging import get_logger

logger = get_logger(__name__)

POST_QUERIES = ("communityPosts",)


def user_vote(post: ForumPost, email: str | None) -> VoteType | None:
    """The vote *email* has cast on *post*, if any."""
    if not email:
        return None
    for vote in post.votes:
        if vote.email == email:
            return vote.type
    return None


def next_vote(current: VoteType | None, requested: VoteType) -> VoteType | None:
    """Repeating the current vote withdraws it; anything else replaces it."""
    return None if current == requested else requested


def is_author(post: ForumPost, email: str | None, display_name: str | None = None) -> bool:
    if email and post.author_email and email == post.author_email:
        return True
    return bool(display_name and post.author and display_name == post.author)


class CommunityService:
    """Votes and comments on forum posts.

    With a *cache*, every accepted change drops the cached post pages so
    the next read reflects it.
    """

    def __init__(self, api: FitnessApi, cache: QueryCache | None = None) -> None:
        self._api = api
        self._cache = cache

    def _refresh(self) -> None:
        if self._cache is not None:
            self._cache.invalidate(POST_QUERIES)

    async def vote(self, post: ForumPost, email: str | None, requested: VoteType) -> VoteType | None:
        """Send the caller's toggled vote and return the vote now in effect."""
        if not email:
            raise UnauthorizedError("Please login to vote.")
        new_vote = next_vote(user_vote(post, email), requested)
        await self._api.vote(post.id, new_vote)
        self._refresh()
        logger.info("post_vote_submitted", post_id=post.id, vote=new_vote)
        return new_vote

    async def comment(
        self,
        post: ForumPost,
        email: str | None,
        text: str,
        display_name: str | None = None,
    ) -> Comment | None:
        if not email:
            raise UnauthorizedError("Please login to comment.")
        body = (text or "").strip()
        if not body:
            raise ValidationError(
                "Comment text is required",
                errors=[{"field": "comment", "error": "required"}],
            )
        if is_author(post, email, display_name):
            raise ForbiddenError("You cannot comment on your own post.")
        comment = await self._api.add_comment(post.id, body)
        self._refresh()
        logger.info("post_comment_submitted", post_id=post.id)
        return comment


__all__ = ["CommunityService", "POST_QUERIES", "is_author", "next_vote", "user_vote"]
