from typing import Sequence

from app.models.facebook import FacebookComment, FacebookPost
from app.repos.base import BaseRepo


class FacebookPostRepo(BaseRepo[FacebookPost]):
    """Repository for Facebook page posts."""

    def __init__(self) -> None:
        super().__init__(FacebookPost)

    async def delete_by_recipient_ids(self, page_ids: Sequence[str]) -> int:
        if not page_ids:
            return 0
        return await self.delete_where(FacebookPost.recipient_id.in_(page_ids))


class FacebookCommentRepo(BaseRepo[FacebookComment]):
    """Repository for Facebook post comments."""

    def __init__(self) -> None:
        super().__init__(FacebookComment)

    async def delete_by_recipient_ids(self, page_ids: Sequence[str]) -> int:
        if not page_ids:
            return 0
        return await self.delete_where(FacebookComment.recipient_id.in_(page_ids))
