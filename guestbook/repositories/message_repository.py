import logging
from enum import Enum
from typing import Optional, List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError

from guestbook.config import settings
from guestbook.errors import NotFoundError, ValidationError
from guestbook.models.base import new_id, utcnow
from guestbook.models.message import Message
from guestbook.models.user import User

logger = logging.getLogger(__name__)


class SortKey(str, Enum):
    DATES = "dates"
    LIKES = "likes"
    NEWEST = "newest"

    @classmethod
    def parse(cls, value: Optional[str]) -> "SortKey":
        """Unknown or missing values fall back to newest first."""
        if value == cls.DATES.value:
            return cls.DATES
        if value == cls.LIKES.value:
            return cls.LIKES
        return cls.NEWEST


_ORDERINGS = {
    SortKey.DATES: (Message.created_at.asc(), Message.id.asc()),
    SortKey.LIKES: (Message.like_count.desc(), Message.created_at.desc(), Message.id.asc()),
    SortKey.NEWEST: (Message.created_at.desc(), Message.id.asc()),
}


class MessageRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, text: str, author_id: Optional[str] = None) -> Message:
        """Store a guestbook message of 5 to 140 characters."""
        if text is None or not (
            settings.MESSAGE_MIN_LENGTH <= len(text) <= settings.MESSAGE_MAX_LENGTH
        ):
            raise ValidationError(
                "Could not save post to the database",
                {
                    "message": (
                        f"Message must be between {settings.MESSAGE_MIN_LENGTH} and "
                        f"{settings.MESSAGE_MAX_LENGTH} characters"
                    )
                },
            )

        # The author link is kept only when it names a real user
        if author_id is not None and await self.db.get(User, author_id) is None:
            author_id = None

        message = Message(
            id=new_id(),
            author_id=author_id,
            text=text,
            like_count=0,
            created_at=utcnow(),
        )
        self.db.add(message)
        await self.db.commit()
        await self.db.refresh(message)
        return message

    async def get_by_id(self, message_id: str) -> Optional[Message]:
        result = await self.db.execute(select(Message).where(Message.id == message_id))
        return result.scalar_one_or_none()

    async def increment_like(self, message_id: str) -> None:
        """Add one like in a single UPDATE so concurrent likes are never lost."""
        try:
            result = await self.db.execute(
                update(Message)
                .where(Message.id == message_id)
                .values(like_count=Message.like_count + 1)
            )
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.warning("Like on %s failed: %s", message_id, e)
            raise NotFoundError("Could not find the post", {"postId": "Could not find the post"})

        if result.rowcount == 0:
            logger.info("Like on unknown post %s", message_id)
            raise NotFoundError("Could not find the post", {"postId": "Could not find the post"})

    async def list_messages(self, sort: Optional[str] = None, limit: Optional[int] = None) -> List[Message]:
        """Up to ``limit`` messages (20 by default) in the requested order."""
        if limit is None:
            limit = settings.MESSAGE_LIST_LIMIT
        ordering = _ORDERINGS[SortKey.parse(sort)]
        result = await self.db.execute(
            select(Message)
            .order_by(*ordering)
            .limit(limit)
        )
        return list(result.scalars().all())
