import logging
from dataclasses import dataclass
from typing import Dict, Optional, List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, or_
from sqlalchemy.exc import IntegrityError

from guestbook.config import settings
from guestbook.errors import AuthError, ValidationError
from guestbook.models.base import new_id, utcnow
from guestbook.models.message import Message
from guestbook.models.user import User
from guestbook.auth import generate_access_token, get_password_hash, verify_password

logger = logging.getLogger(__name__)


@dataclass
class SessionInfo:
    name: str
    user_id: str
    access_token: str


class UserRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def register(self, name: str, email: str, password: str) -> User:
        """Create a user with a hashed password and a fresh access token.

        Raises ValidationError with per-field detail for empty name/email,
        short passwords and already registered names or emails.
        """
        errors = self._validate(name, email, password)
        if not errors:
            errors = await self._duplicate_fields(name, email)
        if errors:
            raise ValidationError("Could not create user", errors)

        db_user = User(
            id=new_id(),
            name=name,
            email=email,
            password_hash=get_password_hash(password),
            access_token=generate_access_token(),
            created_at=utcnow(),
        )
        self.db.add(db_user)
        try:
            await self.db.commit()
        except IntegrityError:
            # A concurrent registration won the unique index
            await self.db.rollback()
            errors = await self._duplicate_fields(name, email)
            raise ValidationError(
                "Could not create user",
                errors or {"user": "User could not be stored"},
            )

        await self.db.refresh(db_user)
        logger.info("Registered user %s", db_user.id)
        return db_user

    async def login(self, email: str, password: str) -> SessionInfo:
        user = await self.get_by_email(email) if email else None
        if not verify_password(password or "", user.password_hash if user else None):
            logger.info("Failed login attempt")
            raise AuthError()

        return SessionInfo(name=user.name, user_id=user.id, access_token=user.access_token)

    async def find_by_token(self, token: str) -> Optional[User]:
        result = await self.db.execute(select(User).where(User.access_token == token))
        return result.scalar_one_or_none()

    async def get_by_id(self, user_id: str) -> Optional[User]:
        result = await self.db.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def get_by_name(self, name: str) -> Optional[User]:
        result = await self.db.execute(select(User).where(User.name == name))
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> Optional[User]:
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def get_message_ids(self, user_id: str) -> List[str]:
        """Ids of the user's messages, oldest first."""
        result = await self.db.execute(
            select(Message.id)
            .where(Message.author_id == user_id)
            .order_by(Message.created_at.asc(), Message.id.asc())
        )
        return list(result.scalars().all())

    def _validate(self, name: str, email: str, password: str) -> Dict[str, str]:
        errors = {}
        if not name or not name.strip():
            errors["name"] = "Name is required"
        if not email or not email.strip():
            errors["email"] = "Email is required"
        if not password or len(password) < settings.PASSWORD_MIN_LENGTH:
            errors["password"] = (
                f"Password must be at least {settings.PASSWORD_MIN_LENGTH} characters"
            )
        elif len(password.encode("utf-8")) > settings.PASSWORD_MAX_BYTES:
            errors["password"] = (
                f"Password must be at most {settings.PASSWORD_MAX_BYTES} bytes"
            )
        return errors

    async def _duplicate_fields(self, name: str, email: str) -> Dict[str, str]:
        result = await self.db.execute(
            select(User.name, User.email).where(
                or_(User.name == name, User.email == email)
            )
        )
        errors = {}
        for existing_name, existing_email in result.all():
            if existing_name == name:
                errors["name"] = "Name is already taken"
            if existing_email == email:
                errors["email"] = "Email is already registered"
        return errors
