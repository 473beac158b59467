"""Password hashing, access-token issuance and the request session gate."""

import logging
import secrets
from typing import Optional

import bcrypt
from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from guestbook.config import settings
from guestbook.database import get_db
from guestbook.errors import ForbiddenError
from guestbook.models.user import User

logger = logging.getLogger(__name__)

ACCESS_TOKEN_BYTES = 64

# Checked against when the email is unknown so both login failures cost the same
_DUMMY_HASH = bcrypt.hashpw(b"dummy-password", bcrypt.gensalt())


def get_password_hash(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, password_hash: Optional[str]) -> bool:
    """Check a plaintext password against a stored bcrypt hash.

    A ``None`` hash, or a password too long for bcrypt, still runs a full
    comparison against a dummy value and returns False.
    """
    encoded = password.encode("utf-8")
    if password_hash is None or len(encoded) > settings.PASSWORD_MAX_BYTES:
        bcrypt.checkpw(b"dummy-password", _DUMMY_HASH)
        return False
    return bcrypt.checkpw(encoded, password_hash.encode("utf-8"))


def generate_access_token() -> str:
    """128 hex characters from the OS CSPRNG."""
    return secrets.token_hex(ACCESS_TOKEN_BYTES)


def extract_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    token = authorization.strip()
    if token.lower().startswith("bearer "):
        token = token[len("bearer "):].strip()
    return token or None


async def get_current_user(
    request: Request,
    authorization: Optional[str] = Header(None),
    db: AsyncSession = Depends(get_db),
) -> User:
    from guestbook.repositories.user_repository import UserRepository

    token = extract_token(authorization)
    user = await UserRepository(db).find_by_token(token) if token else None
    if user is None:
        logger.info("Rejected request to %s without a valid access token", request.url.path)
        raise ForbiddenError()

    request.state.user = user
    return user
