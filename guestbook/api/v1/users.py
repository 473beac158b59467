from typing import List, Optional
from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from guestbook.database import get_db
from guestbook.repositories.user_repository import UserRepository
from guestbook.repositories.message_repository import MessageRepository
from guestbook.schemas.user import UserCreate, UserResponse
from guestbook.schemas.message import MessageCreate, MessageResponse
from guestbook.auth import get_current_user
from guestbook.models.message import Message
from guestbook.models.user import User

router = APIRouter()


def message_payload(message: Message) -> dict:
    return {
        "id": message.id,
        "author_id": message.author_id,
        "message": message.text,
        "likes": message.like_count,
        "created_at": message.created_at,
    }


async def user_payload(user: User, user_repo: UserRepository) -> dict:
    return {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "access_token": user.access_token,
        "message_ids": await user_repo.get_message_ids(user.id),
        "created_at": user.created_at,
    }


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register_user(user_data: UserCreate, db: AsyncSession = Depends(get_db)):
    """Register a user; the response carries the access token."""
    user_repo = UserRepository(db)
    user = await user_repo.register(user_data.name, user_data.email, user_data.password)
    return await user_payload(user, user_repo)


# Declared before /{user_id} so "messages" is never read as a user id
@router.get("/messages", response_model=List[MessageResponse])
async def list_messages(
    sort: Optional[str] = Query(None, description="dates, likes, or anything else for newest first"),
    db: AsyncSession = Depends(get_db),
):
    messages = await MessageRepository(db).list_messages(sort)
    return [message_payload(message) for message in messages]


@router.post("/{user_id}", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def post_message(
    user_id: str,
    message_data: MessageCreate,
    db: AsyncSession = Depends(get_db),
):
    """Post a guestbook message on behalf of ``user_id``"""
    message = await MessageRepository(db).create(message_data.message, author_id=user_id)
    return message_payload(message)


@router.post("/{user_id}/{post_id}/like", status_code=status.HTTP_201_CREATED)
async def like_message(
    user_id: str,
    post_id: str,
    db: AsyncSession = Depends(get_db),
):
    await MessageRepository(db).increment_like(post_id)
    return Response(status_code=status.HTTP_201_CREATED)


@router.get("/{user_id}", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def get_user_profile(
    user_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Profile of the authenticated user, whatever ``user_id`` says"""
    return await user_payload(current_user, UserRepository(db))
