from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from guestbook.database import get_db
from guestbook.repositories.user_repository import UserRepository
from guestbook.schemas.user import SessionCreate, SessionResponse

router = APIRouter()

@router.post("", response_model=SessionResponse)
async def login_user(credentials: SessionCreate, db: AsyncSession = Depends(get_db)):
    session = await UserRepository(db).login(credentials.email, credentials.password)
    return {"name": session.name, "user_id": session.user_id, "access_token": session.access_token}
