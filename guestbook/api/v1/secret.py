from fastapi import APIRouter, Depends

from guestbook.auth import get_current_user
from guestbook.config import settings
from guestbook.models.user import User
from guestbook.schemas.user import SecretResponse

router = APIRouter()

@router.get("", response_model=SecretResponse)
async def get_secret(current_user: User = Depends(get_current_user)):
    return {"secret": settings.SECRET_MESSAGE}
