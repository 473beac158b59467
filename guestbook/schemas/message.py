from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

class MessageCreate(BaseModel):
    message: str

class MessageResponse(BaseModel):
    id: str
    author_id: Optional[str] = Field(default=None, alias="authorId")
    message: str
    likes: int = 0
    created_at: datetime = Field(alias="createdAt")

    class Config:
        populate_by_name = True
