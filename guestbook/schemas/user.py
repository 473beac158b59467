from pydantic import BaseModel, Field
from typing import List
from datetime import datetime

class UserCreate(BaseModel):
    name: str
    email: str
    password: str

class UserResponse(BaseModel):
    id: str
    name: str
    email: str
    access_token: str = Field(alias="accessToken")
    message_ids: List[str] = Field(default_factory=list, alias="messageIds")
    created_at: datetime = Field(alias="createdAt")

    class Config:
        populate_by_name = True

class SessionCreate(BaseModel):
    email: str
    password: str

class SessionResponse(BaseModel):
    name: str
    user_id: str = Field(alias="userId")
    access_token: str = Field(alias="accessToken")

    class Config:
        populate_by_name = True

class SecretResponse(BaseModel):
    secret: str
