from sqlalchemy import Column, String
from sqlalchemy.orm import relationship
from .base import BaseModel

class User(BaseModel):
    __tablename__ = "users"
    
    name = Column(String(100), unique=True, index=True, nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    access_token = Column(String(128), unique=True, index=True, nullable=False)
    
    messages = relationship(
        "Message",
        back_populates="author",
        order_by="Message.created_at",
    )
