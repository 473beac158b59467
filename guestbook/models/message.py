from sqlalchemy import Column, Integer, ForeignKey, String
from sqlalchemy.orm import relationship
from .base import BaseModel

class Message(BaseModel):
    __tablename__ = "messages"
    
    # Best-effort association, may stay empty
    author_id = Column(String(32), ForeignKey("users.id"), nullable=True, index=True)
    text = Column(String(140), nullable=False)
    like_count = Column(Integer, nullable=False, index=True)
    
    author = relationship("User", back_populates="messages")
