from sqlalchemy import Column, Integer, Float, ForeignKey, DateTime
from sqlalchemy.sql import func
from app.db import Base

class TypingScore(Base):
    __tablename__ = "typing_scores"
    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False)
    duration = Column(Integer, nullable=False)            # segundos configurados (no el restante)
    words = Column(Integer, nullable=False)               # palabras correctas
    words_per_minute = Column(Float, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
