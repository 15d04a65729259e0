# app/models/shops.py

from sqlalchemy import Column, Index, String, Text, DateTime, ForeignKey
from sqlalchemy.sql import func

from app.database import Base, generate_id, utcnow


class Shop(Base):
    __tablename__ = "shops"

    id = Column(String(36), primary_key=True, default=generate_id)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False)

    name = Column(String, nullable=False)
    description = Column(String(255), nullable=False)
    terms = Column(Text, nullable=False)

    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False)
    deleted_at = Column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        Index("ix_shops_user_id", "user_id"),
    )
