# app/models/catalog.py
# Reference data: not owned by end users

from sqlalchemy import Column, String

from app.database import Base, generate_id


class Category(Base):
    __tablename__ = "categories"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String, unique=True, nullable=False)


class Brand(Base):
    __tablename__ = "brands"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String, unique=True, nullable=False)
