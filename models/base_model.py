#!/usr/bin/env python3
"""
Shared SQLAlchemy base and mixin for the Marketplace API.

- Integer autoincrement primary key (user ids travel inside tokens as ints)
- created_at / updated_at timestamps set by the database
- kwargs constructor that ignores a stray __class__ key

Notes:
- We use server-side defaults (func.now()) so timestamps are set consistently by the DB.
- For SQLite, func.now() maps to CURRENT_TIMESTAMP (second resolution), so
  anything ordered by created_at also orders by id to break ties.
"""

from __future__ import annotations

from sqlalchemy import Column, DateTime, Integer
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

# Declarative base for all models
Base = declarative_base()


class BaseModel:
    """
    Base mixin for all persistent models: id, created_at, updated_at.
    """

    id = Column(Integer, primary_key=True, autoincrement=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    def __init__(self, *args, **kwargs):
        for key, value in kwargs.items():
            if key != "__class__":
                setattr(self, key, value)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} id={self.id}>"
