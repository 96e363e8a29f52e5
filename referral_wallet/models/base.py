"""
Declarative base.

All models inherit from Base so a single metadata object describes the
schema for create_all and Alembic.
"""

from sqlalchemy.ext.asyncio import AsyncAttrs
from sqlalchemy.orm import DeclarativeBase


class Base(AsyncAttrs, DeclarativeBase):
    """Base class for all database models."""
