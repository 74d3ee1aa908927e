"""Declarative base for the Pledgebook tables (entities and key/value store)."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass
