"""Shared base classes for domain entities"""

from datetime import datetime
from uuid import uuid4
from pydantic import BaseModel as PydanticModel, ConfigDict
from sqlmodel import SQLModel


def generate_uuid() -> str:
    """Opaque unique identifier for new records"""
    return uuid4().hex


def local_now() -> datetime:
    """Current time in the device's local timezone (tz-aware)"""
    return datetime.now().astimezone()


class BaseModel(SQLModel):
    """Base for entities backed by a database table"""
    pass


class EntityModel(PydanticModel):
    """
    Base for entities stored as JSON blobs

    Fields carry camelCase aliases matching the stored document shape;
    Python code may use either the field name or the alias.
    """

    model_config = ConfigDict(populate_by_name=True)
