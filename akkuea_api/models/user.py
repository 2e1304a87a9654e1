"""User model definitions."""

import enum
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Enum, Integer, String
from akkuea_api.database import Base


class Role(str, enum.Enum):
    """Roles a user can register with."""

    EDUCATOR = "Educator"
    STUDENT = "Student"
    DESIGNER = "Designer"


class User(Base):
    """Represents an application user."""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    role = Column(
        Enum(Role, name="user_role", native_enum=False, values_callable=lambda roles: [role.value for role in roles]),
        nullable=False,
    )
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False)
