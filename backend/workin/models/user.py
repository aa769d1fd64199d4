from __future__ import annotations

from sqlalchemy import Boolean, Column, DateTime, Integer, String, func

from workin.database import Base


USER_ROLES = ("candidate", "hr")


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(120), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    phone_number = Column(String(40), nullable=False)
    password_hash = Column(String(512), nullable=False)
    role = Column(String(20), default="candidate", nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, server_default=func.now())
