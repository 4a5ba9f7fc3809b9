# backend/tradelink/models/user.py

from sqlalchemy import Column, String, Boolean, DateTime, Enum as SAEnum

from tradelink.core.database import Base
from tradelink.models.base import gen_uuid, utcnow
from tradelink.models.enums import UserRole


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=gen_uuid)
    email = Column(String, unique=True, nullable=False, index=True)
    role = Column(SAEnum(UserRole, name="user_role", native_enum=False), nullable=False)
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    phone = Column(String, nullable=True)
    avatar = Column(String, nullable=True)

    # read by the matching verification gate
    verified = Column(Boolean, nullable=False, default=False)

    locale = Column(String, nullable=False, default="en")
    timezone = Column(String, nullable=False, default="Africa/Accra")
    currency = Column(String, nullable=False, default="USD")

    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
