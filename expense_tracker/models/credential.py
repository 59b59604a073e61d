# expense_tracker/models/credential.py
import enum
from sqlalchemy import Column, Integer, String, Boolean, Enum
from expense_tracker.core.database import Base
from .mixins import TimestampMixin

class Role(str, enum.Enum):
    ADMIN = "ADMIN"
    USER = "USER"

class Credential(TimestampMixin, Base):
    """Login identity. Separate from Person, which is a plain profile record."""
    __tablename__ = "credentials"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(length=50), unique=True, index=True, nullable=False)
    email = Column(String(length=255), unique=True, index=True, nullable=False)
    hashed_password = Column(String(length=255), nullable=False)
    role = Column(Enum(Role, name="credential_role"), default=Role.USER, nullable=False)
    is_enabled = Column(Boolean, default=True, nullable=False)

    def __repr__(self):
        return f"<Credential username={self.username} role={self.role}>"
