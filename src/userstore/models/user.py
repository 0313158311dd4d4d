from datetime import datetime
from typing import Any, Dict

from sqlalchemy import Column, DateTime, Integer, String

from ..config import settings
from ..database import Base


class User(Base):
    """SQLAlchemy model for stored user credentials."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String, unique=True, index=True, nullable=False)
    password = Column(String, nullable=False)
    role = Column(String, default=settings.default_role, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    last_updated_at = Column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )

    def to_dict(self) -> Dict[str, Any]:
        """Return the column values as a plain mapping."""
        return {col.name: getattr(self, col.name) for col in self.__table__.columns}

    def __repr__(self) -> str:
        return f"<User id={self.id} username={self.username!r} role={self.role!r}>"
