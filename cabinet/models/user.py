from sqlalchemy import Column, String, Enum as SQLEnum

from ..core.database import Base, InsertionOrderMixin
from ..core.security import UserRole


class User(InsertionOrderMixin, Base):
    __tablename__ = "users"

    id = Column(String(32), primary_key=True, index=True)
    username = Column(String(100), unique=True, index=True, nullable=False)
    full_name = Column(String(255), nullable=False)
    # Stored as typed; credentials are compared verbatim
    password = Column(String(255), nullable=False)
    role = Column(SQLEnum(UserRole), nullable=False)

    def __repr__(self):
        return f"<User(id={self.id}, username='{self.username}', role='{self.role}')>"
