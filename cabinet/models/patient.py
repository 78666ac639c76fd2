from sqlalchemy import Column, Integer, String

from ..core.database import Base, InsertionOrderMixin


class Patient(InsertionOrderMixin, Base):
    __tablename__ = "patients"

    id = Column(String(32), primary_key=True, index=True)
    name = Column(String(255), nullable=False, index=True)
    age = Column(Integer, default=0)

    # Contact information
    address = Column(String(255), default="")
    phone = Column(String(20), default="")
    email = Column(String(255), nullable=True)

    # Medical context
    insurance = Column(String(100), default="")
    pathology = Column(String(255), default="")

    def __repr__(self):
        return f"<Patient(id={self.id}, name='{self.name}')>"
