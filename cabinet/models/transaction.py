from sqlalchemy import Column, String, DateTime, Float, Enum as SQLEnum
import enum

from ..core.database import Base, InsertionOrderMixin


class TransactionType(str, enum.Enum):
    GAIN = "gain"
    EXPENSE = "depense"


class PaymentMethod(str, enum.Enum):
    CASH = "Espèces"
    CARD = "TPE"
    CHEQUE = "Chèque"


class Transaction(InsertionOrderMixin, Base):
    __tablename__ = "transactions"

    id = Column(String(32), primary_key=True, index=True)
    type = Column(SQLEnum(TransactionType), nullable=False)
    category = Column(String(255), nullable=False)
    method = Column(SQLEnum(PaymentMethod), nullable=False)
    amount = Column(Float, nullable=False)
    date = Column(DateTime, nullable=False, index=True)

    def __repr__(self):
        return f"<Transaction(id={self.id}, type='{self.type}', amount={self.amount})>"
