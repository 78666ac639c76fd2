from datetime import date, datetime, time
from typing import List
import logging

from ..core.periods import Period, in_period, period_bounds, to_local
from ..core.policy import Action, Resource, can
from ..core.security import AuthorizationError
from ..models.transaction import TransactionType
from ..repositories.base import DataStore
from ..schemas.transaction import Transaction, TransactionCreate
from ..schemas.user import Profile
from ..schemas.views import FinanceSummary

logger = logging.getLogger(__name__)

LEDGER_RESOURCES = {
    TransactionType.GAIN: Resource.GAINS,
    TransactionType.EXPENSE: Resource.EXPENSES,
}


def transactions_in_period(
    transactions: List[Transaction], period: Period, anchor: date
) -> List[Transaction]:
    """Transactions dated inside the period, newest first."""
    selected = [t for t in transactions if in_period(t.date, period, anchor)]
    return sorted(selected, key=lambda t: to_local(t.date), reverse=True)


def total(transactions: List[Transaction], kind: TransactionType) -> float:
    return sum(t.amount for t in transactions if t.type == kind)


class FinanceService:
    def __init__(self, store: DataStore, user: Profile):
        self.store = store
        self.user = user

    def summary(self, period: Period, anchor: date) -> FinanceSummary:
        start, end = period_bounds(period, anchor)
        selected = transactions_in_period(self.store.transactions.list(), period, anchor)

        expenses = [t for t in selected if t.type == TransactionType.EXPENSE]
        summary = FinanceSummary(
            period=period,
            anchor=anchor,
            start=start,
            end=end,
            expenses=expenses,
            total_expenses=total(expenses, TransactionType.EXPENSE),
        )

        if can(self.user.role, Action.VIEW, Resource.GAINS):
            gains = [t for t in selected if t.type == TransactionType.GAIN]
            summary.gains = gains
            summary.total_gains = total(gains, TransactionType.GAIN)
            summary.net = summary.total_gains - summary.total_expenses

        return summary

    def record(self, data: TransactionCreate) -> Transaction:
        if not can(self.user.role, Action.CREATE, LEDGER_RESOURCES[data.type]):
            raise AuthorizationError(
                f"Role '{self.user.role.value}' cannot record '{data.type.value}' entries"
            )

        transaction = self.store.transactions.create({
            "type": data.type,
            "amount": data.amount,
            "category": data.category,
            "method": data.method,
            "date": datetime.combine(data.date, time.min),
        })
        logger.info(
            f"Recorded {transaction.type.value} of {transaction.amount:.2f} "
            f"({transaction.category}) by {self.user.username}"
        )
        return transaction
