from datetime import date
from typing import Dict, List
import logging

from ..core.periods import Period, in_period, to_local
from ..core.policy import Action, Resource, can
from ..models.appointment import AppointmentStatus
from ..models.transaction import TransactionType
from ..repositories.base import DataStore
from ..schemas.transaction import Transaction
from ..schemas.user import Profile
from ..schemas.views import ChartPoint, DashboardKpis, DashboardResponse
from .finance_service import total, transactions_in_period

logger = logging.getLogger(__name__)

MONTH_LABELS = [
    "janv.", "févr.", "mars", "avr.", "mai", "juin",
    "juil.", "août", "sept.", "oct.", "nov.", "déc.",
]


def bucket_of(moment, period: Period):
    """Return the ``(key, label)`` chart bucket of a timestamp.

    A year is split by month, a month by day and a day by hour.
    """
    moment = to_local(moment)
    if period is Period.YEAR:
        return moment.month, MONTH_LABELS[moment.month - 1]
    if period is Period.MONTH:
        return moment.day, str(moment.day)
    return moment.hour, f"{moment.hour}h"


def build_series(transactions: List[Transaction], period: Period) -> List[ChartPoint]:
    points: Dict[int, ChartPoint] = {}
    for transaction in transactions:
        key, label = bucket_of(transaction.date, Period(period))
        point = points.setdefault(key, ChartPoint(key=key, label=label))
        if transaction.type == TransactionType.GAIN:
            point.gain += transaction.amount
        else:
            point.depense += transaction.amount
    return [points[key] for key in sorted(points)]


class DashboardService:
    def __init__(self, store: DataStore, user: Profile):
        self.store = store
        self.user = user

    def overview(self, period: Period, anchor: date) -> DashboardResponse:
        appointments = [
            a for a in self.store.appointments.list()
            if in_period(a.start_time, period, anchor)
        ]
        transactions = transactions_in_period(self.store.transactions.list(), period, anchor)

        kpis = DashboardKpis(
            appointments_count=len(appointments),
            patients_count=len(self.store.patients.list()),
            pending_count=sum(1 for a in appointments if a.status == AppointmentStatus.PENDING),
        )
        if can(self.user.role, Action.VIEW, Resource.NET_PROFIT):
            kpis.net_profit = (
                total(transactions, TransactionType.GAIN)
                - total(transactions, TransactionType.EXPENSE)
            )

        return DashboardResponse(
            period=period,
            anchor=anchor,
            kpis=kpis,
            series=build_series(transactions, period),
        )
