from datetime import date, datetime
from typing import List, Optional
from pydantic import BaseModel

from ..core.periods import Period
from .appointment import Appointment
from .transaction import Transaction
from .user import Profile


# Calendar
class CalendarSlot(BaseModel):
    hour: int
    appointments: List[Appointment] = []


class CalendarDay(BaseModel):
    date: date
    is_today: bool = False
    slots: List[CalendarSlot]


class CalendarWeek(BaseModel):
    week_start: date
    previous_anchor: date
    next_anchor: date
    hours: List[int]
    therapist_filter: str
    can_edit: bool
    therapists: List[Profile]
    days: List[CalendarDay]


# Finance
class FinanceSummary(BaseModel):
    period: Period
    anchor: date
    start: datetime
    end: datetime
    expenses: List[Transaction]
    total_expenses: float
    # Only filled for roles allowed to read income
    gains: Optional[List[Transaction]] = None
    total_gains: Optional[float] = None
    net: Optional[float] = None


# Dashboard
class ChartPoint(BaseModel):
    key: int
    label: str
    gain: float = 0.0
    depense: float = 0.0


class DashboardKpis(BaseModel):
    appointments_count: int
    patients_count: int
    pending_count: int
    net_profit: Optional[float] = None


class DashboardResponse(BaseModel):
    period: Period
    anchor: date
    kpis: DashboardKpis
    series: List[ChartPoint]


# Navigation
class RouteDecision(BaseModel):
    path: str
    allowed: bool
    redirect_to: Optional[str] = None


class MenuEntry(BaseModel):
    path: str
    label: str
