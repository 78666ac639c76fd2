from datetime import date
from fastapi import APIRouter, Depends, status
from typing import Optional

from ...api.deps import get_store, require_view
from ...core.periods import Period, local_now
from ...core.policy import Resource
from ...repositories.base import DataStore
from ...schemas.transaction import Transaction, TransactionCreate
from ...schemas.user import Profile
from ...schemas.views import FinanceSummary
from ...services.finance_service import FinanceService

router = APIRouter(prefix="/finance", tags=["Finance"])

finance_viewer = require_view(Resource.FINANCE)


@router.get("", response_model=FinanceSummary)
async def finance_summary(
    period: Period = Period.MONTH,
    anchor: Optional[date] = None,
    store: DataStore = Depends(get_store),
    current_user: Profile = Depends(finance_viewer)
):
    """Ledger of the period around the anchor date, split into gains and expenses."""
    service = FinanceService(store, current_user)
    return service.summary(period, anchor or local_now().date())


@router.post("/transactions", response_model=Transaction, status_code=status.HTTP_201_CREATED)
async def create_transaction(
    transaction_data: TransactionCreate,
    store: DataStore = Depends(get_store),
    current_user: Profile = Depends(finance_viewer)
):
    """Record an income or an expense."""
    return FinanceService(store, current_user).record(transaction_data)
