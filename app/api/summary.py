from datetime import datetime

from fastapi import APIRouter, Depends, Path
from sqlmodel import Session

from app.core.budget import monthly_summary, yearly_summary
from app.database import get_session
from app.models.category import Category
from app.schemas.summary import SummaryResponse, YearSummaryResponse
from app.services.budget_service import transactions_for_month, transactions_for_year
from app.store import Store

router = APIRouter(prefix="/summary", tags=["summary"])


@router.get("/{year}", response_model=YearSummaryResponse)
def get_year_summary(
    year: int = Path(..., ge=1900, le=9998),
    session: Session = Depends(get_session),
):
    """Ingresos, gastos y ahorro de cada mes del año."""
    return yearly_summary(year, transactions_for_year(Store(session), year))


@router.get("/{year}/{month}", response_model=SummaryResponse)
def get_summary(
    year: int = Path(..., ge=1900, le=9999),
    month: int = Path(..., ge=1, le=12),
    session: Session = Depends(get_session),
):
    """Ingresos, gastos, balance y desglose por categoría, por semana y por día del mes."""
    store = Store(session)
    start = datetime(year, month, 1)
    return monthly_summary(start, transactions_for_month(store, start), store.query(Category))
