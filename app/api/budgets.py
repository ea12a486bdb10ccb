# app/api/budgets.py

from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Path
from sqlmodel import Session

from app.database import get_session
from app.schemas.budget import BudgetOverviewRead, MonthlyBudgetSave
from app.services.budget_service import delete_budget, load_overview, save_budget
from app.store import Store

router = APIRouter(prefix="/budgets", tags=["budgets"])


def _month(year: int, month: int) -> datetime:
    return datetime(year, month, 1)


@router.put("/{year}/{month}", response_model=BudgetOverviewRead)
def put_monthly_budget(
    data: MonthlyBudgetSave,
    year: int = Path(..., ge=1900, le=9999),
    month: int = Path(..., ge=1, le=12),
    session: Session = Depends(get_session),
):
    """
    Guarda el presupuesto del mes. Si ya existe se sobrescribe y sus
    asignaciones por categoría se reemplazan por las enviadas.
    """
    store = Store(session)
    allocations = {}
    for allocation in data.allocations:
        if allocation.category_id in allocations:
            raise HTTPException(status_code=400, detail="Categoría repetida en las asignaciones.")
        allocations[allocation.category_id] = allocation.allocated_amount

    save_budget(store, _month(year, month), data.total_budget, allocations)
    return load_overview(store, _month(year, month))


@router.get("/{year}/{month}", response_model=BudgetOverviewRead)
def get_monthly_budget(
    year: int = Path(..., ge=1900, le=9999),
    month: int = Path(..., ge=1, le=12),
    session: Session = Depends(get_session),
):
    overview = load_overview(Store(session), _month(year, month))
    if overview is None:
        raise HTTPException(status_code=404, detail="No hay presupuesto para ese mes.")
    return overview


@router.delete("/{year}/{month}")
def delete_monthly_budget(
    year: int = Path(..., ge=1900, le=9999),
    month: int = Path(..., ge=1, le=12),
    session: Session = Depends(get_session),
):
    if not delete_budget(Store(session), _month(year, month)):
        raise HTTPException(status_code=404, detail="No hay presupuesto para ese mes.")
    return {"detail": "Presupuesto eliminado correctamente"}
