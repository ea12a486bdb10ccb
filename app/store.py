# app/store.py

"""
Almacén de colecciones sobre una sesión de SQLModel.

Ofrece insert/delete/query/commit para todas las entidades y ejecuta las
cascadas a nivel de aplicación (los modelos solo tienen claves foráneas).
"""

import logging
from datetime import datetime
from typing import List, Optional, Type, TypeVar

from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, SQLModel, select

from app.core.errors import PersistenceError
from app.models.account import Account
from app.models.budget import CategoryBudget, MonthlyBudget
from app.models.category import Category
from app.models.recurring_subscription import RecurringSubscription
from app.models.transaction import Transaction

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=SQLModel)


class Store:
    def __init__(self, session: Session):
        self.session = session

    def insert(self, entity: M) -> M:
        self.session.add(entity)
        return entity

    def get(self, model: Type[M], entity_id: int) -> Optional[M]:
        return self.session.get(model, entity_id)

    def query(self, model: Type[M], *criteria, order_by=None) -> List[M]:
        statement = select(model)
        if criteria:
            statement = statement.where(*criteria)
        if order_by is not None:
            statement = statement.order_by(order_by)
        return list(self.session.exec(statement).all())

    def delete(self, entity: SQLModel) -> None:
        if isinstance(entity, Category):
            # Categoría: borra transacciones, suscripciones y asignaciones
            for subscription in self.query(RecurringSubscription, RecurringSubscription.category_id == entity.id):
                self.delete(subscription)
            for transaction in self.query(Transaction, Transaction.category_id == entity.id):
                self.session.delete(transaction)
            for allocation in self.query(CategoryBudget, CategoryBudget.category_id == entity.id):
                self.session.delete(allocation)
        elif isinstance(entity, RecurringSubscription):
            # Suscripción: las transacciones generadas se conservan
            for transaction in self.query(Transaction, Transaction.recurring_subscription_id == entity.id):
                transaction.recurring_subscription_id = None
                self.session.add(transaction)
        elif isinstance(entity, MonthlyBudget):
            for allocation in self.query(CategoryBudget, CategoryBudget.monthly_budget_id == entity.id):
                self.session.delete(allocation)
        elif isinstance(entity, Account):
            for transaction in self.query(Transaction, Transaction.account_id == entity.id):
                transaction.account_id = None
                self.session.add(transaction)

        # Sin relaciones ORM no hay orden de dependencias: los hijos van primero
        self.flush()
        self.session.delete(entity)

    def compare_and_swap_schedule(
        self,
        subscription_id: int,
        observed_next_due: datetime,
        last_transaction_date: datetime,
        next_due_date: datetime,
    ) -> bool:
        """
        Actualiza el calendario solo si next_due_date sigue siendo el observado.
        Devuelve False si otro proceso ya lo movió.
        """
        statement = (
            update(RecurringSubscription)
            .where(
                RecurringSubscription.id == subscription_id,
                RecurringSubscription.next_due_date == observed_next_due,
                RecurringSubscription.is_active == True,  # noqa: E712
            )
            .values(last_transaction_date=last_transaction_date, next_due_date=next_due_date)
            .execution_options(synchronize_session=False)
        )
        try:
            result = self.session.execute(statement)
        except SQLAlchemyError as exc:
            self._fail("No se pudo actualizar la suscripción", exc)
        return result.rowcount == 1

    def flush(self) -> None:
        try:
            self.session.flush()
        except SQLAlchemyError as exc:
            self._fail("No se pudieron escribir los cambios", exc)

    def commit(self) -> None:
        try:
            self.session.commit()
        except SQLAlchemyError as exc:
            self._fail("No se pudieron guardar los cambios", exc)

    def rollback(self) -> None:
        self.session.rollback()

    def refresh(self, entity: M) -> M:
        self.session.refresh(entity)
        return entity

    def _fail(self, message: str, exc: Exception):
        self.session.rollback()
        logger.error("%s: %s", message, exc)
        raise PersistenceError(message) from exc
