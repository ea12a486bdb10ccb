# app/core/errors.py


class ExpenseTrackerError(Exception):
    """Base de los errores del dominio."""


class ValidationError(ExpenseTrackerError):
    """Datos inválidos: se rechazan antes de persistir, nunca se corrigen en silencio."""


class NotFoundError(ExpenseTrackerError):
    pass


class PersistenceError(ExpenseTrackerError):
    """Fallo al confirmar cambios en el almacenamiento. No se reintenta."""
