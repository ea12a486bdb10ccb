# app/core/clock.py

from datetime import datetime
from typing import Protocol


class Clock(Protocol):
    def now(self) -> datetime: ...


class SystemClock:
    """Reloj de pared local (naive), igual que el calendario del dispositivo."""

    def now(self) -> datetime:
        return datetime.now()


class FixedClock:
    def __init__(self, instant: datetime):
        self.instant = instant

    def now(self) -> datetime:
        return self.instant

    def set(self, instant: datetime) -> None:
        self.instant = instant


_system_clock = SystemClock()


def get_clock() -> Clock:
    # Dependencia de FastAPI; los tests la sobrescriben con un FixedClock
    return _system_clock
