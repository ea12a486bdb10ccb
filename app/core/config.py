# app/core/config.py

import os
from dotenv import load_dotenv

load_dotenv()  # Carga las variables de entorno desde .env


def _as_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./expense_tracker.db")
SQL_ECHO = _as_bool(os.getenv("SQL_ECHO", "false"))  # echo=True imprime las queries

# "fast_forward" o "catch_up" (ver app/core/materializer.py)
REACTIVATION_POLICY = os.getenv("REACTIVATION_POLICY", "fast_forward")
PROCESS_DUE_ON_STARTUP = _as_bool(os.getenv("PROCESS_DUE_ON_STARTUP", "true"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",")
    if origin.strip()
]
