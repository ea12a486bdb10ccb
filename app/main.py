import logging

from fastapi import FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from contextlib import asynccontextmanager
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlmodel import Session

from app.core.clock import get_clock
from app.core.config import CORS_ORIGINS, LOG_LEVEL, PROCESS_DUE_ON_STARTUP
from app.core.errors import NotFoundError, PersistenceError, ValidationError
from app.database import create_db_and_tables, engine
from app.api import accounts, budgets, categories, subscriptions, summary, transactions
from app.services.subscription_service import subscription_service

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

def process_due_on_startup():
    with Session(engine) as session:
        return subscription_service.process_due(session, get_clock().now())

@asynccontextmanager
async def lifespan(app: FastAPI):
    create_db_and_tables()
    # Al arrancar la app se materializan las suscripciones vencidas, fuera del event loop
    if PROCESS_DUE_ON_STARTUP:
        await run_in_threadpool(process_due_on_startup)
    yield

app = FastAPI(title="Expense Tracker", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse(status_code=400, content={"detail": str(exc)})

@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"detail": str(exc)})

@app.exception_handler(PersistenceError)
async def persistence_error_handler(request: Request, exc: PersistenceError):
    return JSONResponse(status_code=500, content={"detail": str(exc)})

app.include_router(categories.router)
app.include_router(transactions.router)
app.include_router(subscriptions.router)
app.include_router(budgets.router)
app.include_router(accounts.router)
app.include_router(summary.router)

@app.get("/")
def root():
    return {"message": "Servidor de gastos personales"}
