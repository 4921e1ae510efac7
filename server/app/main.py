import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import settings
from .errors import DataSourceError
from .routers import balances, dashboard, date_ranges, expenses, financials, health, orders, profit

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title=f"{settings.branch_name} Dashboard API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
)


@app.exception_handler(DataSourceError)
def data_source_error_handler(request: Request, exc: DataSourceError):
    logger.warning("Request %s failed: %s", request.url.path, exc)
    return JSONResponse(status_code=502, content={"detail": str(exc)})


app.include_router(health.router)
app.include_router(orders.router)
app.include_router(profit.router)
app.include_router(balances.router)
app.include_router(financials.router)
app.include_router(expenses.router)
app.include_router(dashboard.router)
app.include_router(date_ranges.router)


@app.get("/")
def root():
    return {"status": "ok"}
