"""Service configuration loaded from environment variables and a local .env file."""

from __future__ import annotations

import logging
import os
from decimal import Decimal
from typing import Dict, List

from dotenv import load_dotenv
from pydantic import BaseModel, model_validator

logger = logging.getLogger(__name__)


class Settings(BaseModel):
    database_url: str = "sqlite+pysqlite:///./seb_dashboard.db"
    branch_name: str = "SEB 4338"
    # customer_balance_aging is shared between branches; rows are scoped by owner
    customer_owner_id: str = "9465000006136989"
    vat_rate: Decimal = Decimal("0.15")
    currency: str = "SAR"
    cors_origins: List[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]
    log_level: str = "INFO"

    # Client polling cadence per dataset, in seconds
    orders_refresh_seconds: int = 60
    ledger_refresh_seconds: int = 30
    balances_refresh_seconds: int = 300
    financials_refresh_seconds: int = 300
    expenses_refresh_seconds: int = 300

    @model_validator(mode="after")
    def _check_vat_rate(self) -> Settings:
        if self.vat_rate < 0:
            raise ValueError("VAT rate cannot be negative.")
        if not self.customer_owner_id:
            logger.warning("CUSTOMER_OWNER_ID is not set; customer balances will be empty")
        return self

    @property
    def refresh_intervals(self) -> Dict[str, int]:
        return {
            "orders": self.orders_refresh_seconds,
            "due_from_seb": self.ledger_refresh_seconds,
            "fund_transfers": self.ledger_refresh_seconds,
            "dashboard_summary": self.ledger_refresh_seconds,
            "customer_balances": self.balances_refresh_seconds,
            "vendor_balances": self.balances_refresh_seconds,
            "financials": self.financials_refresh_seconds,
            "expenses": self.expenses_refresh_seconds,
        }

    @classmethod
    def from_env(cls, env_file: str | None = None) -> Settings:
        # values already in the environment win over the file
        load_dotenv(env_file)
        cors_raw = os.getenv("CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000")
        cors_origins = [origin.strip() for origin in cors_raw.split(",") if origin.strip()]

        return cls(
            database_url=os.getenv("DATABASE_URL", "sqlite+pysqlite:///./seb_dashboard.db"),
            branch_name=os.getenv("BRANCH_NAME", "SEB 4338"),
            customer_owner_id=os.getenv("CUSTOMER_OWNER_ID", "9465000006136989"),
            vat_rate=Decimal(os.getenv("VAT_RATE", "0.15")),
            currency=os.getenv("CURRENCY", "SAR"),
            cors_origins=cors_origins,
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            orders_refresh_seconds=int(os.getenv("ORDERS_REFRESH_SECONDS", "60")),
            ledger_refresh_seconds=int(os.getenv("LEDGER_REFRESH_SECONDS", "30")),
            balances_refresh_seconds=int(os.getenv("BALANCES_REFRESH_SECONDS", "300")),
            financials_refresh_seconds=int(os.getenv("FINANCIALS_REFRESH_SECONDS", "300")),
            expenses_refresh_seconds=int(os.getenv("EXPENSES_REFRESH_SECONDS", "300")),
        )


settings = Settings.from_env()
