from datetime import date, datetime
from decimal import Decimal

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.config import settings
from app.db import Base, get_db
from app.main import app
from app.models import (
    customer_balance_aging_view,
    due_from_seb_table,
    expenses_view,
    financial_summary_view,
    fund_transfers_table,
    profit_analysis_view,
    transfer_orders_view,
    vendor_balance_aging_view,
)


def _override(engine):
    TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)

    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    return TestingSessionLocal


def _insert_rows(db, table, rows):
    # one statement per row; the rows do not all set the same columns
    for row in rows:
        db.execute(table.insert(), row)


def _engine():
    return create_engine(
        "sqlite+pysqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )


def build_client() -> TestClient:
    engine = _engine()
    Base.metadata.create_all(engine)
    TestingSessionLocal = _override(engine)

    with TestingSessionLocal() as db:
        _insert_rows(
            db,
            transfer_orders_view,
            [
                {
                    "date": date(2024, 3, 1),
                    "order_number": "TO-100",
                    "item_name": "Tyre",
                    "qty": Decimal("4"),
                    "cost": Decimal("400"),
                    "costwvat": Decimal("460"),
                    "total": Decimal("400"),
                    "totalwvat": Decimal("460"),
                    "source_warehouse": "Main",
                    "destination_warehouse": "SEB 4338",
                    "status": "transferred",
                },
                {
                    "date": date(2024, 3, 1),
                    "order_number": "TO-100",
                    "item_name": "Tyre",
                    "qty": Decimal("4"),
                    "cost": Decimal("400"),
                    "costwvat": Decimal("460"),
                    "total": Decimal("400"),
                    "totalwvat": Decimal("460"),
                    "source_warehouse": "Main",
                    "destination_warehouse": "SEB 4338",
                    "status": "transferred",
                },
                {
                    "date": date(2024, 3, 5),
                    "order_number": "TO-101",
                    "item_name": "Filter",
                    "qty": Decimal("-2"),
                    "cost": Decimal("-100"),
                    "costwvat": Decimal("-115"),
                    "total": Decimal("-100"),
                    "totalwvat": Decimal("-115"),
                    "source_warehouse": "SEB 4338",
                    "destination_warehouse": "Main",
                    "status": "transferred",
                },
            ],
        )
        _insert_rows(
            db,
            profit_analysis_view,
            [
                {
                    "inv_no": "INV-1",
                    "inv_date": date(2024, 2, 10),
                    "item": "Service",
                    "qty": Decimal("1"),
                    "sale_price": Decimal("200"),
                    "sale_with_vat": Decimal("230"),
                    "cost": Decimal("150"),
                    "profit": Decimal("50"),
                    "customer_name": "Fleet Co",
                },
                {
                    "inv_no": "INV-2",
                    "inv_date": date(2024, 3, 3),
                    "item": "Tyre",
                    "qty": Decimal("2"),
                    "sale_price": Decimal("400"),
                    "sale_with_vat": Decimal("460"),
                    "cost": Decimal("300"),
                    "profit": Decimal("100"),
                    "customer_name": "Walk-in",
                },
            ],
        )
        _insert_rows(
            db,
            customer_balance_aging_view,
            [
                {
                    "customer_id": "C-1",
                    "customer_owner": settings.customer_owner_id,
                    "customer_name": "Fleet Co",
                    "total_balance": Decimal("900"),
                    "current_0_30": Decimal("400"),
                    "past_due_61_90": Decimal("500"),
                    "total_invoices": 3,
                },
                {
                    "customer_id": "C-2",
                    "customer_owner": settings.customer_owner_id,
                    "customer_name": "Alpha Rentals",
                    "total_balance": Decimal("100"),
                    "current_0_30": Decimal("100"),
                    "total_invoices": 1,
                },
                {
                    "customer_id": "C-3",
                    "customer_owner": "other-branch",
                    "customer_name": "Elsewhere Ltd",
                    "total_balance": Decimal("5000"),
                    "past_due_over_180": Decimal("5000"),
                    "total_invoices": 9,
                },
            ],
        )
        _insert_rows(
            db,
            vendor_balance_aging_view,
            [
                {
                    "vendor_id": "V-1",
                    "vendor_name": "Parts Supplier",
                    "total_outstanding": Decimal("800"),
                    "past_due_over_120": Decimal("800"),
                    "outstanding_bills_count": 2,
                    "risk_category": "High Risk",
                },
                {
                    "vendor_id": "V-2",
                    "vendor_name": "Settled Vendor",
                    "total_outstanding": Decimal("0"),
                    "outstanding_bills_count": 0,
                },
            ],
        )
        _insert_rows(
            db,
            financial_summary_view,
            [
                {
                    "month": "2024-03",
                    "month_date": date(2024, 3, 1),
                    "invoice_count": 2,
                    "total_sales": Decimal("1000"),
                    "cost_of_goods_sold": Decimal("700"),
                    "gross_profit": Decimal("300"),
                    "operating_expenses": Decimal("100"),
                    "net_profit": Decimal("200"),
                    "net_profit_margin": Decimal("20"),
                },
                {
                    "month": "2024-02",
                    "month_date": date(2024, 2, 1),
                    "invoice_count": "n/a",
                    "total_sales": Decimal("1000"),
                    "cost_of_goods_sold": Decimal("900"),
                    "gross_profit": Decimal("100"),
                    "operating_expenses": Decimal("50"),
                    "net_profit": Decimal("50"),
                    "net_profit_margin": Decimal("5"),
                },
            ],
        )
        _insert_rows(
            db,
            expenses_view,
            [
                {
                    "id": 1,
                    "expense_date": date(2024, 3, 4),
                    "account_name": "Fuel",
                    "description": "Diesel",
                    "full_description": "Diesel for tow truck",
                    "amount": Decimal("150"),
                    "created_at": datetime(2024, 3, 4, 9, 0),
                    "year_month": "2024-03",
                },
                {
                    "id": 2,
                    "expense_date": date(2024, 2, 20),
                    "account_name": "Rent",
                    "description": "Workshop rent",
                    "full_description": "Workshop rent February",
                    "amount": Decimal("1200"),
                    "year_month": "2024-02",
                },
            ],
        )
        _insert_rows(
            db,
            due_from_seb_table,
            [
                {"date": "2024-03-02", "description": "Parts", "amount": "SAR 1,000.00"},
                {"date": "2024-03-06", "description": "Labour", "amount": "250"},
            ],
        )
        _insert_rows(
            db,
            fund_transfers_table,
            [
                {
                    "transaction_date": "2024-03-07",
                    "transaction_number": "FT-9",
                    "from_account": "SEB",
                    "to_account": "Branch",
                    "amount": "700",
                }
            ],
        )
        db.commit()

    return TestClient(app)


def test_orders_are_grouped_with_duplicate_lines_kept():
    client = build_client()

    response = client.get("/api/orders")

    assert response.status_code == 200
    payload = response.json()
    assert [group["order_number"] for group in payload["groups"]] == ["TO-101", "TO-100"]
    duplicate = payload["groups"][1]
    assert duplicate["item_count"] == 2
    assert Decimal(str(duplicate["total_value"])) == Decimal("920")
    assert payload["totals"]["order_count"] == 2
    assert payload["totals"]["item_count"] == 3
    assert Decimal(str(payload["totals"]["total_value"])) == Decimal("805")


def test_orders_summary_splits_direction():
    client = build_client()

    payload = client.get("/api/orders/summary").json()

    assert payload["total_orders"] == 3
    assert Decimal(str(payload["inbound_value"])) == Decimal("920")
    assert Decimal(str(payload["outbound_value"])) == Decimal("-115")


def test_orders_export_is_csv_attachment():
    client = build_client()

    response = client.get("/api/orders/export")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert "transfer_orders.csv" in response.headers["content-disposition"]
    lines = response.text.strip().split("\n")
    assert lines[0] == "Order Number,Date,Item Name,Quantity,Cost,Cost w/VAT,Total,Total w/VAT"
    assert len(lines) == 4


def test_profit_analysis_custom_range():
    client = build_client()

    response = client.get("/api/profit-analysis", params={"start": "2024-03-01", "end": "2024-03-31"})

    assert response.status_code == 200
    payload = response.json()
    assert payload["preset"] == "custom"
    assert [group["invoice_number"] for group in payload["groups"]] == ["INV-2"]
    assert Decimal(str(payload["totals"]["profit_margin"])) == Decimal("25")


def test_profit_analysis_without_filters_returns_everything():
    client = build_client()

    payload = client.get("/api/profit-analysis").json()

    assert payload["preset"] == "all"
    assert payload["start"] is None
    assert [group["invoice_number"] for group in payload["groups"]] == ["INV-2", "INV-1"]


def test_profit_analysis_rejects_unknown_preset_and_bad_custom_range():
    client = build_client()

    assert client.get("/api/profit-analysis", params={"preset": "next_decade"}).status_code == 400
    assert client.get("/api/profit-analysis", params={"preset": "custom", "start": "2024-03-01"}).status_code == 400
    assert client.get("/api/profit-analysis", params={"start": "2024-03-31", "end": "2024-03-01"}).status_code == 400


def test_profit_analysis_accepts_a_single_bound():
    client = build_client()

    since = client.get("/api/profit-analysis", params={"start": "2024-03-01"}).json()
    until = client.get("/api/profit-analysis", params={"end": "2024-02-28"}).json()

    assert since["preset"] == "custom"
    assert since["start"] == "2024-03-01"
    assert since["end"] is None
    assert [group["invoice_number"] for group in since["groups"]] == ["INV-2"]
    assert [group["invoice_number"] for group in until["groups"]] == ["INV-1"]


def test_customer_balances_are_scoped_searched_and_tiered():
    client = build_client()

    payload = client.get("/api/balances/customers").json()

    assert [row["customer_id"] for row in payload["balances"]] == ["C-1", "C-2"]
    assert payload["balances"][0]["risk_tier"] == "Medium Risk"
    assert payload["balances"][1]["risk_tier"] == "Current"
    assert payload["totals"]["customer_count"] == 2
    assert Decimal(str(payload["totals"]["total_balance"])) == Decimal("1000")

    searched = client.get("/api/balances/customers", params={"search": "alpha"}).json()
    assert [row["customer_id"] for row in searched["balances"]] == ["C-2"]
    assert searched["totals"]["customer_count"] == 2


def test_customer_balances_sort_by_risk_tier():
    client = build_client()

    payload = client.get(
        "/api/balances/customers", params={"sort_field": "risk_tier", "sort_direction": "asc"}
    ).json()

    assert [row["risk_tier"] for row in payload["balances"]] == ["Current", "Medium Risk"]


def test_customer_balances_reject_unknown_sort_field():
    client = build_client()

    response = client.get("/api/balances/customers", params={"sort_field": "customer_owner"})

    assert response.status_code == 400


def test_vendor_balances_list_only_outstanding_vendors():
    client = build_client()

    payload = client.get("/api/balances/vendors").json()

    assert [row["vendor_id"] for row in payload["balances"]] == ["V-1"]
    assert payload["balances"][0]["risk_tier"] == "Very High Risk"
    assert payload["totals"]["vendor_count"] == 1


def test_financials_overview_and_rollups():
    client = build_client()

    overview = client.get("/api/financials", params={"as_of": "2024-03-20"}).json()
    assert overview["available_months"] == ["2024-03", "2024-02"]
    assert overview["months"][0]["margin_tier"] == "Excellent"
    assert overview["metrics"]["best_month"] == "2024-03"
    assert overview["metrics"]["previous_month"]["month"] == "2024-02"

    rollup = client.get("/api/financials/rollup", params={"selection": "ytd", "as_of": "2024-03-20"}).json()
    assert rollup["month"] == "Year 2024"
    assert Decimal(str(rollup["net_profit_margin"])) == Decimal("12.5")


def test_financials_rollup_reads_malformed_counts_as_zero():
    client = build_client()

    response = client.get("/api/financials/rollup", params={"selection": "all"})

    assert response.status_code == 200
    assert response.json()["invoice_count"] == 2
    assert client.get("/api/financials/rollup", params={"selection": "2024-02"}).json()["invoice_count"] == 0


def test_financials_rollup_unknown_month_is_404():
    client = build_client()

    response = client.get("/api/financials/rollup", params={"selection": "2019-01"})

    assert response.status_code == 404


def test_expenses_filter_by_month_and_summarize():
    client = build_client()

    payload = client.get("/api/expenses", params={"month": "2024-03", "as_of": "2024-03-20"}).json()

    assert [row["id"] for row in payload["expenses"]] == [1]
    assert payload["expenses"][0]["amount_tier"] == "Low"
    assert payload["filtered_count"] == 1
    assert Decimal(str(payload["filtered_total"])) == Decimal("150")
    assert payload["available_months"] == ["2024-03", "2024-02"]
    assert Decimal(str(payload["summary"]["total_expenses"])) == Decimal("1350")


def test_dashboard_summary_and_ledgers():
    client = build_client()

    summary = client.get("/api/dashboard/summary").json()
    assert Decimal(str(summary["transfer_orders_total"])) == Decimal("1035")
    assert Decimal(str(summary["due_from_seb_total"])) == Decimal("1250")
    assert Decimal(str(summary["total_receivables"])) == Decimal("2285")
    assert Decimal(str(summary["net_balance"])) == Decimal("1585")

    ledger = client.get("/api/dashboard/due-from-seb").json()
    assert ledger["entries"][0]["description"] == "Labour"
    assert ledger["entries"][1]["amount_text"] == "SAR 1,000.00"

    transfers = client.get("/api/dashboard/fund-transfers").json()
    assert transfers["transfers"][0]["transaction_number"] == "FT-9"
    assert Decimal(str(transfers["total"])) == Decimal("700")


def test_date_range_endpoint():
    client = build_client()

    response = client.get("/api/date-ranges/previous_quarter", params={"today": "2024-03-15"})
    assert response.json() == {"preset": "previous_quarter", "start": "2023-10-01", "end": "2023-12-31"}

    assert client.get("/api/date-ranges/someday").status_code == 400
    assert len(client.get("/api/date-ranges").json()) == 13


def test_refresh_intervals_and_health():
    client = build_client()

    assert client.get("/health").json()["branch"] == settings.branch_name
    intervals = client.get("/api/refresh-intervals").json()["intervals"]
    assert intervals["orders"] == settings.orders_refresh_seconds
    assert intervals["due_from_seb"] == settings.ledger_refresh_seconds


def test_unreachable_view_returns_bad_gateway():
    _override(_engine())
    client = TestClient(app)

    response = client.get("/api/orders")

    assert response.status_code == 502
    assert response.json()["detail"].startswith("Failed to fetch transfer orders")
