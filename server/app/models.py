"""Read-only reporting views.

The views are computed upstream; they are declared here as plain tables so
they can be selected with SQLAlchemy Core and created in test databases.
Rows are never loaded through the ORM identity map, which would collapse
duplicate lines that share a natural key.
"""

from sqlalchemy import Column, Date, DateTime, Integer, Numeric, String, Table, Text

from .db import Base

transfer_orders_view = Table(
    "transfer_orders_view",
    Base.metadata,
    Column("date", Date, nullable=False),
    Column("order_number", String(50), nullable=False),
    Column("item_name", String(255), nullable=True),
    Column("qty", Numeric(14, 2), nullable=True),
    Column("cost", Numeric(14, 2), nullable=True),
    Column("costwvat", Numeric(14, 2), nullable=True),
    Column("total", Numeric(14, 2), nullable=True),
    Column("totalwvat", Numeric(14, 2), nullable=True),
    Column("source_warehouse", String(200), nullable=True),
    Column("destination_warehouse", String(200), nullable=True),
    Column("status", String(50), nullable=True),
)

profit_analysis_view = Table(
    "profit_analysis_seb_vehicle",
    Base.metadata,
    Column("inv_no", String(50), nullable=False),
    Column("inv_date", Date, nullable=False),
    Column("item", String(255), nullable=True),
    Column("qty", Numeric(14, 2), nullable=True),
    Column("sale_price", Numeric(14, 2), nullable=True),
    Column("sale_with_vat", Numeric(14, 2), nullable=True),
    Column("cost", Numeric(14, 2), nullable=True),
    Column("profit", Numeric(14, 2), nullable=True),
    Column("profit_percentage", Numeric(9, 2), nullable=True),
    Column("customer_name", String(200), nullable=True),
    Column("branch_name", String(200), nullable=True),
    Column("unit_price", Numeric(14, 2), nullable=True),
    Column("unit_cost", Numeric(14, 2), nullable=True),
    Column("unit_profit", Numeric(14, 2), nullable=True),
    Column("sales_person_name", String(200), nullable=True),
    Column("invoice_status", String(50), nullable=True),
)

customer_balance_aging_view = Table(
    "customer_balance_aging",
    Base.metadata,
    Column("customer_id", String(50), nullable=False),
    Column("customer_owner", String(50), nullable=True),
    Column("customer_name", String(200), nullable=False),
    Column("display_name", String(200), nullable=True),
    Column("company_name", String(200), nullable=True),
    Column("total_balance", Numeric(14, 2), nullable=True),
    Column("current_0_30", Numeric(14, 2), nullable=True),
    Column("past_due_31_60", Numeric(14, 2), nullable=True),
    Column("past_due_61_90", Numeric(14, 2), nullable=True),
    Column("past_due_91_180", Numeric(14, 2), nullable=True),
    Column("past_due_over_180", Numeric(14, 2), nullable=True),
    Column("total_invoices", Integer, nullable=True),
    Column("last_invoice_date", Date, nullable=True),
    Column("customer_status", String(50), nullable=True),
)

vendor_balance_aging_view = Table(
    "seb_vendor_balance_aging",
    Base.metadata,
    Column("vendor_id", String(50), nullable=False),
    Column("vendor_name", String(200), nullable=False),
    Column("company_name", String(200), nullable=True),
    Column("vendor_status", String(50), nullable=True),
    Column("vendor_currency", String(10), nullable=True),
    Column("total_outstanding", Numeric(14, 2), nullable=True),
    Column("current_0_30", Numeric(14, 2), nullable=True),
    Column("past_due_31_60", Numeric(14, 2), nullable=True),
    Column("past_due_61_90", Numeric(14, 2), nullable=True),
    Column("past_due_91_120", Numeric(14, 2), nullable=True),
    Column("past_due_over_120", Numeric(14, 2), nullable=True),
    Column("outstanding_bills_count", Integer, nullable=True),
    Column("avg_days_outstanding", Numeric(9, 2), nullable=True),
    Column("oldest_due_date", Date, nullable=True),
    Column("last_bill_date", Date, nullable=True),
    Column("currency", String(10), nullable=True),
    Column("risk_category", String(50), nullable=True),
)

financial_summary_view = Table(
    "seb_vehicle_financial_summary",
    Base.metadata,
    Column("month", String(7), nullable=False),
    Column("month_date", Date, nullable=True),
    Column("invoice_count", Integer, nullable=True),
    Column("total_sales", Numeric(14, 2), nullable=True),
    Column("total_sales_with_vat", Numeric(14, 2), nullable=True),
    Column("cost_of_goods_sold", Numeric(14, 2), nullable=True),
    Column("gross_profit", Numeric(14, 2), nullable=True),
    Column("avg_profit_margin", Numeric(9, 2), nullable=True),
    Column("expense_count", Integer, nullable=True),
    Column("operating_expenses", Numeric(14, 2), nullable=True),
    Column("net_profit", Numeric(14, 2), nullable=True),
    Column("net_profit_margin", Numeric(9, 2), nullable=True),
    Column("gross_profit_margin", Numeric(9, 2), nullable=True),
    Column("expense_ratio", Numeric(9, 2), nullable=True),
)

expenses_view = Table(
    "seb_vehicle_expenses",
    Base.metadata,
    Column("id", Integer, primary_key=True),
    Column("expense_date", Date, nullable=True),
    Column("original_date", String(50), nullable=True),
    Column("account_name", String(200), nullable=True),
    Column("description", Text, nullable=True),
    Column("reference_number", String(100), nullable=True),
    Column("reference_no", String(100), nullable=True),
    Column("full_description", Text, nullable=True),
    Column("amount", Numeric(14, 2), nullable=True),
    Column("original_amount", String(50), nullable=True),
    Column("entity_type", String(50), nullable=True),
    Column("entity_id", String(50), nullable=True),
    Column("created_at", DateTime, nullable=True),
    Column("branch_name", String(200), nullable=True),
    Column("year", Integer, nullable=True),
    Column("month", Integer, nullable=True),
    Column("year_month", String(7), nullable=True),
)

# Sheet-synced tables keep their spreadsheet column headers.
due_from_seb_table = Table(
    "Due from SEB",
    Base.metadata,
    Column("Date", String(50), key="date", nullable=True),
    Column("Description", Text, key="description", nullable=True),
    Column("Amount", String(50), key="amount", nullable=True),
)

fund_transfers_table = Table(
    "SEB_Transfer_Funds",
    Base.metadata,
    Column("Transaction Date", String(50), key="transaction_date", nullable=True),
    Column("Transaction Number", String(100), key="transaction_number", nullable=True),
    Column("From Account", String(200), key="from_account", nullable=True),
    Column("To Account", String(200), key="to_account", nullable=True),
    Column("Amount", String(50), key="amount", nullable=True),
    Column("Reference", String(200), key="reference", nullable=True),
    Column("Description", Text, key="description", nullable=True),
)
