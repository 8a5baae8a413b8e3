"""SQLAlchemy Core schema of the ledger store.

Balances live in place on ``accounts``, one column per currency bucket.
``transactions`` and ``changes`` are append-only.
"""

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    MetaData,
    Numeric,
    String,
    Table,
    Text,
    UniqueConstraint,
)

from household_ledger.domain.currency import Currency


Money = Numeric(20, 6)

metadata = MetaData()

users = Table(
    "users",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("name", String(120), nullable=False),
    Column("email", String(255), nullable=False, unique=True),
    Column("income_percentage", Money, nullable=False, default=0),
    Column("monthly_income_usd", Money, nullable=False, default=0),
    Column("monthly_income_usdt", Money, nullable=False, default=0),
    Column("monthly_income_cup", Money, nullable=False, default=0),
    Column("created_at", DateTime(timezone=True), nullable=False),
)

accounts = Table(
    "accounts",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("name", String(120), nullable=False),
    Column("is_shared", Boolean, nullable=False, default=False),
    Column("balance_usd_zelle", Money, nullable=False, default=0),
    Column("balance_usd_efectivo", Money, nullable=False, default=0),
    Column("balance_usdt", Money, nullable=False, default=0),
    Column("balance_cup_efectivo", Money, nullable=False, default=0),
    Column("balance_cup_transferencia", Money, nullable=False, default=0),
    Column("created_at", DateTime(timezone=True), nullable=False),
)

user_accounts = Table(
    "user_accounts",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("user_id", String(36), ForeignKey("users.id"), nullable=False),
    Column("account_id", String(36), ForeignKey("accounts.id"), nullable=False),
    Column("role", String(16), nullable=False),
    UniqueConstraint("user_id", "account_id", name="uq_user_account"),
)

categories = Table(
    "categories",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("name", String(120), nullable=False, unique=True),
    Column("color", String(16)),
)

expenses = Table(
    "expenses",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("amount", Money, nullable=False),
    Column("description", Text),
    Column("currency", String(32), nullable=False),
    Column("payment_method", String(16), nullable=False),
    Column("expense_type", String(16), nullable=False),
    Column("is_shared", Boolean, nullable=False, default=False),
    Column("planned_date", DateTime(timezone=True)),
    Column("account_id", String(36), ForeignKey("accounts.id"), nullable=False),
    Column("category_id", String(36), ForeignKey("categories.id"), nullable=False),
    Column("user_id", String(36), ForeignKey("users.id"), nullable=False),
    Column("created_at", DateTime(timezone=True), nullable=False),
)

# Member shares actually charged for a shared expense; reversals read these.
expense_allocations = Table(
    "expense_allocations",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("expense_id", String(36), ForeignKey("expenses.id"), nullable=False),
    Column("user_id", String(36), ForeignKey("users.id"), nullable=False),
    Column("account_id", String(36), ForeignKey("accounts.id"), nullable=False),
    Column("amount", Money, nullable=False),
    Column("percentage", Money, nullable=False),
)

incomes = Table(
    "incomes",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("amount", Money, nullable=False),
    Column("description", Text),
    Column("currency", String(32), nullable=False),
    Column("converted_to_cup", Boolean, nullable=False, default=False),
    Column("exchange_rate", Money),
    Column("conversion_id", String(36), ForeignKey("conversions.id")),
    Column("account_id", String(36), ForeignKey("accounts.id"), nullable=False),
    Column("user_id", String(36), ForeignKey("users.id"), nullable=False),
    Column("created_at", DateTime(timezone=True), nullable=False),
)

conversions = Table(
    "conversions",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("from_amount", Money, nullable=False),
    Column("to_amount", Money, nullable=False),
    Column("from_currency", String(32), nullable=False),
    Column("to_currency", String(32), nullable=False),
    Column("exchange_rate", Money, nullable=False),
    Column("user_id", String(36), ForeignKey("users.id"), nullable=False),
    Column(
        "from_account_id",
        String(36),
        ForeignKey("accounts.id"),
        nullable=False,
    ),
    Column("to_account_id", String(36), ForeignKey("accounts.id"), nullable=False),
    Column("created_at", DateTime(timezone=True), nullable=False),
)

loans = Table(
    "loans",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("amount", Money, nullable=False),
    Column("description", Text),
    Column("currency", String(32), nullable=False),
    Column("due_date", DateTime(timezone=True)),
    Column("is_paid", Boolean, nullable=False, default=False),
    Column("paid_amount", Money, nullable=False, default=0),
    Column("paid_date", DateTime(timezone=True)),
    Column("giver_id", String(36), ForeignKey("users.id"), nullable=False),
    Column("receiver_id", String(36), ForeignKey("users.id"), nullable=False),
    Column(
        "from_account_id",
        String(36),
        ForeignKey("accounts.id"),
        nullable=False,
    ),
    Column("to_account_id", String(36), ForeignKey("accounts.id"), nullable=False),
    Column("created_at", DateTime(timezone=True), nullable=False),
)

debts = Table(
    "debts",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("amount", Money, nullable=False),
    Column("description", Text),
    Column("currency", String(32), nullable=False),
    Column("due_date", DateTime(timezone=True)),
    Column("creditor", String(255), nullable=False),
    Column("is_paid", Boolean, nullable=False, default=False),
    Column("paid_amount", Money, nullable=False, default=0),
    Column("paid_date", DateTime(timezone=True)),
    Column("account_id", String(36), ForeignKey("accounts.id"), nullable=False),
    Column("user_id", String(36), ForeignKey("users.id"), nullable=False),
    Column("created_at", DateTime(timezone=True), nullable=False),
)

transfers = Table(
    "transfers",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("amount", Money, nullable=False),
    Column("description", Text),
    Column("currency", String(32), nullable=False),
    Column("user_id", String(36), ForeignKey("users.id"), nullable=False),
    Column(
        "from_account_id",
        String(36),
        ForeignKey("accounts.id"),
        nullable=False,
    ),
    Column("to_account_id", String(36), ForeignKey("accounts.id"), nullable=False),
    Column("created_at", DateTime(timezone=True), nullable=False),
)

transactions = Table(
    "transactions",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("type", String(16), nullable=False),
    Column("amount", Money, nullable=False),
    Column("currency", String(32), nullable=False),
    Column("description", Text),
    Column("reference_id", String(36)),
    Column("user_id", String(36), ForeignKey("users.id"), nullable=False),
    Column("account_id", String(36), ForeignKey("accounts.id"), nullable=False),
    Column("created_at", DateTime(timezone=True), nullable=False),
)

# Back references are plain columns: the audited row may be deleted later.
changes = Table(
    "changes",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("action", String(16), nullable=False),
    Column("entity_type", String(16), nullable=False),
    Column("entity_id", String(36), nullable=False),
    Column("old_value", Text),
    Column("new_value", Text),
    Column("author_id", String(36), ForeignKey("users.id"), nullable=False),
    Column("expense_id", String(36)),
    Column("income_id", String(36)),
    Column("loan_id", String(36)),
    Column("debt_id", String(36)),
    Column("created_at", DateTime(timezone=True), nullable=False),
)

BALANCE_COLUMNS = {
    Currency.USD_ZELLE: accounts.c.balance_usd_zelle,
    Currency.USD_EFECTIVO: accounts.c.balance_usd_efectivo,
    Currency.USDT: accounts.c.balance_usdt,
    Currency.CUP_EFECTIVO: accounts.c.balance_cup_efectivo,
    Currency.CUP_TRANSFERENCIA: accounts.c.balance_cup_transferencia,
}


def balance_column(currency: Currency) -> Column:
    """Return the balance column of a bucket."""
    return BALANCE_COLUMNS[currency]


__all__ = [
    "metadata",
    "users",
    "accounts",
    "user_accounts",
    "categories",
    "expenses",
    "expense_allocations",
    "incomes",
    "conversions",
    "loans",
    "debts",
    "transfers",
    "transactions",
    "changes",
    "BALANCE_COLUMNS",
    "balance_column",
]
