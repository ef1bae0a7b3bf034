import dataclasses
import logging
from datetime import date
from decimal import Decimal, InvalidOperation

from api.expense_api import ExpenseAPI
from models.category import Category, PaymentMethod
from models.expense import Expense
from services import aggregator
from utils.constants import ALL
from utils.currency import ZERO, to_money
from utils.date_helpers import format_date, parse_date, today, today_str

logger = logging.getLogger(__name__)


class ExpenseService:
    def __init__(self, expense_api: ExpenseAPI):
        self._api = expense_api

    def get_expenses(self) -> list[Expense]:
        return self._api.get_all()

    def get_filtered(
        self,
        expenses: list[Expense],
        category=ALL,
        month=ALL,
        year: int | str | None = None,
    ) -> list[Expense]:
        """Apply the category and month/year filters of the expense list."""
        result = aggregator.filter_by_category(expenses, category)
        return aggregator.filter_by_period(result, month, year or today().year)

    def get_overview(self, expenses: list[Expense], ref: date | None = None) -> dict:
        """Totals and counts for this month, last month and this year."""
        ref = ref or today()
        periods = {
            "this_month": aggregator.current_month_records(expenses, ref),
            "last_month": aggregator.previous_month_records(expenses, ref),
            "this_year": aggregator.current_year_records(expenses, ref),
        }
        return {
            name: {"total": aggregator.sum_amounts(rows), "count": len(rows)}
            for name, rows in periods.items()
        }

    def get_category_breakdown(self, expenses: list[Expense]) -> dict[Category, Decimal]:
        return aggregator.group_by_category(expenses)

    def get_outstanding(self, expenses: list[Expense]) -> list[Expense]:
        """Lent or credit-card expenses that have not been repaid yet."""
        return [e for e in expenses if e.outstanding_amount > 0]

    def add_expense(
        self,
        description: str,
        amount,
        category,
        payment_method=PaymentMethod.SELF,
        date: str | None = None,
    ) -> Expense:
        description = description.strip()
        money = self._validate(description, amount, category, payment_method, date)
        expense = Expense(
            id="",
            description=description,
            amount=money,
            category=Category(category),
            date=date or today_str(),
            payment_method=PaymentMethod(payment_method),
        )
        created = self._api.create(expense)
        if created is None:
            logger.info("Added expense %s (no record returned)", description)
            return expense
        logger.info("Added expense %s (%s)", created.id, created.description)
        return created

    def mark_repaid(
        self,
        expense: Expense,
        repaid_amount=None,
        repayment_date: str | None = None,
    ) -> Expense:
        """Record a repayment; repaid_amount None means the full amount came back."""
        if not expense.payment_method.is_repayable:
            raise ValueError("Only lent or credit-card expenses can be repaid.")
        if repaid_amount is not None:
            repaid_amount = to_money(repaid_amount)
            if repaid_amount <= 0:
                raise ValueError("Repaid amount must be positive.")
            if repaid_amount > expense.amount:
                raise ValueError("Repaid amount cannot exceed the expense amount.")
        if repayment_date is not None and not parse_date(repayment_date):
            raise ValueError("Invalid repayment date. Use YYYY-MM-DD.")
        repayment_date = repayment_date or format_date(today())
        updated = self._api.repay(expense.id, repaid_amount, repayment_date)
        if updated is not None:
            return updated
        return dataclasses.replace(
            expense,
            is_repaid=True,
            repaid_amount=expense.amount if repaid_amount is None else repaid_amount,
            repayment_date=repayment_date,
        )

    def clear_repayment(self, expense: Expense) -> Expense:
        updated = self._api.clear_repayment(expense.id)
        if updated is not None:
            return updated
        return dataclasses.replace(
            expense, is_repaid=False, repaid_amount=ZERO, repayment_date=None
        )

    # ── Helpers ──────────────────────────────────────────────────────────────

    @staticmethod
    def _validate(description, amount, category, payment_method, date) -> Decimal:
        if not description:
            raise ValueError("Description cannot be empty.")
        try:
            money = to_money(amount)
        except (InvalidOperation, ValueError):
            raise ValueError("Amount must be a number.") from None
        if money <= 0:
            raise ValueError("Amount must be positive.")
        if category not in [c.value for c in Category]:
            raise ValueError(
                f"Invalid category '{category}'. "
                f"Must be one of: {', '.join(c.value for c in Category)}."
            )
        if payment_method not in [m.value for m in PaymentMethod]:
            raise ValueError(f"Invalid payment method '{payment_method}'.")
        if date is not None and not parse_date(date):
            raise ValueError("Invalid date format. Use YYYY-MM-DD.")
        return money
