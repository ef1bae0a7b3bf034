from api.expense_api import ExpenseAPI
from models.expense import Expense
from services import aggregator
from utils.currency import format_amount
from utils.date_helpers import month_name, today


class MonthlySheetService:
    def __init__(self, expense_api: ExpenseAPI):
        self._api = expense_api

    def get_sheet(
        self,
        month: int | str | None = None,
        year: int | str | None = None,
        expenses: list[Expense] | None = None,
    ) -> dict:
        """Expenses of one calendar month (0-based ``month``) with totals.

        Returns {month_label, expenses, total, count, by_payment_method}.
        """
        ref = today()
        m = int(month) if month is not None else ref.month - 1
        y = int(year) if year is not None else ref.year
        if expenses is None:
            expenses = self._api.get_all()
        rows = aggregator.filter_by_period(expenses, m, y)
        return {
            "month_label": f"{month_name(m)} {y}",
            "expenses": rows,
            "total": aggregator.sum_amounts(rows),
            "count": len(rows),
            "by_payment_method": aggregator.group_by_payment_method(rows),
        }

    def export_csv(
        self,
        month: int | str | None = None,
        year: int | str | None = None,
        expenses: list[Expense] | None = None,
    ) -> list[list[str]]:
        """Return rows suitable for CSV export."""
        sheet = self.get_sheet(month, year, expenses)
        header = ["Date", "Description", "Category", "Payment Method", "Amount", "Repaid"]
        rows = [header]
        for e in sorted(sheet["expenses"], key=lambda e: (e.date, e.id)):
            rows.append([
                e.date[:10],
                e.description,
                e.category.label,
                e.payment_method.label,
                format_amount(e.amount),
                "Yes" if e.is_repaid else "No",
            ])
        rows.append(["", "Total", "", "", format_amount(sheet["total"]), ""])
        return rows
