from api.http_client import ApiClient
from models.expense import Expense
from utils.currency import to_json_number


class ExpenseAPI:
    def __init__(self, client: ApiClient):
        self._client = client

    def get_all(self) -> list[Expense]:
        rows = self._client.get("/api/expenses/get_expenses") or []
        return [Expense.from_json(r) for r in rows]

    def create(self, expense: Expense) -> Expense | None:
        body = self._client.post("/api/expenses/add_expense", expense.to_json())
        return Expense.from_json(body) if isinstance(body, dict) and body else None

    def repay(self, expense_id: str, repaid_amount, repayment_date: str) -> Expense | None:
        """repaid_amount None means repaid in full."""
        payload = {
            "repaidAmount": None if repaid_amount is None else to_json_number(repaid_amount),
            "repaymentDate": repayment_date,
        }
        body = self._client.post(f"/api/repayments/repay/{expense_id}", payload)
        return Expense.from_json(body) if isinstance(body, dict) and body else None

    def clear_repayment(self, expense_id: str) -> Expense | None:
        body = self._client.delete(f"/api/repayments/repay/{expense_id}")
        return Expense.from_json(body) if isinstance(body, dict) and body else None
