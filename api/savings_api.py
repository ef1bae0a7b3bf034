from api.http_client import ApiClient
from models.savings import MonthlySavings, SavingsSummary, SavingsTransaction


class SavingsAPI:
    def __init__(self, client: ApiClient):
        self._client = client

    def get_transactions(self) -> list[SavingsTransaction]:
        rows = self._client.get("/api/savings/transactions") or []
        transactions = [SavingsTransaction.from_json(r) for r in rows]
        return [t for t in transactions if t.type is not None]

    def get_summary(self) -> SavingsSummary:
        return SavingsSummary.from_json(self._client.get("/api/savings/summary") or {})

    def get_monthly(self) -> list[MonthlySavings]:
        rows = self._client.get("/api/savings/monthly") or []
        return [MonthlySavings.from_json(r) for r in rows]

    def create(self, transaction: SavingsTransaction):
        self._client.post("/api/savings/add", transaction.to_json())

    def delete(self, transaction_id: str):
        self._client.delete(f"/api/savings/{transaction_id}")
