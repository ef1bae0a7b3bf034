from api.http_client import ApiClient
from models.emi import EMI, EMISummary
from utils.currency import to_json_number


class EMIAPI:
    def __init__(self, client: ApiClient):
        self._client = client

    def get_all(self) -> list[EMI]:
        rows = self._client.get("/api/emis") or []
        return [EMI.from_json(r) for r in rows]

    def get_summary(self) -> EMISummary:
        return EMISummary.from_json(self._client.get("/api/emis/summary") or {})

    def create(self, emi: EMI) -> EMI | None:
        body = self._client.post("/api/emis", emi.to_json())
        return EMI.from_json(body) if isinstance(body, dict) and body else None

    def pay_installment(
        self, emi_id: str, installment_number: int, paid_amount, paid_date: str
    ) -> EMI | None:
        body = self._client.put(
            f"/api/emis/{emi_id}/installment/{installment_number}/pay",
            {"paidAmount": to_json_number(paid_amount), "paidDate": paid_date},
        )
        return EMI.from_json(body) if isinstance(body, dict) and body else None

    def unpay_installment(self, emi_id: str, installment_number: int) -> EMI | None:
        body = self._client.put(
            f"/api/emis/{emi_id}/installment/{installment_number}/unpay", {}
        )
        return EMI.from_json(body) if isinstance(body, dict) and body else None
