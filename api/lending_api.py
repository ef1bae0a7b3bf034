from api.http_client import ApiClient
from models.lending import LendingRecord, LendingSummary
from utils.currency import to_json_number


class LendingAPI:
    def __init__(self, client: ApiClient):
        self._client = client

    def get_all(self) -> list[LendingRecord]:
        rows = self._client.get("/api/lending/list") or []
        return [LendingRecord.from_json(r) for r in rows]

    def get_summary(self) -> LendingSummary:
        return LendingSummary.from_json(self._client.get("/api/lending/summary") or {})

    def create(self, record: LendingRecord):
        self._client.post("/api/lending/add", record.to_json())

    def update_return(self, record_id: str, returned_amount, notes: str | None = None):
        body = {"returnedAmount": to_json_number(returned_amount)}
        if notes:
            body["notes"] = notes
        self._client.put(f"/api/lending/{record_id}", body)

    def delete(self, record_id: str):
        self._client.delete(f"/api/lending/{record_id}")
