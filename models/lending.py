from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional

from models.category import LendingStatus
from utils.currency import ZERO, to_json_number, to_money


def lending_status(amount: Decimal, returned_amount: Decimal) -> LendingStatus:
    """Derive the repayment status from how much of the loan came back."""
    if returned_amount <= 0:
        return LendingStatus.PENDING
    if returned_amount < amount:
        return LendingStatus.PARTIALLY_RETURNED
    return LendingStatus.FULLY_RETURNED


@dataclass
class LendingRecord:
    id: str
    borrower_name: str
    amount: Decimal
    lend_date: str
    returned_amount: Decimal = ZERO
    expected_return_date: Optional[str] = None
    purpose: str = ""
    notes: Optional[str] = None
    created_at: str = ""

    @classmethod
    def from_json(cls, data: dict) -> "LendingRecord":
        # 'status' from the backend is ignored; it is always recomputed
        return cls(
            id=str(data.get("_id") or data.get("id") or ""),
            borrower_name=data.get("borrowerName", ""),
            amount=to_money(data.get("amount")),
            lend_date=data.get("lendDate", ""),
            returned_amount=to_money(data.get("returnedAmount")),
            expected_return_date=data.get("expectedReturnDate") or None,
            purpose=data.get("purpose", ""),
            notes=data.get("notes") or None,
            created_at=data.get("createdAt", ""),
        )

    def to_json(self) -> dict:
        data = {
            "borrowerName": self.borrower_name,
            "amount": to_json_number(self.amount),
            "purpose": self.purpose,
            "lendDate": self.lend_date,
        }
        if self.expected_return_date:
            data["expectedReturnDate"] = self.expected_return_date
        if self.notes:
            data["notes"] = self.notes
        return data

    @property
    def status(self) -> LendingStatus:
        return lending_status(self.amount, self.returned_amount)

    @property
    def remaining_amount(self) -> Decimal:
        return max(ZERO, self.amount - self.returned_amount)


@dataclass
class LendingSummary:
    total_lent: Decimal = ZERO
    total_returned: Decimal = ZERO
    pending_amount: Decimal = ZERO
    status_counts: dict[LendingStatus, int] = field(
        default_factory=lambda: {s: 0 for s in LendingStatus}
    )
    total_records: int = 0

    @classmethod
    def from_json(cls, data: dict) -> "LendingSummary":
        counts = data.get("statusCounts") or {}
        return cls(
            total_lent=to_money(data.get("totalLent")),
            total_returned=to_money(data.get("totalReturned")),
            pending_amount=to_money(data.get("pendingAmount")),
            status_counts={s: int(counts.get(s.value) or 0) for s in LendingStatus},
            total_records=int(data.get("totalRecords") or 0),
        )

    @property
    def open_count(self) -> int:
        """Records with money still outstanding."""
        return (
            self.status_counts[LendingStatus.PENDING]
            + self.status_counts[LendingStatus.PARTIALLY_RETURNED]
        )
