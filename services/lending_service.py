import logging
from decimal import Decimal, InvalidOperation

from api.lending_api import LendingAPI
from models.lending import LendingRecord, LendingSummary
from services import aggregator
from utils.constants import ALL, DEFAULT_LENDING_PURPOSE
from utils.currency import to_money
from utils.date_helpers import parse_date, today_str

logger = logging.getLogger(__name__)


class LendingService:
    def __init__(self, lending_api: LendingAPI):
        self._api = lending_api

    def get_records(self) -> list[LendingRecord]:
        return self._api.get_all()

    def get_summary(self) -> LendingSummary:
        return self._api.get_summary()

    def compute_summary(self, records: list[LendingRecord]) -> LendingSummary:
        return aggregator.compute_lending_summary(records)

    def filter_records(self, records: list[LendingRecord], status=ALL) -> list[LendingRecord]:
        return aggregator.filter_by_status(records, status)

    def add_record(
        self,
        borrower_name: str,
        amount,
        lend_date: str | None = None,
        purpose: str = "",
        expected_return_date: str | None = None,
        notes: str | None = None,
    ):
        borrower_name = borrower_name.strip()
        if not borrower_name:
            raise ValueError("Borrower name cannot be empty.")
        money = self._money(amount)
        if money <= 0:
            raise ValueError("Amount must be positive.")
        lend_date = lend_date or today_str()
        if not parse_date(lend_date):
            raise ValueError("Invalid lend date. Use YYYY-MM-DD.")
        if expected_return_date and not parse_date(expected_return_date):
            raise ValueError("Invalid expected return date. Use YYYY-MM-DD.")

        self._api.create(LendingRecord(
            id="",
            borrower_name=borrower_name,
            amount=money,
            lend_date=lend_date,
            expected_return_date=expected_return_date or None,
            purpose=purpose.strip() or DEFAULT_LENDING_PURPOSE,
            notes=(notes or "").strip() or None,
        ))
        logger.info("Added lending record for %s", borrower_name)

    def update_return(self, record: LendingRecord, returned_amount, notes: str | None = None):
        """Set the total amount returned so far (not an increment)."""
        if returned_amount is None or returned_amount == "":
            raise ValueError("Please enter the returned amount")
        money = self._money(returned_amount)
        if money < 0:
            raise ValueError("Returned amount cannot be negative.")
        if money > record.amount:
            raise ValueError("Returned amount cannot exceed the amount lent.")
        self._api.update_return(record.id, money, (notes or "").strip() or None)

    def delete_record(self, record_id: str):
        self._api.delete(record_id)

    @staticmethod
    def _money(value) -> Decimal:
        try:
            return to_money(value)
        except (InvalidOperation, ValueError):
            raise ValueError("Amount must be a number.") from None
