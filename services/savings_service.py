import logging
from decimal import InvalidOperation

from api.savings_api import SavingsAPI
from models.category import SavingsType
from models.savings import MonthlySavings, SavingsSummary, SavingsTransaction
from services import aggregator
from utils.constants import ALL, DEFAULT_SAVINGS_CATEGORY
from utils.currency import to_money
from utils.date_helpers import parse_date, today_str

logger = logging.getLogger(__name__)


class SavingsService:
    def __init__(self, savings_api: SavingsAPI):
        self._api = savings_api

    def get_transactions(self) -> list[SavingsTransaction]:
        return self._api.get_transactions()

    def get_summary(self) -> SavingsSummary:
        return self._api.get_summary()

    def get_monthly(self) -> list[MonthlySavings]:
        return self._api.get_monthly()

    def compute_summary(self, transactions: list[SavingsTransaction]) -> SavingsSummary:
        return aggregator.compute_savings_summary(transactions)

    def compute_monthly(self, transactions: list[SavingsTransaction]) -> list[MonthlySavings]:
        return aggregator.group_by_month(transactions)

    def filter_transactions(
        self, transactions: list[SavingsTransaction], type_=ALL, month_key: str = ALL
    ) -> list[SavingsTransaction]:
        """Filter by deposit/withdrawal and by 'YYYY-MM' month."""
        result = aggregator.filter_by_type(transactions, type_)
        return aggregator.filter_by_month_key(result, month_key)

    def add_transaction(
        self,
        amount,
        type_,
        description: str = "",
        category: str = "",
        date: str | None = None,
    ):
        try:
            money = to_money(amount)
        except (InvalidOperation, ValueError):
            raise ValueError("Amount must be a number.") from None
        if money <= 0:
            raise ValueError("Amount must be positive.")
        if type_ not in [t.value for t in SavingsType]:
            raise ValueError(f"Invalid type '{type_}'. Must be deposit or withdrawal.")
        date = date or today_str()
        if not parse_date(date):
            raise ValueError("Invalid date format. Use YYYY-MM-DD.")

        self._api.create(SavingsTransaction(
            id="",
            amount=money,
            type=SavingsType(type_),
            description=description.strip(),
            category=category.strip() or DEFAULT_SAVINGS_CATEGORY,
            date=date,
        ))
        logger.info("Added savings %s of %s", SavingsType(type_).value, money)

    def delete_transaction(self, transaction_id: str):
        self._api.delete(transaction_id)
