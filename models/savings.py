from dataclasses import dataclass
from decimal import Decimal

from models.category import SavingsType
from utils.constants import DEFAULT_SAVINGS_CATEGORY
from utils.currency import ZERO, to_json_number, to_money


@dataclass
class SavingsTransaction:
    id: str
    amount: Decimal
    type: SavingsType | None    # None when the backend sent an unknown type
    description: str
    category: str
    date: str                   # 'YYYY-MM-DD'
    created_at: str = ""

    @classmethod
    def from_json(cls, data: dict) -> "SavingsTransaction":
        return cls(
            id=str(data.get("_id") or data.get("id") or ""),
            amount=to_money(data.get("amount")),
            type=SavingsType.parse(data.get("type")),
            description=data.get("description", ""),
            category=data.get("category") or DEFAULT_SAVINGS_CATEGORY,
            date=data.get("date", ""),
            created_at=data.get("createdAt", ""),
        )

    def to_json(self) -> dict:
        return {
            "amount": to_json_number(self.amount),
            "type": self.type.value,
            "description": self.description,
            "category": self.category,
            "date": self.date,
        }

    @property
    def signed_amount(self) -> Decimal:
        return self.amount if self.type == SavingsType.DEPOSIT else -self.amount


@dataclass
class SavingsSummary:
    total_deposits: Decimal = ZERO
    total_withdrawals: Decimal = ZERO
    balance: Decimal = ZERO
    transaction_count: int = 0

    @classmethod
    def from_json(cls, data: dict) -> "SavingsSummary":
        return cls(
            total_deposits=to_money(data.get("totalDeposits")),
            total_withdrawals=to_money(data.get("totalWithdrawals")),
            balance=to_money(data.get("balance")),
            transaction_count=int(data.get("transactionCount") or 0),
        )


@dataclass
class MonthlySavings:
    month: str                  # 'YYYY-MM'
    deposits: Decimal = ZERO
    withdrawals: Decimal = ZERO

    @property
    def net(self) -> Decimal:
        return self.deposits - self.withdrawals

    @classmethod
    def from_json(cls, data: dict) -> "MonthlySavings":
        return cls(
            month=data.get("month", ""),
            deposits=to_money(data.get("deposits")),
            withdrawals=to_money(data.get("withdrawals")),
        )
