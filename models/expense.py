from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from models.category import Category, PaymentMethod
from utils.currency import ZERO, to_json_number, to_money


@dataclass
class Expense:
    id: str
    description: str
    amount: Decimal
    category: Category
    date: str                   # 'YYYY-MM-DD'
    payment_method: PaymentMethod = PaymentMethod.SELF
    is_repaid: bool = False
    repaid_amount: Decimal = ZERO
    repayment_date: Optional[str] = None
    created_at: str = ""

    @classmethod
    def from_json(cls, data: dict) -> "Expense":
        return cls(
            id=str(data.get("_id") or data.get("id") or ""),
            description=data.get("description", ""),
            amount=to_money(data.get("amount")),
            category=Category.parse(data.get("category")),
            date=data.get("date", ""),
            payment_method=PaymentMethod.parse(data.get("paymentMethod")),
            is_repaid=bool(data.get("isRepaid", False)),
            repaid_amount=to_money(data.get("repaidAmount")),
            repayment_date=data.get("repaymentDate"),
            created_at=data.get("createdAt", ""),
        )

    def to_json(self) -> dict:
        return {
            "description": self.description,
            "amount": to_json_number(self.amount),
            "category": self.category.value,
            "paymentMethod": self.payment_method.value,
            "date": self.date,
        }

    @property
    def outstanding_amount(self) -> Decimal:
        """What is still owed back on a lent/credit-card expense."""
        if not self.payment_method.is_repayable or self.is_repaid:
            return ZERO
        return self.amount - self.repaid_amount


@dataclass
class PaymentMethodTotal:
    total: Decimal = ZERO
    count: int = 0
