import logging
from enum import Enum

logger = logging.getLogger(__name__)


class Category(str, Enum):
    FOOD = "food"
    TRANSPORT = "transport"
    UTILITIES = "utilities"
    ENTERTAINMENT = "entertainment"
    LIVING_ESSENTIALS = "livingessentials"
    OTHER = "other"

    @classmethod
    def parse(cls, value) -> "Category":
        """Missing -> OTHER; unknown values are logged and mapped to OTHER."""
        if value is None or value == "":
            return cls.OTHER
        try:
            return cls(value)
        except ValueError:
            logger.warning("Unknown expense category %r, using 'other'", value)
            return cls.OTHER

    @property
    def label(self) -> str:
        return CATEGORY_LABELS[self]


class PaymentMethod(str, Enum):
    SELF = "self"
    LENT = "lent"
    CREDIT_CARD = "credit-card"

    @classmethod
    def parse(cls, value) -> "PaymentMethod":
        if value is None or value == "":
            return cls.SELF
        try:
            return cls(value)
        except ValueError:
            logger.warning("Unknown payment method %r, using 'self'", value)
            return cls.SELF

    @property
    def label(self) -> str:
        return PAYMENT_METHOD_LABELS[self]

    @property
    def is_repayable(self) -> bool:
        return self in REPAYABLE_METHODS


class LendingStatus(str, Enum):
    PENDING = "pending"
    PARTIALLY_RETURNED = "partially_returned"
    FULLY_RETURNED = "fully_returned"

    @property
    def label(self) -> str:
        return LENDING_STATUS_LABELS[self]


class SavingsType(str, Enum):
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"

    @classmethod
    def parse(cls, value) -> "SavingsType | None":
        """Unknown or missing values are logged and give None; such rows are skipped."""
        try:
            return cls(value)
        except ValueError:
            logger.warning("Unknown savings transaction type %r, skipping", value)
            return None

    @property
    def label(self) -> str:
        return SAVINGS_TYPE_LABELS[self]


REPAYABLE_METHODS = (PaymentMethod.LENT, PaymentMethod.CREDIT_CARD)

CATEGORY_LABELS = {
    Category.FOOD: "Food",
    Category.TRANSPORT: "Transport",
    Category.UTILITIES: "Utilities",
    Category.ENTERTAINMENT: "Entertainment",
    Category.LIVING_ESSENTIALS: "Living Essentials",
    Category.OTHER: "Other",
}

PAYMENT_METHOD_LABELS = {
    PaymentMethod.SELF: "Self",
    PaymentMethod.LENT: "Lent",
    PaymentMethod.CREDIT_CARD: "Credit Card",
}

LENDING_STATUS_LABELS = {
    LendingStatus.PENDING: "Pending",
    LendingStatus.PARTIALLY_RETURNED: "Partially Returned",
    LendingStatus.FULLY_RETURNED: "Fully Returned",
}

SAVINGS_TYPE_LABELS = {
    SavingsType.DEPOSIT: "Deposit",
    SavingsType.WITHDRAWAL: "Withdrawal",
}
