from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional

from utils.currency import ZERO, to_json_number, to_money


@dataclass
class EMIInstallment:
    installment_number: int
    due_date: str
    amount: Decimal
    is_paid: bool = False
    paid_date: Optional[str] = None
    paid_amount: Decimal = ZERO     # set only when is_paid

    @classmethod
    def from_json(cls, data: dict) -> "EMIInstallment":
        return cls(
            installment_number=int(data["installmentNumber"]),
            due_date=data.get("dueDate", ""),
            amount=to_money(data.get("amount")),
            is_paid=bool(data.get("isPaid", False)),
            paid_date=data.get("paidDate"),
            paid_amount=to_money(data.get("paidAmount")),
        )


@dataclass
class EMI:
    id: str
    loan_name: str
    total_amount: Decimal
    monthly_amount: Decimal
    total_months: int
    start_date: str
    interest_rate: Decimal = ZERO
    installments: list[EMIInstallment] = field(default_factory=list)
    is_active: bool = True
    end_date: str = ""
    lender_name: str = ""
    description: str = ""
    created_at: str = ""

    @classmethod
    def from_json(cls, data: dict) -> "EMI":
        installments = [EMIInstallment.from_json(i) for i in data.get("installments", [])]
        installments.sort(key=lambda i: i.installment_number)
        return cls(
            id=str(data.get("_id") or data.get("id") or ""),
            loan_name=data.get("loanName", ""),
            total_amount=to_money(data.get("totalAmount")),
            monthly_amount=to_money(data.get("monthlyAmount")),
            total_months=int(data.get("totalMonths") or 0),
            start_date=data.get("startDate", ""),
            interest_rate=Decimal(str(data.get("interestRate") or 0)),
            installments=installments,
            is_active=bool(data.get("isActive", True)),
            end_date=data.get("endDate", ""),
            lender_name=data.get("lenderName", ""),
            description=data.get("description", ""),
            created_at=data.get("createdAt", ""),
        )

    def to_json(self) -> dict:
        return {
            "loanName": self.loan_name,
            "totalAmount": to_json_number(self.total_amount),
            "monthlyAmount": to_json_number(self.monthly_amount),
            "totalMonths": self.total_months,
            "startDate": self.start_date,
            "interestRate": float(self.interest_rate),
            "lenderName": self.lender_name,
            "description": self.description,
        }

    @property
    def paid_count(self) -> int:
        return sum(1 for i in self.installments if i.is_paid)

    @property
    def remaining_count(self) -> int:
        return len(self.installments) - self.paid_count

    @property
    def next_due_installment(self) -> EMIInstallment | None:
        return next((i for i in self.installments if not i.is_paid), None)

    def get_installment(self, number: int) -> EMIInstallment | None:
        return next((i for i in self.installments if i.installment_number == number), None)


@dataclass
class EMISummary:
    total_active_loans: int = 0
    total_outstanding: Decimal = ZERO
    total_paid_amount: Decimal = ZERO
    total_monthly_emi: Decimal = ZERO
    overdue_count: int = 0
    upcoming_this_month: int = 0

    @classmethod
    def from_json(cls, data: dict) -> "EMISummary":
        return cls(
            total_active_loans=int(data.get("totalActiveLoans") or 0),
            total_outstanding=to_money(data.get("totalOutstanding")),
            total_paid_amount=to_money(data.get("totalPaidAmount")),
            total_monthly_emi=to_money(data.get("totalMonthlyEMI")),
            overdue_count=int(data.get("overdueCount") or 0),
            upcoming_this_month=int(data.get("upcomingThisMonth") or 0),
        )
