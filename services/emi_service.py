import dataclasses
import logging
from datetime import datetime
from decimal import Decimal, InvalidOperation

from api.emi_api import EMIAPI
from models.emi import EMI, EMIInstallment, EMISummary
from services import aggregator
from utils.currency import ZERO, to_money
from utils.date_helpers import parse_date, utc_timestamp

logger = logging.getLogger(__name__)


class EMIService:
    def __init__(self, emi_api: EMIAPI):
        self._api = emi_api

    def get_emis(self) -> list[EMI]:
        return self._api.get_all()

    def get_summary(self) -> EMISummary:
        """Summary as computed by the backend."""
        return self._api.get_summary()

    def compute_summary(self, emis: list[EMI], ref: datetime | None = None) -> EMISummary:
        """Same figures as get_summary, computed from already-fetched loans."""
        return aggregator.compute_emi_summary(emis, ref)

    def overdue_installments(
        self, emis: list[EMI], ref: datetime | None = None
    ) -> list[tuple[EMI, EMIInstallment]]:
        return aggregator.overdue_installments(emis, ref)

    def add_emi(
        self,
        loan_name: str,
        total_amount,
        monthly_amount,
        total_months,
        start_date: str,
        interest_rate=0,
        lender_name: str = "",
        description: str = "",
    ) -> EMI | None:
        """Create a loan. The backend generates the installment schedule."""
        loan_name = loan_name.strip()
        if not loan_name:
            raise ValueError("Loan name cannot be empty.")
        total = self._positive_money(total_amount, "Total amount")
        monthly = self._positive_money(monthly_amount, "Monthly amount")
        try:
            months = int(total_months)
        except (TypeError, ValueError):
            raise ValueError("Total months must be a whole number.") from None
        if months <= 0:
            raise ValueError("Total months must be positive.")
        try:
            rate = Decimal(str(interest_rate or 0))
        except InvalidOperation:
            raise ValueError("Interest rate must be a number.") from None
        if rate < 0:
            raise ValueError("Interest rate cannot be negative.")
        if not parse_date(start_date):
            raise ValueError("Invalid start date. Use YYYY-MM-DD.")

        emi = EMI(
            id="",
            loan_name=loan_name,
            total_amount=total,
            monthly_amount=monthly,
            total_months=months,
            start_date=start_date,
            interest_rate=rate,
            lender_name=lender_name.strip(),
            description=description.strip(),
        )
        created = self._api.create(emi)
        logger.info("Added EMI %s over %d months", loan_name, months)
        return created

    def pay_installment(self, emi: EMI, installment_number: int, ref: datetime | None = None) -> EMI:
        """Mark an installment paid for its scheduled amount; returns the patched loan."""
        inst = self._require_installment(emi, installment_number)
        if inst.is_paid:
            raise ValueError(f"Installment {installment_number} is already paid.")
        paid_at = utc_timestamp(ref)
        updated = self._api.pay_installment(emi.id, installment_number, inst.amount, paid_at)
        if updated is not None:
            return updated
        return self._patch(
            emi, installment_number,
            is_paid=True, paid_date=paid_at, paid_amount=inst.amount,
        )

    def unpay_installment(self, emi: EMI, installment_number: int) -> EMI:
        inst = self._require_installment(emi, installment_number)
        if not inst.is_paid:
            raise ValueError(f"Installment {installment_number} is not paid.")
        updated = self._api.unpay_installment(emi.id, installment_number)
        if updated is not None:
            return updated
        return self._patch(
            emi, installment_number, is_paid=False, paid_date=None, paid_amount=ZERO
        )

    # ── Helpers ──────────────────────────────────────────────────────────────

    @staticmethod
    def _require_installment(emi: EMI, number: int) -> EMIInstallment:
        inst = emi.get_installment(number)
        if inst is None:
            raise ValueError(f"Loan '{emi.loan_name}' has no installment {number}.")
        return inst

    @staticmethod
    def _patch(emi: EMI, number: int, **changes) -> EMI:
        installments = [
            dataclasses.replace(i, **changes) if i.installment_number == number else i
            for i in emi.installments
        ]
        return dataclasses.replace(emi, installments=installments)

    @staticmethod
    def _positive_money(value, label: str) -> Decimal:
        try:
            money = to_money(value)
        except (InvalidOperation, ValueError):
            raise ValueError(f"{label} must be a number.") from None
        if money <= 0:
            raise ValueError(f"{label} must be positive.")
        return money
