"""Loads everything one view needs in a single call.

The fetches behind a view run in parallel. If any of them fails, the whole load
fails and the other results are discarded, so a view never renders from a partial
batch. Results are collected in the order the fetches are listed, so the error
raised is that of the first failing fetch in that order, not the earliest to fail
in time. The pool waits for every sibling fetch to finish before the error is
re-raised. No timeout is applied here beyond the one configured on the ApiClient.
"""
import logging
from concurrent.futures import ThreadPoolExecutor

from services.emi_service import EMIService
from services.expense_service import ExpenseService
from services.lending_service import LendingService
from services.savings_service import SavingsService

logger = logging.getLogger(__name__)


class DashboardService:
    def __init__(
        self,
        expense_service: ExpenseService,
        emi_service: EMIService,
        lending_service: LendingService,
        savings_service: SavingsService,
    ):
        self._expenses = expense_service
        self._emis = emi_service
        self._lending = lending_service
        self._savings = savings_service

    def load_savings_view(self) -> dict:
        return self._fetch_all({
            "transactions": self._savings.get_transactions,
            "summary": self._savings.get_summary,
            "monthly": self._savings.get_monthly,
        })

    def load_lending_view(self) -> dict:
        return self._fetch_all({
            "records": self._lending.get_records,
            "summary": self._lending.get_summary,
        })

    def load_emi_view(self) -> dict:
        return self._fetch_all({
            "emis": self._emis.get_emis,
            "summary": self._emis.get_summary,
        })

    def load_overview(self) -> dict:
        """Every list, for a combined overview across entities."""
        return self._fetch_all({
            "expenses": self._expenses.get_expenses,
            "emis": self._emis.get_emis,
            "lending": self._lending.get_records,
            "savings": self._savings.get_transactions,
        })

    @staticmethod
    def _fetch_all(fetchers: dict) -> dict:
        with ThreadPoolExecutor(max_workers=len(fetchers)) as pool:
            futures = {name: pool.submit(fn) for name, fn in fetchers.items()}
            try:
                return {name: f.result() for name, f in futures.items()}
            except Exception:
                logger.warning("Batch load failed; discarding %d results", len(futures))
                raise
