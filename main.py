import argparse
import csv
import getpass
import logging
import os
import sys

# Ensure project root is on sys.path when run directly
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from api.auth_api import AuthAPI
from api.emi_api import EMIAPI
from api.errors import ApiError, AuthenticationError
from api.expense_api import ExpenseAPI
from api.http_client import ApiClient
from api.lending_api import LendingAPI
from api.savings_api import SavingsAPI
from api.session_store import SessionStore

from services import aggregator
from services.auth_service import AuthService
from services.dashboard_service import DashboardService
from services.emi_service import EMIService
from services.expense_service import ExpenseService
from services.lending_service import LendingService
from services.monthly_sheet_service import MonthlySheetService
from services.savings_service import SavingsService

from utils.app_config import get_api_base_url, get_session_file, load_config
from utils.constants import APP_NAME
from utils.currency import format_currency, format_signed
from utils.date_helpers import format_display_date, friendly_month, month_key, today_str

logger = logging.getLogger(__name__)


def build_services(config: dict | None = None) -> dict:
    config = load_config() if config is None else config

    # ── Session + HTTP ───────────────────────────────────────────────────────
    store = SessionStore(get_session_file(config))
    client = ApiClient(get_api_base_url(config), store)

    # ── Resource clients ─────────────────────────────────────────────────────
    auth_api = AuthAPI(client)
    expense_api = ExpenseAPI(client)
    emi_api = EMIAPI(client)
    lending_api = LendingAPI(client)
    savings_api = SavingsAPI(client)

    # ── Services ─────────────────────────────────────────────────────────────
    expense_svc = ExpenseService(expense_api)
    emi_svc = EMIService(emi_api)
    lending_svc = LendingService(lending_api)
    savings_svc = SavingsService(savings_api)
    return {
        "auth": AuthService(auth_api, store),
        "expenses": expense_svc,
        "sheet": MonthlySheetService(expense_api),
        "emis": emi_svc,
        "lending": lending_svc,
        "savings": savings_svc,
        "dashboard": DashboardService(expense_svc, emi_svc, lending_svc, savings_svc),
    }


def cmd_login(services: dict, args) -> int:
    password = getpass.getpass("Password: ")
    user = services["auth"].login(args.username, password)
    print(f"Logged in as {user.username}")
    return 0


def cmd_logout(services: dict, args) -> int:
    services["auth"].logout()
    print("Logged out")
    return 0


def cmd_sheet(services: dict, args) -> int:
    sheet_svc: MonthlySheetService = services["sheet"]
    if args.csv:
        rows = sheet_svc.export_csv(args.month, args.year)
        with open(args.csv, "w", newline="", encoding="utf-8") as f:
            csv.writer(f).writerows(rows)
        print(f"Wrote {len(rows) - 2} expenses to {args.csv}")
        return 0

    sheet = sheet_svc.get_sheet(args.month, args.year)
    print(f"{sheet['month_label']}: {format_currency(sheet['total'])} "
          f"across {sheet['count']} expenses")
    for method, bucket in sheet["by_payment_method"].items():
        print(f"  {method.label:<12} "
              f"{format_currency(bucket.total):>14}  ({bucket.count})")
    if args.list:
        for e in sorted(sheet["expenses"], key=lambda e: e.date):
            print(f"  {format_display_date(e.date):<13} {e.description[:30]:<30} "
                  f"{format_currency(e.amount):>14}")
    return 0


def cmd_summary(services: dict, args) -> int:
    data = services["dashboard"].load_overview()
    expenses = data["expenses"]
    overview = services["expenses"].get_overview(expenses)
    print(friendly_month(month_key(today_str())))
    print(f"This month  {format_currency(overview['this_month']['total'])}")
    print(f"Last month  {format_currency(overview['last_month']['total'])}")
    print(f"This year   {format_currency(overview['this_year']['total'])}")
    for category, total in aggregator.group_by_category(
        aggregator.current_month_records(expenses)
    ).items():
        print(f"  {category.label:<18} {format_currency(total):>14}")

    emi = aggregator.compute_emi_summary(data["emis"])
    print(f"EMIs: {emi.total_active_loans} active, "
          f"{format_currency(emi.total_monthly_emi)}/month, "
          f"{emi.overdue_count} overdue")
    lending = aggregator.compute_lending_summary(data["lending"])
    print(f"Lent: {format_currency(lending.total_lent)}, "
          f"pending {format_currency(lending.pending_amount)}")
    savings = aggregator.compute_savings_summary(data["savings"])
    monthly = aggregator.group_by_month(data["savings"])
    print(f"Savings balance: {format_currency(savings.balance)}", end="")
    if monthly:
        print(f" ({format_signed(monthly[-1].net)} in {friendly_month(monthly[-1].month)})")
    else:
        print()
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="finance-tracker", description=APP_NAME)
    parser.add_argument("-v", "--verbose", action="store_true")
    sub = parser.add_subparsers(dest="command", required=True)

    login = sub.add_parser("login")
    login.add_argument("username")
    login.set_defaults(func=cmd_login)

    sub.add_parser("logout").set_defaults(func=cmd_logout)

    sheet = sub.add_parser("sheet", help="monthly expense sheet")
    sheet.add_argument("--month", type=int, help="0-based month (0 = January)")
    sheet.add_argument("--year", type=int)
    sheet.add_argument("--csv", help="write the sheet to this CSV file")
    sheet.add_argument("--list", action="store_true", help="print every expense")
    sheet.set_defaults(func=cmd_sheet)

    sub.add_parser("summary").set_defaults(func=cmd_summary)
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)
    services = build_services()
    try:
        return args.func(services, args)
    except AuthenticationError as exc:
        logger.debug("%s failed", args.command, exc_info=True)
        print(f"{exc.message} Please log in again.", file=sys.stderr)
        return 2
    except (ApiError, ValueError) as exc:
        logger.debug("%s failed", args.command, exc_info=True)
        print(getattr(exc, "message", str(exc)), file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
