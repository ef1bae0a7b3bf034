APP_NAME = "Expense Tracker"
CONFIG_DIR_NAME = ".finance_tracker"
SESSION_FILE = "session.json"

DATE_FORMAT = "%Y-%m-%d"
MONTH_FORMAT = "%Y-%m"

# ── Backend ───────────────────────────────────────────────────────────────────

API_URLS = {
    "production":  "https://expense-tracker-backend-delta-seven.vercel.app",
    "development": "http://localhost:3004",
}
DEFAULT_ENVIRONMENT = "development"

TOKEN_KEY = "expense_tracker_token"
USER_KEY = "expense_tracker_user"

GENERIC_ERROR_MESSAGE = "Something went wrong. Please try again."

# ── Filters / defaults ────────────────────────────────────────────────────────

ALL = "all"

CURRENCY_SYMBOL = "₹"
MIN_PASSWORD_LENGTH = 6
YEAR_OPTION_SPAN = 5

DEFAULT_SAVINGS_CATEGORY = "General"
DEFAULT_LENDING_PURPOSE = "Personal loan"

MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]
