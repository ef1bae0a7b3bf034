import json
from decimal import Decimal

import pytest

from api.http_client import ApiClient
from api.session_store import SessionStore
from models.category import Category, PaymentMethod, SavingsType
from models.emi import EMI, EMIInstallment
from models.expense import Expense
from models.lending import LendingRecord
from models.savings import SavingsTransaction

BASE_URL = "http://backend.test"


class FakeResponse:
    def __init__(self, status_code: int = 200, body=None, raw: bytes | None = None):
        self.status_code = status_code
        if raw is not None:
            self.content = raw
        elif body is not None:
            self.content = json.dumps(body).encode()
        else:
            self.content = b""

    def json(self):
        return json.loads(self.content)


class FakeSession:
    """Stands in for requests.Session: canned responses keyed by (method, path)."""

    def __init__(self):
        self.calls: list[dict] = []
        self.routes: dict[tuple[str, str], FakeResponse] = {}
        self.error: Exception | None = None

    def route(self, method: str, path: str, status: int = 200, body=None, raw=None):
        self.routes[(method, path)] = FakeResponse(status, body, raw)

    def request(self, method, url, json=None, headers=None, timeout=None):
        path = url[len(BASE_URL):]
        self.calls.append({"method": method, "path": path, "json": json, "headers": headers})
        if self.error is not None:
            raise self.error
        return self.routes.get((method, path), FakeResponse(404, {"error": "Not found"}))

    @property
    def last(self) -> dict:
        return self.calls[-1]


@pytest.fixture
def store(tmp_path):
    return SessionStore(tmp_path / "session.json")


@pytest.fixture
def fake_session():
    return FakeSession()


@pytest.fixture
def client(store, fake_session):
    return ApiClient(BASE_URL, store, session=fake_session)


@pytest.fixture
def make_expense():
    counter = iter(range(1, 10_000))

    def _make(amount="10.00", category=Category.FOOD, date="2024-03-01",
              method=PaymentMethod.SELF, **kwargs):
        return Expense(
            id=kwargs.pop("id", f"e{next(counter)}"),
            description=kwargs.pop("description", "item"),
            amount=Decimal(str(amount)),
            category=category,
            date=date,
            payment_method=method,
            **kwargs,
        )
    return _make


@pytest.fixture
def make_lending():
    counter = iter(range(1, 10_000))

    def _make(amount="1000", returned="0", **kwargs):
        return LendingRecord(
            id=kwargs.pop("id", f"l{next(counter)}"),
            borrower_name=kwargs.pop("borrower_name", "Ravi"),
            amount=Decimal(str(amount)),
            lend_date=kwargs.pop("lend_date", "2024-01-05"),
            returned_amount=Decimal(str(returned)),
            **kwargs,
        )
    return _make


@pytest.fixture
def make_savings():
    counter = iter(range(1, 10_000))

    def _make(amount, type_=SavingsType.DEPOSIT, date="2024-03-01", **kwargs):
        return SavingsTransaction(
            id=kwargs.pop("id", f"s{next(counter)}"),
            amount=Decimal(str(amount)),
            type=type_,
            description=kwargs.pop("description", ""),
            category=kwargs.pop("category", "General"),
            date=date,
        )
    return _make


@pytest.fixture
def make_emi():
    def _make(id="emi1", monthly="1000", installments=(), is_active=True, **kwargs):
        insts = [
            EMIInstallment(
                installment_number=n,
                due_date=due,
                amount=Decimal(str(monthly)),
                is_paid=paid,
                paid_amount=Decimal(str(monthly)) if paid else Decimal("0.00"),
                paid_date=due if paid else None,
            )
            for n, (due, paid) in enumerate(installments, start=1)
        ]
        return EMI(
            id=id,
            loan_name=kwargs.pop("loan_name", "Car loan"),
            total_amount=Decimal(str(monthly)) * max(len(insts), 1),
            monthly_amount=Decimal(str(monthly)),
            total_months=max(len(insts), 1),
            start_date=insts[0].due_date if insts else "2024-01-01",
            installments=insts,
            is_active=is_active,
            **kwargs,
        )
    return _make
