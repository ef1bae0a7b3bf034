from decimal import Decimal

import pytest

from api.auth_api import AuthAPI
from api.emi_api import EMIAPI
from api.errors import ApiError
from api.expense_api import ExpenseAPI
from api.lending_api import LendingAPI
from api.savings_api import SavingsAPI
from models.category import SavingsType


# ── Auth ──────────────────────────────────────────────────────────────────────

def test_login_returns_token_and_user(client, fake_session):
    fake_session.route("POST", "/api/users/login", body={
        "token": "tok", "user": {"_id": "u1", "username": "asha", "email": "a@x.io"},
    })
    token, user = AuthAPI(client).login("asha", "secret")
    assert token == "tok"
    assert user.username == "asha"
    assert fake_session.last["json"] == {"username": "asha", "password": "secret"}


def test_login_without_token_fails(client, fake_session):
    fake_session.route("POST", "/api/users/login", body={"message": "ok?"})
    with pytest.raises(ApiError, match="Login failed"):
        AuthAPI(client).login("asha", "secret")


def test_register_requires_success_flag(client, fake_session):
    fake_session.route("POST", "/api/users/register", body={"success": False, "token": "t"})
    with pytest.raises(ApiError, match="Registration failed"):
        AuthAPI(client).register("asha", "a@x.io", "secret")
    fake_session.route("POST", "/api/users/register", body={"success": True, "token": "t"})
    assert AuthAPI(client).register("asha", "a@x.io", "secret") == "t"


# ── Expenses ──────────────────────────────────────────────────────────────────

def test_expense_list_and_create(client, fake_session):
    fake_session.route("GET", "/api/expenses/get_expenses", body=[
        {"_id": "e1", "description": "Bus", "amount": 30, "category": "transport",
         "date": "2024-03-01"},
    ])
    fake_session.route("POST", "/api/expenses/add_expense", body={
        "_id": "e2", "description": "Tea", "amount": 15, "category": "food", "date": "2024-03-02",
    })
    api = ExpenseAPI(client)
    [bus] = api.get_all()
    assert bus.amount == Decimal("30.00")

    created = api.create(bus)
    assert created.id == "e2"
    assert fake_session.last["json"]["paymentMethod"] == "self"


def test_expense_repay_full_sends_null_amount(client, fake_session):
    fake_session.route("POST", "/api/repayments/repay/e1", body={
        "_id": "e1", "amount": 100, "isRepaid": True, "date": "2024-03-01",
        "paymentMethod": "lent",
    })
    updated = ExpenseAPI(client).repay("e1", None, "2024-03-05")
    assert updated.is_repaid
    assert fake_session.last["json"] == {"repaidAmount": None, "repaymentDate": "2024-03-05"}


def test_clear_repayment_with_empty_body(client, fake_session):
    fake_session.route("DELETE", "/api/repayments/repay/e1", status=204)
    assert ExpenseAPI(client).clear_repayment("e1") is None


# ── EMIs ──────────────────────────────────────────────────────────────────────

def test_emi_list_summary_and_pay(client, fake_session):
    emi_json = {
        "_id": "m1", "loanName": "Phone", "monthlyAmount": 500, "totalMonths": 2,
        "installments": [{"installmentNumber": 1, "dueDate": "2024-03-28", "amount": 500}],
    }
    fake_session.route("GET", "/api/emis", body=[emi_json])
    fake_session.route("GET", "/api/emis/summary", body={"totalActiveLoans": 1})
    fake_session.route("PUT", "/api/emis/m1/installment/1/pay", body=emi_json)
    api = EMIAPI(client)

    assert api.get_all()[0].loan_name == "Phone"
    assert api.get_summary().total_active_loans == 1
    assert api.pay_installment("m1", 1, Decimal("500"), "2024-03-20").id == "m1"
    assert fake_session.last["json"] == {"paidAmount": 500.0, "paidDate": "2024-03-20"}


def test_emi_unpay_without_body(client, fake_session):
    fake_session.route("PUT", "/api/emis/m1/installment/1/unpay", status=204)
    assert EMIAPI(client).unpay_installment("m1", 1) is None
    assert fake_session.last["json"] == {}


# ── Lending ───────────────────────────────────────────────────────────────────

def test_lending_update_return_payload(client, fake_session, make_lending):
    fake_session.route("PUT", "/api/lending/l1", body={"success": True})
    api = LendingAPI(client)
    api.update_return("l1", Decimal("250"))
    assert fake_session.last["json"] == {"returnedAmount": 250.0}
    api.update_return("l1", Decimal("250"), notes="cash")
    assert fake_session.last["json"]["notes"] == "cash"


def test_lending_list_summary_add_delete(client, fake_session, make_lending):
    fake_session.route("GET", "/api/lending/list", body={"success": True, "data": [
        {"_id": "l1", "borrowerName": "Ravi", "amount": 1000, "returnedAmount": 0,
         "lendDate": "2024-01-05"},
    ]})
    fake_session.route("GET", "/api/lending/summary", body={"success": True, "data": {
        "totalLent": 1000, "totalReturned": 0, "pendingAmount": 1000,
        "statusCounts": {"pending": 1}, "totalRecords": 1,
    }})
    fake_session.route("POST", "/api/lending/add", body={"success": True})
    fake_session.route("DELETE", "/api/lending/l1", body={"success": True})
    api = LendingAPI(client)

    assert api.get_all()[0].borrower_name == "Ravi"
    assert api.get_summary().pending_amount == Decimal("1000.00")
    api.create(make_lending(amount=200))
    assert fake_session.last["json"]["amount"] == 200.0
    api.delete("l1")
    assert fake_session.last["method"] == "DELETE"


# ── Savings ───────────────────────────────────────────────────────────────────

def test_savings_endpoints(client, fake_session, make_savings):
    fake_session.route("GET", "/api/savings/transactions", body={"success": True, "data": [
        {"_id": "s1", "amount": 500, "type": "deposit", "date": "2024-03-01"},
    ]})
    fake_session.route("GET", "/api/savings/monthly", body={"success": True, "data": [
        {"month": "2024-03", "deposits": 500, "withdrawals": 0},
    ]})
    fake_session.route("POST", "/api/savings/add", body={"success": True})
    api = SavingsAPI(client)

    assert api.get_transactions()[0].type is SavingsType.DEPOSIT
    assert api.get_monthly()[0].net == Decimal("500.00")
    api.create(make_savings(75, SavingsType.WITHDRAWAL))
    assert fake_session.last["json"]["type"] == "withdrawal"


def test_expense_writes_with_empty_body_return_none(client, fake_session, make_expense):
    fake_session.route("POST", "/api/expenses/add_expense", status=201)
    fake_session.route("POST", "/api/repayments/repay/e1", status=200)
    api = ExpenseAPI(client)
    assert api.create(make_expense()) is None
    assert api.repay("e1", None, "2024-03-05") is None


def test_savings_rows_with_unknown_type_are_skipped(client, fake_session):
    fake_session.route("GET", "/api/savings/transactions", body=[
        {"_id": "s1", "amount": 500, "type": "deposit", "date": "2024-03-01"},
        {"_id": "s2", "amount": 90, "type": "transfer", "date": "2024-03-02"},
        {"_id": "s3", "amount": 40, "date": "2024-03-03"},
    ])
    assert [t.id for t in SavingsAPI(client).get_transactions()] == ["s1"]
