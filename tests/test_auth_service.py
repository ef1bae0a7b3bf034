import pytest

from api.errors import ApiError
from models.user import User
from services.auth_service import AuthService


class StubAuthAPI:
    def __init__(self, fail=False):
        self.fail = fail
        self.calls = []

    def login(self, username, password):
        self.calls.append(("login", username, password))
        if self.fail:
            raise ApiError("Invalid credentials")
        return "tok", User(id="u1", username=username)

    def register(self, username, email, password):
        self.calls.append(("register", username, email, password))
        return "new-tok"


@pytest.fixture
def api():
    return StubAuthAPI()


@pytest.fixture
def service(api, store):
    return AuthService(api, store)


def test_login_stores_session(service, store):
    user = service.login("  asha ", "secret")
    assert user.username == "asha"
    assert store.get_token() == "tok"
    assert service.current_user() == user
    assert service.is_authenticated


def test_login_requires_both_fields(service, api):
    with pytest.raises(ValueError):
        service.login("", "secret")
    with pytest.raises(ValueError):
        service.login("asha", "")
    assert api.calls == []


def test_failed_login_leaves_store_empty(store):
    service = AuthService(StubAuthAPI(fail=True), store)
    with pytest.raises(ApiError):
        service.login("asha", "wrong")
    assert not store.is_authenticated


@pytest.mark.parametrize("args, message", [
    (("asha", "", "secret", "secret"), "All fields are required"),
    (("asha", "a@x.io", "secret", "secreT"), "Passwords do not match"),
    (("asha", "a@x.io", "abc", "abc"), "Password must be at least 6 characters long"),
    (("asha", "not-an-email", "secret", "secret"), "Please enter a valid email address"),
    (("asha", "a@x", "secret", "secret"), "Please enter a valid email address"),
])
def test_register_validation(service, api, args, message):
    with pytest.raises(ValueError, match=message):
        service.register(*args)
    assert api.calls == []


def test_register_success_starts_session(service, api, store):
    assert service.register("asha", " a@x.io ", "secret", "secret") == "new-tok"
    assert api.calls == [("register", "asha", "a@x.io", "secret")]
    assert store.get_token() == "new-tok"


def test_logout_clears(service, store):
    service.login("asha", "secret")
    service.logout()
    assert not service.is_authenticated
    assert service.current_user() is None
