from api.http_client import ApiClient
from api.errors import ApiError
from models.user import User


class AuthAPI:
    def __init__(self, client: ApiClient):
        self._client = client

    def login(self, username: str, password: str) -> tuple[str, User]:
        body = self._client.post(
            "/api/users/login",
            {"username": username, "password": password},
            auth=False,
        )
        token = (body or {}).get("token")
        if not token:
            raise ApiError("Login failed. Please try again.")
        return token, User.from_json(body.get("user") or {"username": username})

    def register(self, username: str, email: str, password: str) -> str:
        body = self._client.post(
            "/api/users/register",
            {"username": username, "email": email, "password": password},
            auth=False,
        ) or {}
        if not (body.get("success") and body.get("token")):
            raise ApiError("Registration failed. Please try again.")
        return body["token"]
