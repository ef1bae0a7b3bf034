import logging
import re

from api.auth_api import AuthAPI
from api.session_store import SessionStore
from models.user import User
from utils.constants import MIN_PASSWORD_LENGTH

logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class AuthService:
    def __init__(self, auth_api: AuthAPI, session_store: SessionStore):
        self._api = auth_api
        self._store = session_store

    def login(self, username: str, password: str) -> User:
        username = username.strip()
        if not username or not password:
            raise ValueError("Username and password are required.")
        token, user = self._api.login(username, password)
        self._store.save(token, user)
        logger.info("Logged in as %s", user.username)
        return user

    def register(
        self, username: str, email: str, password: str, confirm_password: str
    ) -> str:
        """Create an account and start a session; returns the new token."""
        username = username.strip()
        email = email.strip()
        self._validate_registration(username, email, password, confirm_password)
        token = self._api.register(username, email, password)
        self._store.save(token)
        logger.info("Registered new user %s", username)
        return token

    def logout(self):
        self._store.clear()

    @property
    def is_authenticated(self) -> bool:
        return self._store.is_authenticated

    def current_user(self) -> User | None:
        return self._store.get_user()

    # ── Helpers ──────────────────────────────────────────────────────────────

    @staticmethod
    def _validate_registration(username: str, email: str, password: str, confirm_password: str):
        if not (username and email and password and confirm_password):
            raise ValueError("All fields are required")
        if password != confirm_password:
            raise ValueError("Passwords do not match")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValueError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
            )
        if not EMAIL_RE.match(email):
            raise ValueError("Please enter a valid email address")
