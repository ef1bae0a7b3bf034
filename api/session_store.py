import json
import logging
from pathlib import Path

from models.user import User
from utils.app_config import load_config, save_config
from utils.constants import TOKEN_KEY, USER_KEY

logger = logging.getLogger(__name__)


class SessionStore:
    """Two named slots, the bearer token and the last-known user, kept in a JSON file.

    The user slot holds the user as a JSON string, the way it came back from login.
    Both slots are cleared together.
    """

    def __init__(self, path: str | Path):
        self._path = Path(path)

    def _read(self) -> dict:
        return load_config(self._path)

    def get_token(self) -> str | None:
        return self._read().get(TOKEN_KEY) or None

    def get_user(self) -> User | None:
        raw = self._read().get(USER_KEY)
        if not raw:
            return None
        try:
            return User.from_json(json.loads(raw))
        except (TypeError, ValueError):
            logger.warning("Discarding unreadable user entry in %s", self._path)
            return None

    def save(self, token: str, user: User | None = None):
        data = {TOKEN_KEY: token}
        if user is not None:
            data[USER_KEY] = json.dumps(user.to_json())
        save_config(data, self._path)

    def clear(self):
        if self._path.exists():
            self._path.unlink()
        logger.info("Session cleared")

    @property
    def is_authenticated(self) -> bool:
        return self.get_token() is not None
