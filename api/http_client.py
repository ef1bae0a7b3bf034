import logging

import requests

from api.errors import ApiError, AuthenticationError, NetworkError, ValidationError
from api.session_store import SessionStore
from utils.constants import GENERIC_ERROR_MESSAGE

logger = logging.getLogger(__name__)


class ApiClient:
    """Sends requests to the backend and turns failures into ApiError subclasses.

    The Authorization header is built for each request from the session store's
    current token; nothing auth-related is kept on the shared requests.Session.
    """

    def __init__(
        self,
        base_url: str,
        session_store: SessionStore,
        session: requests.Session | None = None,
        timeout: float | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.session_store = session_store
        self._session = session or requests.Session()
        self._timeout = timeout

    def get(self, path: str):
        return self.request("GET", path)

    def post(self, path: str, payload: dict | None = None, auth: bool = True):
        return self.request("POST", path, payload, auth=auth)

    def put(self, path: str, payload: dict | None = None):
        return self.request("PUT", path, payload)

    def delete(self, path: str):
        return self.request("DELETE", path)

    def request(self, method: str, path: str, payload: dict | None = None, auth: bool = True):
        url = f"{self.base_url}{path}"
        headers = self._headers(auth)
        logger.debug("%s %s", method, path)
        try:
            response = self._session.request(
                method, url, json=payload, headers=headers, timeout=self._timeout
            )
        except requests.RequestException as exc:
            logger.error("%s %s failed: %s", method, path, exc)
            raise NetworkError(
                "Could not reach the server. Check your connection and try again."
            ) from exc

        status = response.status_code
        if status == 401:
            logger.warning("%s %s returned 401, clearing session", method, path)
            self.session_store.clear()
            raise AuthenticationError(self._error_message(response), status)
        if 400 <= status < 500:
            logger.warning("%s %s rejected with %s", method, path, status)
            raise ValidationError(self._error_message(response), status)
        if status >= 300:
            logger.error("%s %s failed with %s", method, path, status)
            raise ApiError(status_code=status)

        return self._unwrap(self._json(response, method, path))

    # ── Helpers ──────────────────────────────────────────────────────────────

    def _headers(self, auth: bool) -> dict:
        headers = {"Accept": "application/json"}
        token = self.session_store.get_token() if auth else None
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    @staticmethod
    def _json(response, method: str, path: str):
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            logger.error("%s %s returned a body that is not JSON", method, path)
            raise ApiError(status_code=response.status_code) from exc

    @staticmethod
    def _unwrap(body):
        """Strip the {success, data} envelope some endpoints use."""
        if isinstance(body, dict) and "success" in body and "data" in body:
            return body["data"]
        return body

    @staticmethod
    def _error_message(response) -> str:
        try:
            body = response.json()
        except ValueError:
            return GENERIC_ERROR_MESSAGE
        if isinstance(body, dict):
            return body.get("error") or body.get("message") or GENERIC_ERROR_MESSAGE
        return GENERIC_ERROR_MESSAGE
