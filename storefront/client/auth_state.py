# storefront/client/auth_state.py
import logging
from collections.abc import Callable

from storefront.client.api import ApiError, StoreApiClient
from storefront.client.storage import LocalStorage

logger = logging.getLogger(__name__)

TOKEN_STORAGE_KEY = "token"

Listener = Callable[["AuthStore"], None]


class AuthStore:
    """
    Single source of client-side authentication state.

    Holds the bearer token (persisted under "token") and the current user.
    Interested components call `subscribe` and are notified after every
    login, registration, logout and focus regain.
    """

    def __init__(self, api: StoreApiClient, storage: LocalStorage):
        self.api = api
        self.storage = storage
        self.token: str | None = storage.get(TOKEN_STORAGE_KEY)
        self.user: dict | None = None
        self._listeners: list[Listener] = []

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; returns a callable that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    def _set_session(self, token: str | None, user: dict | None) -> None:
        self.token = token
        self.user = user
        if token:
            self.storage.set(TOKEN_STORAGE_KEY, token)
        else:
            self.storage.remove(TOKEN_STORAGE_KEY)

    def login(self, email: str, password: str) -> dict:
        data = self.api.login(email, password)
        self._set_session(data["token"], data["user"])
        self._notify()
        return data["user"]

    def register(self, username: str, email: str, password: str, phone: str | None = None) -> dict:
        data = self.api.register(username, email, password, phone)
        self._set_session(data["token"], data["user"])
        self._notify()
        return data["user"]

    def logout(self) -> None:
        """
        Forget the credential locally, then tell the server.

        A failed server call still leaves the client logged out.
        """
        self._set_session(None, None)
        try:
            self.api.logout()
        except ApiError as exc:
            logger.warning("Server logout failed: %s", exc.message)
        self._notify()

    def window_focused(self) -> None:
        """Re-read the persisted token (another tab may have changed it)."""
        token = self.storage.get(TOKEN_STORAGE_KEY)
        if token != self.token:
            self.user = None
        self.token = token
        self._notify()
