# storefront/client/favorites.py
"""
Client mirror of the caller's favorites.

The server is the record of truth. Toggles flip the local set at once,
call the server, then always refetch; the refetch replaces the local set
wholesale. Every fetch takes a sequence number and only the response of
the most recently issued fetch is applied, so a slow, superseded refetch
cannot overwrite a newer one.
"""

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from storefront.client.api import ApiError, StoreApiClient
from storefront.client.auth_state import AuthStore
from storefront.core.ids import normalize_id

logger = logging.getLogger(__name__)

# Keys a favorite record may carry its target under (flat id or populated
# sub-document), in lookup order.
TARGET_KEYS = ("product_id", "productId", "service_id", "serviceId")


def extract_item_id(record: Any) -> str:
    """
    Pull the referenced product (or service) id out of a favorite record.
    """
    if not isinstance(record, Mapping):
        return ""
    for key in TARGET_KEYS:
        value = record.get(key)
        if value:
            return normalize_id(value)
    return ""


def _item_id(item: Any) -> str:
    if isinstance(item, Mapping):
        return normalize_id(item)
    return normalize_id(getattr(item, "id", None))


class FavoritesStore:
    def __init__(self, api: StoreApiClient, auth: AuthStore):
        self.api = api
        self.auth = auth
        self.favorites: set[str] = set()
        self.is_authenticated = False
        self.loading = False
        self._seq = 0
        self._unsubscribe = auth.subscribe(self._on_auth_changed)
        self.fetch_favorites()

    def close(self) -> None:
        self._unsubscribe()

    def _on_auth_changed(self, auth: AuthStore) -> None:
        self.fetch_favorites()

    def fetch_favorites(self) -> set[str]:
        """
        Resync with the server.

        Anonymous: empty the set without any network call. Authenticated:
        replace the set with the server's list. A failed fetch keeps the
        current set.
        """
        self._seq += 1
        seq = self._seq
        self.is_authenticated = self.auth.is_authenticated

        if not self.is_authenticated:
            self.favorites = set()
            self.loading = False
            return self.favorites

        self.loading = True
        try:
            records = self.api.get_favorites()
        except ApiError as exc:
            logger.warning("Fetching favorites failed: %s", exc.message)
            if seq == self._seq:
                self.loading = False
                if exc.status_code == 401:
                    # stored token expired or was revoked server-side
                    self.is_authenticated = False
                    self.favorites = set()
            return self.favorites

        if seq != self._seq:
            logger.debug("Discarding favorites response %d (latest is %d)", seq, self._seq)
            return self.favorites

        self.favorites = {item_id for item_id in map(extract_item_id, records) if item_id}
        self.loading = False
        return self.favorites

    def toggle_favorite(self, item_id: Any, kind: str = "product") -> bool:
        """
        Flip favorite status of a product (or service, with kind="service").

        Returns the membership after reconciliation with the server.
        """
        if not self.auth.is_authenticated:
            logger.warning("Cannot toggle favorite %s: not authenticated", item_id)
            return False

        key = normalize_id(item_id)
        was_favorite = key in self.favorites

        # optimistic flip
        if was_favorite:
            self.favorites = self.favorites - {key}
        else:
            self.favorites = self.favorites | {key}

        try:
            if was_favorite:
                self.api.remove_favorite(key)
            elif kind == "service":
                self.api.add_favorite(service_id=key)
            else:
                self.api.add_favorite(product_id=key)
        except ApiError as exc:
            logger.warning("Toggling favorite %s failed: %s", key, exc.message)
        finally:
            self.fetch_favorites()

        return key in self.favorites

    def is_favorite(self, item_id: Any) -> bool:
        return normalize_id(item_id) in self.favorites

    def sort_by_favorites(self, items: Iterable[Any]) -> list[Any]:
        """Favorites first; relative order otherwise preserved (stable)."""
        return sorted(items, key=lambda item: 0 if _item_id(item) in self.favorites else 1)
