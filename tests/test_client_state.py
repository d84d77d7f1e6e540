from unittest.mock import MagicMock, patch

import httpx
import pytest

from storefront.client.api import NETWORK_ERROR_MESSAGE, ApiError, StoreApiClient
from storefront.client.auth_state import TOKEN_STORAGE_KEY, AuthStore
from storefront.client.favorites import FavoritesStore, extract_item_id
from storefront.client.storage import LocalStorage


def make_auth(token: str | None = "token-1"):
    storage = LocalStorage()
    if token:
        storage.set(TOKEN_STORAGE_KEY, token)
    api = MagicMock()
    api.get_favorites.return_value = []
    return api, AuthStore(api, storage)


class TestExtractItemId:
    @pytest.mark.parametrize(
        "record, expected",
        [
            ({"product_id": "p1"}, "p1"),
            ({"productId": 7}, "7"),
            ({"product_id": {"id": "p2", "name": "Zinc"}}, "p2"),
            ({"productId": {"_id": "p3"}}, "p3"),
            ({"product_id": None, "service_id": "s1"}, "s1"),
            ({"other": "x"}, ""),
        ],
    )
    def test_shapes(self, record, expected):
        assert extract_item_id(record) == expected


class TestFavoritesStore:
    def test_anonymous_fetch_clears_without_network(self):
        api, auth = make_auth(token=None)
        store = FavoritesStore(api, auth)
        store.favorites = {"p1"}
        assert store.fetch_favorites() == set()
        api.get_favorites.assert_not_called()
        assert store.is_authenticated is False

    def test_fetch_replaces_set_wholesale(self):
        api, auth = make_auth()
        api.get_favorites.return_value = [{"product_id": "p1"}, {"product_id": {"id": 2}}]
        store = FavoritesStore(api, auth)
        assert store.favorites == {"p1", "2"}

        api.get_favorites.return_value = [{"product_id": "p3"}]
        store.fetch_favorites()
        assert store.favorites == {"p3"}

    def test_toggle_on_calls_add_and_refetches(self):
        api, auth = make_auth()
        store = FavoritesStore(api, auth)
        api.get_favorites.return_value = [{"product_id": "42"}]

        assert store.toggle_favorite(42) is True
        api.add_favorite.assert_called_once_with(product_id="42")
        assert store.is_favorite("42")
        assert store.is_favorite(42)

    def test_toggle_off_calls_remove(self):
        api, auth = make_auth()
        api.get_favorites.return_value = [{"product_id": "p1"}]
        store = FavoritesStore(api, auth)
        api.get_favorites.return_value = []

        assert store.toggle_favorite("p1") is False
        api.remove_favorite.assert_called_once_with("p1")

    def test_service_toggle(self):
        api, auth = make_auth()
        store = FavoritesStore(api, auth)
        store.toggle_favorite("s1", kind="service")
        api.add_favorite.assert_called_once_with(service_id="s1")

    def test_failed_toggle_reconciles_to_server(self):
        api, auth = make_auth()
        store = FavoritesStore(api, auth)
        api.add_favorite.side_effect = ApiError(500, "Internal server error")

        assert store.toggle_favorite("p1") is False
        assert store.favorites == set()
        assert api.get_favorites.call_count == 2

    def test_optimistic_flip_is_visible_during_call(self):
        api, auth = make_auth()
        store = FavoritesStore(api, auth)
        seen = []
        api.add_favorite.side_effect = lambda **kwargs: seen.append(store.is_favorite("p1"))
        api.get_favorites.return_value = [{"product_id": "p1"}]

        store.toggle_favorite("p1")
        assert seen == [True]

    def test_anonymous_toggle_is_rejected(self, caplog):
        api, auth = make_auth(token=None)
        store = FavoritesStore(api, auth)
        assert store.toggle_favorite("p1") is False
        api.add_favorite.assert_not_called()
        assert "not authenticated" in caplog.text

    def test_superseded_response_is_discarded(self):
        api, auth = make_auth()
        store = FavoritesStore(api, auth)
        state = {"nested": False}

        def slow_then_fast():
            if not state["nested"]:
                state["nested"] = True
                # a newer fetch starts and completes before this one returns
                store.fetch_favorites()
                return [{"product_id": "stale"}]
            return [{"product_id": "fresh"}]

        api.get_favorites.side_effect = slow_then_fast
        store.fetch_favorites()
        assert store.favorites == {"fresh"}
        assert store.loading is False

    def test_failed_fetch_keeps_current_set(self):
        api, auth = make_auth()
        api.get_favorites.return_value = [{"product_id": "p1"}]
        store = FavoritesStore(api, auth)
        api.get_favorites.side_effect = ApiError(None, NETWORK_ERROR_MESSAGE)
        assert store.fetch_favorites() == {"p1"}

    def test_expired_token_clears_like_anonymous(self):
        api, auth = make_auth()
        api.get_favorites.return_value = [{"product_id": "p1"}]
        store = FavoritesStore(api, auth)
        api.get_favorites.side_effect = ApiError(401, "Authentication required")
        assert store.fetch_favorites() == set()
        assert store.is_authenticated is False
        assert store.loading is False

    def test_sort_by_favorites_is_stable(self):
        api, auth = make_auth()
        api.get_favorites.return_value = [{"product_id": "b"}, {"product_id": "d"}]
        store = FavoritesStore(api, auth)
        items = [{"id": "a"}, {"id": "b"}, {"id": "c"}, {"id": "d"}, {"id": "e"}]
        assert [i["id"] for i in store.sort_by_favorites(items)] == ["b", "d", "a", "c", "e"]

    def test_close_stops_listening(self):
        api, auth = make_auth()
        store = FavoritesStore(api, auth)
        store.close()
        auth.window_focused()
        assert api.get_favorites.call_count == 1


class TestAuthStore:
    def test_login_persists_token_and_notifies(self):
        api, auth = make_auth(token=None)
        api.login.return_value = {"token": "t-9", "user": {"username": "u1"}}
        events = []
        auth.subscribe(lambda store: events.append(store.is_authenticated))

        auth.login("user1@example.com", "hunter22")
        assert auth.token == "t-9"
        assert auth.storage.get(TOKEN_STORAGE_KEY) == "t-9"
        assert events == [True]

    def test_unsubscribe(self):
        api, auth = make_auth(token=None)
        events = []
        unsubscribe = auth.subscribe(events.append)
        unsubscribe()
        auth.window_focused()
        assert events == []

    def test_logout_survives_server_failure(self):
        api, auth = make_auth()
        api.logout.side_effect = ApiError(None, NETWORK_ERROR_MESSAGE)
        store = FavoritesStore(api, auth)
        store.favorites = {"p1"}

        auth.logout()
        assert auth.is_authenticated is False
        assert auth.storage.get(TOKEN_STORAGE_KEY) is None
        assert store.favorites == set()

    def test_auth_change_triggers_refetch(self):
        api, auth = make_auth(token=None)
        store = FavoritesStore(api, auth)
        api.login.return_value = {"token": "t-1", "user": {}}
        api.get_favorites.return_value = [{"product_id": "p5"}]

        auth.login("a@example.com", "pw")
        assert store.favorites == {"p5"}

    def test_window_focus_picks_up_external_login(self):
        api, auth = make_auth(token=None)
        api.get_favorites.return_value = [{"product_id": "p7"}]
        store = FavoritesStore(api, auth)

        auth.storage.set(TOKEN_STORAGE_KEY, "from-another-tab")
        auth.window_focused()
        assert store.is_authenticated is True
        assert store.favorites == {"p7"}


class TestApiClient:
    def test_error_message_is_surfaced(self, client):
        api = StoreApiClient(client)
        with pytest.raises(ApiError) as excinfo:
            api.login("ghost@example.com", "whatever")
        assert excinfo.value.status_code == 401
        assert excinfo.value.message == "Invalid credentials"

    def test_network_error(self):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        http = httpx.Client(base_url="http://store.invalid", transport=httpx.MockTransport(refuse))
        with pytest.raises(ApiError) as excinfo:
            StoreApiClient(http).list_products()
        assert excinfo.value.status_code is None
        assert excinfo.value.message == NETWORK_ERROR_MESSAGE

    def test_bearer_header_is_attached(self):
        seen = {}

        def handler(request):
            seen["auth"] = request.headers.get("authorization")
            return httpx.Response(200, json=[])

        http = httpx.Client(base_url="http://store.test", transport=httpx.MockTransport(handler))
        StoreApiClient(http, token_provider=lambda: "abc").get_favorites()
        assert seen["auth"] == "Bearer abc"


def test_favorites_end_to_end(client, product):
    storage = LocalStorage()
    api = StoreApiClient(client, token_provider=lambda: storage.get(TOKEN_STORAGE_KEY))
    auth = AuthStore(api, storage)
    favorites = FavoritesStore(api, auth)

    auth.register("user1", "user1@example.com", "hunter22")
    auth.logout()
    auth.login("user1@example.com", "hunter22")

    assert favorites.toggle_favorite(product.id) is True
    assert favorites.fetch_favorites() == {str(product.id)}

    assert favorites.toggle_favorite(product.id) is False
    assert favorites.fetch_favorites() == set()

    auth.logout()
    with patch.object(api, "get_favorites") as get_favorites:
        assert favorites.fetch_favorites() == set()
        get_favorites.assert_not_called()
