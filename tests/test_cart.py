from unittest.mock import MagicMock

import pytest

from storefront.client.api import ApiError, StoreApiClient
from storefront.client.cart import (
    CART_STORAGE_KEY,
    CartState,
    CartStore,
    add_item,
    clear,
    compute_total,
    remove_item,
    update_quantity,
)
from storefront.client.storage import LocalStorage

P1 = {"id": 1, "name": "Vitamin C", "price": 1000, "image": "/images/c.png"}
P2 = {"id": 2, "name": "Zinc", "price": 500}

DELIVERY = {"county": "Nairobi", "address": "Moi Avenue", "phone": "0712345678"}


class TestCartFunctions:
    @pytest.mark.parametrize("times", [1, 2, 5])
    def test_repeated_add_merges_lines(self, times):
        state = CartState()
        for _ in range(times):
            state = add_item(state, P1)
        assert len(state.lines) == 1
        assert state.lines[0].quantity == times
        assert state.total == 1000 * times

    def test_add_matches_ids_across_types(self):
        state = add_item(CartState(), P1)
        state = add_item(state, {**P1, "id": "1"})
        assert len(state.lines) == 1
        assert state.lines[0].quantity == 2

    def test_add_keeps_original_snapshot(self):
        state = add_item(CartState(), P1)
        state = add_item(state, {**P1, "price": 9999, "name": "Renamed"})
        assert state.lines[0].price == 1000
        assert state.lines[0].name == "Vitamin C"
        assert state.total == 2000

    def test_add_takes_first_image_when_no_image_field(self):
        state = add_item(CartState(), {"_id": "abc", "name": "Tea", "price": 10, "images": ["/a.png", "/b.png"]})
        assert state.lines[0].id == "abc"
        assert state.lines[0].image == "/a.png"

    def test_remove_by_string_id_removes_numeric_line(self):
        state = add_item(add_item(CartState(), {**P1, "id": 42}), P2)
        state = remove_item(state, "42")
        assert [line.id for line in state.lines] == [2]
        assert state.total == 500

    def test_remove_absent_is_noop(self):
        state = add_item(CartState(), P1)
        assert remove_item(state, "999").lines == state.lines

    @pytest.mark.parametrize("quantity", [0, -1])
    def test_quantity_below_one_is_rejected(self, quantity):
        state = add_item(add_item(CartState(), P1), P1)
        assert update_quantity(state, 1, quantity) is state
        assert state.lines[0].quantity == 2

    def test_update_quantity(self):
        state = update_quantity(add_item(CartState(), P1), "1", 4)
        assert state.lines[0].quantity == 4
        assert state.total == 4000

    def test_clear(self):
        state = clear()
        assert state.lines == ()
        assert state.total == 0

    def test_store_clear_empties_and_persists(self):
        store = CartStore(LocalStorage())
        store.add_item(P1)
        store.clear()
        assert store.lines == ()
        assert store.storage.get(CART_STORAGE_KEY) == {"items": [], "total": 0}

    def test_compute_total(self):
        state = add_item(add_item(add_item(CartState(), P1), P1), P2)
        assert compute_total(state.lines) == 2500

    def test_scenario(self):
        state = add_item(CartState(), P1)
        state = add_item(state, P1)
        state = add_item(state, P2)
        assert state.total == 2500

        state = remove_item(state, 2)
        assert state.total == 2000

        state = update_quantity(state, 1, 0)
        assert state.lines[0].quantity == 2
        assert state.total == 2000


class TestCartStore:
    def test_persists_across_instances(self, tmp_path):
        path = tmp_path / "storage.json"
        store = CartStore(LocalStorage(path))
        store.add_item(P1)
        store.add_item(P1)
        store.add_item(P2)

        restored = CartStore(LocalStorage(path))
        assert restored.quantity_of(1) == 2
        assert restored.quantity_of("2") == 1
        assert restored.total == 2500
        assert restored.item_count == 3

    def test_stored_total_is_recomputed(self):
        storage = LocalStorage()
        storage.set(
            CART_STORAGE_KEY,
            {"items": [{"id": 1, "name": "Vitamin C", "price": 1000, "quantity": 3}], "total": 1},
        )
        assert CartStore(storage).total == 3000

    def test_unreadable_cart_starts_empty(self):
        storage = LocalStorage()
        storage.set(CART_STORAGE_KEY, {"items": [{"id": 1, "quantity": 0}]})
        assert CartStore(storage).lines == ()

    def test_checkout_clears_on_success(self):
        storage = LocalStorage()
        store = CartStore(storage)
        store.add_item(P1)
        api = MagicMock()
        api.create_order.return_value = {"id": "order-1"}

        assert store.checkout(api, DELIVERY) == {"id": "order-1"}
        items, delivery = api.create_order.call_args.args
        assert items == [
            {"product_id": "1", "name": "Vitamin C", "quantity": 1, "price": 1000, "image": "/images/c.png"}
        ]
        assert delivery == DELIVERY
        assert store.lines == ()
        assert storage.get(CART_STORAGE_KEY)["items"] == []

    def test_checkout_failure_keeps_cart(self):
        store = CartStore(LocalStorage())
        store.add_item(P1)
        api = MagicMock()
        api.create_order.side_effect = ApiError(400, "Cart is empty")

        with pytest.raises(ApiError):
            store.checkout(api, DELIVERY)
        assert store.quantity_of(1) == 1

    def test_empty_checkout_is_rejected(self):
        with pytest.raises(ValueError):
            CartStore(LocalStorage()).checkout(MagicMock(), DELIVERY)

    def test_checkout_against_api(self, client, product, other_product):
        store = CartStore(LocalStorage())
        store.add_item({"id": str(product.id), "name": product.name, "price": product.price})
        store.add_item({"id": str(product.id), "name": product.name, "price": product.price})
        store.add_item({"id": str(other_product.id), "name": other_product.name, "price": other_product.price})

        order = store.checkout(StoreApiClient(client), DELIVERY)
        assert order["total_amount"] == 2500
        assert order["status"] == "pending"
        assert store.total == 0
