"""Application tests for cart item commands processed through the storefront."""

import pytest
from ordering.cart.cart import ShoppingCart
from ordering.cart.items import AddToCart, ClearCart, RemoveFromCart, UpdateCartQuantity
from protean import current_domain
from shared.exceptions import CartEntryNotFound, ProductNotFound, QuantityExceedsStock, QuantityNotPositive


def _cart(session_id="sess-001"):
    return current_domain.repository_for(ShoppingCart).get(session_id)


class TestAddToCart:
    def test_add(self, storefront):
        quantity = storefront.process(AddToCart(session_id="sess-001", product_id="1", quantity=2))
        assert quantity == 2
        assert _cart().item_count == 2

    def test_default_quantity_is_one(self, storefront):
        storefront.process(AddToCart(session_id="sess-001", product_id="1"))
        assert _cart().item_count == 1

    def test_cart_is_keyed_by_session(self, storefront):
        storefront.process(AddToCart(session_id="sess-a", product_id="1"))
        storefront.process(AddToCart(session_id="sess-b", product_id="2", quantity=3))
        assert _cart("sess-a").item_count == 1
        assert _cart("sess-b").item_for("2").quantity == 3

    def test_unknown_product(self, storefront):
        with pytest.raises(ProductNotFound):
            storefront.process(AddToCart(session_id="sess-001", product_id="999"))

    def test_non_positive_quantity(self, storefront):
        with pytest.raises(QuantityNotPositive):
            storefront.process(AddToCart(session_id="sess-001", product_id="1", quantity=0))

    def test_exceeding_stock(self, storefront):
        with pytest.raises(QuantityExceedsStock) as exc:
            storefront.process(AddToCart(session_id="sess-001", product_id="8", quantity=16))
        assert exc.value.message == "Only 15 items available"
        assert storefront.cart_snapshot("sess-001").is_empty

    def test_existing_plus_new_exceeding_stock(self, storefront):
        storefront.process(AddToCart(session_id="sess-001", product_id="8", quantity=10))
        with pytest.raises(QuantityExceedsStock):
            storefront.process(AddToCart(session_id="sess-001", product_id="8", quantity=6))
        assert _cart().item_for("8").quantity == 10

    def test_up_to_stock_allowed(self, storefront):
        storefront.process(AddToCart(session_id="sess-001", product_id="8", quantity=15))
        assert _cart().item_for("8").quantity == 15

    def test_cart_commands_open_no_checkout_session(self, storefront):
        storefront.process(AddToCart(session_id="sess-001", product_id="1"))
        assert "sess-001" not in storefront.sessions


class TestUpdateCartQuantity:
    def test_update(self, storefront):
        storefront.process(AddToCart(session_id="sess-001", product_id="1"))
        quantity = storefront.process(UpdateCartQuantity(session_id="sess-001", product_id="1", quantity=4))
        assert quantity == 4
        assert _cart().item_for("1").quantity == 4

    def test_zero_removes(self, storefront):
        storefront.process(AddToCart(session_id="sess-001", product_id="1"))
        assert storefront.process(UpdateCartQuantity(session_id="sess-001", product_id="1", quantity=0)) == 0
        assert _cart().is_empty

    def test_negative_rejected(self, storefront):
        storefront.process(AddToCart(session_id="sess-001", product_id="1"))
        with pytest.raises(QuantityNotPositive):
            storefront.process(UpdateCartQuantity(session_id="sess-001", product_id="1", quantity=-1))

    def test_absent_entry(self, storefront):
        with pytest.raises(CartEntryNotFound):
            storefront.process(UpdateCartQuantity(session_id="sess-001", product_id="1", quantity=2))

    def test_exceeding_stock(self, storefront):
        storefront.process(AddToCart(session_id="sess-001", product_id="8"))
        with pytest.raises(QuantityExceedsStock):
            storefront.process(UpdateCartQuantity(session_id="sess-001", product_id="8", quantity=20))


class TestRemoveAndClear:
    def test_remove(self, storefront):
        storefront.process(AddToCart(session_id="sess-001", product_id="1"))
        storefront.process(RemoveFromCart(session_id="sess-001", product_id="1"))
        assert _cart().is_empty

    def test_remove_absent_entry(self, storefront):
        with pytest.raises(CartEntryNotFound):
            storefront.process(RemoveFromCart(session_id="sess-001", product_id="1"))

    def test_clear(self, storefront):
        storefront.process(AddToCart(session_id="sess-001", product_id="1"))
        storefront.process(AddToCart(session_id="sess-001", product_id="2"))
        storefront.process(ClearCart(session_id="sess-001"))
        assert _cart().is_empty
