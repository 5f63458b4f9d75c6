"""
Cart and checkout-total tests.

Pure tests: no app or database needed.
"""

import pytest

from posgo.entities import Product, StoreSettings, Variant
from posgo.services.cart_service import Cart, compute_totals
from posgo.validation import ValidationError


def _product(pid="a", price=10.0, **kwargs):
    return Product(id=pid, name=f"Product {pid}", price=price, stock=10, **kwargs)


def _panetton():
    return Product(
        id="17",
        name="Panetón",
        price=28.0,
        stock=30,
        has_variants=True,
        variants=[
            Variant(id="v1", name="Caja", price=28.0, stock=20),
            Variant(id="v2", name="Lata", price=32.0, stock=10),
        ],
    )


INCLUSIVE = StoreSettings(tax_rate=0.18, prices_include_tax=True)
EXCLUSIVE = StoreSettings(tax_rate=0.18, prices_include_tax=False)


class TestComputeTotals:
    def test_tax_inclusive_worked_example(self):
        cart = Cart()
        cart.add(_product(price=10.0))
        cart.add(_product(price=10.0))
        cart.update_discount("a", 1.0)

        totals = compute_totals(cart.items, INCLUSIVE)

        assert totals.subtotal == pytest.approx(20.0)
        assert totals.discount == pytest.approx(2.0)
        assert totals.total == pytest.approx(18.0)
        assert totals.tax == pytest.approx(18 - 18 / 1.18)
        assert totals.tax == pytest.approx(2.746, abs=1e-3)
        assert totals.stored_subtotal == pytest.approx(15.254, abs=1e-3)
        assert totals.stored_total == pytest.approx(18.0)

    def test_tax_inclusive_invariant(self):
        cart = Cart()
        cart.add(_product("a", 7.35))
        cart.add(_product("b", 3.2))
        cart.update_quantity("b", 4)

        totals = compute_totals(cart.items, INCLUSIVE)

        assert totals.stored_subtotal + totals.tax == pytest.approx(totals.stored_total)
        assert totals.stored_total == pytest.approx(totals.total)

    def test_tax_exclusive_adds_tax_on_top(self):
        cart = Cart()
        cart.add(_product(price=10.0))
        cart.add(_product(price=10.0))
        cart.update_discount("a", 1.0)

        totals = compute_totals(cart.items, EXCLUSIVE)

        assert totals.tax == pytest.approx(18 * 0.18)
        assert totals.stored_subtotal == pytest.approx(18.0)
        assert totals.stored_total == pytest.approx(18.0 + 18 * 0.18)

    def test_total_never_negative(self):
        cart = Cart()
        cart.add(_product(price=5.0))
        cart.update_discount("a", 8.0)

        totals = compute_totals(cart.items, EXCLUSIVE)

        assert totals.total == 0
        assert totals.tax == 0
        assert totals.stored_total == 0

    def test_empty_cart(self):
        totals = compute_totals([], INCLUSIVE)
        assert totals.subtotal == 0
        assert totals.stored_total == 0


class TestCart:
    def test_adding_same_product_increments_quantity(self):
        cart = Cart()
        cart.add(_product())
        cart.add(_product())

        assert len(cart) == 1
        assert cart.items[0].quantity == 2

    def test_variant_lines_are_distinct_and_priced_by_variant(self):
        cart = Cart()
        product = _panetton()
        cart.add(product, "v1")
        cart.add(product, "v2")
        cart.add(product, "v2")

        assert len(cart) == 2
        caja = cart.find("17", "v1")
        lata = cart.find("17", "v2")
        assert caja.price == 28.0 and caja.selected_variant_name == "Caja"
        assert lata.price == 32.0 and lata.quantity == 2

    def test_variant_product_requires_existing_variant(self):
        cart = Cart()
        with pytest.raises(ValidationError):
            cart.add(_panetton())
        with pytest.raises(ValidationError):
            cart.add(_panetton(), "missing")

        assert cart.is_empty()

    def test_variant_id_ignored_for_plain_product(self):
        cart = Cart()
        item = cart.add(_product(price=10.0), "v1")

        assert item.selected_variant_id is None
        assert item.price == 10.0

    def test_snapshot_is_independent_of_catalog(self):
        product = _product(price=10.0)
        cart = Cart()
        cart.add(product)
        product.price = 99.0

        assert cart.items[0].price == 10.0

    def test_update_quantity_clamps_to_one(self):
        cart = Cart()
        cart.add(_product())
        cart.update_quantity("a", -5)

        assert cart.items[0].quantity == 1

    def test_remove_only_matching_variant_line(self):
        cart = Cart()
        product = _panetton()
        cart.add(product, "v1")
        cart.add(product, "v2")

        assert cart.remove("17", "v1") is True
        assert [i.selected_variant_id for i in cart.items] == ["v2"]
        assert cart.remove("17", "v1") is False

    def test_negative_discount_rejected(self):
        cart = Cart()
        cart.add(_product())
        with pytest.raises(ValidationError):
            cart.update_discount("a", -1)

    def test_clear(self):
        cart = Cart()
        cart.add(_product())
        cart.clear()
        assert cart.is_empty()
