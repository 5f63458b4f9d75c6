"""
Catalog shape rules: plain / variants / pack exclusivity and validation.
"""

import pytest

from posgo.entities import PackComponent, Product, Variant
from posgo.services import catalog_service
from posgo.validation import ValidationError


def test_variant_product_stock_is_sum_of_variants():
    product = Product(
        id="p", name="Polo", price=20, stock=999, has_variants=True,
        variants=[Variant("s", "S", 20, 3), Variant("m", "M", 20, 4)],
        pack_items=[PackComponent("x", "X", 1)],
    )
    saved = catalog_service.normalize_for_save(product)

    assert saved.stock == 7
    assert saved.pack_items == []
    assert product.stock == 999  # original untouched


def test_pack_clears_variants_and_defaults_stock():
    product = Product(
        id="k", name="Combo", price=9, stock=0, is_pack=True, has_variants=True,
        variants=[Variant("s", "S", 1, 1)],
        pack_items=[PackComponent("a", "A", 2)],
    )
    saved = catalog_service.normalize_for_save(product)

    assert saved.has_variants is False
    assert saved.variants == []
    assert saved.stock == catalog_service.DEFAULT_PACK_STOCK


def test_plain_product_drops_shape_data():
    product = Product(id="a", name="A", variants=[Variant("s", "S", 1, 1)], pack_items=[PackComponent("b")])
    saved = catalog_service.normalize_for_save(product)

    assert saved.variants == [] and saved.pack_items == []


def test_effective_price_uses_variant_when_present():
    product = Product(id="p", name="P", price=10, has_variants=True, variants=[Variant("v", "V", 12, 1)])

    assert catalog_service.effective_price(product, "v") == 12
    assert catalog_service.effective_price(product, "nope") == 10


def test_pack_candidates_exclude_packs_variant_products_and_self():
    catalog = [
        Product(id="a", name="A"),
        Product(id="b", name="B"),
        Product(id="k", name="K", is_pack=True, pack_items=[PackComponent("a")]),
        Product(id="v", name="V", has_variants=True, variants=[Variant("v1", "Caja", 1, 1)]),
    ]

    ids = [p.id for p in catalog_service.pack_candidates(catalog, exclude_id="b")]

    assert ids == ["a"]


def test_pack_component_must_be_existing_non_pack():
    catalog = [
        Product(id="a", name="Agua"),
        Product(id="k", name="Otro pack", is_pack=True, pack_items=[PackComponent("a")]),
    ]
    nested = Product(id="n", name="Nested", is_pack=True, pack_items=[PackComponent("k", "", 1)])
    missing = Product(id="m", name="Missing", is_pack=True, pack_items=[PackComponent("zzz", "", 1)])

    with pytest.raises(ValidationError):
        catalog_service.prepare_product(nested, catalog)
    with pytest.raises(ValidationError):
        catalog_service.prepare_product(missing, catalog)


def test_prepare_product_refreshes_component_names():
    catalog = [Product(id="a", name="Agua San Mateo")]
    pack = Product(id="k", name="Six pack", is_pack=True, stock=5, pack_items=[PackComponent("a", "old", 6)])

    prepared = catalog_service.prepare_product(pack, catalog)

    assert prepared.pack_items[0].product_name == "Agua San Mateo"
    assert prepared.stock == 5


def test_pack_cannot_contain_itself():
    pack = Product(id="k", name="Loop", is_pack=True, pack_items=[PackComponent("k", "Loop", 1)])
    with pytest.raises(ValidationError):
        catalog_service.prepare_product(pack, [pack])


def test_product_from_payload_coerces_and_rejects():
    product = catalog_service.product_from_payload({
        "name": " Leche ",
        "price": "4.20",
        "stock": "36",
        "category": "Alimentos",
    })
    assert product.name == "Leche"
    assert product.price == pytest.approx(4.2)
    assert product.stock == 36
    assert product.id

    with pytest.raises(ValidationError):
        catalog_service.product_from_payload({"name": "X", "price": -1})
    with pytest.raises(ValidationError):
        catalog_service.product_from_payload({"name": "X", "stock": "1.5"})


def test_more_than_two_images_rejected():
    product = Product(id="a", name="A", images=["i1", "i2", "i3"])
    with pytest.raises(ValidationError):
        catalog_service.prepare_product(product, [])


def test_variant_product_cannot_be_pack_component():
    catalog = [Product(
        id="17", name="Panetón", has_variants=True,
        variants=[Variant("v1", "Caja", 28, 20), Variant("v2", "Lata", 32, 10)],
    )]
    pack = Product(id="k", name="Regalo", is_pack=True, pack_items=[PackComponent("17", "", 2)])

    with pytest.raises(ValidationError):
        catalog_service.prepare_product(pack, catalog)


def test_pack_component_cannot_switch_to_variants():
    catalog = [
        Product(id="a", name="Agua", stock=10),
        Product(id="k", name="Six pack", is_pack=True, stock=5, pack_items=[PackComponent("a", "Agua", 6)]),
    ]
    agua = Product(id="a", name="Agua", has_variants=True, variants=[Variant("v1", "1L", 2, 5)])

    with pytest.raises(ValidationError):
        catalog_service.prepare_product(agua, catalog)


def test_variant_flag_without_variants_rejected():
    with pytest.raises(ValidationError):
        catalog_service.prepare_product(Product(id="p", name="Polo", has_variants=True), [])


def test_category_must_be_a_known_category():
    assert catalog_service.product_from_payload({"name": "X"}).category == "General"
    assert catalog_service.product_from_payload({"name": "X", "category": " Snacks "}).category == "Snacks"

    with pytest.raises(ValidationError):
        catalog_service.product_from_payload({"name": "X", "category": "Ferretería"})
