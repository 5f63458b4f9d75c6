"""
Store-mode storage tests: tenant scoping, failure policy, row store rules.
"""

import pytest

from posgo.constants import DEMO_TEMPLATE_STORE_ID
from posgo.entities import CashShift, Customer, Product, StoreSettings, Transaction, UserProfile, Variant
from posgo.storage import (
    AccessPolicy,
    CloudStorage,
    RowStoreError,
    RowStorePermissionError,
    SessionContext,
    SqlRowStore,
)


def _cloud(store_id):
    return CloudStorage(SqlRowStore(), lambda: store_id)


def test_rows_are_scoped_by_store(make_store):
    a = make_store("Tienda A")
    b = make_store("Tienda B")

    _cloud(a.store_id).save_customer(Customer(id="c-a", name="Ana"))
    _cloud(b.store_id).save_customer(Customer(id="c-b", name="Beto"))

    assert [c.id for c in _cloud(a.store_id).get_customers()] == ["c-a"]
    assert [c.id for c in _cloud(b.store_id).get_customers()] == ["c-b"]


def test_product_round_trip_with_variants_and_images(store_profile):
    cloud = _cloud(store_profile.store_id)
    product = Product(
        id="pan", name="Panetón", price=28.0, stock=25, has_variants=True,
        variants=[Variant("v1", "Caja", 28.0, 20), Variant("v2", "Lata", 32.0, 5)],
        images=["data:image/png;base64,AAA", "data:image/png;base64,BBB"],
    )

    assert cloud.save_product(product) is True
    assert cloud.get_products() == [product]

    product.images = ["data:image/png;base64,CCC"]
    cloud.save_product(product)
    assert cloud.get_products()[0].images == ["data:image/png;base64,CCC"]

    assert cloud.delete_product("pan") is True
    assert cloud.get_products() == []


def test_transactions_newest_first_with_iso_dates(store_profile):
    cloud = _cloud(store_profile.store_id)
    for tid, date in [("t1", "2026-03-01T10:00:00Z"), ("t2", "2026-03-02T10:00:00Z")]:
        cloud.save_transaction(Transaction(
            id=tid, date=date, items=[], subtotal=1, tax=0, discount=0, total=1,
            payment_method="cash", payments=[], shift_id="s1",
        ))

    transactions = cloud.get_transactions()
    assert [t.id for t in transactions] == ["t2", "t1"]
    assert transactions[0].date == "2026-03-02T10:00:00Z"


def test_shift_upsert_updates_in_place(store_profile):
    cloud = _cloud(store_profile.store_id)
    shift = CashShift(id="s1", start_time="2026-03-01T08:00:00Z", start_amount=50)
    cloud.save_shift(shift)

    shift.status = "CLOSED"
    shift.end_time = "2026-03-01T18:00:00Z"
    shift.end_amount = 120
    cloud.save_shift(shift)

    shifts = cloud.get_shifts()
    assert len(shifts) == 1
    assert shifts[0] == shift


def test_settings_live_on_store_row(store_profile):
    cloud = _cloud(store_profile.store_id)
    assert cloud.get_settings().name == "Bodega Central"

    assert cloud.save_settings(StoreSettings(name="Renamed", tax_rate=0.1)) is True
    assert cloud.get_settings().tax_rate == 0.1


def test_reads_degrade_to_empty_and_writes_return_false(db_session, failing_rows):
    cloud = CloudStorage(failing_rows, lambda: "store-1")

    assert cloud.get_products() == []
    assert cloud.get_transactions() == []
    assert cloud.get_settings() == StoreSettings()
    assert cloud.save_customer(Customer(id="c", name="X")) is False
    assert cloud.save_settings(StoreSettings()) is False
    assert cloud.delete_product("x") is False


def test_no_store_means_no_rows(db_session):
    cloud = CloudStorage(SqlRowStore(), lambda: None)

    assert cloud.get_customers() == []
    assert cloud.save_customer(Customer(id="c", name="X")) is False


class TestSqlRowStore:
    def test_unknown_column_raises(self, db_session):
        with pytest.raises(RowStoreError):
            SqlRowStore().insert("customers", [{"id": "c", "store_id": "s", "name": "A", "nickname": "x"}])

    def test_unknown_table_raises(self, db_session):
        with pytest.raises(RowStoreError):
            SqlRowStore().select("nope")

    def test_upsert_cannot_move_row_to_another_store(self, make_store):
        a = make_store("A")
        b = make_store("B")
        rows = SqlRowStore()
        rows.upsert("customers", [{"id": "c1", "store_id": a.store_id, "name": "Ana"}])

        with pytest.raises(RowStorePermissionError):
            rows.upsert("customers", [{"id": "c1", "store_id": b.store_id, "name": "Ana"}])

        assert rows.select("customers", {"id": "c1"})[0]["store_id"] == a.store_id

    def test_unfiltered_delete_refused(self, db_session):
        with pytest.raises(RowStoreError):
            SqlRowStore().delete("customers", {})


class TestAccessPolicy:
    def _rows(self, profile):
        ctx = SessionContext("test-user-demo", "@demo.posgo", lambda _pid: profile.store_id)
        ctx.set_profile(profile)
        return SqlRowStore(AccessPolicy(ctx))

    def test_template_writes_need_super_admin(self, db_session):
        rows = self._rows(UserProfile(id="u", email="o@b.pe", role="admin", store_id="s1"))
        with pytest.raises(RowStorePermissionError):
            rows.upsert("products", [{"id": "p", "store_id": DEMO_TEMPLATE_STORE_ID, "name": "P"}])

    def test_template_reads_are_public(self, db_session):
        rows = self._rows(UserProfile(id="u", email="o@b.pe", role="admin", store_id="s1"))
        assert rows.select("products", {"store_id": DEMO_TEMPLATE_STORE_ID}) == []

    def test_leads_and_store_listing_need_super_admin(self, db_session):
        rows = self._rows(UserProfile(id="u", email="o@b.pe", role="admin", store_id="s1"))
        with pytest.raises(RowStorePermissionError):
            rows.select("leads")
        with pytest.raises(RowStorePermissionError):
            rows.select("stores")
        with pytest.raises(RowStorePermissionError):
            rows.delete("stores", {"id": "s1"})
        assert rows.select("stores", {"id": "s1"}) == []

    def test_super_admin_may_list(self, db_session):
        rows = self._rows(UserProfile(id="u", email="r@p.pe", role="superadmin"))
        assert rows.select("leads") == []
        assert rows.select("stores") == []
