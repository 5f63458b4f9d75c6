"""
Demo template tests: read fallback tiers and tri-state writes.
"""

from posgo.constants import DEMO_TEMPLATE_STORE_ID, SEED_PRODUCTS
from posgo.entities import Product
from posgo.storage import LOCAL_ONLY, REJECTED, SYNCED, DemoTemplateService, SqlRowStore


def _product(pid="t1", name="Template item", price=5.0):
    return Product(id=pid, name=name, price=price, stock=10, category="Snacks")


class TestReadFallback:
    def test_seed_when_remote_empty_and_no_cache(self, router):
        products = router.template.get_demo_template()

        assert [p.id for p in products] == [p["id"] for p in SEED_PRODUCTS]

    def test_cache_when_remote_reachable_but_empty(self, router):
        router.local.save_cached_template([_product("cached")])

        products = router.template.get_demo_template(force_cloud=True)

        assert SqlRowStore().select("products", {"store_id": DEMO_TEMPLATE_STORE_ID}) == []
        assert [p.id for p in products] == ["cached"]
        assert [p.id for p in router.local.get_cached_template()] == ["cached"]

    def test_cache_when_remote_unreachable(self, router, failing_rows):
        router.local.save_cached_template([_product("cached")])
        template = DemoTemplateService(failing_rows, router.local, router.context)

        assert [p.id for p in template.get_demo_template()] == ["cached"]

    def test_remote_read_refreshes_cache(self, router, superadmin_profile):
        router.save_session(superadmin_profile)
        assert router.template.save_product(_product("remote")).status == SYNCED
        router.local.save_cached_template([_product("stale")])

        products = router.template.get_demo_template(force_cloud=True)

        assert "remote" in [p.id for p in products]
        assert "remote" in [p.id for p in router.local.get_cached_template()]

    def test_force_cloud_false_skips_remote(self, router):
        router.local.save_cached_template([_product("cached")])
        assert [p.id for p in router.template.get_demo_template(force_cloud=False)] == ["cached"]


class TestWrites:
    def test_super_admin_write_is_synced(self, router, superadmin_profile):
        router.save_session(superadmin_profile)

        result = router.template.save_product(_product())

        assert result.status == SYNCED
        assert result.success is True
        rows = SqlRowStore().select("products", {"store_id": DEMO_TEMPLATE_STORE_ID})
        assert [r["id"] for r in rows] == ["t1"]

    def test_regular_store_user_gets_permission_denied_local_only(self, store_router):
        result = store_router.template.save_product(_product())

        assert result.status == LOCAL_ONLY
        assert result.success is True
        assert result.permission_denied is True
        assert "super admin" in result.warning
        assert "t1" in [p.id for p in store_router.local.get_cached_template()]
        assert SqlRowStore().select("products", {"store_id": DEMO_TEMPLATE_STORE_ID}) == []

    def test_demo_session_saves_locally_only(self, demo_router):
        result = demo_router.template.save_product(_product())

        assert result.status == LOCAL_ONLY
        assert result.permission_denied is False
        assert result.warning

    def test_transient_remote_failure_is_local_only_warning(self, store_router, failing_rows):
        template = DemoTemplateService(failing_rows, store_router.local, store_router.context)

        result = template.save_product(_product())

        assert result.status == LOCAL_ONLY
        assert result.permission_denied is False
        assert [p.id for p in store_router.local.get_cached_template()][-1] == "t1"

    def test_invalid_product_is_rejected_and_nothing_written(self, router):
        result = router.template.save_product(_product(name=""))

        assert result.status == REJECTED
        assert result.success is False
        assert router.local.get_cached_template() is None

    def test_delete_and_restore_defaults(self, router):
        router.local.save_cached_template([_product("a"), _product("b")])

        result = router.template.delete_product("a")
        assert result.success
        assert [p.id for p in router.local.get_cached_template()] == ["b"]

        assert router.template.delete_product("missing").status == REJECTED

        restored = router.template.restore_defaults()
        assert len(restored) == len(SEED_PRODUCTS)
        assert len(router.local.get_cached_template()) == len(SEED_PRODUCTS)
