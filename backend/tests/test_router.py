"""
Persistence router tests: mode resolution, demo seeding/reset, and
demo/store isolation.
"""

from posgo.constants import SEED_PRODUCTS
from posgo.entities import Customer, Product, UserProfile
from posgo.storage import MODE_DEMO, MODE_STORE, SessionContext


def _context(profile=None, lookup=None):
    ctx = SessionContext("test-user-demo", "@demo.posgo", lookup)
    ctx.set_profile(profile)
    return ctx


class TestSessionContext:
    def test_no_profile_is_demo(self):
        assert _context().mode == MODE_DEMO

    def test_demo_user_id_is_demo(self):
        assert _context(UserProfile(id="test-user-demo", email="x@y.pe")).mode == MODE_DEMO

    def test_demo_email_domain_is_demo(self):
        assert _context(UserProfile(id="u1", email="Someone@DEMO.posgo")).mode == MODE_DEMO

    def test_other_identity_is_store(self):
        assert _context(UserProfile(id="u1", email="owner@bodega.pe")).mode == MODE_STORE

    def test_store_id_resolved_once_and_invalidated(self):
        calls = []

        def lookup(profile_id):
            calls.append(profile_id)
            return "store-1"

        ctx = _context(UserProfile(id="u1", email="owner@bodega.pe"), lookup)
        assert ctx.resolve_store_id() == "store-1"
        assert ctx.resolve_store_id() == "store-1"
        assert calls == ["u1"]

        ctx.invalidate()
        ctx.resolve_store_id()
        assert calls == ["u1", "u1"]

    def test_demo_has_no_store_id(self):
        assert _context().resolve_store_id() is None

    def test_super_admin_flag(self):
        assert _context(UserProfile(id="u", email="r@p.pe", role="superadmin")).is_super_admin
        assert not _context(UserProfile(id="u", email="r@p.pe", role="admin")).is_super_admin


def test_demo_products_seeded_from_template_on_first_read(router):
    products = router.get_products()

    assert router.mode == MODE_DEMO
    assert [p.id for p in products] == [p["id"] for p in SEED_PRODUCTS]
    panetton = next(p for p in products if p.id == "17")
    assert panetton.has_variants and panetton.stock == 30


def test_reset_demo_data_restores_template_and_clears_collections(demo_router):
    demo_router.save_customer(Customer(id="c1", name="Ana"))
    demo_router.save_product(Product(id="extra", name="Extra"))
    demo_router.set_active_shift_id("old-shift")

    demo_router.reset_demo_data()

    assert demo_router.get_customers() == []
    assert demo_router.get_active_shift_id() is None
    assert "extra" not in [p.id for p in demo_router.get_products()]
    assert demo_router.get_settings().name == "Mi Bodega Demo"


def test_store_mode_writes_never_reach_local_store(store_router):
    store_router.save_customer(Customer(id="c1", name="Ana"))

    assert [c.id for c in store_router.get_customers()] == ["c1"]
    assert store_router.local.get_customers() == []


def test_demo_writes_never_reach_cloud(demo_router, store_profile):
    demo_router.save_customer(Customer(id="c-demo", name="Demo"))

    demo_router.save_session(store_profile)
    assert demo_router.get_customers() == []
    assert [c.id for c in demo_router.local.get_customers()] == ["c-demo"]


def test_session_persists_and_logout_clears_cached_store(store_router, store_profile):
    assert store_router.local.get_session_profile() == store_profile
    assert store_router.context.resolve_store_id() == store_profile.store_id

    store_router.clear_session()

    assert store_router.get_session() is None
    assert store_router.mode == MODE_DEMO
    assert store_router.local.get_session_profile() is None


def test_restore_session_picks_up_persisted_profile(store_router, store_profile):
    store_router.context.set_profile(None)

    assert store_router.restore_session() == store_profile
    assert store_router.mode == MODE_STORE


def test_unknown_persisted_role_falls_back_to_cashier():
    profile = UserProfile.from_dict({"id": "u1", "email": "a@b.pe", "role": "owner"})

    assert profile.role == "cashier"
    assert not profile.is_super_admin
    assert UserProfile.from_dict({"id": "u", "email": "r@p.pe", "role": "superadmin"}).is_super_admin
