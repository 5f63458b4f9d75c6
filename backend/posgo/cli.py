# Overview: Flask CLI command groups for bootstrap and maintenance.

# backend/posgo/cli.py
# Commands Legend (run from the backend directory):
# Prereqs:
# - Activate your virtualenv.
# - Set FLASK_APP to wsgi.py.
# - Use: python -m flask <group> <command> [options]
#
# System bootstrap:
# - python -m flask system init-db
#   Create cloud and local tables (use `flask db upgrade` for managed cloud databases).
# - python -m flask system reset-db --yes
#   DEV/TEST only: drop and recreate all tables (deletes all data).
#
# Stores and users:
# - python -m flask stores create --name "Bodega Central" --email owner@bodega.pe --password "secret123"
#   Create a store with its admin profile.
# - python -m flask users create-superadmin --email root@posgo.pe --password "secret123"
#   Create a super admin (may publish the demo template, list leads/stores).
#
# Demo:
# - python -m flask demo reset
#   Reset this terminal's demo data from the demo template.
# - python -m flask template seed
#   Publish the built-in seed catalog as the cloud demo template.

import click
from flask.cli import with_appcontext

from .constants import DEMO_TEMPLATE_STORE_ID
from .extensions import db
from .services import auth_service
from .services.auth_service import AuthError
from .state import get_router
from .storage import SqlRowStore
from .storage.mapping import to_remote
from .storage.template import TEMPLATE_STORE_NAME, seed_products


@click.group('system')
def system_group():
    """System bootstrap and repair commands."""


@system_group.command('init-db')
@with_appcontext
def init_db():
    """Create every table on every bind (idempotent)."""
    db.create_all()
    click.echo("PASS Tables created")


@system_group.command('reset-db')
@click.option('--yes', is_flag=True, help='Confirm destructive reset')
@with_appcontext
def reset_db(yes):
    """DEV/TEST only: drop and recreate all tables."""
    if not yes:
        click.echo("FAIL Refusing to reset without --yes")
        raise SystemExit(1)
    db.drop_all()
    db.create_all()
    click.echo("PASS Database reset")


@click.group('stores')
def stores_group():
    """Store management commands."""


@stores_group.command('create')
@click.option('--name', 'store_name', required=True, help='Store display name')
@click.option('--email', required=True, help='Admin email')
@click.option('--password', required=True, help='Admin password')
@click.option('--owner-name', default='', help='Admin display name')
@with_appcontext
def create_store(store_name, email, password, owner_name):
    try:
        profile = auth_service.register_store(email, password, owner_name, store_name)
    except AuthError as e:
        click.echo(f"FAIL {e}")
        raise SystemExit(1)
    click.echo(f"PASS Created store {profile.store_id} with admin {profile.email}")


@click.group('users')
def users_group():
    """User management commands."""


@users_group.command('create-superadmin')
@click.option('--email', required=True)
@click.option('--password', required=True)
@click.option('--name', default='Super Admin')
@with_appcontext
def create_superadmin(email, password, name):
    try:
        profile = auth_service.create_superadmin(email, password, name)
    except AuthError as e:
        click.echo(f"FAIL {e}")
        raise SystemExit(1)
    click.echo(f"PASS Created super admin {profile.email}")


@click.group('demo')
def demo_group():
    """Demo session commands."""


@demo_group.command('reset')
@with_appcontext
def reset_demo():
    get_router().reset_demo_data()
    click.echo("PASS Demo data reset")


@click.group('template')
def template_group():
    """Demo template commands."""


@template_group.command('seed')
@with_appcontext
def seed_template():
    """Publish the built-in seed catalog to the cloud template scope (operator access, no session policy)."""
    rows = SqlRowStore()
    rows.upsert("stores", [{"id": DEMO_TEMPLATE_STORE_ID, "name": TEMPLATE_STORE_NAME}])
    products = seed_products()
    rows.upsert("products", [to_remote("products", p.to_dict(), DEMO_TEMPLATE_STORE_ID) for p in products])
    click.echo(f"PASS Published {len(products)} template products")


def register_commands(app):
    """Register all CLI commands with Flask app."""
    app.cli.add_command(system_group)
    app.cli.add_command(stores_group)
    app.cli.add_command(users_group)
    app.cli.add_command(demo_group)
    app.cli.add_command(template_group)
