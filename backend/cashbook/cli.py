# Overview: Flask CLI command groups for bootstrap, inspection, and reporting.

# backend/cashbook/cli.py
# Commands Legend (run from the backend directory):
# Prereqs:
# - Activate your virtualenv.
# - Set FLASK_APP (e.g. FLASK_APP="cashbook:create_app").
# - Use: python -m flask <group> <command> [options]
#
# System bootstrap:
# - python -m flask system init-db
#   Create all tables (use `flask db upgrade` where migrations are managed).
#
# Admin accounts (admins cannot self-register over HTTP):
# - python -m flask admins create --name "Owner" --email owner@shop.local --password "..."
#   Create an admin account (prompts if options are omitted).
#
# Cashier inspection:
# - python -m flask cashiers list
#   List cashiers, newest first.
#
# Ledger reporting:
# - python -m flask ledger summary [--owner-id 3]
#   Print inflow/outflow/balance for everyone or one owner.

import click
from flask.cli import with_appcontext
from sqlalchemy.exc import IntegrityError

from .errors import StoreError, ValidationError
from .extensions import db
from .models import Role
from .services import auth_service, balance_service, cashier_service, ledger_service


@click.group('system')
def system_group():
    """System bootstrap commands."""


@system_group.command('init-db')
@with_appcontext
def init_db():
    """Create all tables that do not exist yet."""
    db.create_all()
    click.echo("PASS Database tables created")


# =============================================================================
# ADMIN ACCOUNT COMMANDS
# =============================================================================

@click.group('admins')
def admins_group():
    """Admin account bootstrap commands."""


@admins_group.command('create')
@click.option('--name', prompt=True, help='Display name')
@click.option('--email', prompt=True, help='Email address')
@click.option('--password', prompt=True, hide_input=True, confirmation_prompt=True, help='Password')
@with_appcontext
def create_admin_cli(name, email, password):
    """Create an admin account."""
    try:
        account = auth_service.create_account(Role.ADMIN, name, email, password)
    except ValidationError as e:
        click.echo(f"FAIL {e.message}")
        raise SystemExit(1)
    except IntegrityError:
        db.session.rollback()
        click.echo(f"FAIL An admin with email '{email}' already exists")
        raise SystemExit(1)

    click.echo(f"PASS Created admin: {account.name} ({account.email}) ID {account.id}")


# =============================================================================
# CASHIER COMMANDS
# =============================================================================

@click.group('cashiers')
def cashiers_group():
    """Cashier inspection commands."""


@cashiers_group.command('list')
@with_appcontext
def list_cashiers_cli():
    """List cashiers, newest first."""
    cashiers = cashier_service.list_cashiers()

    if not cashiers:
        click.echo("No cashiers found.")
        return

    click.echo("\n" + "="*80)
    click.echo(f"{'ID':<6} {'Name':<30} {'Email':<30} {'Created'}")
    click.echo("="*80)
    for cashier in cashiers:
        created = cashier.to_dict()["createdAt"] or "-"
        click.echo(f"{cashier.id:<6} {cashier.name:<30} {cashier.email:<30} {created}")
    click.echo("="*80 + "\n")


# =============================================================================
# LEDGER COMMANDS
# =============================================================================

@click.group('ledger')
def ledger_group():
    """Ledger reporting commands."""


@ledger_group.command('summary')
@click.option('--owner-id', type=int, default=None, help='Limit to one owner')
@with_appcontext
def ledger_summary_cli(owner_id):
    """Print inflow, outflow and balance derived from the ledger."""
    try:
        if owner_id is None:
            rows = ledger_service.list_all()
            scope = "all owners"
        else:
            rows = ledger_service.list_by_owner(owner_id)
            scope = f"owner {owner_id}"
    except StoreError:
        click.echo("FAIL Could not read the ledger")
        raise SystemExit(1)

    summary = balance_service.summarize(rows).to_dict()
    click.echo(f"Ledger summary ({scope})")
    click.echo(f"  Entries:   {summary['count']}")
    click.echo(f"  Total in:  {summary['totalIn']:.2f}")
    click.echo(f"  Total out: {summary['totalOut']:.2f}")
    click.echo(f"  Balance:   {summary['balance']:.2f}")


def register_commands(app):
    """Register all CLI commands with Flask app."""
    app.cli.add_command(system_group)
    app.cli.add_command(admins_group)
    app.cli.add_command(cashiers_group)
    app.cli.add_command(ledger_group)
