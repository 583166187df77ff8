# Overview: Pytest coverage for Flask CLI commands.

from cashbook.models import Account, Role
from cashbook.services import ledger_service
from tests.conftest import login


def test_admins_create(app, client, db_session):
    runner = app.test_cli_runner()
    result = runner.invoke(args=[
        "admins", "create", "--name", "Owner", "--email", "owner@shop.local", "--password", "Str0ng!pw",
    ])
    assert result.exit_code == 0, result.output
    assert "PASS Created admin" in result.output

    account = db_session.query(Account).filter_by(email="owner@shop.local").one()
    assert account.role == Role.ADMIN.value
    assert login(client, "admin", "owner@shop.local", "Str0ng!pw").status_code == 200


def test_admins_create_duplicate(app, admin):
    runner = app.test_cli_runner()
    result = runner.invoke(args=[
        "admins", "create", "--name", "Again", "--email", admin.email, "--password", "x",
    ])
    assert result.exit_code == 1
    assert "already exists" in result.output


def test_admins_create_invalid_email(app, db_session):
    runner = app.test_cli_runner()
    result = runner.invoke(args=[
        "admins", "create", "--name", "Bad", "--email", "nope", "--password", "x",
    ])
    assert result.exit_code == 1
    assert "FAIL" in result.output


def test_admins_create_overlong_password(app, db_session):
    runner = app.test_cli_runner()
    result = runner.invoke(args=[
        "admins", "create", "--name", "Long", "--email", "long@shop.local", "--password", "p" * 80,
    ])
    assert result.exit_code == 1
    assert "FAIL" in result.output
    assert db_session.query(Account).filter_by(email="long@shop.local").count() == 0


def test_cashiers_list(app, cashier):
    result = app.test_cli_runner().invoke(args=["cashiers", "list"])
    assert result.exit_code == 0
    assert "ada@x.com" in result.output


def test_cashiers_list_empty(app, db_session):
    result = app.test_cli_runner().invoke(args=["cashiers", "list"])
    assert "No cashiers found." in result.output


def test_ledger_summary(app, db_session):
    ledger_service.record_transaction(owner_id=1, owner_name="Ada", amount=500, kind="sale")
    ledger_service.record_transaction(owner_id=1, owner_name="Ada", amount=200, kind="expense")
    ledger_service.record_transaction(owner_id=2, owner_name="Grace", amount=50, kind="income")

    everyone = app.test_cli_runner().invoke(args=["ledger", "summary"])
    assert "Balance:   350.00" in everyone.output

    one = app.test_cli_runner().invoke(args=["ledger", "summary", "--owner-id", "1"])
    assert "owner 1" in one.output
    assert "Balance:   300.00" in one.output
