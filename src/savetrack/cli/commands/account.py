"""Account management commands."""

import click
from savetrack.cli.account_resolution import resolve_account_or_exit
from savetrack.cli.error_handling import handle_domain_error
from savetrack.domain.account import AccountService
from savetrack.domain.progress import ProgressService
from savetrack.utils.amount_parser import parse_amount


@click.group()
def account_group():
    """Manage accounts and balances."""
    pass


@account_group.command("create")
@click.argument("name", metavar="ACCOUNT_NAME")
@click.option("--balance", default="0", help="Opening balance (default: 0)")
@click.pass_context
def create_account(ctx, name: str, balance: str):
    """Create a new account.

    Examples:
        savetrack account create "Emergency Savings"
        savetrack account create "Holiday Fund" --balance 1,250.00
    """
    db = ctx.obj["db"]
    service = AccountService(db)

    try:
        amount = parse_amount(balance)
        account_id = service.create_account(ctx.obj["user"], name=name, balance=amount)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Created account '{name.strip()}' (ID: {account_id}) with balance {amount}")


@account_group.command("list")
@click.pass_context
def list_accounts(ctx):
    """List all accounts."""
    db = ctx.obj["db"]
    service = AccountService(db)

    accounts = service.list_accounts(ctx.obj["user"])
    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 60)
    for acc in accounts:
        click.echo(f"ID: {acc.id:3d} | {acc.name:25s} | Balance: {acc.balance:>12}")


@account_group.command("set-balance")
@click.argument("account", metavar="ACCOUNT")
@click.argument("balance", metavar="BALANCE")
@click.option("--transaction", "transaction_id", help="ID of the transaction behind this change")
@click.option(
    "--sync/--no-sync",
    default=True,
    help="Recalculate goals linked to the account (default: sync)",
)
@click.pass_context
def set_balance(ctx, account: str, balance: str, transaction_id: str | None, sync: bool):
    """Record a new balance for an account.

    ACCOUNT can be an account name or ID. Active goals linked to the account
    are recalculated unless --no-sync is given.

    Examples:
        savetrack account set-balance "Emergency Savings" 2500
        savetrack account set-balance 1 3100.50 --transaction tx-42
    """
    db = ctx.obj["db"]
    user_id = ctx.obj["user"]
    service = AccountService(db)
    account_id = resolve_account_or_exit(ctx, service, account)

    try:
        amount = parse_amount(balance)
        service.set_balance(account_id, user_id, amount)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Balance of account {account_id} set to {amount}")
    if not sync:
        return

    results = ProgressService(db).sync_account_goals(account_id, user_id, transaction_id)
    for result in results:
        click.echo(
            f"Goal {result.goal_id}: {result.previous_amount} -> {result.new_amount} "
            f"({result.progress_percentage}%)"
        )
        if result.milestone_triggered is not None:
            click.echo(f"  Milestone reached: {result.milestone_triggered}%")


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
