"""Progress recording commands."""

import click
from savetrack.cli.account_resolution import resolve_account_or_exit
from savetrack.cli.error_handling import handle_domain_error
from savetrack.domain.account import AccountService
from savetrack.domain.entities import ProgressCalculation
from savetrack.domain.goal import GoalService
from savetrack.domain.milestone import MilestoneService
from savetrack.domain.progress import ProgressService


def _echo_result(result: ProgressCalculation) -> None:
    click.echo(
        f"Goal {result.goal_id}: {result.previous_amount} -> {result.new_amount} "
        f"(change {result.change_amount:+}, {result.progress_percentage}%)"
    )
    if result.milestone_triggered is not None:
        click.echo(MilestoneService.celebration_message(result.milestone_triggered))


@click.group()
def progress_group():
    """Record and inspect goal progress."""
    pass


@progress_group.command("update")
@click.argument("goal_id", type=int)
@click.option("--transaction", "transaction_id", help="ID of the transaction behind this update")
@click.pass_context
def update_progress(ctx, goal_id: int, transaction_id: str | None):
    """Recalculate a goal from its account's current balance."""
    db = ctx.obj["db"]
    try:
        result = ProgressService(db).update_goal_progress(goal_id, ctx.obj["user"], transaction_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    _echo_result(result)


@progress_group.command("sync")
@click.argument("account", metavar="ACCOUNT")
@click.option("--transaction", "transaction_id", help="ID of the transaction behind this sync")
@click.pass_context
def sync_account(ctx, account: str, transaction_id: str | None):
    """Recalculate every active goal linked to an account.

    ACCOUNT can be an account name or ID.
    """
    db = ctx.obj["db"]
    user_id = ctx.obj["user"]
    account_id = resolve_account_or_exit(ctx, AccountService(db), account)

    results = ProgressService(db).sync_account_goals(account_id, user_id, transaction_id)
    if not results:
        click.echo("No active goals linked to this account.")
        return
    for result in results:
        _echo_result(result)


@progress_group.command("history")
@click.argument("goal_id", type=int)
@click.option("--limit", type=int, help="Only show the most recent entries")
@click.pass_context
def show_history(ctx, goal_id: int, limit: int | None):
    """Show a goal's progress history, newest first."""
    db = ctx.obj["db"]
    try:
        history = GoalService(db).get_progress_history(ctx.obj["user"], goal_id, limit=limit)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    if not history:
        click.echo("No progress recorded yet.")
        return

    for entry in history:
        line = (
            f"{entry.recorded_at:%Y-%m-%d %H:%M}  {entry.previous_amount:>12} -> {entry.new_amount:>12}"
            f"  {entry.change_amount:>+12}  {entry.progress_percentage:>6}%"
        )
        if entry.transaction_id:
            line += f"  tx {entry.transaction_id}"
        click.echo(line)


def register_commands(cli):
    """Register progress commands with main CLI."""
    cli.add_command(progress_group, name="progress")
